from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Iterable, List, Optional

from ..domain import ALL, Event, ViewMode
from .calendar import CalendarCell, events_on, month_grid, shift_month
from .query import EventQuery, apply_query

logger = logging.getLogger(__name__)

Listener = Callable[[str], None]


@dataclass
class EventState:
    """Single owned source of truth for the list and calendar views.

    Renderers subscribe and re-derive their view from this container after
    each change; they never keep their own copy of the events.
    """

    events: List[Event] = field(default_factory=list)
    query: EventQuery = field(default_factory=EventQuery)
    view: ViewMode = ViewMode.LIST
    calendar_month: date = field(default_factory=lambda: date.today().replace(day=1))
    selected_day: Optional[date] = None
    editing: Optional[Event] = None
    _listeners: List[Listener] = field(default_factory=list, repr=False)

    # ------------------------------------------------------------------ observers

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, change: str) -> None:
        for listener in list(self._listeners):
            listener(change)

    # ------------------------------------------------------------------ events

    def replace_events(self, events: Iterable[Event]) -> None:
        self.events = list(events)
        logger.debug("State holds %d events", len(self.events))
        self._notify("events")

    def find(self, event_id: str) -> Optional[Event]:
        for event in self.events:
            if event.id == event_id:
                return event
        return None

    def upsert(self, event: Event) -> None:
        for index, existing in enumerate(self.events):
            if existing.id == event.id:
                self.events[index] = event
                break
        else:
            self.events.append(event)
        self._notify("events")

    def remove(self, event_id: str) -> bool:
        remaining = [event for event in self.events if event.id != event_id]
        if len(remaining) == len(self.events):
            return False
        self.events = remaining
        self._notify("events")
        return True

    # ------------------------------------------------------------------ list view

    def set_query(self, **changes) -> None:
        self.query = self.query.updated(**changes)
        self._notify("query")

    def visible_events(self) -> List[Event]:
        return apply_query(self.events, self.query)

    def category_options(self) -> List[str]:
        seen: List[str] = []
        for event in self.events:
            if event.category.value not in seen:
                seen.append(event.category.value)
        return [ALL, *seen]

    def set_view(self, view: ViewMode) -> None:
        self.view = ViewMode(view)
        self._notify("view")

    # ------------------------------------------------------------------ editing

    def begin_edit(self, event: Event) -> None:
        self.editing = event
        self._notify("editing")

    def end_edit(self) -> None:
        self.editing = None
        self._notify("editing")

    # ------------------------------------------------------------------ calendar view

    def calendar_grid(self) -> List[Optional[CalendarCell]]:
        return month_grid(self.calendar_month, self.events)

    def previous_month(self) -> None:
        self.calendar_month = shift_month(self.calendar_month, -1)
        self._notify("calendar")

    def next_month(self) -> None:
        self.calendar_month = shift_month(self.calendar_month, 1)
        self._notify("calendar")

    def go_to_today(self, today: Optional[date] = None) -> None:
        self.calendar_month = (today or date.today()).replace(day=1)
        self.selected_day = None
        self._notify("calendar")

    def select_day(self, day: Optional[date]) -> None:
        self.selected_day = day
        self._notify("calendar")

    def selected_day_events(self) -> List[Event]:
        if self.selected_day is None:
            return []
        return events_on(self.selected_day, self.events)


__all__ = ["EventState", "Listener"]
