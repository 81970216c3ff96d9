from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Union

from ..domain import ALL, Category, Event, Priority, SortKey

CategoryFilter = Union[Category, str]
PriorityFilter = Union[Priority, str]


@dataclass(frozen=True)
class EventQuery:
    """Filter and sort configuration shared by the list and calendar views."""

    category: CategoryFilter = ALL
    priority: PriorityFilter = ALL
    search: str = ""
    sort_by: SortKey = SortKey.DATE
    completed: Optional[bool] = None

    def __post_init__(self) -> None:
        if self.category != ALL:
            object.__setattr__(self, "category", Category(self.category))
        if self.priority != ALL:
            object.__setattr__(self, "priority", Priority(self.priority))
        object.__setattr__(self, "sort_by", SortKey.parse(self.sort_by))
        object.__setattr__(self, "search", self.search or "")

    def updated(self, **changes) -> "EventQuery":
        return replace(self, **changes)

    def matches(self, event: Event) -> bool:
        if self.category != ALL and event.category is not self.category:
            return False
        if self.priority != ALL and event.priority is not self.priority:
            return False
        if self.completed is not None and event.completed != self.completed:
            return False
        if self.search and not event.matches_text(self.search):
            return False
        return True


def _text_key(value: str) -> tuple[str, str]:
    return (value.casefold(), value)


def filter_events(events: Iterable[Event], query: EventQuery) -> List[Event]:
    return [event for event in events if query.matches(event)]


def sort_events(events: Iterable[Event], sort_by: SortKey) -> List[Event]:
    """Order events by ``sort_by``. Python's sort is stable, so ties keep input order."""

    if sort_by is SortKey.PRIORITY:
        return sorted(events, key=lambda event: event.priority.rank, reverse=True)
    if sort_by is SortKey.TITLE:
        return sorted(events, key=lambda event: _text_key(event.title))
    if sort_by is SortKey.CATEGORY:
        return sorted(events, key=lambda event: _text_key(event.category.value))
    return sorted(events, key=lambda event: event.datetime)


def apply_query(events: Iterable[Event], query: EventQuery) -> List[Event]:
    return sort_events(filter_events(events, query), query.sort_by)


__all__ = ["EventQuery", "apply_query", "filter_events", "sort_events"]
