from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional, Tuple

from ..domain import Event, SortKey
from .query import sort_events

WEEKDAY_HEADERS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
PREVIEW_LIMIT = 3


@dataclass
class CalendarCell:
    """A single day of the displayed month with the events falling on it."""

    day: int
    date: date
    events: List[Event] = field(default_factory=list)

    def preview(self, limit: int = PREVIEW_LIMIT) -> Tuple[List[Event], int]:
        shown = self.events[:limit]
        return shown, len(self.events) - len(shown)


def leading_blanks(reference: date) -> int:
    """Number of padding cells before the 1st when weeks start on Sunday."""

    monday_based, _ = calendar.monthrange(reference.year, reference.month)
    return (monday_based + 1) % 7


def events_on(day: date, events: Iterable[Event]) -> List[Event]:
    bucket = [event for event in events if event.day == day]
    return sort_events(bucket, SortKey.DATE)


def month_grid(reference: date, events: Iterable[Event]) -> List[Optional[CalendarCell]]:
    _, days_in_month = calendar.monthrange(reference.year, reference.month)
    buckets: dict[date, List[Event]] = {}
    for event in events:
        day = event.day
        if day.year == reference.year and day.month == reference.month:
            buckets.setdefault(day, []).append(event)

    grid: List[Optional[CalendarCell]] = [None] * leading_blanks(reference)
    for number in range(1, days_in_month + 1):
        current = date(reference.year, reference.month, number)
        grid.append(CalendarCell(day=number, date=current, events=sort_events(buckets.get(current, []), SortKey.DATE)))
    return grid


def shift_month(reference: date, months: int) -> date:
    """Move ``reference`` by whole months, landing on the 1st of the target month."""

    index = reference.year * 12 + (reference.month - 1) + months
    year, month_index = divmod(index, 12)
    return date(year, month_index + 1, 1)


def is_today(day: date, today: Optional[date] = None) -> bool:
    return day == (today or date.today())


def is_selected(day: date, selected: Optional[date]) -> bool:
    return selected is not None and day == selected


def month_title(reference: date) -> str:
    return f"{calendar.month_name[reference.month]} {reference.year}"


__all__ = [
    "CalendarCell",
    "PREVIEW_LIMIT",
    "WEEKDAY_HEADERS",
    "events_on",
    "is_selected",
    "is_today",
    "leading_blanks",
    "month_grid",
    "month_title",
    "shift_month",
]
