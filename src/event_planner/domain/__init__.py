"""Domain models for event planning."""

from __future__ import annotations

from .enums import ALL, Category, Priority, SortKey, ViewMode
from .errors import MalformedDateError, NotFoundError, PlannerError, TransportError, ValidationError
from .models import Event, parse_datetime

__all__ = [
    "ALL",
    "Category",
    "Event",
    "MalformedDateError",
    "NotFoundError",
    "PlannerError",
    "Priority",
    "SortKey",
    "TransportError",
    "ValidationError",
    "ViewMode",
    "parse_datetime",
]
