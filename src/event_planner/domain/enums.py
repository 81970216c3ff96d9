from __future__ import annotations

import logging
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

ALL = "all"


class Category(str, Enum):
    PERSONAL = "personal"
    WORK = "work"
    FAMILY = "family"
    SOCIAL = "social"
    HEALTH = "health"
    OTHER = "other"

    @classmethod
    def default(cls) -> "Category":
        return cls.PERSONAL

    @classmethod
    def coerce(cls, value: Any) -> "Category":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            if value not in (None, ""):
                logger.warning("Unknown category %r, using %s", value, cls.default().value)
            return cls.default()


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @classmethod
    def default(cls) -> "Priority":
        return cls.MEDIUM

    @classmethod
    def coerce(cls, value: Any) -> "Priority":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            if value not in (None, ""):
                logger.warning("Unknown priority %r, using %s", value, cls.default().value)
            return cls.default()

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    Priority.LOW: 1,
    Priority.MEDIUM: 2,
    Priority.HIGH: 3,
    Priority.URGENT: 4,
}


class SortKey(str, Enum):
    DATE = "date"
    PRIORITY = "priority"
    TITLE = "title"
    CATEGORY = "category"

    @classmethod
    def parse(cls, value: Any) -> "SortKey":
        if isinstance(value, cls):
            return value
        if value == "datetime":
            return cls.DATE
        try:
            return cls(value)
        except ValueError:
            return cls.DATE


class ViewMode(str, Enum):
    LIST = "list"
    CALENDAR = "calendar"
