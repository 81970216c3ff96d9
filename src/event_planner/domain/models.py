from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any, Dict

from .enums import Category, Priority
from .errors import MalformedDateError

EDITABLE_FIELDS = ("title", "description", "datetime", "location", "category", "priority", "completed")


def parse_datetime(value: Any) -> datetime:
    """Parse an ISO timestamp into a naive datetime in local time."""

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as exc:
            raise MalformedDateError(f"Invalid datetime: {value!r}") from exc
    else:
        raise MalformedDateError(f"Unsupported datetime value: {value!r}")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _iso(value: datetime) -> str:
    return value.isoformat(timespec="seconds")


@dataclass(slots=True)
class Event:
    id: str
    title: str
    datetime: datetime
    description: str = ""
    location: str = ""
    category: Category = Category.PERSONAL
    priority: Priority = Priority.MEDIUM
    completed: bool = False
    created_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Event":
        created = record.get("createdAt")
        return cls(
            id=str(record["id"]),
            title=str(record.get("title") or ""),
            datetime=parse_datetime(record.get("datetime")),
            description=record.get("description") or "",
            location=record.get("location") or "",
            category=Category.coerce(record.get("category")),
            priority=Priority.coerce(record.get("priority")),
            completed=bool(record.get("completed", False)),
            created_at=parse_datetime(created) if created else datetime.now(),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "datetime": _iso(self.datetime),
            "location": self.location,
            "category": self.category.value,
            "priority": self.priority.value,
            "completed": self.completed,
            "createdAt": _iso(self.created_at),
        }

    def with_changes(self, changes: Dict[str, Any]) -> "Event":
        """Return a copy with the user-editable fields in ``changes`` applied.

        ``id`` and ``createdAt`` are never taken from ``changes``.
        """

        updates: Dict[str, Any] = {}
        for key in EDITABLE_FIELDS:
            if key not in changes or changes[key] is None:
                continue
            value = changes[key]
            if key == "datetime":
                value = parse_datetime(value)
            elif key == "category":
                value = Category.coerce(value)
            elif key == "priority":
                value = Priority.coerce(value)
            elif key == "completed":
                value = bool(value)
            else:
                value = str(value)
            updates[key] = value
        return replace(self, **updates)

    @property
    def day(self) -> date:
        return self.datetime.date()

    def matches_text(self, term: str) -> bool:
        needle = term.lower()
        return needle in self.title.lower() or needle in self.description.lower()

    def describe(self) -> str:
        stamp = self.datetime.strftime("%a, %b %d %Y %H:%M")
        suffix = f" @ {self.location}" if self.location else ""
        return f"{stamp} {self.title}{suffix}"
