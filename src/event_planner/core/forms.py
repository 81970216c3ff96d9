from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..domain import Category, Event, Priority, parse_datetime

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


@dataclass
class EventForm:
    """Raw values as typed into the event form."""

    title: str = ""
    description: str = ""
    date: str = ""
    time: str = ""
    location: str = ""
    category: str = Category.PERSONAL.value
    priority: str = Priority.MEDIUM.value


def validate_form(form: EventForm) -> Dict[str, str]:
    """Return a mapping of invalid field name to reason; empty when the form is valid."""

    errors: Dict[str, str] = {}
    if not form.title.strip():
        errors["title"] = "Title is required"
    if not form.date:
        errors["date"] = "Date is required"
    if not form.time:
        errors["time"] = "Time is required"
    return errors


def combine_datetime(date_value: str, time_value: str) -> str:
    return f"{date_value}T{time_value}"


def build_submission(form: EventForm, editing: Optional[Event] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "title": form.title.strip(),
        "description": form.description,
        "datetime": combine_datetime(form.date, form.time),
        "location": form.location,
        "category": form.category,
        "priority": form.priority,
        "completed": editing.completed if editing else False,
    }
    if editing is not None:
        payload["id"] = editing.id
        payload["createdAt"] = editing.created_at.isoformat(timespec="seconds")
    return payload


def form_from_event(event: Event) -> EventForm:
    """Split an event back into form fields; raises ``MalformedDateError`` on a bad datetime."""

    moment = parse_datetime(event.datetime)
    return EventForm(
        title=event.title,
        description=event.description,
        date=moment.strftime(DATE_FORMAT),
        time=moment.strftime(TIME_FORMAT),
        location=event.location,
        category=event.category.value,
        priority=event.priority.value,
    )


__all__ = ["EventForm", "build_submission", "combine_datetime", "form_from_event", "validate_form"]
