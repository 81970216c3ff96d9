from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from ..data import EventPage
from ..domain import Event
from .models import ErrorEnvelope, EventEnvelope, EventListEnvelope, EventPayload, Pagination


def event_response(event: Event, message: Optional[str] = None) -> Dict[str, Any]:
    return EventEnvelope(message=message, data=EventPayload.from_domain(event)).render()


def event_list_response(events: Iterable[Event]) -> Dict[str, Any]:
    return EventListEnvelope(data=[EventPayload.from_domain(event) for event in events]).render()


def event_page_response(page: EventPage) -> Dict[str, Any]:
    envelope = EventListEnvelope(
        data=[EventPayload.from_domain(event) for event in page.events],
        pagination=Pagination(page=page.page, limit=page.limit, total=page.total, pages=page.pages),
    )
    return envelope.render()


def error_response(error: str, message: str) -> Dict[str, Any]:
    return ErrorEnvelope(error=error, message=message).model_dump()
