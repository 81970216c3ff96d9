from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from fastapi import APIRouter, Depends, Query, Request

from ..config import AppSettings
from ..core.query import EventQuery
from ..data import EventStore
from ..domain import ALL, PlannerError, ValidationError
from .models import EventWrite
from .serializers import event_list_response, event_page_response, event_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/events", tags=["events"])


class ApiError(Exception):
    """Unexpected failure reported to the client as a 500 envelope."""

    def __init__(self, status_code: int, error: str, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error = error
        self.message = message


def get_store(request: Request) -> EventStore:
    return request.app.state.store


def get_app_settings(request: Request) -> AppSettings:
    return request.app.state.settings


@contextmanager
def _failure(error: str) -> Iterator[None]:
    try:
        yield
    except PlannerError:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.exception(error)
        raise ApiError(500, error, str(exc)) from exc


_COMPLETED_VALUES = {"true": True, "false": False}


def _build_query(
    category: Optional[str],
    priority: Optional[str],
    completed: Optional[str],
    search: Optional[str],
    sort_by: str,
) -> EventQuery:
    if completed is not None and completed not in _COMPLETED_VALUES:
        raise ValidationError(f"Invalid filter: completed must be true or false, got {completed!r}")
    try:
        return EventQuery(
            category=category or ALL,
            priority=priority or ALL,
            search=search or "",
            sort_by=sort_by,
            completed=None if completed is None else _COMPLETED_VALUES[completed],
        )
    except ValueError as exc:
        raise ValidationError(f"Invalid filter: {exc}") from exc


@router.get("")
def list_events(
    category: Optional[str] = None,
    priority: Optional[str] = None,
    completed: Optional[str] = None,
    search: Optional[str] = None,
    sort_by: str = Query("datetime", alias="sortBy"),
    limit: Optional[int] = None,
    page: int = 1,
    store: EventStore = Depends(get_store),
    settings: AppSettings = Depends(get_app_settings),
) -> Dict[str, Any]:
    query = _build_query(category, priority, completed, search, sort_by)
    page_size = limit if limit is not None else settings.server.default_page_size
    with _failure("Failed to fetch events"):
        result = store.query(query, page=page, limit=page_size)
    return event_page_response(result)


@router.get("/upcoming/events")
def upcoming_events(limit: int = 10, store: EventStore = Depends(get_store)) -> Dict[str, Any]:
    with _failure("Failed to fetch upcoming events"):
        events = store.upcoming(limit)
    return event_list_response(events)


@router.get("/{event_id}")
def get_event(event_id: str, store: EventStore = Depends(get_store)) -> Dict[str, Any]:
    with _failure("Failed to fetch event"):
        event = store.get(event_id)
    return event_response(event)


@router.post("", status_code=201)
def create_event(body: EventWrite, store: EventStore = Depends(get_store)) -> Dict[str, Any]:
    with _failure("Failed to create event"):
        event = store.create(body.fields())
    return event_response(event, "Event created successfully")


@router.put("/{event_id}")
def update_event(event_id: str, body: EventWrite, store: EventStore = Depends(get_store)) -> Dict[str, Any]:
    with _failure("Failed to update event"):
        event = store.update(event_id, body.fields())
    return event_response(event, "Event updated successfully")


@router.delete("/{event_id}")
def delete_event(event_id: str, store: EventStore = Depends(get_store)) -> Dict[str, Any]:
    with _failure("Failed to delete event"):
        event = store.delete(event_id)
    return event_response(event, "Event deleted successfully")


@router.patch("/{event_id}/toggle")
def toggle_event(event_id: str, store: EventStore = Depends(get_store)) -> Dict[str, Any]:
    with _failure("Failed to toggle event status"):
        event = store.toggle(event_id)
    state = "complete" if event.completed else "incomplete"
    return event_response(event, f"Event marked as {state}")
