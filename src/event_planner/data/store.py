from __future__ import annotations

import logging
import math
import threading
from copy import deepcopy
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
from uuid import uuid4

import orjson

from ..core.config import DEFAULT_STORE_CONTENT, EVENTS_FILE, ensure_data_dir
from ..core.query import EventQuery, apply_query, sort_events
from ..domain import Event, MalformedDateError, NotFoundError, SortKey, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventPage:
    events: List[Event]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


class EventStore:
    """Document collection of events persisted as a single JSON file.

    The whole document is read on first access and rewritten on every
    mutation. Writes are serialized because the API runs sync handlers in a
    worker pool.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = Path(path) if path else EVENTS_FILE
        self._state: Optional[Dict[str, Any]] = None
        self._lock = threading.RLock()

    @property
    def path(self) -> Path:
        return self._path

    def _ensure_materialized(self) -> None:
        if self._state is not None:
            return
        if not self._path.exists():
            ensure_data_dir(self._path.parent)
            self._state = deepcopy(DEFAULT_STORE_CONTENT)
            self.persist()
            logger.info("Created event store at %s", self._path)
            return
        raw = self._path.read_bytes()
        if not raw:
            self._state = deepcopy(DEFAULT_STORE_CONTENT)
            return
        self._state = orjson.loads(raw)
        # Backfill missing keys when upgrading.
        for key, value in DEFAULT_STORE_CONTENT.items():
            if key not in self._state:
                self._state[key] = deepcopy(value)

    def persist(self) -> None:
        if self._state is None:
            return
        payload = orjson.dumps(self._state, option=orjson.OPT_INDENT_2)
        self._path.write_bytes(payload + b"\n")

    def mutate(self, callback: Callable[[Dict[str, Any]], Any]) -> Any:
        with self._lock:
            self._ensure_materialized()
            assert self._state is not None
            result = callback(self._state)
            self.persist()
            return result

    def _records(self) -> List[Dict[str, Any]]:
        with self._lock:
            self._ensure_materialized()
            assert self._state is not None
            return list(self._state["events"])

    @staticmethod
    def _index_of(state: Dict[str, Any], event_id: str) -> int:
        for index, record in enumerate(state["events"]):
            if record.get("id") == event_id:
                return index
        raise NotFoundError(event_id)

    # ------------------------------------------------------------------ reads

    def list_all(self) -> List[Event]:
        events: List[Event] = []
        for record in self._records():
            try:
                events.append(Event.from_record(record))
            except (KeyError, MalformedDateError):
                logger.warning("Skipping unreadable event record %r", record.get("id"))
        return events

    def get(self, event_id: str) -> Event:
        for record in self._records():
            if record.get("id") == event_id:
                return Event.from_record(record)
        raise NotFoundError(event_id)

    def query(self, query: EventQuery, *, page: int = 1, limit: int = 100) -> EventPage:
        if page < 1 or limit < 1:
            raise ValidationError("page and limit must be positive integers")
        # Chronological pre-order makes datetime the tie-break of every sort key.
        matched = apply_query(sort_events(self.list_all(), SortKey.DATE), query)
        start = (page - 1) * limit
        return EventPage(events=matched[start : start + limit], page=page, limit=limit, total=len(matched))

    def upcoming(self, limit: int = 10, *, now: Optional[datetime] = None) -> List[Event]:
        reference = now or datetime.now()
        pending = [event for event in self.list_all() if event.datetime >= reference and not event.completed]
        return sort_events(pending, SortKey.DATE)[: max(limit, 0)]

    # ------------------------------------------------------------------ writes

    def create(self, fields: Dict[str, Any]) -> Event:
        if not str(fields.get("title") or "").strip() or not fields.get("datetime"):
            raise ValidationError("Title and datetime are required")
        event = Event(
            id=uuid4().hex,
            title="",
            datetime=datetime.now(),
            created_at=datetime.now().replace(microsecond=0),
        ).with_changes({**fields, "completed": False})

        def _append(state: Dict[str, Any]) -> Event:
            state["events"].append(event.to_record())
            return event

        created = self.mutate(_append)
        logger.info("Created event %s", created.id)
        return created

    def update(self, event_id: str, fields: Dict[str, Any]) -> Event:
        if not fields.get("datetime"):
            raise ValidationError("Datetime is required")
        if "title" in fields and fields["title"] is not None and not str(fields["title"]).strip():
            raise ValidationError("Title cannot be empty")

        def _update(state: Dict[str, Any]) -> Event:
            index = self._index_of(state, event_id)
            updated = Event.from_record(state["events"][index]).with_changes(fields)
            state["events"][index] = updated.to_record()
            return updated

        updated = self.mutate(_update)
        logger.info("Updated event %s", event_id)
        return updated

    def delete(self, event_id: str) -> Event:
        def _delete(state: Dict[str, Any]) -> Event:
            index = self._index_of(state, event_id)
            return Event.from_record(state["events"].pop(index))

        deleted = self.mutate(_delete)
        logger.info("Deleted event %s", event_id)
        return deleted

    def toggle(self, event_id: str) -> Event:
        def _toggle(state: Dict[str, Any]) -> Event:
            index = self._index_of(state, event_id)
            current = Event.from_record(state["events"][index])
            toggled = current.with_changes({"completed": not current.completed})
            state["events"][index] = toggled.to_record()
            return toggled

        return self.mutate(_toggle)


__all__ = ["EventPage", "EventStore"]
