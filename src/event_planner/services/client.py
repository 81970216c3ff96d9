from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from ..config import ClientSettings, get_settings
from ..domain import Event, MalformedDateError, NotFoundError, TransportError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemotePage:
    events: List[Event]
    page: int
    limit: int
    total: int
    pages: int


def _decode_event(body: Dict[str, Any]) -> Event:
    record = body.get("data")
    if not isinstance(record, dict):
        raise TransportError("The events API returned a response without event data")
    try:
        return Event.from_record(record)
    except KeyError as exc:
        raise TransportError(f"The events API returned an event without {exc}") from exc


def _decode_events(records: Any) -> List[Event]:
    if not isinstance(records, list):
        raise TransportError("The events API returned a malformed event list")
    events: List[Event] = []
    for record in records:
        if not isinstance(record, dict):
            logger.error("Discarding malformed event %r", record)
            continue
        try:
            events.append(Event.from_record(record))
        except (KeyError, MalformedDateError) as exc:
            logger.error("Discarding malformed event %r: %s", record.get("id"), exc)
    return events


class EventApiClient:
    """Maps planner operations onto the REST API.

    ``http`` must be configured with the API root as its ``base_url`` (for
    example ``http://localhost:5000/api``). Failures surface as
    ``ValidationError``, ``NotFoundError`` or ``TransportError``.
    """

    def __init__(self, http: httpx.Client) -> None:
        self._http = http

    @classmethod
    def from_settings(cls, settings: Optional[ClientSettings] = None) -> "EventApiClient":
        resolved = settings or get_settings().client
        base_url = resolved.api_url.rstrip("/") + "/"
        http = httpx.Client(
            base_url=base_url,
            timeout=resolved.timeout,
            headers={"Content-Type": "application/json"},
        )
        return cls(http)

    def close(self) -> None:
        self._http.close()

    # ------------------------------------------------------------------ plumbing

    def _request(self, method: str, path: str, *, event_id: Optional[str] = None, **kwargs: Any) -> Dict[str, Any]:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("API request %s %s failed: %s", method, path, exc)
            raise TransportError(f"Could not reach the events API: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        if response.is_success:
            return body

        message = body.get("message") or body.get("error") or f"HTTP error! status: {response.status_code}"
        if response.status_code == 404:
            raise NotFoundError(event_id or path, message=body.get("error") or message)
        if response.status_code == 400:
            raise ValidationError(body.get("error") or message)
        logger.error("API request %s %s returned %s: %s", method, path, response.status_code, message)
        raise TransportError(message, status_code=response.status_code)

    # ------------------------------------------------------------------ operations

    def list_events(self, **filters: Any) -> RemotePage:
        params = {key: value for key, value in filters.items() if value not in (None, "")}
        body = self._request("GET", "events", params=params)
        events = _decode_events(body.get("data"))
        pagination = body.get("pagination")
        if not isinstance(pagination, dict):
            pagination = {}
        try:
            return RemotePage(
                events=events,
                page=int(pagination.get("page", 1)),
                limit=int(pagination.get("limit", len(events))),
                total=int(pagination.get("total", len(events))),
                pages=int(pagination.get("pages", 1)),
            )
        except (TypeError, ValueError) as exc:
            raise TransportError(f"The events API returned malformed pagination: {pagination}") from exc

    def fetch_all(self, *, page_size: int = 100) -> List[Event]:
        collected: List[Event] = []
        page = 1
        while True:
            result = self.list_events(page=page, limit=page_size)
            collected.extend(result.events)
            if page >= result.pages:
                return collected
            page += 1

    def get_event(self, event_id: str) -> Event:
        body = self._request("GET", f"events/{event_id}", event_id=event_id)
        return _decode_event(body)

    def create_event(self, payload: Dict[str, Any]) -> Event:
        body = self._request("POST", "events", json=payload)
        return _decode_event(body)

    def update_event(self, event_id: str, payload: Dict[str, Any]) -> Event:
        body = self._request("PUT", f"events/{event_id}", event_id=event_id, json=payload)
        return _decode_event(body)

    def delete_event(self, event_id: str) -> Event:
        body = self._request("DELETE", f"events/{event_id}", event_id=event_id)
        return _decode_event(body)

    def toggle_event(self, event_id: str) -> Event:
        body = self._request("PATCH", f"events/{event_id}/toggle", event_id=event_id)
        return _decode_event(body)

    def upcoming(self, limit: int = 10) -> List[Event]:
        body = self._request("GET", "events/upcoming/events", params={"limit": limit})
        return _decode_events(body.get("data"))

    def _health_url(self) -> str:
        root = str(self._http.base_url).rstrip("/")
        if root.endswith("/api"):
            root = root[: -len("/api")]
        return f"{root}/health"

    def health(self) -> bool:
        try:
            response = self._http.get(self._health_url())
        except httpx.HTTPError as exc:
            logger.error("Health check failed: %s", exc)
            return False
        return response.is_success


__all__ = ["EventApiClient", "RemotePage"]
