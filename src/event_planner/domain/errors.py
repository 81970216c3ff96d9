from __future__ import annotations

from typing import Dict, Optional


class PlannerError(Exception):
    """Base class for errors surfaced to the user as a message."""


class ValidationError(PlannerError):
    """Raised when required event fields are missing or invalid."""

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None) -> None:
        super().__init__(message)
        self.errors: Dict[str, str] = dict(errors or {})


class NotFoundError(PlannerError):
    """Raised when operating on an event id that does not exist."""

    def __init__(self, event_id: str, message: str = "Event not found") -> None:
        super().__init__(message)
        self.event_id = event_id


class TransportError(PlannerError):
    """Raised when the API cannot be reached or answers with a server error."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedDateError(PlannerError, ValueError):
    """Raised when an event datetime cannot be parsed."""
