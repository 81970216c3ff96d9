"""Data access layer."""

from __future__ import annotations

from .store import EventPage, EventStore

__all__ = ["EventPage", "EventStore"]
