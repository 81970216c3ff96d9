"""Application services orchestrating the API client and view state."""

from __future__ import annotations

from .client import EventApiClient, RemotePage
from .planner import ActionOutcome, PlannerService

__all__ = ["ActionOutcome", "EventApiClient", "PlannerService", "RemotePage"]
