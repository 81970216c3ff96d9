"""REST API for events."""

from __future__ import annotations

from .routes import ApiError, router

__all__ = ["ApiError", "router"]
