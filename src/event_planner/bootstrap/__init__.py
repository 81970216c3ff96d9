"""Start-up helpers shared by the CLI and the GUI."""

from __future__ import annotations

from .logging import configure_logging

__all__ = ["configure_logging"]
