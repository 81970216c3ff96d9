"""HTTP services for the event planner."""

from .server import app, create_app, run_local_server

__all__ = [
    "app",
    "create_app",
    "run_local_server",
]
