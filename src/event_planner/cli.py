from __future__ import annotations

import argparse
import logging
from typing import Optional

from .bootstrap import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Event Planner command line interface.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("gui", help="Launch the desktop GUI.")

    api_parser = subparsers.add_parser("api", help="Start the REST server for events.")
    api_parser.add_argument("--host", default=None, help="Defaults to EVENT_PLANNER_HOST.")
    api_parser.add_argument("--port", type=int, default=None, help="Defaults to EVENT_PLANNER_PORT.")

    upcoming_parser = subparsers.add_parser("upcoming", help="Print upcoming events from the running server.")
    upcoming_parser.add_argument("--limit", type=int, default=None, help="Defaults to EVENT_PLANNER_UPCOMING_LIMIT.")

    return parser


def _print_upcoming(limit: Optional[int]) -> int:
    from .config import get_settings
    from .domain import PlannerError
    from .services import EventApiClient

    settings = get_settings()
    client = EventApiClient.from_settings(settings.client)
    try:
        events = client.upcoming(limit or settings.ui.upcoming_limit)
    except PlannerError as exc:
        print(f"Could not load upcoming events: {exc}")
        return 1
    finally:
        client.close()

    if not events:
        print("No upcoming events.")
    for event in events:
        print(event.describe())
    return 0


def main() -> None:
    configure_logging()
    logging.getLogger(__name__).info("Event Planner CLI starting")
    parser = build_parser()
    args = parser.parse_args()

    if args.command == "gui":
        from .ui.app import run_gui

        run_gui()
    elif args.command == "api":
        from .services.http import run_local_server

        run_local_server(host=args.host, port=args.port)
    elif args.command == "upcoming":
        raise SystemExit(_print_upcoming(args.limit))
    else:  # pragma: no cover - argparse enforces choices
        parser.print_help()


if __name__ == "__main__":
    main()
