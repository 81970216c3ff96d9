from __future__ import annotations

from pathlib import Path

from platformdirs import user_data_dir

APP_NAME = "Event Planner"
APP_AUTHOR = "EventPlanner"
DATA_DIR = Path(user_data_dir(APP_NAME, APP_AUTHOR))
EVENTS_FILE = DATA_DIR / "events.json"
SCHEMA_VERSION = 1
DEFAULT_STORE_CONTENT = {
    "events": [],
    "metadata": {"schema_version": SCHEMA_VERSION},
}


def ensure_data_dir(path: Path = DATA_DIR) -> None:
    path.mkdir(parents=True, exist_ok=True)
