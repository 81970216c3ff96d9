from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..core.config import APP_NAME, EVENTS_FILE

load_dotenv()


@dataclass(frozen=True)
class ServerSettings:
    host: str
    port: int
    cors_origins: tuple[str, ...]
    default_page_size: int


@dataclass(frozen=True)
class ClientSettings:
    api_url: str
    timeout: float


@dataclass(frozen=True)
class StorageSettings:
    data_file: Path


@dataclass(frozen=True)
class UiSettings:
    app_name: str
    upcoming_limit: int


@dataclass(frozen=True)
class AppSettings:
    server: ServerSettings
    client: ClientSettings
    storage: StorageSettings
    ui: UiSettings


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _origins_from_env(raw: Optional[str]) -> tuple[str, ...]:
    if not raw:
        return ("*",)
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    host = os.getenv("EVENT_PLANNER_HOST", "127.0.0.1")
    port = _int_from_env("EVENT_PLANNER_PORT", 5000)

    server = ServerSettings(
        host=host,
        port=port,
        cors_origins=_origins_from_env(os.getenv("EVENT_PLANNER_CORS_ORIGINS")),
        default_page_size=_int_from_env("EVENT_PLANNER_PAGE_SIZE", 100),
    )

    client = ClientSettings(
        api_url=os.getenv("EVENT_PLANNER_API_URL", f"http://localhost:{port}/api"),
        timeout=_float_from_env("EVENT_PLANNER_API_TIMEOUT", 10.0),
    )

    data_file = os.getenv("EVENT_PLANNER_DATA_FILE")
    storage = StorageSettings(data_file=Path(data_file) if data_file else EVENTS_FILE)

    ui = UiSettings(
        app_name=os.getenv("EVENT_PLANNER_APP_NAME", APP_NAME),
        upcoming_limit=_int_from_env("EVENT_PLANNER_UPCOMING_LIMIT", 10),
    )

    return AppSettings(server=server, client=client, storage=storage, ui=ui)
