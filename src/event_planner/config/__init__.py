"""Configuration models and helpers."""

from __future__ import annotations

from .settings import AppSettings, ClientSettings, ServerSettings, StorageSettings, UiSettings, get_settings
from .theme import AppPalette

__all__ = [
    "AppPalette",
    "AppSettings",
    "ClientSettings",
    "ServerSettings",
    "StorageSettings",
    "UiSettings",
    "get_settings",
]
