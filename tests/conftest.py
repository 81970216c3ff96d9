"""
Pytest configuration and shared fixtures.
Provides sample events, an isolated store and API-backed clients.
"""

from datetime import datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from event_planner.config import AppSettings, ClientSettings, ServerSettings, StorageSettings, UiSettings
from event_planner.data import EventStore
from event_planner.domain import Category, Event, Priority
from event_planner.services import EventApiClient, PlannerService
from event_planner.services.http import create_app


# ==================== Event Fixtures ====================

@pytest.fixture
def make_event():
    """Factory building events with sensible defaults."""

    counter = {"next": 0}

    def _make(title="Event", when=datetime(2024, 3, 5, 14, 30), **overrides):
        counter["next"] += 1
        values = {
            "id": overrides.pop("id", f"evt-{counter['next']}"),
            "title": title,
            "datetime": when,
            "created_at": datetime(2024, 1, 1, 9, 0),
        }
        values.update(overrides)
        return Event(**values)

    return _make


@pytest.fixture
def sample_events(make_event):
    """A small mixed collection covering every filter dimension."""
    return [
        make_event("Team meeting", datetime(2024, 3, 5, 9, 0), category=Category.WORK, priority=Priority.HIGH,
                   description="Weekly sync"),
        make_event("Dentist", datetime(2024, 3, 2, 15, 0), category=Category.HEALTH, priority=Priority.URGENT),
        make_event("Dinner with family", datetime(2024, 3, 9, 19, 0), category=Category.FAMILY,
                   priority=Priority.MEDIUM, description="Meet at grandma's"),
        make_event("Quarterly review", datetime(2024, 3, 12, 11, 0), category=Category.WORK,
                   priority=Priority.LOW, completed=True),
        make_event("Gym", datetime(2024, 3, 5, 7, 0), category=Category.PERSONAL, priority=Priority.MEDIUM),
    ]


# ==================== Backend Fixtures ====================

@pytest.fixture
def data_file(tmp_path) -> Path:
    return tmp_path / "events.json"


@pytest.fixture
def settings(data_file) -> AppSettings:
    """Settings pointing every component at a temporary data file."""
    return AppSettings(
        server=ServerSettings(host="127.0.0.1", port=5000, cors_origins=("*",), default_page_size=100),
        client=ClientSettings(api_url="http://testserver/api", timeout=5.0),
        storage=StorageSettings(data_file=data_file),
        ui=UiSettings(app_name="Event Planner", upcoming_limit=10),
    )


@pytest.fixture
def store(data_file) -> EventStore:
    return EventStore(data_file)


@pytest.fixture
def app(settings, store):
    return create_app(settings, store)


@pytest.fixture
def api(app):
    """HTTP client addressing the app by absolute path."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def api_client(app):
    """EventApiClient talking to the in-process app."""
    http = TestClient(app, base_url="http://testserver/api/")
    client = EventApiClient(http)
    yield client
    client.close()


@pytest.fixture
def planner(api_client) -> PlannerService:
    return PlannerService(client=api_client, page_size=2)


@pytest.fixture
def event_fields():
    """Minimal valid body for creating an event."""
    return {
        "title": "Project kickoff",
        "description": "Meet the new team",
        "datetime": "2024-03-05T14:30",
        "location": "Room 4",
        "category": "work",
        "priority": "high",
    }
