"""
Integration tests for the API client and planner service against the in-process API.
"""

from datetime import datetime

import httpx
import pytest

from event_planner.core.forms import EventForm
from event_planner.domain import NotFoundError, TransportError, ValidationError
from event_planner.services import EventApiClient, PlannerService


def _offline_client():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.Client(base_url="http://testserver/api/", transport=httpx.MockTransport(handler))
    return EventApiClient(http)


def _stub_client(status, body):
    transport = httpx.MockTransport(lambda request: httpx.Response(status, json=body))
    return EventApiClient(httpx.Client(base_url="http://testserver/api/", transport=transport))


def _form(**overrides):
    values = {"title": "Lunch", "date": "2024-03-05", "time": "12:30", "category": "social", "priority": "low"}
    values.update(overrides)
    return EventForm(**values)


class TestEventApiClient:
    """Tests for request mapping and error translation."""

    def test_round_trip(self, api_client, event_fields):
        created = api_client.create_event(event_fields)

        assert api_client.get_event(created.id) == created
        assert api_client.toggle_event(created.id).completed is True
        assert api_client.delete_event(created.id).id == created.id

    def test_not_found(self, api_client):
        with pytest.raises(NotFoundError) as info:
            api_client.get_event("missing")
        assert info.value.event_id == "missing"

    def test_validation_error(self, api_client):
        with pytest.raises(ValidationError, match="Title and datetime are required"):
            api_client.create_event({"title": ""})

    def test_fetch_all_walks_pages(self, api_client, store, event_fields):
        for index in range(5):
            store.create({**event_fields, "title": f"Event {index}"})

        assert len(api_client.fetch_all(page_size=2)) == 5

    def test_list_events_filters(self, api_client, store, event_fields):
        store.create(event_fields)
        store.create({**event_fields, "title": "Other", "category": "family"})

        page = api_client.list_events(category="family", search=None)
        assert [event.title for event in page.events] == ["Other"]
        assert page.total == 1

    def test_upcoming(self, api_client, store, event_fields):
        store.create({**event_fields, "datetime": "2999-01-01T09:00"})
        store.create({**event_fields, "datetime": "2000-01-01T09:00"})

        assert [event.datetime.year for event in api_client.upcoming()] == [2999]

    def test_health(self, api_client):
        assert api_client.health() is True
        assert _offline_client().health() is False

    def test_unreachable_server(self):
        with pytest.raises(TransportError):
            _offline_client().list_events()

    def test_server_error_status(self):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(500, json={"success": False, "error": "boom", "message": "disk full"})
        )
        client = EventApiClient(httpx.Client(base_url="http://testserver/api/", transport=transport))

        with pytest.raises(TransportError) as info:
            client.list_events()
        assert info.value.status_code == 500
        assert str(info.value) == "disk full"


    @pytest.mark.parametrize("body", ["Bad Gateway", ["upstream", "down"], None])
    def test_error_body_that_is_not_an_object(self, body):
        with pytest.raises(TransportError) as info:
            _stub_client(502, body).list_events()
        assert info.value.status_code == 502

    def test_success_without_event_data(self):
        client = _stub_client(200, {"success": True})

        with pytest.raises(TransportError):
            client.get_event("a1")
        with pytest.raises(TransportError):
            client.list_events()

    def test_success_with_event_missing_id(self):
        client = _stub_client(200, {"success": True, "data": {"title": "No id", "datetime": "2024-03-05T10:00"}})

        with pytest.raises(TransportError):
            client.toggle_event("a1")

    def test_malformed_pagination(self):
        client = _stub_client(200, {"success": True, "data": [], "pagination": {"pages": "many"}})

        with pytest.raises(TransportError):
            client.list_events()


class TestPlannerService:
    """Tests for user actions flowing through the API into view state."""

    def test_refresh_loads_all_pages(self, planner, store, event_fields):
        for index in range(5):
            store.create({**event_fields, "title": f"Event {index}"})

        outcome = planner.refresh()

        assert outcome.ok
        assert outcome.message == "Loaded 5 events"
        assert len(planner.state.events) == 5

    def test_invalid_form_sends_nothing(self, planner, store):
        outcome = planner.submit(_form(title="  ", time=""))

        assert not outcome.ok
        assert set(outcome.errors) == {"title", "time"}
        assert store.list_all() == []

    def test_add_event(self, planner, store):
        outcome = planner.submit(_form())

        assert outcome.ok
        assert outcome.message == "Event added"
        assert outcome.event.datetime == datetime(2024, 3, 5, 12, 30)
        assert planner.state.events == [outcome.event]
        assert store.get(outcome.event.id) == outcome.event

    def test_edit_event(self, planner, store):
        added = planner.submit(_form()).event

        started = planner.start_edit(added.id)
        assert started.ok
        assert started.form.time == "12:30"
        assert planner.state.editing == added

        outcome = planner.submit(_form(title="Long lunch", time="13:00"))

        assert outcome.ok
        assert outcome.message == "Event updated"
        assert outcome.event.id == added.id
        assert outcome.event.created_at == added.created_at
        assert planner.state.editing is None
        assert [event.title for event in planner.state.events] == ["Long lunch"]

    def test_start_edit_unknown(self, planner):
        outcome = planner.start_edit("missing")

        assert not outcome.ok
        assert outcome.message == "That event no longer exists."

    def test_toggle_and_delete(self, planner):
        added = planner.submit(_form()).event

        toggled = planner.toggle(added.id)
        assert toggled.message == "Event marked as complete"
        assert planner.state.find(added.id).completed is True

        deleted = planner.delete(added.id)
        assert deleted.ok
        assert planner.state.events == []

    def test_delete_unknown_keeps_state(self, planner):
        added = planner.submit(_form()).event

        outcome = planner.delete("missing")

        assert not outcome.ok
        assert outcome.message == "That event no longer exists."
        assert planner.state.events == [added]

    def test_offline_refresh_keeps_state(self, make_event):
        planner = PlannerService(client=_offline_client())
        existing = make_event("Cached")
        planner.state.replace_events([existing])

        outcome = planner.refresh()

        assert not outcome.ok
        assert outcome.message == "Could not reach the event server. Please try again."
        assert planner.state.events == [existing]

    def test_upcoming(self, planner, store, event_fields):
        store.create({**event_fields, "title": "Far future", "datetime": "2999-01-01T09:00"})
        store.create({**event_fields, "title": "Long ago", "datetime": "2000-01-01T09:00"})

        outcome = planner.upcoming(limit=5)

        assert outcome.ok
        assert [event.title for event in outcome.events] == ["Far future"]

    def test_save_updates_event_open_when_saved(self, planner, store):
        first = planner.submit(_form(title="A")).event
        second = planner.submit(_form(title="B")).event

        planner.start_edit(first.id)
        editing_first = planner.state.editing
        planner.start_edit(second.id)

        outcome = planner.apply(planner.request_submit(_form(title="A edited"), editing_first))

        assert outcome.ok
        assert store.get(first.id).title == "A edited"
        assert store.get(second.id).title == "B"
        assert planner.state.editing.id == second.id
        assert planner.state.find(first.id).title == "A edited"

    def test_requests_leave_state_until_applied(self, planner, store, event_fields):
        existing = planner.submit(_form(title="Existing")).event
        store.create(event_fields)

        refreshed = planner.request_refresh()
        toggled = planner.request_toggle(existing.id)
        assert len(planner.state.events) == 1
        assert planner.state.find(existing.id).completed is False

        planner.apply(refreshed)
        planner.apply(toggled)
        assert len(planner.state.events) == 2
        assert planner.state.find(existing.id).completed is True

    def test_failed_request_has_nothing_to_apply(self, planner):
        outcome = planner.request_delete("missing")

        assert outcome.effect is None
        assert planner.apply(outcome) is outcome

    def test_non_object_error_body_is_reported(self):
        planner = PlannerService(client=_stub_client(502, "Bad Gateway"))

        outcome = planner.refresh()

        assert not outcome.ok
        assert outcome.message == "Could not reach the event server. Please try again."
