from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from ..core.forms import EventForm, build_submission, form_from_event, validate_form
from ..core.state import EventState
from ..domain import Event, MalformedDateError, NotFoundError, PlannerError, TransportError, ValidationError
from .client import EventApiClient

logger = logging.getLogger(__name__)

Effect = Callable[[EventState], None]


@dataclass
class ActionOutcome:
    """Result of a user action, carrying a message fit for display.

    ``effect`` holds the pending state change of a successful request; it is
    run by ``PlannerService.apply`` on the thread that owns the state.
    """

    ok: bool
    message: str = ""
    errors: Dict[str, str] = field(default_factory=dict)
    event: Optional[Event] = None
    form: Optional[EventForm] = None
    events: List[Event] = field(default_factory=list)
    effect: Optional[Effect] = field(default=None, repr=False)


def _user_message(exc: PlannerError) -> str:
    if isinstance(exc, NotFoundError):
        return "That event no longer exists."
    if isinstance(exc, TransportError):
        return "Could not reach the event server. Please try again."
    return str(exc)


@dataclass
class PlannerService:
    """Boundary between UI actions and the events API.

    Each mutation comes in two halves. ``request_*`` talks to the API and
    never touches ``state``, so it may run on a worker thread. ``apply``
    folds the returned outcome into ``state``. The plain ``refresh``,
    ``submit``, ``delete`` and ``toggle`` do both in one call. Failures are
    logged and reported through the outcome; state is left as it was.
    """

    client: EventApiClient
    state: EventState = field(default_factory=EventState)
    page_size: int = 100

    @classmethod
    def from_settings(cls) -> "PlannerService":
        return cls(client=EventApiClient.from_settings())

    def _guard(self, action: str, operation: Callable[[], ActionOutcome]) -> ActionOutcome:
        try:
            return operation()
        except PlannerError as exc:
            if isinstance(exc, TransportError):
                logger.error("%s failed: %s", action, exc)
            else:
                logger.warning("%s failed: %s", action, exc)
            errors = exc.errors if isinstance(exc, ValidationError) else {}
            return ActionOutcome(ok=False, message=_user_message(exc), errors=errors)

    def apply(self, outcome: ActionOutcome) -> ActionOutcome:
        if outcome.effect is not None:
            effect, outcome.effect = outcome.effect, None
            effect(self.state)
        return outcome

    # ------------------------------------------------------------------ reads

    def request_refresh(self) -> ActionOutcome:
        def _load() -> ActionOutcome:
            events = self.client.fetch_all(page_size=self.page_size)
            return ActionOutcome(
                ok=True,
                message=f"Loaded {len(events)} events",
                events=events,
                effect=lambda state: state.replace_events(events),
            )

        return self._guard("Refresh", _load)

    def refresh(self) -> ActionOutcome:
        return self.apply(self.request_refresh())

    def upcoming(self, limit: int = 10) -> ActionOutcome:
        def _load() -> ActionOutcome:
            events = self.client.upcoming(limit)
            return ActionOutcome(ok=True, events=events)

        return self._guard("Upcoming events", _load)

    # ------------------------------------------------------------------ editing

    def start_edit(self, event_id: str) -> ActionOutcome:
        event = self.state.find(event_id)
        if event is None:
            return ActionOutcome(ok=False, message=_user_message(NotFoundError(event_id)))
        try:
            form = form_from_event(event)
        except MalformedDateError as exc:
            logger.error("Cannot edit event %s: %s", event_id, exc)
            return ActionOutcome(ok=False, message="This event has an invalid date and cannot be edited.")
        self.state.begin_edit(event)
        return ActionOutcome(ok=True, event=event, form=form)

    def cancel_edit(self) -> None:
        self.state.end_edit()

    def request_submit(self, form: EventForm, editing: Optional[Event]) -> ActionOutcome:
        """Save ``form`` as a new event, or as ``editing`` when given.

        ``editing`` is the event open when the user saved, captured by the caller.
        """

        errors = validate_form(form)
        if errors:
            return ActionOutcome(ok=False, message="Please fix the highlighted fields.", errors=errors)

        payload = build_submission(form, editing)

        def _finish(saved: Event) -> Effect:
            def _effect(state: EventState) -> None:
                state.upsert(saved)
                if editing is not None and state.editing is not None and state.editing.id == editing.id:
                    state.end_edit()

            return _effect

        def _save() -> ActionOutcome:
            if editing is not None:
                saved = self.client.update_event(editing.id, payload)
                message = "Event updated"
            else:
                saved = self.client.create_event(payload)
                message = "Event added"
            return ActionOutcome(ok=True, message=message, event=saved, effect=_finish(saved))

        return self._guard("Save event", _save)

    def submit(self, form: EventForm) -> ActionOutcome:
        return self.apply(self.request_submit(form, self.state.editing))

    # ------------------------------------------------------------------ mutations

    def request_delete(self, event_id: str) -> ActionOutcome:
        def _delete() -> ActionOutcome:
            deleted = self.client.delete_event(event_id)
            return ActionOutcome(
                ok=True,
                message="Event deleted",
                event=deleted,
                effect=lambda state: state.remove(event_id),
            )

        return self._guard("Delete event", _delete)

    def delete(self, event_id: str) -> ActionOutcome:
        return self.apply(self.request_delete(event_id))

    def request_toggle(self, event_id: str) -> ActionOutcome:
        def _toggle() -> ActionOutcome:
            toggled = self.client.toggle_event(event_id)
            status = "complete" if toggled.completed else "incomplete"
            return ActionOutcome(
                ok=True,
                message=f"Event marked as {status}",
                event=toggled,
                effect=lambda state: state.upsert(toggled),
            )

        return self._guard("Toggle event", _toggle)

    def toggle(self, event_id: str) -> ActionOutcome:
        return self.apply(self.request_toggle(event_id))


__all__ = ["ActionOutcome", "PlannerService"]
