"""Query, calendar projection, form validation and view state."""

from .calendar import CalendarCell, events_on, is_selected, is_today, month_grid, month_title, shift_month
from .config import APP_NAME, DATA_DIR, EVENTS_FILE, ensure_data_dir
from .forms import EventForm, build_submission, combine_datetime, form_from_event, validate_form
from .query import EventQuery, apply_query, filter_events, sort_events
from .state import EventState

__all__ = [
    "APP_NAME",
    "CalendarCell",
    "DATA_DIR",
    "EVENTS_FILE",
    "EventForm",
    "EventQuery",
    "EventState",
    "apply_query",
    "build_submission",
    "combine_datetime",
    "ensure_data_dir",
    "events_on",
    "filter_events",
    "form_from_event",
    "is_selected",
    "is_today",
    "month_grid",
    "month_title",
    "shift_month",
    "sort_events",
    "validate_form",
]
