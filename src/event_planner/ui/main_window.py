from __future__ import annotations

from datetime import date
from typing import Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QMainWindow, QMessageBox, QStackedWidget, QVBoxLayout, QWidget

from ..config import AppPalette
from ..config.settings import AppSettings
from ..core.forms import EventForm
from ..domain import SortKey, ViewMode
from ..services import ActionOutcome, PlannerService
from ..utils.qt import RequestRunner
from .components.calendar_panel import CalendarPanel
from .components.event_dialog import EventDialog
from .components.event_list import EventListPanel
from .components.header import Header


class MainWindow(QMainWindow):
    state_changed = pyqtSignal(str)

    def __init__(self, *, service: PlannerService, settings: AppSettings, palette: AppPalette) -> None:
        super().__init__()
        self.service = service
        self.state = service.state
        self.settings = settings
        self.runner = RequestRunner()

        self.setWindowTitle(settings.ui.app_name)
        self.resize(1200, 800)

        self.header = Header(settings.ui.app_name)
        self.list_panel = EventListPanel(palette)
        self.calendar_panel = CalendarPanel(palette)
        self.stack = QStackedWidget()
        self.stack.addWidget(self.list_panel)
        self.stack.addWidget(self.calendar_panel)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.header)
        layout.addWidget(self.stack, stretch=1)
        self.setCentralWidget(central)

        self.header.view_changed.connect(self.state.set_view)
        self.header.add_requested.connect(self.add_event)

        self.list_panel.search_changed.connect(lambda text: self.state.set_query(search=text))
        self.list_panel.category_changed.connect(lambda value: self.state.set_query(category=value))
        self.list_panel.priority_changed.connect(lambda value: self.state.set_query(priority=value))
        self.list_panel.sort_changed.connect(lambda key: self.state.set_query(sort_by=SortKey.parse(key)))
        self.list_panel.toggle_requested.connect(self.toggle_event)
        self.list_panel.edit_requested.connect(self.edit_event)
        self.list_panel.delete_requested.connect(self.delete_event)

        self.calendar_panel.previous_requested.connect(self.state.previous_month)
        self.calendar_panel.next_requested.connect(self.state.next_month)
        self.calendar_panel.today_requested.connect(self.state.go_to_today)
        self.calendar_panel.day_selected.connect(self.state.select_day)
        self.calendar_panel.event_selected.connect(self.edit_event)

        self.state_changed.connect(self.render)
        self._unsubscribe = self.state.subscribe(self.state_changed.emit)

        self.render("events")
        self.refresh()

    # ------------------------------------------------------------------ rendering

    def render(self, _change: str = "") -> None:
        self.stack.setCurrentWidget(self.calendar_panel if self.state.view is ViewMode.CALENDAR else self.list_panel)
        self.header.set_editing(self.state.editing is not None)

        self.list_panel.set_category_options(self.state.category_options())
        self.list_panel.populate(self.state.visible_events())

        self.calendar_panel.render_month(
            self.state.calendar_month,
            self.state.calendar_grid(),
            selected=self.state.selected_day,
        )
        self.calendar_panel.show_day(self.state.selected_day, self.state.selected_day_events())

    # ------------------------------------------------------------------ actions

    def refresh(self) -> None:
        self.statusBar().showMessage("Loading events…")
        self.runner.submit(self.service.request_refresh, on_done=self._finish, on_error=self._handle_error)

    def add_event(self) -> None:
        self.service.cancel_edit()
        self._open_dialog(None, default_day=self.state.selected_day)

    def edit_event(self, event_id: str) -> None:
        outcome = self.service.start_edit(event_id)
        if not outcome.ok:
            self._report(outcome)
            return
        self._open_dialog(outcome.form)

    def _open_dialog(self, form: Optional[EventForm], *, default_day: Optional[date] = None) -> None:
        dialog = EventDialog(form=form, default_day=default_day)
        if dialog.exec() != EventDialog.DialogCode.Accepted:
            self.service.cancel_edit()
            return
        values = dialog.values()
        editing = self.state.editing
        self.runner.submit(
            lambda: self.service.request_submit(values, editing),
            on_done=self._finish,
            on_error=self._handle_error,
        )

    def toggle_event(self, event_id: str) -> None:
        self.runner.submit(lambda: self.service.request_toggle(event_id), on_done=self._finish, on_error=self._handle_error)

    def delete_event(self, event_id: str) -> None:
        event = self.state.find(event_id)
        title = event.title if event else "this event"
        answer = QMessageBox.question(self, "Delete event", f"Delete “{title}”?")
        if answer != QMessageBox.StandardButton.Yes:
            return
        self.runner.submit(lambda: self.service.request_delete(event_id), on_done=self._finish, on_error=self._handle_error)

    # ------------------------------------------------------------------ feedback

    def _finish(self, outcome: ActionOutcome) -> None:
        # Runs on the GUI thread, which owns the state.
        self._report(self.service.apply(outcome))

    def _report(self, outcome: ActionOutcome) -> None:
        if outcome.ok:
            if outcome.message:
                self.statusBar().showMessage(outcome.message, 4000)
            return
        self.statusBar().showMessage(outcome.message, 6000)
        QMessageBox.warning(self, "Event Planner", outcome.message)

    def _handle_error(self, exc: Exception) -> None:
        self.statusBar().showMessage(f"Error: {exc}", 5000)
        QMessageBox.critical(self, "Error", str(exc))

    def closeEvent(self, event) -> None:  # noqa: N802
        self._unsubscribe()
        super().closeEvent(event)
