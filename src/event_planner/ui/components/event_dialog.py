from __future__ import annotations

from datetime import date
from typing import Dict, Optional

from PyQt6.QtCore import QDate, QTime
from PyQt6.QtWidgets import (
    QComboBox,
    QDateEdit,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QLineEdit,
    QTextEdit,
    QTimeEdit,
    QVBoxLayout,
    QWidget,
)

from ...core.forms import EventForm, validate_form
from ...domain import Category, Priority


def _with_error(field: QWidget) -> tuple[QWidget, QLabel]:
    container = QWidget()
    layout = QVBoxLayout(container)
    layout.setContentsMargins(0, 0, 0, 0)
    layout.setSpacing(2)
    layout.addWidget(field)
    error = QLabel("")
    error.setObjectName("fieldError")
    error.hide()
    layout.addWidget(error)
    return container, error


class EventDialog(QDialog):
    """Add/edit form. Stays open until the required fields are present."""

    def __init__(self, *, form: Optional[EventForm] = None, default_day: Optional[date] = None) -> None:
        super().__init__()
        editing = form is not None
        form = form or EventForm()
        self.setWindowTitle("Edit Event" if editing else "Add New Event")
        layout = QVBoxLayout(self)
        grid = QFormLayout()

        self.title_input = QLineEdit(form.title)
        self.title_input.setPlaceholderText("Enter event title")
        title_row, self.title_error = _with_error(self.title_input)
        grid.addRow("Event Title *", title_row)

        self.category_box = QComboBox()
        for category in Category:
            self.category_box.addItem(category.value.capitalize(), category.value)
        self.category_box.setCurrentIndex(max(self.category_box.findData(form.category), 0))
        grid.addRow("Category", self.category_box)

        self.description_input = QTextEdit(form.description)
        self.description_input.setPlaceholderText("Enter event description")
        grid.addRow("Description", self.description_input)

        self.date_input = QDateEdit()
        self.date_input.setCalendarPopup(True)
        self.date_input.setDisplayFormat("yyyy-MM-dd")
        initial_day = QDate.fromString(form.date, "yyyy-MM-dd") if form.date else QDate()
        if not initial_day.isValid() and default_day is not None:
            initial_day = QDate(default_day.year, default_day.month, default_day.day)
        self.date_input.setDate(initial_day if initial_day.isValid() else QDate.currentDate())
        date_row, self.date_error = _with_error(self.date_input)
        grid.addRow("Date *", date_row)

        self.time_input = QTimeEdit()
        self.time_input.setDisplayFormat("HH:mm")
        initial_time = QTime.fromString(form.time, "HH:mm") if form.time else QTime(9, 0)
        self.time_input.setTime(initial_time if initial_time.isValid() else QTime(9, 0))
        time_row, self.time_error = _with_error(self.time_input)
        grid.addRow("Time *", time_row)

        self.location_input = QLineEdit(form.location)
        self.location_input.setPlaceholderText("Enter event location")
        grid.addRow("Location", self.location_input)

        self.priority_box = QComboBox()
        for priority in Priority:
            self.priority_box.addItem(priority.value.capitalize(), priority.value)
        self.priority_box.setCurrentIndex(max(self.priority_box.findData(form.priority), 0))
        grid.addRow("Priority", self.priority_box)

        layout.addLayout(grid)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Save | QDialogButtonBox.StandardButton.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        self.title_input.textChanged.connect(lambda _text: self._clear_error("title"))

    def values(self) -> EventForm:
        return EventForm(
            title=self.title_input.text(),
            description=self.description_input.toPlainText().strip(),
            date=self.date_input.date().toString("yyyy-MM-dd"),
            time=self.time_input.time().toString("HH:mm"),
            location=self.location_input.text().strip(),
            category=self.category_box.currentData(),
            priority=self.priority_box.currentData(),
        )

    def show_errors(self, errors: Dict[str, str]) -> None:
        labels = {"title": self.title_error, "date": self.date_error, "time": self.time_error}
        for name, label in labels.items():
            reason = errors.get(name, "")
            label.setText(reason)
            label.setVisible(bool(reason))

    def _clear_error(self, name: str) -> None:
        if name == "title":
            self.title_error.hide()

    def accept(self) -> None:
        errors = validate_form(self.values())
        if errors:
            self.show_errors(errors)
            return
        super().accept()
