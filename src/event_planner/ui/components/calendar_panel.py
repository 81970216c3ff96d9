from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ...config import AppPalette
from ...core.calendar import WEEKDAY_HEADERS, CalendarCell, is_selected, is_today, month_title
from ...domain import Event


class CalendarPanel(QWidget):
    previous_requested = pyqtSignal()
    next_requested = pyqtSignal()
    today_requested = pyqtSignal()
    day_selected = pyqtSignal(object)
    event_selected = pyqtSignal(str)

    def __init__(self, palette: AppPalette) -> None:
        super().__init__()
        self.setObjectName("calendarPanel")
        self.palette_colors = palette
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        header = QHBoxLayout()
        self.month_label = QLabel("")
        self.month_label.setObjectName("title")
        header.addWidget(self.month_label, stretch=1)
        for text, signal in (("‹", self.previous_requested), ("Today", self.today_requested), ("›", self.next_requested)):
            button = QPushButton(text)
            button.setObjectName("secondaryButton")
            button.clicked.connect(signal)
            header.addWidget(button)
        layout.addLayout(header)

        self.grid = QGridLayout()
        self.grid.setSpacing(0)
        for column, name in enumerate(WEEKDAY_HEADERS):
            label = QLabel(name)
            label.setAlignment(Qt.AlignmentFlag.AlignCenter)
            self.grid.addWidget(label, 0, column)
        layout.addLayout(self.grid, stretch=2)

        self.day_label = QLabel("")
        self.day_label.setObjectName("muted")
        layout.addWidget(self.day_label)
        self.day_events = QListWidget()
        self.day_events.itemClicked.connect(lambda item: self.event_selected.emit(item.data(Qt.ItemDataRole.UserRole)))
        layout.addWidget(self.day_events, stretch=1)

        self._cells: List[QWidget] = []

    def render_month(
        self,
        reference: date,
        cells: Iterable[Optional[CalendarCell]],
        *,
        selected: Optional[date],
        today: Optional[date] = None,
    ) -> None:
        self.month_label.setText(month_title(reference))
        for widget in self._cells:
            self.grid.removeWidget(widget)
            widget.deleteLater()
        self._cells = []

        for index, cell in enumerate(cells):
            row, column = divmod(index, 7)
            if cell is None:
                widget: QWidget = QWidget()
            else:
                widget = self._day_button(cell, selected=selected, today=today)
            self.grid.addWidget(widget, row + 1, column)
            self._cells.append(widget)

    def _day_button(self, cell: CalendarCell, *, selected: Optional[date], today: Optional[date]) -> QPushButton:
        shown, overflow = cell.preview()
        dots = "".join("●" for _ in shown)
        more = f" +{overflow}" if overflow else ""
        button = QPushButton(f"{cell.day}\n{dots}{more}")
        button.setObjectName("calendarDay")
        button.setProperty("today", "true" if is_today(cell.date, today) else "false")
        button.setProperty("selected", "true" if is_selected(cell.date, selected) else "false")
        button.setToolTip("\n".join(f"{event.title} - {event.priority.value} priority" for event in cell.events))
        if shown:
            color = self.palette_colors.priority_color(max(shown, key=lambda event: event.priority.rank).priority)
            button.setStyleSheet(f"color: {color};")
        button.clicked.connect(lambda _checked=False, day=cell.date: self.day_selected.emit(day))
        return button

    def show_day(self, day: Optional[date], events: List[Event]) -> None:
        self.day_events.clear()
        if day is None:
            self.day_label.setText("Select a day to see its events.")
            return
        heading = day.strftime("%A, %B %d, %Y")
        if not events:
            self.day_label.setText(f"No events scheduled for {heading}.")
            return
        self.day_label.setText(f"Events for {heading}")
        for event in events:
            text = f"{event.datetime.strftime('%I:%M %p')}  {event.title}"
            if event.location:
                text += f"  ·  {event.location}"
            item = QListWidgetItem(text)
            item.setData(Qt.ItemDataRole.UserRole, event.id)
            item.setToolTip(event.description)
            item.setForeground(QColor(self.palette_colors.priority_color(event.priority)))
            self.day_events.addItem(item)
