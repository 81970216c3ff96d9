from __future__ import annotations

from typing import Iterable, List, Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QColor, QFont, QIcon, QPixmap
from PyQt6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ...config import AppPalette
from ...domain import ALL, Event, Priority, SortKey

_SORT_LABELS = {
    SortKey.DATE: "Date",
    SortKey.PRIORITY: "Priority",
    SortKey.TITLE: "Title",
    SortKey.CATEGORY: "Category",
}


def _label(value: str, all_label: str) -> str:
    return all_label if value == ALL else value.capitalize()


class EventListPanel(QWidget):
    search_changed = pyqtSignal(str)
    category_changed = pyqtSignal(str)
    priority_changed = pyqtSignal(str)
    sort_changed = pyqtSignal(object)
    toggle_requested = pyqtSignal(str)
    edit_requested = pyqtSignal(str)
    delete_requested = pyqtSignal(str)

    def __init__(self, palette: AppPalette) -> None:
        super().__init__()
        self.palette_colors = palette
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        filters = QHBoxLayout()
        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search by title or description...")
        self.search_input.textChanged.connect(self.search_changed)
        filters.addWidget(self.search_input, stretch=2)

        self.category_box = QComboBox()
        self.category_box.currentIndexChanged.connect(self._emit_category)
        filters.addWidget(self.category_box)

        self.priority_box = QComboBox()
        for value in [ALL, *(priority.value for priority in Priority)]:
            self.priority_box.addItem(_label(value, "All Priorities"), value)
        self.priority_box.currentIndexChanged.connect(self._emit_priority)
        filters.addWidget(self.priority_box)

        self.sort_box = QComboBox()
        for key, label in _SORT_LABELS.items():
            self.sort_box.addItem(label, key)
        self.sort_box.currentIndexChanged.connect(self._emit_sort)
        filters.addWidget(self.sort_box)

        self.count_label = QLabel("0 events")
        self.count_label.setObjectName("muted")
        filters.addWidget(self.count_label)
        layout.addLayout(filters)

        self.event_list = QListWidget()
        self.event_list.itemDoubleClicked.connect(lambda item: self.edit_requested.emit(item.data(Qt.ItemDataRole.UserRole)))
        layout.addWidget(self.event_list, stretch=1)

        self.empty_label = QLabel("No events found. Try adjusting your filters or add a new event.")
        self.empty_label.setObjectName("muted")
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.empty_label)

        actions = QHBoxLayout()
        actions.addStretch(1)
        toggle_button = QPushButton("Toggle Complete")
        toggle_button.setObjectName("secondaryButton")
        toggle_button.clicked.connect(lambda: self._emit_for_selection(self.toggle_requested))
        actions.addWidget(toggle_button)
        edit_button = QPushButton("Edit")
        edit_button.setObjectName("secondaryButton")
        edit_button.clicked.connect(lambda: self._emit_for_selection(self.edit_requested))
        actions.addWidget(edit_button)
        delete_button = QPushButton("Delete")
        delete_button.setObjectName("dangerButton")
        delete_button.clicked.connect(lambda: self._emit_for_selection(self.delete_requested))
        actions.addWidget(delete_button)
        layout.addLayout(actions)

    def set_category_options(self, options: Iterable[str]) -> None:
        current = self.category_box.currentData() or ALL
        self.category_box.blockSignals(True)
        self.category_box.clear()
        for value in options:
            self.category_box.addItem(_label(value, "All Categories"), value)
        index = self.category_box.findData(current)
        self.category_box.setCurrentIndex(index if index >= 0 else 0)
        self.category_box.blockSignals(False)
        if index < 0:
            # The filtered category vanished with its last event.
            self._emit_category()

    def populate(self, events: List[Event]) -> None:
        selected = self._selected_id()
        self.event_list.clear()
        for event in events:
            marker = "✔" if event.completed else "○"
            text = (
                f"{marker}  {event.title}  ·  {event.datetime.strftime('%a, %b %d, %Y  %I:%M %p')}"
                f"  ·  {event.priority.value.capitalize()}  ·  {event.category.value.capitalize()}"
            )
            if event.location:
                text += f"  ·  {event.location}"
            item = QListWidgetItem(text)
            item.setData(Qt.ItemDataRole.UserRole, event.id)
            item.setToolTip(event.description)
            item.setIcon(self._category_badge(event.category))
            item.setForeground(QColor(self.palette_colors.priority_color(event.priority)))
            if event.completed:
                font = QFont(item.font())
                font.setStrikeOut(True)
                item.setFont(font)
            self.event_list.addItem(item)
            if event.id == selected:
                item.setSelected(True)
        count = len(events)
        self.count_label.setText(f"{count} event{'s' if count != 1 else ''}")
        self.empty_label.setVisible(count == 0)

    def _category_badge(self, category) -> QIcon:
        badge = QPixmap(12, 12)
        badge.fill(QColor(self.palette_colors.category_color(category)))
        return QIcon(badge)

    def _selected_id(self) -> Optional[str]:
        item = self.event_list.currentItem()
        return item.data(Qt.ItemDataRole.UserRole) if item else None

    def _emit_for_selection(self, signal) -> None:
        event_id = self._selected_id()
        if event_id:
            signal.emit(event_id)

    def _emit_category(self) -> None:
        self.category_changed.emit(self.category_box.currentData() or ALL)

    def _emit_priority(self) -> None:
        self.priority_changed.emit(self.priority_box.currentData() or ALL)

    def _emit_sort(self) -> None:
        self.sort_changed.emit(self.sort_box.currentData() or SortKey.DATE)
