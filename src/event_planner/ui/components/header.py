from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QButtonGroup, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from ...domain import ViewMode


class Header(QWidget):
    view_changed = pyqtSignal(object)
    add_requested = pyqtSignal()

    def __init__(self, app_name: str) -> None:
        super().__init__()
        self.setObjectName("header")
        layout = QHBoxLayout(self)
        layout.setContentsMargins(24, 16, 24, 16)

        titles = QVBoxLayout()
        title = QLabel(app_name)
        title.setObjectName("title")
        titles.addWidget(title)
        titles.addWidget(QLabel("Organize your events efficiently"))
        layout.addLayout(titles, stretch=1)

        self._views = QButtonGroup(self)
        self._views.setExclusive(True)
        for view, text in ((ViewMode.LIST, "List View"), (ViewMode.CALENDAR, "Calendar View")):
            button = QPushButton(text)
            button.setObjectName("secondaryButton")
            button.setCheckable(True)
            button.setChecked(view is ViewMode.LIST)
            button.clicked.connect(lambda _checked=False, selected=view: self.view_changed.emit(selected))
            self._views.addButton(button)
            layout.addWidget(button)

        self.add_button = QPushButton("Add Event")
        self.add_button.clicked.connect(self.add_requested)
        layout.addWidget(self.add_button)

    def set_editing(self, editing: bool) -> None:
        self.add_button.setText("Edit Event" if editing else "Add Event")
