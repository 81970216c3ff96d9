from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

NEUTRAL_COLOR = "#6c757d"


def _priority_colors() -> Dict[str, str]:
    return {
        "low": "#28a745",
        "medium": "#ffc107",
        "high": "#dc3545",
        "urgent": "#343a40",
    }


def _category_colors() -> Dict[str, str]:
    return {
        "personal": "#17a2b8",
        "work": "#0d6efd",
        "family": "#28a745",
        "social": "#ffc107",
        "health": "#dc3545",
        "other": NEUTRAL_COLOR,
    }


@dataclass(frozen=True)
class AppPalette:
    background_primary: str = "#f8f9fa"
    background_secondary: str = "#ffffff"
    surface: str = "#ffffff"
    surface_alt: str = "#e9ecef"
    accent_primary: str = "#0d6efd"
    accent_secondary: str = "#6610f2"
    accent_success: str = "#198754"
    accent_warning: str = "#ffc107"
    accent_error: str = "#dc3545"
    text_primary: str = "#212529"
    text_secondary: str = "#6c757d"
    border_subtle: str = "#dee2e6"
    border_strong: str = "#ced4da"
    neutral: str = NEUTRAL_COLOR
    priority_colors: Dict[str, str] = field(default_factory=_priority_colors)
    category_colors: Dict[str, str] = field(default_factory=_category_colors)

    def priority_color(self, priority: str) -> str:
        return self.priority_colors.get(str(getattr(priority, "value", priority)), self.neutral)

    def category_color(self, category: str) -> str:
        return self.category_colors.get(str(getattr(category, "value", category)), self.neutral)

    def as_stylesheet(self) -> str:
        """Global stylesheet for the PyQt app."""

        return f"""
        QWidget {{
            background-color: {self.background_primary};
            color: {self.text_primary};
            font-family: -apple-system, 'Segoe UI', Roboto, sans-serif;
            font-size: 13px;
        }}
        QPushButton {{
            background-color: {self.accent_primary};
            color: #ffffff;
            border: none;
            padding: 8px 14px;
            border-radius: 6px;
            font-weight: 600;
        }}
        QPushButton:disabled {{
            background-color: {self.surface_alt};
            color: {self.neutral};
        }}
        QPushButton#secondaryButton {{
            background-color: transparent;
            color: {self.accent_primary};
            border: 1px solid {self.accent_primary};
        }}
        QPushButton#secondaryButton:checked {{
            background-color: {self.accent_primary};
            color: #ffffff;
        }}
        QPushButton#dangerButton {{
            background-color: transparent;
            color: {self.accent_error};
            border: 1px solid {self.accent_error};
        }}
        QPushButton#calendarDay {{
            background-color: {self.surface};
            color: {self.text_primary};
            border: 1px solid {self.border_subtle};
            border-radius: 0;
            text-align: left;
            padding: 6px;
        }}
        QPushButton#calendarDay[today="true"] {{
            background-color: #e7f1ff;
            font-weight: 800;
        }}
        QPushButton#calendarDay[selected="true"] {{
            border: 2px solid {self.accent_primary};
        }}
        QLineEdit, QTextEdit, QComboBox, QDateEdit, QTimeEdit {{
            background-color: {self.background_secondary};
            color: {self.text_primary};
            border: 1px solid {self.border_strong};
            border-radius: 6px;
            padding: 6px 10px;
        }}
        QLineEdit[invalid="true"], QDateEdit[invalid="true"], QTimeEdit[invalid="true"] {{
            border-color: {self.accent_error};
        }}
        QLabel#fieldError {{
            color: {self.accent_error};
            font-size: 12px;
        }}
        QLabel#title {{
            font-size: 20px;
            font-weight: 700;
        }}
        QLabel#muted {{
            color: {self.text_secondary};
        }}
        QWidget#header {{
            background-color: {self.accent_primary};
        }}
        QWidget#header QLabel {{
            background-color: transparent;
            color: #ffffff;
        }}
        QListView {{
            background-color: {self.background_secondary};
            border: 1px solid {self.border_strong};
            selection-background-color: #cfe2ff;
            selection-color: {self.text_primary};
        }}
        """
