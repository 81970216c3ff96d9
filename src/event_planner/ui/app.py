from __future__ import annotations

import logging
import sys

from PyQt6.QtWidgets import QApplication

from ..bootstrap import configure_logging
from ..config import AppPalette, get_settings
from ..services import PlannerService
from .main_window import MainWindow
from .styles.theme import apply_palette

logger = logging.getLogger(__name__)


def run_gui() -> None:
    configure_logging()
    app = QApplication.instance() or QApplication(sys.argv)
    settings = get_settings()
    palette = AppPalette()
    apply_palette(app, palette)

    service = PlannerService.from_settings()
    if not service.client.health():
        logger.warning("Events API at %s is not responding", settings.client.api_url)

    window = MainWindow(service=service, settings=settings, palette=palette)
    window.show()
    exit_code = app.exec()
    service.client.close()
    sys.exit(exit_code)
