from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from PyQt6.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal

logger = logging.getLogger(__name__)


class RequestSignals(QObject):
    finished = pyqtSignal(object)
    failed = pyqtSignal(Exception)


class _Request(QRunnable):
    def __init__(self, fn: Callable[[], Any], signals: RequestSignals) -> None:
        super().__init__()
        self.fn = fn
        self.signals = signals

    def run(self) -> None:  # noqa: D401
        try:
            result = self.fn()
        except Exception as exc:  # noqa: BLE001
            logger.exception("Background request failed")
            self.signals.failed.emit(exc)
        else:
            self.signals.finished.emit(result)


class RequestRunner:
    """Runs API calls off the GUI thread and delivers results back on it."""

    def __init__(self, *, max_threads: Optional[int] = 1) -> None:
        self.pool = QThreadPool.globalInstance()
        if max_threads is not None:
            self.pool.setMaxThreadCount(max_threads)
        self._pending: set[RequestSignals] = set()

    def submit(
        self,
        fn: Callable[[], Any],
        *,
        on_done: Optional[Callable[[Any], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> RequestSignals:
        signals = RequestSignals()
        self._pending.add(signals)
        if on_done:
            signals.finished.connect(on_done)
        if on_error:
            signals.failed.connect(on_error)
        signals.finished.connect(lambda _result: self._pending.discard(signals))
        signals.failed.connect(lambda _exc: self._pending.discard(signals))
        self.pool.start(_Request(fn, signals))
        return signals
