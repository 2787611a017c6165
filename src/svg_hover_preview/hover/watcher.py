"""Debounced hover dispatch to a worker thread."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from PySide6.QtCore import QObject, QPoint, QRunnable, QThreadPool, QTimer, Signal

from svg_hover_preview.config import AppConfig
from svg_hover_preview.hover.provider import HoverPreview, HoverProvider


@dataclass(frozen=True)
class HoverRequest:
    text: str
    offset: int
    document_path: Path | None
    global_pos: QPoint


@dataclass(frozen=True)
class HoverResult:
    request: HoverRequest
    preview: HoverPreview | None


class _WorkerSignals(QObject):
    finished = Signal(object)  # HoverResult
    failed = Signal(str)


class _HoverWorker(QRunnable):
    def __init__(self, request: HoverRequest, provider: HoverProvider) -> None:
        super().__init__()
        self._request = request
        self._provider = provider
        self.signals = _WorkerSignals()

    def run(self) -> None:
        req = self._request
        try:
            preview = self._provider.provide_hover(req.text, req.offset, req.document_path)
        except Exception as e:
            self.signals.failed.emit(str(e))
            return
        self.signals.finished.emit(HoverResult(request=req, preview=preview))


class HoverWatcher(QObject):
    """Runs the hover pipeline off the UI thread for the latest hover position."""

    preview_ready = Signal(object)  # HoverResult
    error = Signal(str)

    def __init__(self, config: AppConfig, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._log = logging.getLogger("svg_hover_preview.watcher")

        self._cfg = config
        self._provider = HoverProvider(config)
        self._pool = QThreadPool(self)
        self._pool.setMaxThreadCount(1)

        self._debounce = QTimer(self)
        self._debounce.setSingleShot(True)
        self._debounce.timeout.connect(self._on_debounce_timeout)

        self._pending: HoverRequest | None = None
        self._last_key: tuple[int, int] | None = None
        self._in_flight: bool = False
        self._rerun_after_flight: bool = False

    def set_config(self, config: AppConfig) -> None:
        self._cfg = config
        self._provider = HoverProvider(config)
        self._last_key = None

    def hover(self, text: str, offset: int, document_path: Path | None, global_pos: QPoint) -> None:
        self._pending = HoverRequest(text=text, offset=offset, document_path=document_path, global_pos=global_pos)
        self._debounce.start(int(self._cfg.debounce_ms))

    def cancel(self) -> None:
        self._pending = None
        self._debounce.stop()
        self._last_key = None

    def _on_debounce_timeout(self) -> None:
        req = self._pending
        if req is None:
            return
        if self._in_flight:
            # The latest request stays in _pending and runs when the current job ends.
            self._rerun_after_flight = True
            return

        key = (hash(req.text), req.offset)
        if key == self._last_key:
            return
        self._last_key = key
        self._pending = None

        self._in_flight = True
        worker = _HoverWorker(req, self._provider)
        worker.signals.finished.connect(self._on_worker_finished)
        worker.signals.failed.connect(self._on_worker_failed)
        self._pool.start(worker)

    def _on_worker_failed(self, message: str) -> None:
        self._in_flight = False
        self._log.warning("hover_failed=%s", message)
        self.error.emit(message)
        self._maybe_rerun_latest()

    def _on_worker_finished(self, result: HoverResult) -> None:
        self._in_flight = False
        self.preview_ready.emit(result)
        self._maybe_rerun_latest()

    def _maybe_rerun_latest(self) -> None:
        if not self._rerun_after_flight:
            return
        self._rerun_after_flight = False
        self._debounce.start(0)
