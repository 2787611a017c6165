"""Qt application wiring."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import QObject, QPoint
from PySide6.QtWidgets import QApplication, QMessageBox

from svg_hover_preview.config import AppConfig, get_config_path
from svg_hover_preview.hover.watcher import HoverResult, HoverWatcher
from svg_hover_preview.markup.normalize import collapse_line_breaks
from svg_hover_preview.ui.main_window import MainWindow
from svg_hover_preview.ui.preview_popup import PreviewPopup
from svg_hover_preview.ui.settings_dialog import SettingsDialog


def _setup_logging(level: int = logging.INFO) -> None:
    config_path = get_config_path()
    log_dir = config_path.parent
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / "app.log"

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        handlers=[
            logging.FileHandler(log_path, encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )


class AppController(QObject):
    """Owns top-level app state and connects editor windows to the hover pipeline."""

    def __init__(self, initial_file: Path | None = None) -> None:
        super().__init__()
        self._log = logging.getLogger("svg_hover_preview")

        self._config = AppConfig.load()
        self._log.info(
            "config_loaded debounce=%dms hover_timeout=%dms suffix=%s resolve_images=%s",
            int(self._config.debounce_ms),
            int(self._config.hover_timeout_ms),
            self._config.file_suffix,
            bool(self._config.resolve_images),
        )

        self._windows: list[MainWindow] = []
        self._active: MainWindow | None = None

        self._watcher = HoverWatcher(self._config, parent=self)
        self._watcher.preview_ready.connect(self._on_preview_ready)
        self._watcher.error.connect(self._on_error)

        self._popup = PreviewPopup(self._config)
        self._popup.open_content_requested.connect(self._open_content)
        self._popup.open_file_requested.connect(self._open_file)
        self._popup.dismissed.connect(self._watcher.cancel)
        self._popup.data_uri_copied.connect(self._on_data_uri_copied)

        window = self._new_window()
        if initial_file is not None:
            self._load_into(window, initial_file)
        window.show()

    def _new_window(self, title: str = "SVG Hover Preview") -> MainWindow:
        window = MainWindow(title)
        window.hover_moved.connect(lambda offset, pos, w=window: self._on_hover(w, offset, pos))
        window.hover_left.connect(self._popup.schedule_hide)
        window.open_requested.connect(lambda w=window: self._choose_and_open(w))
        window.settings_requested.connect(self._open_settings)
        window.exit_requested.connect(QApplication.instance().quit)
        self._windows.append(window)
        return window

    def _on_hover(self, window: MainWindow, offset: int, global_pos: QPoint) -> None:
        self._active = window
        self._watcher.hover(window.text(), offset, window.document_path, global_pos)

    def _on_preview_ready(self, result: HoverResult) -> None:
        preview = result.preview
        window = self._active
        if preview is None:
            self._popup.schedule_hide()
            return
        self._popup.show_preview(preview, result.request.global_pos)
        if window is None:
            return
        if preview.kind == "error":
            window.set_status_text(preview.message or "Invalid SVG")
        elif preview.kind == "file":
            window.set_status_text(f"SVG file: {preview.file_uri}")
        else:
            window.set_status_text(f"SVG element at {preview.start}..{preview.end}")

    def _on_data_uri_copied(self, length: int) -> None:
        self._log.info("data_uri_copied chars=%d", length)
        if self._active is not None:
            self._active.set_status_text("Copied SVG data URI to clipboard")

    def _on_error(self, message: str) -> None:
        self._log.warning("error=%s", message)
        if self._active is not None:
            self._active.set_status_text(f"Error: {message}")

    def _choose_and_open(self, window: MainWindow) -> None:
        path = window.choose_file()
        if path is not None:
            self._load_into(window, path)

    def _load_into(self, window: MainWindow, path: Path) -> bool:
        try:
            window.load_file(path)
        except OSError as e:
            self._log.warning("open_failed path=%s error=%s", path, e)
            QMessageBox.warning(window, "SVG Hover Preview", f"Could not open file: {path}\n\n{e}")
            return False
        self._log.info("opened=%s", path)
        return True

    def _open_content(self, svg_text: str) -> None:
        window = self._new_window("Untitled SVG")
        window.set_text(collapse_line_breaks(svg_text))
        window.show()
        self._log.info("opened_svg_content chars=%d", len(svg_text))

    def _open_file(self, path: Path) -> None:
        window = self._new_window()
        if self._load_into(window, path):
            window.set_text(collapse_line_breaks(window.text()), path=path)
        window.show()

    def _open_settings(self) -> None:
        self._log.info("settings_opened")
        dlg = SettingsDialog(self._config, parent=self._active)
        if not dlg.exec():
            self._log.info("settings_cancelled")
            return

        self._config = dlg.result_config()
        self._config.save()
        self._watcher.set_config(self._config)
        self._popup.set_config(self._config)
        self._log.info(
            "settings_applied debounce=%dms hover_timeout=%dms suffix=%s resolve_images=%s",
            int(self._config.debounce_ms),
            int(self._config.hover_timeout_ms),
            self._config.file_suffix,
            bool(self._config.resolve_images),
        )


def run_app(initial_file: Path | None = None, *, debug: bool = False) -> None:
    _setup_logging(logging.DEBUG if debug else logging.INFO)

    app = QApplication([])
    _ = AppController(initial_file)
    raise SystemExit(app.exec())
