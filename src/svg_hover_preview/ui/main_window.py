"""Editor window that reports hover positions over its text."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QEvent, QObject, QPoint, Signal
from PySide6.QtGui import QFontDatabase
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from svg_hover_preview.hover.positions import utf16_to_index


class MainWindow(QMainWindow):
    """A plain-text editor.

    Mouse movement over the text emits `hover_moved(offset, global_pos)`; the
    controller decides what, if anything, to preview.
    """

    hover_moved = Signal(int, QPoint)
    hover_left = Signal()
    open_requested = Signal()
    settings_requested = Signal()
    exit_requested = Signal()

    def __init__(self, title: str = "SVG Hover Preview") -> None:
        super().__init__()
        self._base_title = title
        self._document_path: Path | None = None
        self.setWindowTitle(title)

        self._editor = QPlainTextEdit()
        self._editor.setFont(QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont))
        self._editor.setMouseTracking(True)
        self._editor.viewport().setMouseTracking(True)
        self._editor.viewport().installEventFilter(self)

        self._open_btn = QPushButton("Open…")
        self._open_btn.clicked.connect(self.open_requested)

        self._settings_btn = QPushButton("Settings")
        self._settings_btn.clicked.connect(self.settings_requested)

        self._exit_btn = QPushButton("Exit")
        self._exit_btn.clicked.connect(self.exit_requested)

        self._status = QLabel("Hover over inline <svg> markup or a .svg file name")

        btn_row = QHBoxLayout()
        btn_row.addWidget(self._open_btn)
        btn_row.addWidget(self._settings_btn)
        btn_row.addStretch(1)
        btn_row.addWidget(self._exit_btn)

        root = QVBoxLayout()
        root.addLayout(btn_row)
        root.addWidget(self._editor, 1)
        root.addWidget(self._status)

        w = QWidget()
        w.setLayout(root)
        self.setCentralWidget(w)

        self.resize(820, 600)

    @property
    def document_path(self) -> Path | None:
        return self._document_path

    def text(self) -> str:
        return self._editor.toPlainText()

    def set_text(self, text: str, *, path: Path | None = None) -> None:
        self._editor.setPlainText(text)
        self._document_path = path
        self.setWindowTitle(f"{path.name} - {self._base_title}" if path else self._base_title)

    def load_file(self, path: Path) -> None:
        self.set_text(path.read_text(encoding="utf-8", errors="replace"), path=path)
        self.set_status_text(f"Opened: {path}")

    def choose_file(self) -> Path | None:
        start = str(self._document_path.parent) if self._document_path else ""
        path, _ = QFileDialog.getOpenFileName(self, "Open file", start)
        return Path(path) if path else None

    def set_status_text(self, text: str) -> None:
        self._status.setText(text)

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # type: ignore[override]
        if watched is self._editor.viewport():
            if event.type() == QEvent.Type.MouseMove:
                pos = event.position().toPoint()  # type: ignore[attr-defined]
                qt_pos = self._editor.cursorForPosition(pos).position()
                offset = utf16_to_index(self.text(), qt_pos)
                self.hover_moved.emit(offset, self._editor.viewport().mapToGlobal(pos))
            elif event.type() == QEvent.Type.Leave:
                self.hover_left.emit()
        return super().eventFilter(watched, event)
