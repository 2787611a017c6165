"""Floating preview shown next to the mouse.

The popup renders the cleaned SVG with `QSvgWidget`; rendering problems in the
SVG itself are Qt's concern. A single-shot timer hides the popup after
`hover_timeout_ms`; every new preview restarts it and hovering the popup pauses it.
"""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QByteArray, QPoint, Qt, QTimer, Signal
from PySide6.QtGui import QGuiApplication
from PySide6.QtSvgWidgets import QSvgWidget
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from svg_hover_preview.config import AppConfig
from svg_hover_preview.hover.provider import HoverPreview


class PreviewPopup(QFrame):
    open_content_requested = Signal(str)  # cleaned svg text
    open_file_requested = Signal(object)  # Path
    dismissed = Signal()
    data_uri_copied = Signal(int)  # uri length

    def __init__(self, config: AppConfig, parent: QWidget | None = None) -> None:
        super().__init__(
            parent,
            Qt.WindowType.Tool | Qt.WindowType.FramelessWindowHint | Qt.WindowType.WindowStaysOnTopHint,
        )
        self.setAttribute(Qt.WidgetAttribute.WA_ShowWithoutActivating)
        self.setFrameShape(QFrame.Shape.Box)

        self._cfg = config
        self._preview: HoverPreview | None = None

        self._svg = QSvgWidget()
        self._message = QLabel("")
        self._message.setWordWrap(True)
        self._message.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        self._message.setStyleSheet("color: #a00;")

        self._open_btn = QPushButton("Open in new tab")
        self._open_btn.clicked.connect(self._on_open_clicked)

        self._copy_btn = QPushButton("Copy data URI")
        self._copy_btn.clicked.connect(self._on_copy_clicked)

        btn_row = QHBoxLayout()
        btn_row.addWidget(self._open_btn)
        btn_row.addWidget(self._copy_btn)

        root = QVBoxLayout()
        root.addWidget(self._svg, 1)
        root.addWidget(self._message)
        root.addLayout(btn_row)
        self.setLayout(root)

        self._hide_timer = QTimer(self)
        self._hide_timer.setSingleShot(True)
        self._hide_timer.timeout.connect(self.dismiss)

        self._apply_size()

    def set_config(self, config: AppConfig) -> None:
        self._cfg = config
        self._apply_size()

    def _apply_size(self) -> None:
        self._svg.setFixedSize(int(self._cfg.preview_width_px), int(self._cfg.preview_height_px))
        self._message.setMaximumWidth(int(self._cfg.preview_width_px))

    def show_preview(self, preview: HoverPreview, global_pos: QPoint) -> None:
        self._preview = preview
        if preview.kind == "svg" and preview.svg is not None:
            self._svg.load(QByteArray(preview.svg.encode("utf-8")))
            self._svg.show()
            self._message.hide()
            self._open_btn.setText("Open in new tab")
            self._open_btn.show()
            self._copy_btn.setVisible(preview.data_uri is not None)
        elif preview.kind == "file" and preview.file_path is not None:
            self._svg.load(str(preview.file_path))
            self._svg.show()
            self._message.setText(str(preview.file_path))
            self._message.setStyleSheet("")
            self._message.show()
            self._open_btn.setText("Open file")
            self._open_btn.show()
            self._copy_btn.hide()
        else:
            self._svg.hide()
            self._message.setStyleSheet("color: #a00;")
            self._message.setText(preview.message or "")
            self._message.show()
            self._open_btn.hide()
            self._copy_btn.hide()

        self.adjustSize()
        self.move(global_pos + QPoint(12, 16))
        self.show()
        self.raise_()
        self._hide_timer.start(int(self._cfg.hover_timeout_ms))

    def schedule_hide(self) -> None:
        if self.isVisible() and not self.underMouse():
            self._hide_timer.start(int(self._cfg.hover_timeout_ms))

    def dismiss(self) -> None:
        self._hide_timer.stop()
        self.hide()
        self._preview = None
        self.dismissed.emit()

    def enterEvent(self, event) -> None:  # type: ignore[override]
        self._hide_timer.stop()
        super().enterEvent(event)

    def leaveEvent(self, event) -> None:  # type: ignore[override]
        self._hide_timer.start(int(self._cfg.hover_timeout_ms))
        super().leaveEvent(event)

    def _on_copy_clicked(self) -> None:
        preview = self._preview
        if preview is None or preview.data_uri is None:
            return
        QGuiApplication.clipboard().setText(preview.data_uri)
        self.data_uri_copied.emit(len(preview.data_uri))

    def _on_open_clicked(self) -> None:
        preview = self._preview
        if preview is None:
            return
        if preview.kind == "svg" and preview.svg is not None:
            self.open_content_requested.emit(preview.svg)
        elif preview.kind == "file" and preview.file_path is not None:
            self.open_file_requested.emit(Path(preview.file_path))
        self.dismiss()
