"""Settings dialog for hover and preview behavior."""

from __future__ import annotations

from dataclasses import replace

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QGroupBox,
    QLabel,
    QLineEdit,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from svg_hover_preview.config import AppConfig


def _normalize_suffix(value: str) -> str:
    v = value.strip()
    if not v:
        return ".svg"
    if not v.startswith("."):
        v = f".{v}"
    if len(v) < 2 or any(ch.isspace() or ch in "/\\" for ch in v):
        raise ValueError("File suffix must look like '.svg'.")
    return v


class SettingsDialog(QDialog):
    """Modal dialog used to edit `AppConfig`."""

    def __init__(self, config: AppConfig, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)

        self._working = replace(config)

        self._hover_timeout = QSpinBox()
        self._hover_timeout.setRange(200, 60_000)
        self._hover_timeout.setSingleStep(100)
        self._hover_timeout.setValue(int(self._working.hover_timeout_ms))

        self._preview_w = QSpinBox()
        self._preview_w.setRange(32, 4096)
        self._preview_w.setValue(int(self._working.preview_width_px))

        self._preview_h = QSpinBox()
        self._preview_h.setRange(32, 4096)
        self._preview_h.setValue(int(self._working.preview_height_px))

        self._suffix = QLineEdit(self._working.file_suffix)

        self._resolve_images = QCheckBox("Resolve relative <image> links against the document folder")
        self._resolve_images.setChecked(bool(self._working.resolve_images))

        self._adv_group = QGroupBox("Advanced")
        adv_form = QFormLayout()

        self._debounce = QSpinBox()
        self._debounce.setRange(0, 2000)
        self._debounce.setValue(int(self._working.debounce_ms))
        adv_form.addRow("Debounce (ms)", self._debounce)

        self._max_text = QSpinBox()
        self._max_text.setRange(10_000, 200_000_000)
        self._max_text.setSingleStep(100_000)
        self._max_text.setValue(int(self._working.max_text_chars))
        adv_form.addRow("Max document size (chars)", self._max_text)

        self._adv_group.setLayout(adv_form)

        form = QFormLayout()
        form.addRow("Hide preview after (ms)", self._hover_timeout)
        form.addRow("Preview width (px)", self._preview_w)
        form.addRow("Preview height (px)", self._preview_h)
        form.addRow("File reference suffix", self._suffix)
        form.addRow("", self._resolve_images)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)

        err = QLabel("")
        err.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        err.setStyleSheet("color: #a00;")
        self._error = err

        root = QVBoxLayout()
        root.addLayout(form)
        root.addWidget(self._adv_group)
        root.addWidget(self._error)
        root.addWidget(buttons)

        self.setLayout(root)
        self.resize(480, 280)

    def result_config(self) -> AppConfig:
        return self._working

    def accept(self) -> None:
        self._error.setText("")
        try:
            self._working.hover_timeout_ms = int(self._hover_timeout.value())
            self._working.preview_width_px = int(self._preview_w.value())
            self._working.preview_height_px = int(self._preview_h.value())
            self._working.file_suffix = _normalize_suffix(self._suffix.text())
            self._working.resolve_images = bool(self._resolve_images.isChecked())
            self._working.debounce_ms = int(self._debounce.value())
            self._working.max_text_chars = int(self._max_text.value())
        except ValueError as e:
            self._error.setText(str(e))
            return

        super().accept()
