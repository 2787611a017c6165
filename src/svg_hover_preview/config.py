"""Configuration persistence for svg-hover-preview.

The configuration is stored in a JSON file under `%APPDATA%\\SvgHoverPreview\\config.json`
on Windows and `$XDG_CONFIG_HOME/svg-hover-preview/config.json` elsewhere.
"""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

APP_DIR_NAME: Final[str] = "SvgHoverPreview"
XDG_DIR_NAME: Final[str] = "svg-hover-preview"
CONFIG_FILE_NAME: Final[str] = "config.json"


def _default_config_dir() -> Path:
    if sys.platform.startswith("win"):
        appdata = os.getenv("APPDATA")
        base = Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
        return base / APP_DIR_NAME
    xdg = os.getenv("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / XDG_DIR_NAME


def get_config_path() -> Path:
    return _default_config_dir() / CONFIG_FILE_NAME


@dataclass
class AppConfig:
    """User-configurable settings.

    Notes:
    - `hover_timeout_ms` is how long a preview stays up once the mouse leaves it.
    - `file_suffix` selects which words count as file references.
    """

    debounce_ms: int = 150
    hover_timeout_ms: int = 1800

    preview_width_px: int = 300
    preview_height_px: int = 200

    # Buffers above this size are not scanned on hover.
    max_text_chars: int = 5_000_000

    file_suffix: str = ".svg"
    resolve_images: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "debounce_ms": self.debounce_ms,
            "hover_timeout_ms": self.hover_timeout_ms,
            "preview_width_px": self.preview_width_px,
            "preview_height_px": self.preview_height_px,
            "max_text_chars": self.max_text_chars,
            "file_suffix": self.file_suffix,
            "resolve_images": self.resolve_images,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "AppConfig":
        cfg = cls()
        for k, v in raw.items():
            if hasattr(cfg, k):
                setattr(cfg, k, v)
        return cfg

    @classmethod
    def load(cls) -> "AppConfig":
        path = get_config_path()
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return cls()
        if not isinstance(data, dict):
            return cls()
        return cls.from_dict(data)

    def save(self) -> None:
        path = get_config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
