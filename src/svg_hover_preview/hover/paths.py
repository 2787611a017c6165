"""Path and URI resolution handed to the core as an explicit capability.

Resolution is pure string work (no file-system access), so it cannot block the
normalization pipeline.
"""

from __future__ import annotations

import os
import re
from pathlib import Path, PureWindowsPath

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
_DRIVE_RE = re.compile(r"^[A-Za-z]:[\\/]")


def has_uri_scheme(value: str) -> bool:
    return _SCHEME_RE.match(value) is not None and _DRIVE_RE.match(value) is None


def _absolute_uri(path: str) -> str | None:
    if _DRIVE_RE.match(path):
        return PureWindowsPath(path).as_uri()
    if os.path.isabs(path):
        return Path(os.path.normpath(path)).as_uri()
    return None


class DocumentPathResolver:
    """Resolve `image` hrefs against the directory of the hovered document.

    Returns None when the href cannot be made absolute; the normalizer then
    leaves it as written.
    """

    def __init__(self, base_dir: Path | None) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else None

    @classmethod
    def for_document(cls, document_path: str | Path | None) -> "DocumentPathResolver":
        if not document_path:
            return cls(None)
        return cls(Path(document_path).parent)

    def __call__(self, href: str) -> str | None:
        if not href or href.startswith("#"):
            return None
        if has_uri_scheme(href):
            return href
        absolute = _absolute_uri(href)
        if absolute is not None:
            return absolute
        if self._base_dir is None or not self._base_dir.is_absolute():
            return None
        return Path(os.path.normpath(self._base_dir / href)).as_uri()


def resolve_file_path(path: str, document_path: str | Path | None) -> Path:
    """Resolve a referenced file relative to the document that mentions it."""
    p = Path(path).expanduser()
    if p.is_absolute() or document_path is None:
        return Path(os.path.normpath(p.absolute()))
    return Path(os.path.normpath(Path(document_path).absolute().parent / p))


def resolve_file_uri(path: str, document_path: str | Path | None) -> str:
    if "://" in path:
        return path
    return resolve_file_path(path, document_path).as_uri()
