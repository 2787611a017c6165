"""Hover preview: the collaborator that drives the markup core.

Given a text buffer and a cursor offset this either previews the enclosing
inline `<svg>` element, previews a referenced `.svg` file, or reports why the
element under the cursor cannot be previewed. It has no Qt dependency so it can
run on a worker thread and under plain pytest.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Literal
from urllib.parse import quote

from svg_hover_preview.config import AppConfig
from svg_hover_preview.hover.diagnostics import describe
from svg_hover_preview.hover.paths import DocumentPathResolver, resolve_file_path, resolve_file_uri
from svg_hover_preview.markup.locate import explain_locate, locate, looks_like_svg_text
from svg_hover_preview.markup.normalize import normalize
from svg_hover_preview.markup.references import reference_at
from svg_hover_preview.markup.validate import validate

PreviewKind = Literal["svg", "file", "error"]

# Characters encodeURIComponent leaves alone.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def svg_data_uri(svg_text: str) -> str:
    return "data:image/svg+xml," + quote(svg_text, safe=_URI_COMPONENT_SAFE)


@dataclass(frozen=True)
class HoverPreview:
    """Result of one hover lookup.

    `start`/`end` delimit the hovered span in the source text.
    """

    kind: PreviewKind
    start: int
    end: int
    svg: str | None = None
    data_uri: str | None = None
    file_path: Path | None = None
    file_uri: str | None = None
    message: str | None = None


class HoverProvider:
    """Thread-safe: holds only immutable settings."""

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        resolver_factory: Callable[[str | Path | None], Callable[[str], str | None]] | None = None,
    ) -> None:
        self._log = logging.getLogger("svg_hover_preview.hover")
        cfg = config or AppConfig()
        self._suffix = cfg.file_suffix or ".svg"
        self._resolve_images = bool(cfg.resolve_images)
        self._max_text_chars = int(cfg.max_text_chars)
        self._resolver_factory = resolver_factory or DocumentPathResolver.for_document

    def provide_hover(
        self,
        text: str,
        offset: int,
        document_path: str | Path | None = None,
    ) -> HoverPreview | None:
        if not text:
            return None
        if self._max_text_chars > 0 and len(text) > self._max_text_chars:
            self._log.info("hover_text_too_large chars=%d", len(text))
            return None

        t0 = time.perf_counter()
        preview = self._svg_preview(text, offset, document_path)
        if preview is None:
            preview = self._file_preview(text, offset, document_path)
        if preview is not None:
            self._log.debug(
                "hover_preview kind=%s start=%d end=%d ms=%.1f",
                preview.kind,
                preview.start,
                preview.end,
                (time.perf_counter() - t0) * 1000.0,
            )
        return preview

    def _svg_preview(self, text: str, offset: int, document_path: str | Path | None) -> HoverPreview | None:
        if not looks_like_svg_text(text):
            return None
        fragment = locate(text, offset)
        if fragment is None:
            self._log.debug("no_fragment offset=%d reason=%s", offset, explain_locate(text, offset))
            return None

        content = fragment.content
        verdict = validate(content)
        if verdict.reason is not None:
            self._log.info(
                "invalid_fragment start=%d end=%d reason=%s", fragment.start, fragment.end, verdict.reason.value
            )
            return HoverPreview(
                kind="error",
                start=fragment.start,
                end=fragment.end,
                message=describe(verdict.reason),
            )

        resolver = self._resolver_factory(document_path) if self._resolve_images else None
        cleaned = normalize(content, resolver)
        return HoverPreview(
            kind="svg",
            start=fragment.start,
            end=fragment.end,
            svg=cleaned,
            data_uri=svg_data_uri(cleaned),
        )

    def _file_preview(self, text: str, offset: int, document_path: str | Path | None) -> HoverPreview | None:
        ref = reference_at(text, offset, self._suffix)
        if ref is None:
            return None
        return HoverPreview(
            kind="file",
            start=ref.start,
            end=ref.end,
            file_path=None if "://" in ref.path else resolve_file_path(ref.path, document_path),
            file_uri=resolve_file_uri(ref.path, document_path),
        )
