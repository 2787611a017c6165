"""Recognize tokens that name an SVG file (e.g. `./assets/icon.svg`)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

DEFAULT_SUFFIX: Final[str] = ".svg"

# Characters that may appear in a path-like word under the cursor.
_PATH_CHAR_RE = re.compile(r"[\w\-./\\~:@%+]")


@dataclass(frozen=True)
class FileReference:
    path: str
    start: int
    end: int


def _bare_filename_re(suffix: str) -> re.Pattern[str]:
    return re.compile(rf"[\w\-.]+{re.escape(suffix)}")


def is_file_reference(token: str, suffix: str = DEFAULT_SUFFIX) -> bool:
    """True for tokens ending in `suffix` that look like a path or a plain filename.

    The filename rule keeps `.svg_backup`-style words and prose out.
    """
    if not token or not token.endswith(suffix):
        return False
    if "/" in token or "\\" in token:
        return True
    return _bare_filename_re(suffix).fullmatch(token) is not None


def word_at(text: str, offset: int) -> tuple[int, int] | None:
    """Return the `(start, end)` span of the path-like word around `offset`."""
    if not text or offset < 0 or offset > len(text):
        return None
    start = offset
    while start > 0 and _PATH_CHAR_RE.match(text[start - 1]):
        start -= 1
    end = offset
    while end < len(text) and _PATH_CHAR_RE.match(text[end]):
        end += 1
    if start == end:
        return None
    return start, end


def reference_at(text: str, offset: int, suffix: str = DEFAULT_SUFFIX) -> FileReference | None:
    span = word_at(text, offset)
    if span is None:
        return None
    start, end = span
    word = text[start:end]
    # Sentence punctuation directly after a filename ("see icon.svg.").
    trimmed = word.rstrip(".:")
    if trimmed != word and trimmed.endswith(suffix):
        end -= len(word) - len(trimmed)
        word = trimmed
    if not is_file_reference(word, suffix):
        return None
    return FileReference(path=word, start=start, end=end)
