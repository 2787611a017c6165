"""Locate the `<svg>…</svg>` element enclosing a cursor offset."""

from __future__ import annotations

import re

from svg_hover_preview.markup.fragment import ELEMENT_NAME, OPEN_TOKEN, Defect, Fragment
from svg_hover_preview.markup.scanner import TokenKind, iter_tokens

_SVG_OPEN_RE = re.compile(r"<svg\b", flags=re.IGNORECASE)
_SVG_CLOSE_RE = re.compile(r"</svg\s*>", flags=re.IGNORECASE)


def looks_like_svg_text(text: str) -> bool:
    """Cheap pre-check for inline SVG markup in a buffer."""
    if not text:
        return False
    if _SVG_OPEN_RE.search(text) is None:
        return False
    return _SVG_CLOSE_RE.search(text) is not None


def locate(text: str, offset: int) -> Fragment | None:
    """Return the innermost `<svg>` element containing `offset`, if any.

    "Nothing here" is a normal outcome and yields None.
    """
    found = _locate(text, offset)
    return found if isinstance(found, Fragment) else None


def explain_locate(text: str, offset: int) -> Defect | None:
    """Why `locate` found nothing at `offset`; None when it found a fragment."""
    found = _locate(text, offset)
    return None if isinstance(found, Fragment) else found


def _locate(text: str, offset: int) -> Fragment | Defect:
    if not text or offset < 0:
        return Defect.NO_OPENING_TAG
    offset = min(offset, len(text))

    # rfind end bound: an opener starting at `offset` itself still counts.
    search_end = offset + len(OPEN_TOKEN)
    while True:
        start = text.rfind(OPEN_TOKEN, 0, search_end)
        if start < 0:
            return Defect.NO_OPENING_TAG
        search_end = start + len(OPEN_TOKEN) - 1

        after = start + len(OPEN_TOKEN)
        if after < len(text) and not _is_name_boundary(text[after]):
            # e.g. `<svgfoo`
            continue
        if _in_foreign_block(text, start, offset):
            continue

        matched = _match_element(text, start)
        if matched is None:
            continue
        if isinstance(matched, Defect):
            return matched
        if matched.contains(offset):
            return matched
        # A complete nested element ending before the offset; keep walking
        # back to its parent.


def _is_name_boundary(ch: str) -> bool:
    return ch.isspace() or ch in ">/"


_FOREIGN_BLOCKS = (("<!--", "-->"), ("<![CDATA[", "]]>"))


def _in_foreign_block(text: str, pos: int, offset: int) -> bool:
    """True when `pos` sits in a comment or CDATA block that does not also hold `offset`.

    Commented-out markup under the cursor is still a hover target.
    """
    for opener, terminator in _FOREIGN_BLOCKS:
        begin = text.rfind(opener, 0, pos)
        if begin < 0:
            continue
        close = text.find(terminator, begin + len(opener))
        end = len(text) if close < 0 else close + len(terminator)
        if pos < end and not (begin <= offset < end):
            return True
    return False


def _match_element(text: str, start: int) -> Fragment | Defect | None:
    tokens = iter_tokens(text, start)
    opener = next(tokens, None)
    if opener is None or opener.start != start or not opener.complete:
        return Defect.UNTERMINATED_OPENING_TAG
    if opener.kind is TokenKind.SELF_CLOSING:
        return None

    depth = 1
    for tok in tokens:
        if not tok.complete:
            break
        if tok.name != ELEMENT_NAME:
            continue
        if tok.kind is TokenKind.OPEN:
            depth += 1
        elif tok.kind is TokenKind.CLOSE:
            depth -= 1
            if depth == 0:
                return Fragment(text=text, start=start, end=tok.end)
    return Defect.UNBALANCED_DEPTH

