"""Structural well-formedness check for a located fragment.

The check is a depth counter over every element, not a schema check: tag names
are never matched against each other, so `<svg><g></rect></svg>` is balanced.
"""

from __future__ import annotations

from svg_hover_preview.markup.fragment import CLOSE_TOKEN, OPEN_TOKEN, Defect, ValidationVerdict
from svg_hover_preview.markup.scanner import TokenKind, iter_tokens


def validate(fragment_text: str) -> ValidationVerdict:
    """Return the first structural defect found scanning left to right."""
    stripped = fragment_text.strip()
    if not stripped.startswith(OPEN_TOKEN) or not stripped.endswith(CLOSE_TOKEN):
        return ValidationVerdict.invalid(Defect.BOUNDARY_MISMATCH)

    boundary_end = len(fragment_text.rstrip())
    depth = 0
    closed_at_boundary = False
    for tok in iter_tokens(fragment_text):
        if not tok.complete:
            if tok.open_quote is not None:
                return ValidationVerdict.invalid(Defect.UNTERMINATED_QUOTE)
            break
        if tok.kind is TokenKind.OPEN:
            depth += 1
        elif tok.kind is TokenKind.CLOSE:
            depth -= 1
            if depth < 0:
                return ValidationVerdict.invalid(Defect.UNMATCHED_CLOSING_TAG)
            closed_at_boundary = tok.end == boundary_end

    if depth == 0:
        return ValidationVerdict.ok()
    if closed_at_boundary:
        # The root's closing tag arrived while an inner element was still open.
        return ValidationVerdict.invalid(Defect.UNMATCHED_CLOSING_TAG)
    return ValidationVerdict.invalid(Defect.UNBALANCED_DEPTH)


def is_valid(fragment_text: str) -> bool:
    return validate(fragment_text).is_valid
