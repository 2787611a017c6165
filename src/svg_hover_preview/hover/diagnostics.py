"""User-facing text for structural defects."""

from __future__ import annotations

from typing import Final

from svg_hover_preview.markup.fragment import Defect

PREVIEW_ERROR_PREFIX: Final[str] = "Could not create SVG preview."

DIAGNOSTICS: Final[dict[Defect, str]] = {
    Defect.NO_OPENING_TAG: "No <svg> element found at this position.",
    Defect.UNTERMINATED_OPENING_TAG: "The <svg> opening tag is never closed with '>'.",
    Defect.UNMATCHED_CLOSING_TAG: (
        "A closing tag does not match any open element. "
        "Check that every element opened inside the SVG is closed before </svg>."
    ),
    Defect.UNBALANCED_DEPTH: (
        "Opening and closing tags are not balanced. "
        "Check for unclosed elements or a missing </svg>."
    ),
    Defect.UNTERMINATED_QUOTE: "An attribute value is missing its closing quote.",
    Defect.BOUNDARY_MISMATCH: "SVG must start with <svg and end with </svg>.",
}


def describe(defect: Defect) -> str:
    return f"{PREVIEW_ERROR_PREFIX} {DIAGNOSTICS[defect]}"
