"""Value types passed between the locator, validator and normalizer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

OPEN_TOKEN: Final[str] = "<svg"
CLOSE_TOKEN: Final[str] = "</svg>"
ELEMENT_NAME: Final[str] = "svg"


class Defect(Enum):
    """Closed set of structural problems.

    The first two are reported by the locator diagnostics only; the rest are
    validation reasons.
    """

    NO_OPENING_TAG = "no_opening_tag"
    UNTERMINATED_OPENING_TAG = "unterminated_opening_tag"
    UNMATCHED_CLOSING_TAG = "unmatched_closing_tag"
    UNBALANCED_DEPTH = "unbalanced_depth"
    UNTERMINATED_QUOTE = "unterminated_quote"
    BOUNDARY_MISMATCH = "boundary_mismatch"


@dataclass(frozen=True)
class Fragment:
    """One candidate `<svg>` element inside a larger text buffer."""

    text: str
    start: int
    end: int

    def __post_init__(self) -> None:
        if not (0 <= self.start < self.end <= len(self.text)):
            raise ValueError(f"invalid fragment bounds start={self.start} end={self.end}")

    @property
    def content(self) -> str:
        return self.text[self.start : self.end]

    def contains(self, offset: int) -> bool:
        return self.start <= offset < self.end


@dataclass(frozen=True)
class ValidationVerdict:
    reason: Defect | None = None

    @classmethod
    def ok(cls) -> "ValidationVerdict":
        return cls()

    @classmethod
    def invalid(cls, reason: Defect) -> "ValidationVerdict":
        return cls(reason=reason)

    @property
    def is_valid(self) -> bool:
        return self.reason is None
