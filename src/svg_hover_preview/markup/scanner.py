"""Quote-aware markup tokenizer shared by the locator, validator and normalizer.

This is not an XML parser. It splits text into tag-shaped tokens so callers can
count nesting depth and edit attributes in place without building a tree.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class TokenKind(Enum):
    OPEN = "open"
    CLOSE = "close"
    SELF_CLOSING = "self_closing"
    COMMENT = "comment"
    CDATA = "cdata"
    DECLARATION = "declaration"


@dataclass(frozen=True)
class Token:
    start: int
    # One past the final character; len(text) when the token never terminates.
    end: int
    kind: TokenKind
    name: str = ""
    complete: bool = True
    open_quote: str | None = None


@dataclass(frozen=True)
class Attribute:
    name: str
    value: str
    start: int
    end: int


_NAME_RE = re.compile(r"[A-Za-z_:][-\w.:]*")
_ATTR_RE = re.compile(r"""([^\s=/<>"']+)\s*=\s*(?:"([^"]*)"|'([^']*)')""")

# (opener, terminator, kind) checked in order; CDATA must win over "<!".
_SPECIAL = (
    ("<!--", "-->", TokenKind.COMMENT),
    ("<![CDATA[", "]]>", TokenKind.CDATA),
    ("<?", "?>", TokenKind.DECLARATION),
    ("<!", ">", TokenKind.DECLARATION),
)


def find_tag_end(text: str, start: int) -> tuple[int, str | None]:
    """Return the index of the `>` closing a tag, tracking quoted values.

    Returns `(-1, quote)` when the input ends first; `quote` is the quote
    character still open at that point, if any.
    """
    quote: str | None = None
    for i in range(start, len(text)):
        ch = text[i]
        if quote is not None:
            if ch == quote:
                quote = None
        elif ch == '"' or ch == "'":
            quote = ch
        elif ch == ">":
            return i, None
    return -1, quote


def iter_tokens(text: str, start: int = 0) -> Iterator[Token]:
    """Yield markup tokens from `start` onwards.

    Iteration stops after the first incomplete token.
    """
    i = start
    n = len(text)
    while True:
        i = text.find("<", i)
        if i < 0 or i >= n:
            return

        special = _match_special(text, i)
        if special is not None:
            opener, terminator, kind = special
            j = text.find(terminator, i + len(opener))
            if j < 0:
                yield Token(start=i, end=n, kind=kind, complete=False)
                return
            end = j + len(terminator)
            yield Token(start=i, end=end, kind=kind)
            i = end
            continue

        closing = text.startswith("</", i)
        name_m = _NAME_RE.match(text, i + 2 if closing else i + 1)
        if name_m is None:
            # Stray "<" in character data.
            i += 1
            continue

        gt, quote = find_tag_end(text, name_m.end())
        if gt < 0:
            kind = TokenKind.CLOSE if closing else TokenKind.OPEN
            yield Token(start=i, end=n, kind=kind, name=name_m.group(0), complete=False, open_quote=quote)
            return

        if closing:
            kind = TokenKind.CLOSE
        elif text[gt - 1] == "/":
            kind = TokenKind.SELF_CLOSING
        else:
            kind = TokenKind.OPEN
        yield Token(start=i, end=gt + 1, kind=kind, name=name_m.group(0))
        i = gt + 1


def _match_special(text: str, i: int) -> tuple[str, str, TokenKind] | None:
    for opener, terminator, kind in _SPECIAL:
        if text.startswith(opener, i):
            return opener, terminator, kind
    return None


def iter_attributes(text: str, token: Token) -> Iterator[Attribute]:
    """Yield quoted `name=value` attributes of an open or self-closing tag."""
    if token.kind not in (TokenKind.OPEN, TokenKind.SELF_CLOSING):
        return
    body_start = token.start + 1 + len(token.name)
    for m in _ATTR_RE.finditer(text, body_start, token.end):
        value = m.group(2) if m.group(2) is not None else m.group(3)
        yield Attribute(name=m.group(1), value=value, start=m.start(), end=m.end())


def first_element(text: str, name: str) -> Token | None:
    """Return the first open or self-closing tag called `name`."""
    for tok in iter_tokens(text):
        if not tok.complete:
            return None
        if tok.kind in (TokenKind.OPEN, TokenKind.SELF_CLOSING) and tok.name == name:
            return tok
    return None
