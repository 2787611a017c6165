"""Convert Qt text positions to Python string indexes.

Qt counts UTF-16 code units; a `str` is indexed by code point, so every
character outside the Basic Multilingual Plane shifts the two apart by one.
"""

from __future__ import annotations


def utf16_to_index(text: str, utf16_pos: int) -> int:
    """Map a UTF-16 position in `text` to the matching `str` index.

    A position that falls between the two halves of a surrogate pair maps to
    the start of that character.
    """
    if utf16_pos <= 0:
        return 0
    # A code point index never exceeds its UTF-16 position.
    prefix = text[:utf16_pos]
    if prefix.isascii():
        return len(prefix)
    units = prefix.encode("utf-16-le", "surrogatepass")[: 2 * utf16_pos]
    return len(units.decode("utf-16-le", "ignore"))
