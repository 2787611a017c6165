"""Rewrite a structurally valid SVG fragment into a self-contained renderable form.

Every step is a targeted text edit located with the shared tokenizer, so content
the steps do not touch is preserved byte for byte. No step raises: when an
expected pattern is missing the text is returned unchanged, and running the
pipeline twice gives the same result as running it once.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Final, Iterable

from svg_hover_preview.markup.fragment import ELEMENT_NAME
from svg_hover_preview.markup.scanner import Token, TokenKind, first_element, iter_attributes, iter_tokens

SVG_NS: Final[str] = "http://www.w3.org/2000/svg"
XLINK_NS: Final[str] = "http://www.w3.org/1999/xlink"

# Prefix -> namespace URI injected when the prefix is used but never declared.
KNOWN_PREFIXES: Final[dict[str, str]] = {"xlink": XLINK_NS}

FALLBACK_WIDTH: Final[str] = "300"
FALLBACK_HEIGHT: Final[str] = "200"
FALLBACK_VIEWBOX: Final[str] = f"0 0 {FALLBACK_WIDTH} {FALLBACK_HEIGHT}"

REFERENCE_ATTRIBUTES: Final[tuple[str, ...]] = (
    "fill",
    "stroke",
    "filter",
    "clip-path",
    "mask",
    "marker-start",
    "marker-mid",
    "marker-end",
    "pattern",
    "linearGradient",
    "radialGradient",
)

IMAGE_HREF_ATTRIBUTES: Final[tuple[str, ...]] = ("xlink:href", "href")

HrefResolver = Callable[[str], "str | None"]

_URL_REF_RE = re.compile(r"^\s*url\(\s*#([^)\s]+)\s*\)\s*$")
_NON_NUMERIC_RE = re.compile(r"[^\d.]")

_log = logging.getLogger("svg_hover_preview.normalize")

# (start, end, replacement)
_Edit = tuple[int, int, str]


def normalize(fragment_text: str, resolve_href: HrefResolver | None = None) -> str:
    """Run the full normalization pipeline in its fixed order."""
    text = strip_comments(fragment_text)
    text = inject_namespaces(text)
    text = resolve_dimensions(text)
    text = prune_dangling_references(text)
    text = resolve_image_references(text, resolve_href)
    text = propagate_nested_namespaces(text)
    return text


def _apply_edits(text: str, edits: Iterable[_Edit]) -> str:
    # Apply right to left so earlier offsets stay valid.
    for start, end, replacement in sorted(edits, key=lambda e: e[0], reverse=True):
        text = text[:start] + replacement + text[end:]
    return text


def _insert_after_name(text: str, tag: Token, attrs: list[tuple[str, str]]) -> str:
    if not attrs:
        return text
    at = tag.start + 1 + len(tag.name)
    inserted = "".join(f' {name}="{value}"' for name, value in attrs)
    return text[:at] + inserted + text[at:]


def _attribute_map(text: str, tag: Token) -> dict[str, str]:
    out: dict[str, str] = {}
    for attr in iter_attributes(text, tag):
        out.setdefault(attr.name, attr.value)
    return out


def _complete_tokens(text: str) -> Iterable[Token]:
    for tok in iter_tokens(text):
        if not tok.complete:
            return
        yield tok


def _element_tags(text: str) -> Iterable[Token]:
    for tok in _complete_tokens(text):
        if tok.kind in (TokenKind.OPEN, TokenKind.SELF_CLOSING):
            yield tok


def strip_comments(text: str) -> str:
    """Remove `<!-- … -->` blocks; CDATA sections are separate tokens and survive.

    Removing one comment can splice its neighbours into a new one
    (`<<!-- a -->!-- b -->`), so this repeats until no complete comment is left.
    """
    while True:
        edits = [(tok.start, tok.end, "") for tok in _complete_tokens(text) if tok.kind is TokenKind.COMMENT]
        if not edits:
            return text
        text = _apply_edits(text, edits)


def collapse_line_breaks(text: str) -> str:
    """Document formatting for SVG opened in its own window: drop CR/LF characters."""
    return text.replace("\r", "").replace("\n", "")


def inject_namespaces(text: str) -> str:
    root = first_element(text, ELEMENT_NAME)
    if root is None:
        return text
    declared = _attribute_map(text, root)

    missing: list[tuple[str, str]] = []
    if "xmlns" not in declared:
        missing.append(("xmlns", SVG_NS))

    used_prefixes: set[str] = set()
    for tag in _element_tags(text):
        for attr in iter_attributes(text, tag):
            prefix, sep, _ = attr.name.partition(":")
            if sep and prefix in KNOWN_PREFIXES:
                used_prefixes.add(prefix)
    for prefix in sorted(used_prefixes):
        if f"xmlns:{prefix}" not in declared:
            missing.append((f"xmlns:{prefix}", KNOWN_PREFIXES[prefix]))

    return _insert_after_name(text, root, missing)


def _numeric_part(value: str) -> str:
    return _NON_NUMERIC_RE.sub("", value)


def resolve_dimensions(text: str) -> str:
    root = first_element(text, ELEMENT_NAME)
    if root is None:
        return text
    attrs = _attribute_map(text, root)
    width = attrs.get("width")
    height = attrs.get("height")

    added: list[tuple[str, str]] = []
    if "viewBox" not in attrs:
        w = _numeric_part(width) if width is not None else ""
        h = _numeric_part(height) if height is not None else ""
        if w and h:
            added.append(("viewBox", f"0 0 {w} {h}"))
        else:
            added.append(("viewBox", FALLBACK_VIEWBOX))
    if width is None:
        added.append(("width", FALLBACK_WIDTH))
    if height is None:
        added.append(("height", FALLBACK_HEIGHT))
    return _insert_after_name(text, root, added)


def collect_identifiers(text: str) -> set[str]:
    ids: set[str] = set()
    for tag in _element_tags(text):
        for attr in iter_attributes(text, tag):
            if attr.name == "id" and attr.value:
                ids.add(attr.value)
    return ids


def prune_dangling_references(text: str) -> str:
    """Drop `attr="url(#id)"` occurrences whose target id is not declared.

    Only the offending attribute goes; the element and its other attributes stay.
    """
    ids = collect_identifiers(text)
    edits: list[_Edit] = []
    for tag in _element_tags(text):
        for attr in iter_attributes(text, tag):
            if attr.name not in REFERENCE_ATTRIBUTES:
                continue
            m = _URL_REF_RE.match(attr.value)
            if m is None or m.group(1) in ids:
                continue
            start = attr.start
            # Take the separating whitespace with it.
            while start > tag.start and text[start - 1].isspace():
                start -= 1
            edits.append((start, attr.end, ""))
    return _apply_edits(text, edits)


def resolve_image_references(text: str, resolve_href: HrefResolver | None) -> str:
    """Rewrite non-data `image` hrefs through `resolve_href`; failures keep the href as written."""
    if resolve_href is None:
        return text
    edits: list[_Edit] = []
    for tag in _element_tags(text):
        if tag.name != "image":
            continue
        for attr in iter_attributes(text, tag):
            if attr.name not in IMAGE_HREF_ATTRIBUTES:
                continue
            href = attr.value.strip()
            if not href or href.startswith("data:"):
                continue
            try:
                resolved = resolve_href(href)
            except Exception as e:
                _log.debug("image_href_unresolved href=%s error=%s", href, e)
                continue
            if not resolved or resolved == attr.value:
                continue
            quote = text[attr.end - 1]
            if quote in resolved:
                continue
            edits.append((attr.start, attr.end, f"{attr.name}={quote}{resolved}{quote}"))
    return _apply_edits(text, edits)


def propagate_nested_namespaces(text: str) -> str:
    """Give every nested `<svg>` without its own `xmlns` the default namespace."""
    edits: list[_Edit] = []
    seen_root = False
    for tag in _element_tags(text):
        if tag.name != ELEMENT_NAME:
            continue
        if not seen_root:
            seen_root = True
            continue
        if "xmlns" in _attribute_map(text, tag):
            continue
        at = tag.start + 1 + len(tag.name)
        edits.append((at, at, f' xmlns="{SVG_NS}"'))
    return _apply_edits(text, edits)
