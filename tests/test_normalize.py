import pytest

from svg_hover_preview.markup.normalize import (
    SVG_NS,
    XLINK_NS,
    collapse_line_breaks,
    collect_identifiers,
    normalize,
    strip_comments,
)


def test_normalize_derives_viewbox_from_width_height() -> None:
    out = normalize('<svg width="10" height="20"></svg>')
    assert out == f'<svg viewBox="0 0 10 20" xmlns="{SVG_NS}" width="10" height="20"></svg>'


def test_normalize_fallback_dimensions() -> None:
    out = normalize("<svg></svg>")
    assert out == f'<svg viewBox="0 0 300 200" width="300" height="200" xmlns="{SVG_NS}"></svg>'


def test_normalize_fills_only_missing_dimension() -> None:
    out = normalize('<svg width="50px"></svg>')
    assert 'width="50px"' in out
    assert 'height="200"' in out
    assert 'width="300"' not in out
    assert 'viewBox="0 0 300 200"' in out


def test_normalize_strips_units_for_viewbox() -> None:
    out = normalize('<svg width="100%" height="50.5px"></svg>')
    assert 'viewBox="0 0 100 50.5"' in out


def test_normalize_keeps_existing_viewbox_and_namespace() -> None:
    svg = f'<svg xmlns="{SVG_NS}" viewBox="0 0 1 1" width="1" height="1"></svg>'
    assert normalize(svg) == svg


def test_normalize_ignores_prefixed_width_lookalikes() -> None:
    out = normalize('<svg stroke-width="3"></svg>')
    assert 'width="300"' in out
    assert 'stroke-width="3"' in out


def test_normalize_removes_dangling_reference_only() -> None:
    out = normalize('<svg><rect x="1" fill="url(#missing)" stroke="red"/></svg>')
    assert '<rect x="1" stroke="red"/>' in out
    assert "url(#missing)" not in out


def test_normalize_removes_attribute_but_keeps_element() -> None:
    out = normalize('<svg><rect fill="url(#missing)"/></svg>')
    assert "<rect/>" in out
    assert "fill=" not in out


def test_normalize_keeps_declared_reference() -> None:
    svg = '<svg><defs><linearGradient id="g"/></defs><rect fill="url(#g)"/></svg>'
    out = normalize(svg)
    assert '<rect fill="url(#g)"/>' in out


def test_normalize_prunes_each_reference_kind() -> None:
    svg = (
        '<svg><defs><clipPath id="c"/></defs>'
        '<g clip-path="url(#c)" filter="url(#f)" mask=\'url(#m)\' marker-end="url( #arrow )"/>'
        "</svg>"
    )
    out = normalize(svg)
    assert 'clip-path="url(#c)"' in out
    assert "filter=" not in out
    assert "mask=" not in out
    assert "marker-end=" not in out


def test_normalize_injects_xlink_namespace_when_used() -> None:
    out = normalize('<svg><use xlink:href="#a"/></svg>')
    assert f'xmlns:xlink="{XLINK_NS}"' in out
    assert out.count("xmlns:xlink=") == 1


def test_normalize_strips_comments_but_keeps_cdata() -> None:
    out = normalize("<svg><!-- note --><style><![CDATA[<!-- keep -->]]></style></svg>")
    assert "note" not in out
    assert "<![CDATA[<!-- keep -->]]>" in out


def test_strip_comments_leaves_unterminated_comment() -> None:
    assert strip_comments("<svg><!-- open</svg>") == "<svg><!-- open</svg>"


def test_strip_comments_removes_comment_spliced_by_removal() -> None:
    assert strip_comments("<svg><<!-- a -->!-- b --></svg>") == "<svg></svg>"


def test_collapse_line_breaks() -> None:
    assert collapse_line_breaks('<svg>\r\n  <rect/>\n</svg>') == "<svg>  <rect/></svg>"
    assert collapse_line_breaks("<svg></svg>") == "<svg></svg>"


def test_normalize_propagates_namespace_to_nested_svg() -> None:
    out = normalize('<svg><svg width="1" height="1"><svg/></svg></svg>')
    assert out.count(f'xmlns="{SVG_NS}"') == 3
    assert f'<svg xmlns="{SVG_NS}" width="1" height="1">' in out


def test_normalize_resolves_image_hrefs() -> None:
    def resolver(href: str) -> str | None:
        return href if href.startswith("file:") else "file:///base/" + href

    svg = (
        '<svg><image href="img/a.png"/>'
        '<image xlink:href="data:image/png;base64,AAAA"/></svg>'
    )
    out = normalize(svg, resolver)
    assert 'href="file:///base/img/a.png"' in out
    assert 'xlink:href="data:image/png;base64,AAAA"' in out
    assert normalize(out, resolver) == out


def test_normalize_image_resolution_failures_keep_href() -> None:
    def broken(href: str) -> str | None:
        raise OSError("unreachable")

    svg = '<svg><image href="img/a.png"/><image href="b.png"/></svg>'
    assert 'href="img/a.png"' in normalize(svg, broken)
    assert 'href="b.png"' in normalize(svg, lambda href: None)
    assert 'href="b.png"' in normalize(svg)


def test_collect_identifiers() -> None:
    ids = collect_identifiers('<svg id="root"><g grid="x"><rect id=\'r1\'/></g></svg>')
    assert ids == {"root", "r1"}


@pytest.mark.parametrize(
    "svg",
    [
        "<svg></svg>",
        '<svg width="10" height="20"><rect fill="url(#missing)"/></svg>',
        '<svg><defs><radialGradient id="g"/></defs><circle fill="url(#g)"/></svg>',
        '<svg><!-- c --><use xlink:href="#x"/><svg><svg></svg></svg></svg>',
        '<svg viewBox="0 0 5 5"><text>it\'s &lt; ok</text></svg>',
        "<svg><<!-- a -->!-- b --></svg>",
    ],
)
def test_normalize_is_idempotent(svg: str) -> None:
    once = normalize(svg)
    assert normalize(once) == once
