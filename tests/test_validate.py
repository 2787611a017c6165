from svg_hover_preview.markup.fragment import Defect
from svg_hover_preview.markup.validate import is_valid, validate


def test_validate_well_formed() -> None:
    verdict = validate('<svg width="10" height="10"><rect x="1"/><g><circle r="2"></circle></g></svg>')
    assert verdict.is_valid
    assert verdict.reason is None


def test_validate_ignores_surrounding_whitespace() -> None:
    assert is_valid("  <svg></svg>\n") is True


def test_validate_boundary_mismatch() -> None:
    assert validate("<g></g>").reason is Defect.BOUNDARY_MISMATCH
    assert validate("<svg></svg> trailing").reason is Defect.BOUNDARY_MISMATCH


def test_validate_root_closed_while_inner_open() -> None:
    # Depth balance only: the closing root arrives while <rect> is still open.
    assert validate("<svg><rect></svg>").reason is Defect.UNMATCHED_CLOSING_TAG


def test_validate_closing_tag_without_open_element() -> None:
    assert validate("<svg></g></svg>").reason is Defect.UNMATCHED_CLOSING_TAG


def test_validate_does_not_match_tag_names() -> None:
    assert is_valid("<svg><g></rect></svg>") is True


def test_validate_unbalanced_depth() -> None:
    assert validate("<svg><rect </svg>").reason is Defect.UNBALANCED_DEPTH
    assert validate("<svg><!-- </svg>").reason is Defect.UNBALANCED_DEPTH


def test_validate_unterminated_quote() -> None:
    assert validate('<svg title="oops></svg>').reason is Defect.UNTERMINATED_QUOTE


def test_validate_accepts_comments_cdata_and_text() -> None:
    svg = (
        "<svg><!-- <g> -->"
        "<style><![CDATA[ a > b { fill: red } ]]></style>"
        "<text>it's 1 < 2</text>"
        "</svg>"
    )
    assert is_valid(svg) is True


def test_validate_quoted_markup_in_attributes() -> None:
    assert is_valid('<svg aria-label="<b>bold</b>"><rect title=\'a > b\'/></svg>') is True
