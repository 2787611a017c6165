from svg_hover_preview.hover.positions import utf16_to_index
from svg_hover_preview.markup.locate import locate


def test_utf16_to_index_ascii_is_identity() -> None:
    text = "x <svg></svg> y"
    assert utf16_to_index(text, 0) == 0
    assert utf16_to_index(text, 5) == 5
    assert utf16_to_index(text, len(text)) == len(text)


def test_utf16_to_index_counts_astral_characters_once() -> None:
    text = "😀😀 x <svg></svg> y"
    # Each emoji is a surrogate pair in UTF-16.
    assert utf16_to_index(text, 19) == 17
    assert text[utf16_to_index(text, 19)] == "y"
    assert utf16_to_index(text, 4) == 2


def test_utf16_to_index_inside_surrogate_pair_maps_to_character_start() -> None:
    assert utf16_to_index("😀a", 1) == 0
    assert utf16_to_index("a😀b", 2) == 1


def test_utf16_to_index_clamps_out_of_range() -> None:
    assert utf16_to_index("abc", -3) == 0
    assert utf16_to_index("é😀", 99) == 2


def test_hover_after_astral_text_finds_no_element_past_its_end() -> None:
    text = "😀😀 <svg></svg>x"
    qt_pos_of_x = len(text.encode("utf-16-le")) // 2 - 1
    offset = utf16_to_index(text, qt_pos_of_x)
    assert text[offset] == "x"
    assert locate(text, offset) is None

    qt_pos_of_close = qt_pos_of_x - 1
    frag = locate(text, utf16_to_index(text, qt_pos_of_close))
    assert frag is not None
    assert frag.content == "<svg></svg>"
