from svg_hover_preview.markup.references import FileReference, is_file_reference, reference_at, word_at


def test_is_file_reference() -> None:
    assert is_file_reference("icon.svg") is True
    assert is_file_reference("./assets/icon.svg") is True
    assert is_file_reference("assets\\icons\\logo.svg") is True
    assert is_file_reference("description.svg_backup") is False
    assert is_file_reference("not an icon.svg") is False
    assert is_file_reference("") is False


def test_is_file_reference_custom_suffix() -> None:
    assert is_file_reference("logo.png", ".png") is True
    assert is_file_reference("logo.svg", ".png") is False


def test_word_at() -> None:
    text = 'src="./img/a.svg" alt'
    assert word_at(text, text.index("img")) == (5, 16)
    assert word_at("   ", 1) is None
    assert word_at("abc", 10) is None


def test_reference_at_inside_quotes() -> None:
    text = '{"icon": "assets/icon.svg"}'
    ref = reference_at(text, text.index("icon.svg"))
    assert ref == FileReference(path="assets/icon.svg", start=10, end=25)


def test_reference_at_trims_sentence_punctuation() -> None:
    text = "see icon.svg."
    ref = reference_at(text, 5)
    assert ref is not None
    assert ref.path == "icon.svg"
    assert text[ref.start : ref.end] == "icon.svg"


def test_reference_at_rejects_other_words() -> None:
    assert reference_at("description.svg_backup", 3) is None
    assert reference_at("plain words", 2) is None
