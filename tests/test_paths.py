from pathlib import Path

from svg_hover_preview.hover.paths import (
    DocumentPathResolver,
    has_uri_scheme,
    resolve_file_path,
    resolve_file_uri,
)


def test_resolver_relative_to_document_dir(tmp_path: Path) -> None:
    resolver = DocumentPathResolver.for_document(tmp_path / "page.html")
    assert resolver("img/a.png") == (tmp_path / "img" / "a.png").as_uri()
    assert resolver("../b.png") == (tmp_path.parent / "b.png").as_uri()


def test_resolver_keeps_absolute_uris(tmp_path: Path) -> None:
    resolver = DocumentPathResolver(tmp_path)
    assert resolver("https://example.com/a.png") == "https://example.com/a.png"
    assert resolver("file:///x/a.png") == "file:///x/a.png"


def test_resolver_gives_up_without_base() -> None:
    resolver = DocumentPathResolver.for_document(None)
    assert resolver("img/a.png") is None
    assert resolver("#frag") is None
    assert resolver("") is None


def test_resolver_windows_drive_path() -> None:
    resolver = DocumentPathResolver(None)
    assert resolver("C:\\img\\a.png") == "file:///C:/img/a.png"


def test_has_uri_scheme() -> None:
    assert has_uri_scheme("http://x") is True
    assert has_uri_scheme("data:image/png;base64,AA") is True
    assert has_uri_scheme("C:\\x") is False
    assert has_uri_scheme("img/a.png") is False


def test_resolve_file_path_and_uri(tmp_path: Path) -> None:
    doc = tmp_path / "notes.md"
    assert resolve_file_path("./icons/a.svg", doc) == tmp_path / "icons" / "a.svg"
    assert resolve_file_uri("icons/a.svg", doc) == (tmp_path / "icons" / "a.svg").as_uri()
    assert resolve_file_uri("https://example.com/a.svg", doc) == "https://example.com/a.svg"
