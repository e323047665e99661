from __future__ import annotations

from pathlib import Path

import pytest

from conftest import build_epub
from rsvp_reader.core.epub_parser import EpubParser
from rsvp_reader.core.errors import (
    ArchiveCorruptError,
    FileTooLargeError,
    InvalidFileTypeError,
)
from rsvp_reader.core.parser_factory import ParserFactory
from rsvp_reader.core.tokenizer import segment


def test_two_part_document_end_to_end() -> None:
    data = build_epub(["<p>One two.</p>", "<p>Three four!</p>"])

    document = EpubParser(data).parse()
    segmented = segment(document.text)

    assert document.text == "One two.\n\nThree four!"
    assert [t.text for t in segmented.tokens] == ["One", "two.", "Three", "four!"]
    assert [t.paragraph_index for t in segmented.tokens] == [0, 0, 1, 1]
    assert document.part_count == 2
    assert document.skipped_parts == 0


def test_parse_reports_metadata(sample_epub: bytes) -> None:
    document = EpubParser(sample_epub, name="storm.epub").parse()

    assert document.metadata.title == "Storm Book"
    assert document.metadata.author == "A. Writer"
    assert document.metadata.byte_size == len(sample_epub)


def test_empty_parts_are_dropped() -> None:
    data = build_epub(["<p>Start.</p>", "<script>x()</script>", "<p>End.</p>"])

    document = EpubParser(data).parse()

    assert document.text == "Start.\n\nEnd."


def test_all_parts_unresolved_gives_empty_document() -> None:
    data = build_epub([], extra_spine=["missing"])

    document = EpubParser(data).parse()

    assert document.text == ""
    assert document.is_empty
    assert document.skipped_parts == 1
    assert segment(document.text).tokens == []


def test_parse_is_repeatable(sample_epub: bytes) -> None:
    parser = EpubParser(sample_epub)

    assert parser.parse() == parser.parse()
    assert parser.get_metadata().title == "Storm Book"


def test_from_path(tmp_path: Path, sample_epub: bytes) -> None:
    path = tmp_path / "storm.epub"
    path.write_bytes(sample_epub)

    parser = EpubParser.from_path(path)

    assert parser.name == "storm.epub"
    assert parser.parse().metadata.title == "Storm Book"


def test_factory_creates_parser_for_epub(tmp_path: Path, sample_epub: bytes) -> None:
    path = tmp_path / "Storm.EPUB"
    path.write_bytes(sample_epub)

    parser = ParserFactory.create(path)

    assert isinstance(parser, EpubParser)
    assert "dark night." in parser.parse().text


def test_factory_rejects_wrong_extension(tmp_path: Path, sample_epub: bytes) -> None:
    path = tmp_path / "storm.pdf"
    path.write_bytes(sample_epub)

    with pytest.raises(InvalidFileTypeError):
        ParserFactory.create(path)


def test_factory_rejects_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        ParserFactory.create(tmp_path / "nope.epub")


def test_validate_rejects_non_zip_bytes() -> None:
    with pytest.raises(InvalidFileTypeError):
        ParserFactory.validate(b"%PDF-1.7 not an epub", name="book.epub")


def test_validate_rejects_oversized_input(sample_epub: bytes) -> None:
    with pytest.raises(FileTooLargeError) as exc_info:
        ParserFactory.validate(sample_epub, name="book.epub", max_file_size=10)

    assert isinstance(exc_info.value, InvalidFileTypeError)
    assert exc_info.value.limit == 10


def test_truncated_archive_is_corrupt(sample_epub: bytes) -> None:
    # Keeps the zip signature but loses the central directory
    parser = ParserFactory.create_from_bytes(sample_epub[:40], name="book.epub")

    with pytest.raises(ArchiveCorruptError):
        parser.parse()


@pytest.mark.parametrize(
    ("name", "expected"),
    [("book.epub", True), ("BOOK.EPUB", True), ("book.pdf", False), ("book", False)],
)
def test_is_supported(name: str, expected: bool) -> None:
    assert ParserFactory.is_supported(Path(name)) is expected
