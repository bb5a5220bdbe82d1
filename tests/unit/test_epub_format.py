# ABOUTME: Unit tests for EPUB book and text extraction.
# ABOUTME: Tests metadata, cover extraction, fallbacks, and corrupt archives.

from pathlib import Path

import pytest

from bookdrop.formats.epub import (
    EpubFileParser,
    EpubReadError,
    EpubTextParser,
    read_epub,
)
from bookdrop.library import UNKNOWN_AUTHOR, Category


class TestReadEpub:
    """read_epub extracts a Book and cover from valid EPUBs."""

    def test_extracts_title(self, sample_epub: Path) -> None:
        book, _ = read_epub(sample_epub)
        assert book.title == "The Name of the Rose"

    def test_extracts_author(self, sample_epub: Path) -> None:
        book, _ = read_epub(sample_epub)
        assert book.author == "Umberto Eco"

    def test_extracts_description(self, sample_epub: Path) -> None:
        book, _ = read_epub(sample_epub)
        assert book.description == "A mystery set in a medieval monastery."

    def test_extracts_cover(self, sample_epub: Path) -> None:
        _, cover = read_epub(sample_epub)
        assert cover is not None
        assert cover.format == "png"
        assert cover.data.startswith(b"\x89PNG")

    def test_new_book_fields(self, sample_epub: Path) -> None:
        book, _ = read_epub(sample_epub)
        assert book.file_path == str(sample_epub)
        assert book.category is Category.UNCATEGORIZED
        assert book.text_path == ""
        assert book.progress == 0.0
        assert book.last_opened is None
        assert book.cover_image is None

    def test_missing_author_uses_placeholder(self, minimal_epub: Path) -> None:
        book, cover = read_epub(minimal_epub)
        assert book.title == "Untitled Book"
        assert book.author == UNKNOWN_AUTHOR
        assert book.description is None
        assert cover is None

    def test_corrupt_epub_raises(self, corrupt_epub: Path) -> None:
        with pytest.raises(EpubReadError):
            read_epub(corrupt_epub)

    def test_nonexistent_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(EpubReadError):
            read_epub(tmp_path / "does_not_exist.epub")


class TestEpubFileParser:
    def test_parses_valid_file(self, sample_epub: Path) -> None:
        result = EpubFileParser().parse(sample_epub)
        assert result is not None
        assert result[0].title == "The Name of the Rose"

    def test_truncated_archive_is_not_mine(self, truncated_epub: Path) -> None:
        assert EpubFileParser().parse(truncated_epub) is None


class TestEpubTextParser:
    def test_chunks_follow_spine_order(self, sample_epub: Path) -> None:
        texts = [chunk.text for chunk in EpubTextParser().chunks(sample_epub)]
        assert "Chapter 1" in texts
        first = texts.index("In the beginning was the Word.")
        second = texts.index("It was a beautiful morning.")
        assert first < second

    def test_ids_are_contiguous(self, sample_epub: Path) -> None:
        chunks = EpubTextParser().chunks(sample_epub)
        assert [chunk.id for chunk in chunks] == list(range(len(chunks)))
