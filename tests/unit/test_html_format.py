# ABOUTME: Unit tests for HTML book and text extraction.
# ABOUTME: Tests title lookup, filename fallback, and block-level chunking.

from pathlib import Path

from bookdrop.formats.html import (
    HtmlFileParser,
    HtmlTextParser,
    block_texts,
    document_title,
    load_soup,
)
from bookdrop.library import UNKNOWN_AUTHOR


class TestDocumentTitle:
    def test_reads_head_title(self) -> None:
        soup = load_soup("<html><head><title>Hello</title></head></html>")
        assert document_title(soup) == "Hello"

    def test_missing_title(self) -> None:
        assert document_title(load_soup("<p>No head</p>")) is None


class TestHtmlFileParser:
    def test_uses_trimmed_title(self, sample_html: Path) -> None:
        result = HtmlFileParser().parse(sample_html)
        assert result is not None
        book, cover = result
        assert book.title == "On Reading"
        assert book.author == UNKNOWN_AUTHOR
        assert cover is None

    def test_blank_title_falls_back_to_filename(self, untitled_html: Path) -> None:
        result = HtmlFileParser().parse(untitled_html)
        assert result is not None
        assert result[0].title == "notes"

    def test_binary_file_is_not_mine(self, binary_junk) -> None:
        assert HtmlFileParser().parse(binary_junk("junk.html")) is None


class TestBlockTexts:
    def test_nested_blocks_emitted_once(self) -> None:
        soup = load_soup("<body><blockquote><p>Inner</p></blockquote><p>Next</p></body>")
        assert block_texts(soup) == ["Inner", "Next"]

    def test_falls_back_to_lines_without_blocks(self) -> None:
        soup = load_soup("<body>line one<br>line two</body>")
        assert block_texts(soup) == ["line one", "line two"]

    def test_empty_document(self) -> None:
        assert block_texts(load_soup("")) == []


class TestHtmlTextParser:
    def test_chunks_blocks_in_order(self, sample_html: Path) -> None:
        texts = [chunk.text for chunk in HtmlTextParser().chunks(sample_html)]
        assert texts == [
            "On Reading",
            "Books are the quietest friends.",
            "Quoted wisdom.",
            "First",
            "Second",
        ]
