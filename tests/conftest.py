# ABOUTME: Shared pytest fixtures for Bookdrop tests.
# ABOUTME: Builds real sample files (valid and corrupt) for every supported format.

from pathlib import Path

import fitz
import pytest
from ebooklib import epub

FAKE_PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def sample_epub(tmp_path: Path) -> Path:
    """Create a minimal valid EPUB file with known metadata and a cover."""
    book = epub.EpubBook()

    book.set_identifier("test-isbn-978-0-123456-47-2")
    book.set_title("The Name of the Rose")
    book.set_language("en")
    book.add_author("Umberto Eco")
    book.add_metadata("DC", "description", "A mystery set in a medieval monastery.")
    book.set_cover("cover.png", FAKE_PNG, create_page=False)

    chapter = epub.EpubHtml(title="Chapter 1", file_name="chap01.xhtml", lang="en")
    chapter.content = (
        b"<html><body><h1>Chapter 1</h1>"
        b"<p>In the beginning was the Word.</p>"
        b"<p>It was a beautiful morning.</p></body></html>"
    )
    book.add_item(chapter)

    book.toc = [epub.Link("chap01.xhtml", "Chapter 1", "chap01")]
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = ["nav", chapter]

    filepath = tmp_path / "name_of_the_rose.epub"
    epub.write_epub(str(filepath), book)
    return filepath


@pytest.fixture
def minimal_epub(tmp_path: Path) -> Path:
    """Create an EPUB with a title but no author or cover."""
    book = epub.EpubBook()
    book.set_identifier("minimal-id")
    book.set_title("Untitled Book")
    book.set_language("en")

    chapter = epub.EpubHtml(title="Content", file_name="content.xhtml", lang="en")
    chapter.content = b"<html><body><p>Minimal content.</p></body></html>"
    book.add_item(chapter)

    book.toc = [epub.Link("content.xhtml", "Content", "content")]
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = ["nav", chapter]

    filepath = tmp_path / "minimal.epub"
    epub.write_epub(str(filepath), book)
    return filepath


@pytest.fixture
def corrupt_epub(tmp_path: Path) -> Path:
    """A file named .epub whose contents are not an archive at all."""
    filepath = tmp_path / "corrupt.epub"
    filepath.write_text("this is not a valid epub file")
    return filepath


@pytest.fixture
def truncated_epub(sample_epub: Path, tmp_path: Path) -> Path:
    """The first part of a real EPUB: right signature, broken archive."""
    data = sample_epub.read_bytes()
    filepath = tmp_path / "truncated.epub"
    filepath.write_bytes(data[: len(data) // 3])
    return filepath


@pytest.fixture
def sample_pdf(tmp_path: Path) -> Path:
    """Create a one-page PDF with document info metadata."""
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Revenue grew in every region.")
    page.insert_text((72, 400), "Costs stayed flat.")
    doc.set_metadata({
        "title": "Quarterly Report",
        "author": "Jane Analyst",
        "subject": "Numbers for the quarter",
    })

    filepath = tmp_path / "report.pdf"
    doc.save(str(filepath))
    doc.close()
    return filepath


@pytest.fixture
def untitled_pdf(tmp_path: Path) -> Path:
    """Create a PDF with no title or author metadata."""
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Just some text.")

    filepath = tmp_path / "  scanned notes .pdf"
    doc.save(str(filepath))
    doc.close()
    return filepath


@pytest.fixture
def corrupt_pdf(tmp_path: Path) -> Path:
    """A PDF header followed by garbage."""
    filepath = tmp_path / "broken.pdf"
    filepath.write_bytes(b"%PDF-1.7\n" + b"garbage " * 64)
    return filepath


@pytest.fixture
def sample_txt(tmp_path: Path) -> Path:
    filepath = tmp_path / "war_and_peace.txt"
    filepath.write_text(
        "Well, Prince, so Genoa and Lucca\nare now just family estates.\n\n"
        "It was in July, 1805.\n\n\n"
        "   \n"
        "The end.\n",
        encoding="utf-8",
    )
    return filepath


@pytest.fixture
def sample_html(tmp_path: Path) -> Path:
    filepath = tmp_path / "essay.html"
    filepath.write_text(
        "<html><head><title>  On Reading  </title>"
        "<style>p { color: red; }</style></head>"
        "<body><h1>On Reading</h1>"
        "<p>Books are the quietest friends.</p>"
        "<blockquote><p>Quoted wisdom.</p></blockquote>"
        "<ul><li>First</li><li>Second</li></ul>"
        "<script>var ignored = 1;</script>"
        "</body></html>",
        encoding="utf-8",
    )
    return filepath


@pytest.fixture
def untitled_html(tmp_path: Path) -> Path:
    filepath = tmp_path / "notes.HTM"
    filepath.write_text(
        "<html><head><title>   </title></head><body><p>Body only.</p></body></html>",
        encoding="utf-8",
    )
    return filepath


@pytest.fixture
def binary_junk(tmp_path: Path):
    """Factory writing binary garbage under a given file name."""

    def _make(name: str) -> Path:
        filepath = tmp_path / name
        filepath.write_bytes(b"\x00\x01\x02\xff" * 64)
        return filepath

    return _make


@pytest.fixture
def downloads_dir(tmp_path: Path) -> Path:
    """A flat downloads folder with mixed supported and unsupported files.

    Layout:
        Downloads/
            Alpha Story.txt
            beta-notes.HTML
            Gamma.epub
            delta report.pdf
            image.png
            archive.zip
            Nested/
                hidden.txt
    """
    root = tmp_path / "Downloads"
    root.mkdir()
    (root / "Alpha Story.txt").write_text("Alpha.")
    (root / "beta-notes.HTML").write_text("<p>Beta</p>")
    (root / "Gamma.epub").write_bytes(b"PK\x03\x04fake")
    (root / "delta report.pdf").write_bytes(b"%PDF-1.4 fake")
    (root / "image.png").write_bytes(FAKE_PNG)
    (root / "archive.zip").write_bytes(b"PK\x03\x04")
    nested = root / "Nested"
    nested.mkdir()
    (nested / "hidden.txt").write_text("Not scanned.")
    return root
