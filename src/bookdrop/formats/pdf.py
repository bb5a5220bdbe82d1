# ABOUTME: PDF support using PyMuPDF: document info metadata, first-page cover, text blocks.
# ABOUTME: Truncated or encrypted documents surface as PdfReadError inside the parser.

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import fitz  # pymupdf

from bookdrop.formats.base import (
    BookParseError,
    FileParser,
    ParseResult,
    TextParser,
    new_book,
    pick_title,
)
from bookdrop.library.types import UNKNOWN_AUTHOR, CoverImage

logger = logging.getLogger(__name__)

COVER_SCALE = 0.5

# PyMuPDF get_text("blocks") tuple layout: (x0, y0, x1, y1, text, block_no, block_type)
_BLOCK_TEXT = 4
_BLOCK_TYPE = 6
_TEXT_BLOCK = 0


class PdfReadError(BookParseError):
    """Raised when a PDF file cannot be opened or read."""


@contextmanager
def _open_pdf(path: Path) -> Iterator[fitz.Document]:
    if not path.exists():
        raise PdfReadError(f"File not found: {path}")

    try:
        doc = fitz.open(str(path))
    except Exception as exc:
        raise PdfReadError(f"Failed to open PDF: {path}: {exc}") from exc

    try:
        if doc.needs_pass:
            raise PdfReadError(f"PDF is password protected: {path}")
        if doc.page_count == 0:
            raise PdfReadError(f"PDF has zero pages: {path}")
        yield doc
    finally:
        doc.close()


def _render_cover(doc: fitz.Document) -> CoverImage:
    """Render the first page as a PNG thumbnail."""
    page = doc.load_page(0)
    pix = page.get_pixmap(matrix=fitz.Matrix(COVER_SCALE, COVER_SCALE))
    return CoverImage(data=pix.tobytes("png"), format="png")


def read_pdf(path: Path) -> ParseResult:
    """Extract a Book and a rendered cover from a PDF file.

    Raises:
        PdfReadError: If the document cannot be opened.
    """
    with _open_pdf(path) as doc:
        info = doc.metadata or {}
        title = pick_title(info.get("title"), path)
        author = (info.get("author") or "").strip()
        description = (info.get("subject") or "").strip() or None

        try:
            cover = _render_cover(doc)
        except Exception as exc:  # noqa: BLE001 - a broken cover never loses the book
            logger.warning("Could not render cover for %s: %s", path, exc)
            cover = None

    return new_book(
        path,
        title=title,
        author=author or UNKNOWN_AUTHOR,
        description=description,
    ), cover


def read_pdf_text(path: Path) -> list[str]:
    """Text blocks of every page, top to bottom, page by page."""
    blocks: list[str] = []
    with _open_pdf(path) as doc:
        for page in doc:
            for block in page.get_text("blocks", sort=True):
                if block[_BLOCK_TYPE] != _TEXT_BLOCK:
                    continue
                text = " ".join(str(block[_BLOCK_TEXT]).split())
                if text:
                    blocks.append(text)
    return blocks


class PdfFileParser(FileParser):
    format_name = "pdf"

    def read(self, path: Path) -> ParseResult:
        return read_pdf(path)


class PdfTextParser(TextParser):
    """One chunk per text block on each page."""

    def extract(self, path: Path) -> list[str]:
        return read_pdf_text(path)
