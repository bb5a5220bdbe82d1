# ABOUTME: EPUB support using ebooklib: metadata, cover, and spine-ordered text extraction.
# ABOUTME: Unreadable archives surface as EpubReadError.

import logging
from pathlib import Path

import ebooklib
from ebooklib import epub

from bookdrop.formats.base import (
    BookParseError,
    FileParser,
    ParseResult,
    TextParser,
    new_book,
    pick_title,
)
from bookdrop.formats.html import block_texts, load_soup
from bookdrop.library.types import UNKNOWN_AUTHOR, CoverImage

logger = logging.getLogger(__name__)


class EpubReadError(BookParseError):
    """Raised when an EPUB file cannot be read or parsed."""


def _open_epub(path: Path) -> epub.EpubBook:
    if not path.exists():
        raise EpubReadError(f"File not found: {path}")

    try:
        return epub.read_epub(str(path), options={"ignore_ncx": True})
    except Exception as exc:
        raise EpubReadError(f"Failed to read EPUB: {path}: {exc}") from exc


def _get_metadata_value(book: epub.EpubBook, namespace: str, name: str) -> str | None:
    """Extract a single metadata value from an EpubBook, or None if missing."""
    values = book.get_metadata(namespace, name)
    if not values:
        return None
    # Metadata entries are tuples of (value, attributes)
    value = values[0][0]
    return str(value).strip() if value else None


def _get_authors(book: epub.EpubBook) -> list[str]:
    """Extract all author names from an EpubBook."""
    creators = book.get_metadata("DC", "creator")
    if not creators:
        return []
    return [str(entry[0]).strip() for entry in creators if entry[0] and str(entry[0]).strip()]


def _image_format(item: epub.EpubItem) -> str:
    """Format tag from the item's media type, falling back to its extension."""
    media_type = getattr(item, "media_type", None) or ""
    if media_type.startswith("image/"):
        return media_type.split("/", 1)[1].split("+", 1)[0]
    return Path(item.get_name() or "").suffix.lstrip(".").lower() or "unknown"


def _as_cover(item: epub.EpubItem | None) -> CoverImage | None:
    if item is None:
        return None
    data = item.get_content()
    if not data:
        return None
    return CoverImage(data=data, format=_image_format(item))


def _extract_cover_image(book: epub.EpubBook) -> CoverImage | None:
    """Extract the cover image from an EPUB, if present."""
    cover_id = None
    meta_entries = book.get_metadata("OPF", "cover")
    if meta_entries:
        cover_id = meta_entries[0][1].get("content")

    if cover_id:
        cover = _as_cover(book.get_item_with_id(cover_id))
        if cover is not None:
            return cover

    # Fallback: look for image items with "cover" in the id or filename
    for item in book.get_items():
        if item.get_type() not in (ebooklib.ITEM_IMAGE, ebooklib.ITEM_COVER):
            continue
        item_id = item.get_id() or ""
        item_name = item.get_name() or ""
        if "cover" in item_id.lower() or "cover" in item_name.lower():
            return _as_cover(item)

    return None


def read_epub(path: Path) -> ParseResult:
    """Extract a Book and its cover from an EPUB file.

    Raises:
        EpubReadError: If the file cannot be read or parsed.
    """
    book = _open_epub(path)

    title = pick_title(_get_metadata_value(book, "DC", "title"), path)
    authors = _get_authors(book)
    description = _get_metadata_value(book, "DC", "description")

    try:
        cover = _extract_cover_image(book)
    except Exception as exc:  # noqa: BLE001 - a broken cover never loses the book
        logger.warning("Ignoring unreadable cover in %s: %s", path, exc)
        cover = None

    parsed = new_book(
        path,
        title=title,
        author=", ".join(authors) if authors else UNKNOWN_AUTHOR,
        description=description,
    )
    return parsed, cover


def read_epub_text(path: Path) -> list[str]:
    """Block texts of every spine document, in reading order."""
    book = _open_epub(path)

    blocks: list[str] = []
    for idref, _linear in book.spine:
        item = book.get_item_with_id(idref)
        if item is None or item.get_type() != ebooklib.ITEM_DOCUMENT:
            continue
        soup = load_soup(item.get_content())
        for tag in soup(["script", "style"]):
            tag.decompose()
        blocks.extend(block_texts(soup))
    return blocks


class EpubFileParser(FileParser):
    format_name = "epub"

    def read(self, path: Path) -> ParseResult:
        return read_epub(path)


class EpubTextParser(TextParser):
    """One chunk per block element across the spine documents."""

    def extract(self, path: Path) -> list[str]:
        return read_epub_text(path)
