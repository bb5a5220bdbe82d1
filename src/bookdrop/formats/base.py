# ABOUTME: Parser contracts shared by every supported format.
# ABOUTME: FileParser turns a file into a Book; TextParser turns it into id-stamped text chunks.

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from pathlib import Path

from bookdrop.core.resource import Error, Loading, Resource, Success
from bookdrop.formats.detection import matches_format
from bookdrop.library.types import (
    UNKNOWN_AUTHOR,
    Book,
    Category,
    CoverImage,
    StringResource,
    StringWithId,
)

logger = logging.getLogger(__name__)

ParseResult = tuple[Book, CoverImage | None]


class BookParseError(Exception):
    """Raised when a file of a recognized format cannot be parsed."""


def fallback_title(path: Path) -> str:
    """Filename without extension, trimmed."""
    return path.stem.strip()


def pick_title(candidate: str | None, path: Path) -> str:
    """Use the format's own title unless it is blank."""
    if candidate and candidate.strip():
        return candidate.strip()
    return fallback_title(path)


def new_book(
    path: Path,
    title: str,
    author: str | StringResource = UNKNOWN_AUTHOR,
    description: str | None = None,
) -> Book:
    """Build a freshly parsed Book with an untouched reading position."""
    return Book(
        title=title,
        author=author,
        description=description,
        text_path="",
        scroll_index=0,
        scroll_offset=0,
        progress=0.0,
        file_path=str(path),
        last_opened=None,
        category=Category.default(),
        cover_image=None,
    )


class FileParser(ABC):
    """Turns one on-disk file of a single format into a Book and optional cover.

    parse() returns None when the file is not this parser's format, does not
    exist, or turns out to be malformed. It never raises for a bad file, so
    one corrupt file cannot abort a batch.
    """

    format_name: str = ""

    def accepts(self, path: Path) -> bool:
        return matches_format(path, self.format_name)

    def parse(self, path: Path) -> ParseResult | None:
        try:
            if not self.accepts(path):
                return None
            return self.read(path)
        except Exception as exc:  # noqa: BLE001 - any parse failure means "not mine"
            logger.warning("Skipping malformed %s file %s: %s", self.format_name, path, exc)
            return None

    @abstractmethod
    def read(self, path: Path) -> ParseResult:
        """Extract the Book from a file already known to be of this format."""


class TextParser(ABC):
    """Turns a file of a known format into ordered StringWithId chunks."""

    @abstractmethod
    def extract(self, path: Path) -> list[str]:
        """Return the document's text blocks in reading order."""

    def chunks(self, path: Path) -> list[StringWithId]:
        """Blocking parse; ids run 0..n-1 in document order."""
        blocks = [block for block in self.extract(path) if block]
        return [StringWithId(id=index, text=text) for index, text in enumerate(blocks)]

    async def parse(self, path: Path) -> AsyncIterator[Resource[list[StringWithId]]]:
        """Stream Loading, then the full chunk list or an Error."""
        yield Loading(True)
        try:
            result = await asyncio.to_thread(self.chunks, path)
        except Exception as exc:  # noqa: BLE001 - converted to an Error state
            logger.warning("Could not extract text from %s: %s", path, exc)
            yield Error(f"Could not read {path.name}: {exc}")
            return
        yield Success(result)
