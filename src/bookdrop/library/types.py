# ABOUTME: Core data structures for parsed books, covers, text chunks, and history.
# ABOUTME: Book is the interchange format between parsers, the ingest pipeline, and the catalog.

import enum
from dataclasses import dataclass
from datetime import datetime


class Category(enum.Enum):
    """Closed set of shelves a book can live on. The first member is the default."""

    UNCATEGORIZED = 0
    READING = 1
    ALREADY_READ = 2
    PLANNING = 3
    DROPPED = 4

    @classmethod
    def default(cls) -> "Category":
        """The bucket freshly ingested books start in."""
        return next(iter(cls))


@dataclass(frozen=True)
class StringResource:
    """A reference to a localizable display string, resolved at render time."""

    key: str

    def resolve(self) -> str:
        return STRINGS.get(self.key, self.key)


STRINGS: dict[str, str] = {
    "unknown_author": "Unknown author",
}

UNKNOWN_AUTHOR = StringResource("unknown_author")


def display_text(value: "str | StringResource") -> str:
    """Render plain text or a string resource for display."""
    if isinstance(value, StringResource):
        return value.resolve()
    return value


@dataclass(frozen=True)
class CoverImage:
    """Raw cover image bytes plus the image format tag (png, jpeg, ...)."""

    data: bytes
    format: str

    def __post_init__(self) -> None:
        if not self.data:
            raise ValueError("cover image data must not be empty")


@dataclass(frozen=True)
class StringWithId:
    """One chunk of body text with an id that is stable across re-parses."""

    id: int
    text: str


@dataclass
class Book:
    """A single book as produced by a file parser.

    file_path is the natural key: two books with the same file_path refer to
    the same source file. Reading position fields (scroll_index,
    scroll_offset, progress) are carried as-is and never computed here.
    """

    title: str
    author: str | StringResource
    file_path: str
    description: str | None = None
    text_path: str = ""
    scroll_index: int = 0
    scroll_offset: int = 0
    progress: float = 0.0
    last_opened: datetime | None = None
    category: Category = Category.UNCATEGORIZED
    cover_image: CoverImage | None = None
    id: int | None = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.progress <= 1.0:
            msg = f"progress must be between 0.0 and 1.0, got {self.progress}"
            raise ValueError(msg)

    @property
    def author_text(self) -> str:
        """Author as display text, with the placeholder resolved."""
        return display_text(self.author)

    @property
    def has_cover(self) -> bool:
        return self.cover_image is not None


@dataclass
class History:
    """One recorded opening of a cataloged book."""

    id: int | None
    book_id: int
    time: datetime
