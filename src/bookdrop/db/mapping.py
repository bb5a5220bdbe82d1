# ABOUTME: Converts between the Book dataclass and SQLite row dictionaries.
# ABOUTME: Handles author resources, categories, timestamps, and inline cover bytes.

from datetime import datetime
from typing import Any

from bookdrop.library.types import Book, Category, CoverImage, History, StringResource


def _format_time(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_time(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def book_to_row(book: Book) -> dict[str, Any]:
    """Convert a Book to a dict suitable for INSERT.

    A StringResource author is stored by key in author_resource so it can be
    resolved again at display time; plain author text goes in author.
    """
    if isinstance(book.author, StringResource):
        author, author_resource = None, book.author.key
    else:
        author, author_resource = book.author, None

    cover = book.cover_image
    return {
        "title": book.title,
        "author": author,
        "author_resource": author_resource,
        "description": book.description,
        "text_path": book.text_path,
        "scroll_index": book.scroll_index,
        "scroll_offset": book.scroll_offset,
        "progress": book.progress,
        "file_path": book.file_path,
        "last_opened": _format_time(book.last_opened),
        "category": book.category.name,
        "cover_image": cover.data if cover else None,
        "cover_format": cover.format if cover else None,
    }


def row_to_book(row: Any) -> Book:
    """Convert a database row (dict-like) back to a Book."""
    if row["author_resource"]:
        author: str | StringResource = StringResource(row["author_resource"])
    else:
        author = row["author"] or ""

    cover = None
    if row["cover_image"]:
        cover = CoverImage(data=bytes(row["cover_image"]), format=row["cover_format"] or "unknown")

    return Book(
        id=row["id"],
        title=row["title"],
        author=author,
        description=row["description"],
        text_path=row["text_path"],
        scroll_index=row["scroll_index"],
        scroll_offset=row["scroll_offset"],
        progress=row["progress"],
        file_path=row["file_path"],
        last_opened=_parse_time(row["last_opened"]),
        category=Category[row["category"]],
        cover_image=cover,
    )


def row_to_history(row: Any) -> History:
    return History(id=row["id"], book_id=row["book_id"], time=datetime.fromisoformat(row["time"]))
