# ABOUTME: Library package holding the book data model shared across Bookdrop.
# ABOUTME: Exports Book, CoverImage, Category, StringWithId, and History.

from bookdrop.library.types import (
    UNKNOWN_AUTHOR,
    Book,
    Category,
    CoverImage,
    History,
    StringResource,
    StringWithId,
    display_text,
)

__all__ = [
    "UNKNOWN_AUTHOR",
    "Book",
    "Category",
    "CoverImage",
    "History",
    "StringResource",
    "StringWithId",
    "display_text",
]
