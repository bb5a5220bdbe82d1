# ABOUTME: Public API for the Bookdrop library database layer.
# ABOUTME: Exports connection management, catalog operations, and the repository contract.

from bookdrop.db.catalog import LibraryCatalog
from bookdrop.db.connection import DEFAULT_DB_PATH, open_library
from bookdrop.db.repository import BookRepository

__all__ = [
    "DEFAULT_DB_PATH",
    "BookRepository",
    "LibraryCatalog",
    "open_library",
]
