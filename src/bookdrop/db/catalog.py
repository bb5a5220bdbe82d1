# ABOUTME: CRUD operations for the Bookdrop library catalog.
# ABOUTME: Implements the BookRepository insert/query contract plus open history.

import sqlite3
from collections.abc import Sequence
from datetime import datetime

from bookdrop.db.mapping import book_to_row, row_to_book, row_to_history
from bookdrop.library.types import STRINGS, Book, History


def _like_pattern(text: str) -> str:
    """Wrap text in % wildcards, escaping LIKE metacharacters."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _matching_resource_keys(text: str) -> list[str]:
    """Keys of the display strings that contain text, case-insensitively."""
    needle = text.casefold()
    return [key for key, value in STRINGS.items() if needle in value.casefold()]


class LibraryCatalog:
    """Wraps a sqlite3 connection and provides typed CRUD for the books table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def _insert_row(self, book: Book) -> sqlite3.Cursor:
        row = book_to_row(book)
        columns = ", ".join(row.keys())
        placeholders = ", ".join("?" for _ in row)
        return self._conn.execute(
            f"INSERT OR IGNORE INTO books ({columns}) VALUES ({placeholders})",
            list(row.values()),
        )

    def insert(self, books: Sequence[Book]) -> None:
        """Store a batch of books, skipping any whose file_path is already cataloged."""
        if not books:
            return
        with self._conn:
            for book in books:
                self._insert_row(book)

    def query(self, text: str = "") -> list[Book]:
        """Books whose title or author contains text (case-insensitive), ordered by title.

        Placeholder authors are matched on their display text, not their key.
        """
        if not text:
            return self.list_all()
        pattern = _like_pattern(text)
        keys = _matching_resource_keys(text)
        marks = ", ".join("?" for _ in keys)
        cursor = self._conn.execute(
            "SELECT * FROM books "
            "WHERE title LIKE ? ESCAPE '\\' OR author LIKE ? ESCAPE '\\' "
            f"OR author_resource IN ({marks}) "
            "ORDER BY title COLLATE NOCASE",
            (pattern, pattern, *keys),
        )
        return [row_to_book(row) for row in cursor.fetchall()]

    def list_all(self) -> list[Book]:
        """Return all books in the catalog, ordered by title."""
        cursor = self._conn.execute("SELECT * FROM books ORDER BY title COLLATE NOCASE")
        return [row_to_book(row) for row in cursor.fetchall()]

    def get_by_id(self, book_id: int) -> Book | None:
        """Retrieve a book by its row ID."""
        cursor = self._conn.execute("SELECT * FROM books WHERE id = ?", (book_id,))
        row = cursor.fetchone()
        return row_to_book(row) if row else None

    def get_by_path(self, file_path: str) -> Book | None:
        """Retrieve a book by its source file path."""
        cursor = self._conn.execute("SELECT * FROM books WHERE file_path = ?", (file_path,))
        row = cursor.fetchone()
        return row_to_book(row) if row else None

    # --- History operations ---

    def mark_opened(self, book_id: int, when: datetime | None = None) -> History:
        """Record that a book was opened: sets last_opened and appends a history row.

        Raises:
            ValueError: If the book_id does not exist.
        """
        when = when or datetime.now()
        stamp = when.isoformat()
        with self._conn:
            cursor = self._conn.execute(
                "UPDATE books SET last_opened = ? WHERE id = ?", (stamp, book_id)
            )
            if cursor.rowcount == 0:
                raise ValueError(f"Book with id {book_id} not found")
            cursor = self._conn.execute(
                "INSERT INTO history (book_id, time) VALUES (?, ?)", (book_id, stamp)
            )
        return History(id=cursor.lastrowid, book_id=book_id, time=when)

    def list_history(self) -> list[History]:
        """All history entries, most recent first."""
        cursor = self._conn.execute("SELECT * FROM history ORDER BY time DESC, id DESC")
        return [row_to_history(row) for row in cursor.fetchall()]
