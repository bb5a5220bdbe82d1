# ABOUTME: BookRepository protocol: the narrow insert/query contract for persisting books.
# ABOUTME: The browse session only talks to storage through this interface.

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from bookdrop.library.types import Book


@runtime_checkable
class BookRepository(Protocol):
    """Sink and source for ingested books.

    insert() must never store two books with the same file_path; query()
    returns stored books whose title or author contains the text.
    """

    def insert(self, books: Sequence[Book]) -> None: ...

    def query(self, text: str = "") -> list[Book]: ...
