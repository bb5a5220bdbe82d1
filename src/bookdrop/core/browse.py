# ABOUTME: Browse session state: candidate files, selection flags, search query, parsed batch.
# ABOUTME: One session owns its state; derived selection fields are always recomputed.

import asyncio
import dataclasses
import logging
from collections.abc import AsyncIterator, Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from bookdrop.config import (
    DEBOUNCE_SECONDS,
    PERMISSION_POLL_ATTEMPTS,
    PERMISSION_POLL_INTERVAL,
)
from bookdrop.core.ingest import ingest
from bookdrop.core.resource import Error, Loading, Resource, Success
from bookdrop.db.repository import BookRepository
from bookdrop.library.types import Book

logger = logging.getLogger(__name__)

DiscoverFn = Callable[[str], AsyncIterator[Resource[list[Path]]]]
IngestFn = Callable[[Sequence[Path]], AsyncIterator[Resource[list[Book]]]]


@dataclass(frozen=True)
class SelectableFile:
    path: Path
    selected: bool = False


@dataclass(frozen=True)
class SelectableBook:
    book: Book
    selected: bool = True


@dataclass(frozen=True)
class BrowseState:
    """Snapshot of everything the browse screen shows.

    selected_items_count and has_selected_items are derived from the
    per-file flags and are only ever set by recompute_selection().
    """

    selectable_files: tuple[SelectableFile, ...] = ()
    selected_items_count: int = 0
    has_selected_items: bool = False
    search_query: str = ""
    show_search: bool = False
    is_loading: bool = False
    is_refreshing: bool = False
    selected_books: tuple[SelectableBook, ...] = ()
    is_books_loading: bool = False
    show_adding_dialog: bool = False
    permission_granted: bool = True
    show_error_message: bool = False
    error_message: str | None = None

    @property
    def selected_files(self) -> list[Path]:
        return [item.path for item in self.selectable_files if item.selected]

    @property
    def books_to_add(self) -> list[Book]:
        return [item.book for item in self.selected_books if item.selected]


def recompute_selection(state: BrowseState) -> BrowseState:
    """Rederive the selection count fields from the per-file flags."""
    count = sum(1 for item in state.selectable_files if item.selected)
    return dataclasses.replace(
        state,
        selected_items_count=count,
        has_selected_items=count > 0,
    )


def with_files(state: BrowseState, files: Sequence[Path]) -> BrowseState:
    """Replace the candidate list with unselected entries for files."""
    items = tuple(SelectableFile(path=path) for path in files)
    return recompute_selection(dataclasses.replace(state, selectable_files=items))


def toggle_file(state: BrowseState, index: int) -> BrowseState:
    """Flip the selected flag of one candidate file.

    Raises:
        IndexError: If index is outside the candidate list.
    """
    items = list(state.selectable_files)
    if not 0 <= index < len(items):
        raise IndexError(f"No candidate file at index {index}")
    items[index] = dataclasses.replace(items[index], selected=not items[index].selected)
    return recompute_selection(dataclasses.replace(state, selectable_files=tuple(items)))


def clear_selection(state: BrowseState) -> BrowseState:
    items = tuple(dataclasses.replace(item, selected=False) for item in state.selectable_files)
    return recompute_selection(dataclasses.replace(state, selectable_files=items))


def toggle_book(state: BrowseState, index: int) -> BrowseState:
    """Flip the selected flag of one parsed book.

    A toggle that would leave no book selected is refused and the state is
    returned unchanged.

    Raises:
        IndexError: If index is outside the parsed batch.
    """
    items = list(state.selected_books)
    if not 0 <= index < len(items):
        raise IndexError(f"No parsed book at index {index}")
    items[index] = dataclasses.replace(items[index], selected=not items[index].selected)
    if not any(item.selected for item in items):
        return state
    return dataclasses.replace(state, selected_books=tuple(items))


class BrowseSession:
    """Owns a BrowseState and applies every mutation to it in turn.

    All methods must be called from the same event loop. Discovery and
    ingestion stream Resource values that are folded into the state as they
    arrive; the blocking work behind them runs in worker threads.
    """

    def __init__(
        self,
        repository: BookRepository,
        discover_fn: DiscoverFn,
        *,
        ingest_fn: IngestFn = ingest,
        debounce_seconds: float = DEBOUNCE_SECONDS,
    ) -> None:
        self.state = BrowseState()
        self._repository = repository
        self._discover = discover_fn
        self._ingest = ingest_fn
        self._debounce_seconds = debounce_seconds
        self._search_task: asyncio.Task[None] | None = None

    def _update(self, **changes: object) -> None:
        self.state = dataclasses.replace(self.state, **changes)

    # --- Discovery ---

    async def load_files(self, query: str | None = None) -> None:
        """Run discovery for query (default: the current search query) and store the result."""
        if query is None:
            query = self.state.search_query
        async for result in self._discover(query):
            if isinstance(result, Loading):
                self._update(is_loading=result.is_loading)
            elif isinstance(result, Success):
                self.state = with_files(self.state, result.data)
                self._update(is_loading=False, error_message=None)
            elif isinstance(result, Error):
                self._update(is_loading=False, error_message=result.message)

    async def load_list(self) -> None:
        self._update(is_loading=True)
        await self.load_files("")

    async def refresh(self) -> None:
        """Drop selection and search, then rescan with an empty query."""
        self._update(
            is_refreshing=True,
            show_search=False,
            search_query="",
            selectable_files=(),
        )
        self.state = recompute_selection(self.state)
        try:
            await self.load_files("")
        finally:
            self._update(is_refreshing=False)

    def change_query(self, query: str) -> None:
        """Store the query now; rescan once no further change arrives for the quiet period.

        Cancelling the pending search and scheduling its replacement happen in
        one synchronous step, so a replaced search can never run.
        """
        self._update(search_query=query)
        if self._search_task is not None:
            self._search_task.cancel()
        self._search_task = asyncio.get_running_loop().create_task(self._debounced_search())

    async def _debounced_search(self) -> None:
        try:
            await asyncio.sleep(self._debounce_seconds)
            await self.load_files(self.state.search_query)
        except asyncio.CancelledError:
            # A scan cut off mid-stream never delivers its terminal state
            self._update(is_loading=False)
            raise

    async def wait_for_search(self) -> None:
        """Wait until the pending debounced search, if any, has finished."""
        task = self._search_task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    async def toggle_search(self) -> None:
        """Show or hide the search bar. Hiding it restores the unfiltered list."""
        if self.state.show_search:
            self._update(search_query="")
            await self.load_files("")
        else:
            self._update(search_query="")
        self._update(show_search=not self.state.show_search)

    # --- Selection ---

    def toggle_file(self, index: int) -> None:
        self.state = toggle_file(self.state, index)

    def toggle_book(self, index: int) -> None:
        self.state = toggle_book(self.state, index)

    def clear_selected_files(self) -> None:
        self.state = clear_selection(self.state)

    # --- Ingestion ---

    async def get_books_from_files(self) -> None:
        """Parse the selected files and offer every resulting book for adding."""
        self._update(show_adding_dialog=True, selected_books=())
        async for result in self._ingest(self.state.selected_files):
            if isinstance(result, Loading):
                self._update(is_books_loading=result.is_loading)
            elif isinstance(result, Success):
                books = tuple(SelectableBook(book=book) for book in result.data)
                self._update(selected_books=books, is_books_loading=False, error_message=None)
            elif isinstance(result, Error):
                self._update(is_books_loading=False, error_message=result.message)

    def dismiss_adding_dialog(self) -> None:
        self._update(show_adding_dialog=False)

    def add_books(self) -> list[Book]:
        """Persist the selected parsed books and return the repository's books.

        Nothing selected is a no-op that returns an empty list.
        """
        books = self.state.books_to_add
        if not books:
            return []

        self._repository.insert(books)
        stored = self._repository.query("")
        logger.info("Added %d book(s) to the library", len(books))

        self._update(show_adding_dialog=False)
        self.clear_selected_files()
        return stored

    # --- Permission ---

    async def request_permission(
        self,
        check: Callable[[], bool],
        *,
        attempts: int = PERMISSION_POLL_ATTEMPTS,
        interval: float = PERMISSION_POLL_INTERVAL,
    ) -> bool:
        """Poll check() until it reports access or the retry budget runs out.

        On success the list is refreshed. On exhaustion the state is left
        marked as not granted so the caller can show why nothing is listed.
        """
        for attempt in range(attempts):
            if check():
                self._update(permission_granted=True, show_error_message=False)
                await self.refresh()
                return True
            if attempt < attempts - 1:
                await asyncio.sleep(interval)

        logger.info("Storage permission not granted after %d attempt(s)", attempts)
        self._update(permission_granted=False, show_error_message=True)
        return False

    async def aclose(self) -> None:
        """Cancel any pending debounced search."""
        if self._search_task is not None:
            self._search_task.cancel()
            await self.wait_for_search()
            self._search_task = None
