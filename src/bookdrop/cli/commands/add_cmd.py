# ABOUTME: The `bookdrop add` command for parsing e-book files and cataloging them.
# ABOUTME: Either ingests explicit paths or browses the scan root and adds the picked files.

import asyncio
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bookdrop.cli.options import db_option, root_option, scan_roots
from bookdrop.cli.streaming import run_stream
from bookdrop.core.browse import BrowseSession
from bookdrop.core.discovery import discover
from bookdrop.core.ingest import ingest
from bookdrop.core.resource import Error
from bookdrop.db.catalog import LibraryCatalog
from bookdrop.db.connection import DEFAULT_DB_PATH, open_library
from bookdrop.library.types import Book

console = Console()


class _BrowseFailed(Exception):
    """Raised when the browse flow stops before any book was parsed."""


async def _browse_books(
    session: BrowseSession, query: str, picks: tuple[int, ...],
) -> list[Book]:
    """Scan, select the picked candidates (all by default), and parse them."""
    await session.load_files(query)
    state = session.state
    if state.error_message:
        raise _BrowseFailed(state.error_message)
    if not state.selectable_files:
        raise _BrowseFailed("No e-book files found.")

    indices = [pick - 1 for pick in picks] if picks else range(len(state.selectable_files))
    for index in sorted(set(indices)):
        try:
            session.toggle_file(index)
        except IndexError as exc:
            raise _BrowseFailed(f"No candidate file #{index + 1}") from exc

    await session.get_books_from_files()
    if session.state.error_message:
        raise _BrowseFailed(session.state.error_message)
    return session.state.books_to_add


def _print_books(books: list[Book], skipped: set[str]) -> None:
    table = Table()
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("File")
    table.add_column("Cover", width=5)

    for book in books:
        title = escape(book.title)
        if book.file_path in skipped:
            title += " [dim](already in library)[/dim]"
        table.add_row(
            title,
            escape(book.author_text),
            escape(Path(book.file_path).name),
            "yes" if book.has_cover else "no",
        )
    console.print(table)


@click.command("add")
@click.argument(
    "paths",
    nargs=-1,
    type=click.Path(dir_okay=False, path_type=Path),
)
@root_option
@click.option(
    "-q", "--query",
    default="",
    help="Only consider scanned files whose name contains this text.",
)
@click.option(
    "-p", "--pick",
    "picks",
    type=click.IntRange(min=1),
    multiple=True,
    help="Add only the scanned file with this number (repeatable; default: all).",
)
@db_option
def add(
    paths: tuple[Path, ...],
    root: Path | None,
    query: str,
    picks: tuple[int, ...],
    db_path: Path | None,
) -> None:
    """Parse e-book files and add them to the library.

    With PATHS, those files are parsed. Without, the scan root is browsed and
    every matching file (or each --pick) is parsed.
    """
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        catalog = LibraryCatalog(conn)

        if paths:
            result = run_stream(
                ingest(list(paths)), console, "Parsing...",
            )
            if isinstance(result, Error):
                console.print(f"[red]Error:[/red] {escape(result.message)}")
                raise SystemExit(1)
            books = result.data
            skipped = {b.file_path for b in books if catalog.get_by_path(b.file_path)}
            catalog.insert(books)
        else:
            primary, fallback = scan_roots(root)
            session = BrowseSession(catalog, lambda q: discover(q, primary, fallback))
            try:
                with console.status("Scanning and parsing..."):
                    books = asyncio.run(_browse_books(session, query, picks))
            except _BrowseFailed as exc:
                console.print(f"[yellow]{exc}[/yellow]")
                return
            skipped = {b.file_path for b in books if catalog.get_by_path(b.file_path)}
            session.add_books()

        if not books:
            console.print("[yellow]No valid books found.[/yellow]")
            return

        _print_books(books, skipped)
        added = len(books) - len(skipped)
        parts = [f"[green]{added} added[/green]"]
        if skipped:
            parts.append(f"[yellow]{len(skipped)} skipped[/yellow]")
        console.print(", ".join(parts))
    finally:
        conn.close()
