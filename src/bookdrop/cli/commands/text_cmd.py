# ABOUTME: The `bookdrop text` command for printing a file's id-stamped text chunks.
# ABOUTME: Records an open in the library history when the file is cataloged.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from bookdrop.cli.options import db_option
from bookdrop.cli.streaming import run_stream
from bookdrop.core.resource import Error
from bookdrop.db.catalog import LibraryCatalog
from bookdrop.db.connection import DEFAULT_DB_PATH, open_library
from bookdrop.formats.registry import text_parser_for

console = Console()


@click.command("text")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-n", "--limit",
    type=click.IntRange(min=1),
    default=None,
    help="Print at most this many chunks.",
)
@db_option
def text(path: Path, limit: int | None, db_path: Path | None) -> None:
    """Print the text chunks of an e-book file with their ids."""
    path = path.absolute()
    parser = text_parser_for(path)
    if parser is None:
        console.print(f"[red]Error:[/red] unsupported file type: {escape(path.suffix)}")
        raise SystemExit(1)

    result = run_stream(parser.parse(path), console, "Reading...")
    if isinstance(result, Error):
        console.print(f"[red]Error:[/red] {escape(result.message)}")
        raise SystemExit(1)

    chunks = result.data
    for chunk in chunks[:limit]:
        console.print(f"[dim]{chunk.id:>5}[/dim]  {escape(chunk.text)}")

    if limit is not None and len(chunks) > limit:
        console.print(f"\n[dim]... {len(chunks) - limit} more chunk(s)[/dim]")

    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        catalog = LibraryCatalog(conn)
        book = catalog.get_by_path(str(path))
        if book is not None and book.id is not None:
            catalog.mark_opened(book.id)
    finally:
        conn.close()
