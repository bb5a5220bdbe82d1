# ABOUTME: The `bookdrop history` command for listing recently opened books.
# ABOUTME: Joins history entries with their books, most recent first.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bookdrop.cli.options import db_option
from bookdrop.db.catalog import LibraryCatalog
from bookdrop.db.connection import DEFAULT_DB_PATH, open_library

console = Console()


@click.command("history")
@db_option
def history(db_path: Path | None) -> None:
    """List when cataloged books were opened."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        catalog = LibraryCatalog(conn)
        entries = catalog.list_history()
        books = {entry.book_id: catalog.get_by_id(entry.book_id) for entry in entries}
    finally:
        conn.close()

    if not entries:
        console.print("[yellow]No history yet.[/yellow]")
        return

    table = Table()
    table.add_column("Opened", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Author")

    for entry in entries:
        book = books.get(entry.book_id)
        table.add_row(
            entry.time.strftime("%Y-%m-%d %H:%M"),
            escape(book.title) if book else "[dim]deleted[/dim]",
            escape(book.author_text) if book else "",
        )

    console.print(table)
