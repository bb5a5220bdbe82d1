# ABOUTME: The `bookdrop ls` command for listing cataloged books.
# ABOUTME: Displays a Rich table of the books in the library database.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bookdrop.cli.options import db_option
from bookdrop.db.catalog import LibraryCatalog
from bookdrop.db.connection import DEFAULT_DB_PATH, open_library

console = Console()


@click.command("ls")
@db_option
@click.option(
    "-q", "--query",
    default="",
    help="Only list books whose title or author contains this text.",
)
def ls(db_path: Path | None, query: str) -> None:
    """List all books in the library catalog."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        books = LibraryCatalog(conn).query(query)
    finally:
        conn.close()

    if not books:
        console.print("[yellow]No books in the library.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Category")
    table.add_column("Progress", justify="right")

    for book in books:
        table.add_row(
            str(book.id),
            escape(book.title),
            escape(book.author_text),
            book.category.name.replace("_", " ").lower(),
            f"{book.progress:.0%}",
        )

    console.print(table)
    console.print(f"\n[dim]{len(books)} book(s)[/dim]")
