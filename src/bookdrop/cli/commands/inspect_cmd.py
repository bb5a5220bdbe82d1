# ABOUTME: The `bookdrop inspect` command for viewing what a file parses to.
# ABOUTME: Shows the Book a single e-book file would be ingested as.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bookdrop.core.ingest import parse_file

console = Console()


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def inspect(path: Path) -> None:
    """Show the book parsed from an e-book file."""
    book = parse_file(path.absolute())
    if book is None:
        console.print(f"[red]Error:[/red] {escape(path.name)} is not a readable e-book file")
        raise SystemExit(1)

    table = Table(title=escape(path.name), show_header=False, pad_edge=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Title", escape(book.title))
    table.add_row("Author", escape(book.author_text))
    table.add_row("Description", escape(book.description) if book.description else "[dim]none[/dim]")
    table.add_row("Category", book.category.name)
    if book.cover_image is not None:
        cover = f"{book.cover_image.format}, {len(book.cover_image.data)} bytes"
    else:
        cover = "no"
    table.add_row("Cover", cover)
    table.add_row("File", escape(book.file_path))

    console.print(table)
