# ABOUTME: The `bookdrop scan` command for listing candidate e-book files.
# ABOUTME: Runs discovery on the scan root and prints matches in a Rich table.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bookdrop.cli.options import root_option, scan_roots
from bookdrop.cli.streaming import run_stream
from bookdrop.core.discovery import discover
from bookdrop.core.resource import Error

console = Console()


@click.command("scan")
@click.argument("query", default="")
@root_option
def scan(query: str, root: Path | None) -> None:
    """List supported e-book files in the scan root, optionally filtered by QUERY."""
    primary, fallback = scan_roots(root)
    result = run_stream(discover(query, primary, fallback), console, "Scanning...")

    if isinstance(result, Error):
        console.print(f"[red]Error:[/red] {escape(result.message)}")
        raise SystemExit(1)

    files: list[Path] = result.data
    if not files:
        console.print("[yellow]No e-book files found.[/yellow]")
        return

    table = Table()
    table.add_column("#", style="dim", width=4)
    table.add_column("File", style="bold")
    table.add_column("Format")

    for index, path in enumerate(files, start=1):
        table.add_row(str(index), escape(path.name), path.suffix.lower().lstrip("."))

    console.print(table)
    console.print(f"\n[dim]{len(files)} file(s)[/dim]")
