# ABOUTME: Shared Click options for Bookdrop CLI commands.
# ABOUTME: Provides reusable decorators for common flags like --db and --root.

from pathlib import Path

import click

from bookdrop.config import DEFAULT_SCAN_ROOT, LEGACY_SCAN_ROOT
from bookdrop.db.connection import DEFAULT_DB_PATH

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    help=f"Path to library database (default: {DEFAULT_DB_PATH})",
)

root_option = click.option(
    "--root",
    "root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help=f"Directory to scan (default: {DEFAULT_SCAN_ROOT}, falling back to {LEGACY_SCAN_ROOT}).",
)


def scan_roots(root: Path | None) -> tuple[Path, Path | None]:
    """Primary and fallback roots: an explicit --root has no fallback."""
    if root is not None:
        return root, None
    return DEFAULT_SCAN_ROOT, LEGACY_SCAN_ROOT
