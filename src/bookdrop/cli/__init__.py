# ABOUTME: CLI package for Bookdrop, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from bookdrop.cli.commands import (
    add_cmd,
    history_cmd,
    inspect_cmd,
    ls_cmd,
    scan_cmd,
    text_cmd,
)

_LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def configure_logging(verbosity: int) -> None:
    """Route log records through Rich; each -v lowers the threshold one step."""
    level = _LOG_LEVELS[min(verbosity, len(_LOG_LEVELS) - 1)]
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(package_name="bookdrop")
@click.option("-v", "--verbose", count=True, help="Log more (repeat for debug output).")
def cli(verbose: int) -> None:
    """Bookdrop - pick up e-books from your downloads and catalog them."""
    configure_logging(verbose)


cli.add_command(add_cmd.add)
cli.add_command(history_cmd.history)
cli.add_command(inspect_cmd.inspect)
cli.add_command(ls_cmd.ls)
cli.add_command(scan_cmd.scan)
cli.add_command(text_cmd.text)
