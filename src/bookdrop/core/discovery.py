# ABOUTME: Candidate file discovery: a flat scan of one root for supported e-book files.
# ABOUTME: Streams Loading then a single Success or Error; every call rescans from scratch.

import asyncio
import logging
import os
from collections.abc import AsyncIterator
from pathlib import Path

from bookdrop.core.resource import Error, Loading, Resource, Success
from bookdrop.formats.detection import is_supported

logger = logging.getLogger(__name__)


class ScanRootError(Exception):
    """Raised when no scan root can be listed."""


def is_readable_dir(path: Path) -> bool:
    return path.is_dir() and os.access(path, os.R_OK | os.X_OK)


def select_scan_root(primary: Path, fallback: Path | None = None) -> Path:
    """Pick the primary root when it is readable, else the narrower fallback.

    Raises:
        ScanRootError: If neither root can be listed.
    """
    if is_readable_dir(primary):
        return primary
    if fallback is not None and is_readable_dir(fallback):
        logger.info("Scan root %s not accessible, falling back to %s", primary, fallback)
        return fallback
    raise ScanRootError(f"Cannot read scan root: {primary}")


def matches_query(path: Path, query: str) -> bool:
    """Case-insensitive substring match on the filename. Empty query matches all."""
    if not query:
        return True
    return query.casefold() in path.name.casefold()


def scan_root(root: Path, query: str = "") -> list[Path]:
    """List supported files directly inside root whose names match the query.

    Subdirectories are not descended into. Results are sorted by filename,
    case-insensitively.

    Raises:
        ScanRootError: If root is missing or cannot be listed.
    """
    if not root.is_dir():
        raise ScanRootError(f"Scan root is not a directory: {root}")

    try:
        entries = list(root.iterdir())
    except OSError as exc:
        raise ScanRootError(f"Cannot list scan root: {root}: {exc}") from exc

    candidates = [
        path
        for path in entries
        if path.is_file() and is_supported(path) and matches_query(path, query)
    ]
    return sorted(candidates, key=lambda p: (p.name.casefold(), p.name))


async def discover(
    query: str, root: Path, fallback: Path | None = None
) -> AsyncIterator[Resource[list[Path]]]:
    """Scan a root off the event loop and stream the matching candidate files.

    The fallback root is only used when root itself cannot be listed.
    """
    yield Loading(True)
    try:
        root = select_scan_root(root, fallback)
        files = await asyncio.to_thread(scan_root, root, query)
    except ScanRootError as exc:
        logger.warning("Discovery failed: %s", exc)
        yield Error(str(exc))
        return
    logger.info("Discovered %d candidate file(s) in %s for query %r", len(files), root, query)
    yield Success(files)
