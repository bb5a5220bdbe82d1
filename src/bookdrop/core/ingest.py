# ABOUTME: Ingestion pipeline that turns selected candidate files into a batch of Books.
# ABOUTME: Fans out per-file parsing to worker threads and emits one result after the join.

import asyncio
import dataclasses
import logging
from collections.abc import AsyncIterator, Sequence
from pathlib import Path

from bookdrop.config import MAX_PARSE_WORKERS
from bookdrop.core.resource import Error, Loading, Resource, Success
from bookdrop.formats.base import FileParser
from bookdrop.formats.registry import FILE_PARSERS
from bookdrop.library.types import Book

logger = logging.getLogger(__name__)


def parse_file(path: Path, parsers: Sequence[FileParser] = FILE_PARSERS) -> Book | None:
    """Try each parser in order; the first one that accepts the file wins.

    The cover image, if any, is attached to the returned Book. Returns None
    when no parser accepts the file.
    """
    for parser in parsers:
        result = parser.parse(path)
        if result is None:
            continue
        book, cover = result
        if cover is not None:
            book = dataclasses.replace(book, cover_image=cover)
        return book
    return None


def _unique_by_path(books: list[Book | None]) -> list[Book]:
    """Drop unparsed entries and any repeat of an already-seen file_path."""
    seen: set[str] = set()
    batch: list[Book] = []
    for book in books:
        if book is None or book.file_path in seen:
            continue
        seen.add(book.file_path)
        batch.append(book)
    return batch


async def parse_files(
    files: Sequence[Path],
    parsers: Sequence[FileParser] = FILE_PARSERS,
    max_workers: int = MAX_PARSE_WORKERS,
) -> list[Book]:
    """Parse all files concurrently and return the accepted books in input order."""
    semaphore = asyncio.Semaphore(max(1, max_workers))

    async def _parse_one(path: Path) -> Book | None:
        async with semaphore:
            try:
                book = await asyncio.to_thread(parse_file, path, parsers)
            except Exception as exc:  # noqa: BLE001 - one bad file never fails the batch
                logger.warning("Could not parse %s: %s", path, exc)
                return None
        if book is None:
            logger.debug("No parser accepted %s", path)
        return book

    results = await asyncio.gather(*(_parse_one(Path(f).absolute()) for f in files))
    return _unique_by_path(list(results))


async def ingest(
    files: Sequence[Path],
    parsers: Sequence[FileParser] = FILE_PARSERS,
    max_workers: int = MAX_PARSE_WORKERS,
) -> AsyncIterator[Resource[list[Book]]]:
    """Stream the ingestion of a batch of files.

    An empty input completes at once with Success([]). Otherwise emits
    Loading(True) and, once every file has been parsed, a single Success with
    the books that some parser accepted. Unparseable files are left out of the
    batch; Error is reserved for failures of the operation as a whole.
    """
    if not files:
        yield Success([])
        return

    yield Loading(True)
    try:
        books = await parse_files(files, parsers, max_workers)
    except Exception as exc:  # noqa: BLE001 - operation-level failure becomes an Error
        logger.exception("Ingestion of %d file(s) failed", len(files))
        yield Error(f"Could not ingest files: {exc}")
        return

    logger.info("Parsed %d of %d file(s)", len(books), len(files))
    yield Success(books)
