# ABOUTME: Fixed, ordered set of format handlers used by ingestion and text extraction.
# ABOUTME: File parsers are tried first-match-wins; text parsers are picked by format name.

from pathlib import Path

from bookdrop.formats.base import FileParser, TextParser
from bookdrop.formats.detection import format_for_extension
from bookdrop.formats.epub import EpubFileParser, EpubTextParser
from bookdrop.formats.html import HtmlFileParser, HtmlTextParser
from bookdrop.formats.pdf import PdfFileParser, PdfTextParser
from bookdrop.formats.txt import TxtFileParser, TxtTextParser

FILE_PARSERS: tuple[FileParser, ...] = (
    TxtFileParser(),
    HtmlFileParser(),
    EpubFileParser(),
    PdfFileParser(),
)

TEXT_PARSERS: dict[str, TextParser] = {
    "txt": TxtTextParser(),
    "html": HtmlTextParser(),
    "epub": EpubTextParser(),
    "pdf": PdfTextParser(),
}


def text_parser_for(path: Path) -> TextParser | None:
    """The text parser for a file's extension, or None if unsupported."""
    format_name = format_for_extension(path)
    if format_name is None:
        return None
    return TEXT_PARSERS[format_name]
