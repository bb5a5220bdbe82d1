# ABOUTME: Plain text support: Book extraction and paragraph chunking for .txt files.
# ABOUTME: Title always comes from the filename since plain text carries no metadata.

import re
from pathlib import Path

from bookdrop.formats.base import FileParser, ParseResult, TextParser, fallback_title, new_book

_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")
_WHITESPACE_RE = re.compile(r"\s+")


def read_text_file(path: Path) -> str:
    """Read a text file as UTF-8, replacing undecodable bytes."""
    return path.read_text(encoding="utf-8", errors="replace")


class TxtFileParser(FileParser):
    format_name = "txt"

    def read(self, path: Path) -> ParseResult:
        return new_book(path, title=fallback_title(path)), None


class TxtTextParser(TextParser):
    """One chunk per blank-line separated paragraph, inner whitespace collapsed."""

    def extract(self, path: Path) -> list[str]:
        text = read_text_file(path)
        paragraphs = []
        for block in _PARAGRAPH_SPLIT_RE.split(text):
            cleaned = _WHITESPACE_RE.sub(" ", block).strip()
            if cleaned:
                paragraphs.append(cleaned)
        return paragraphs
