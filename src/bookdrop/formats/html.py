# ABOUTME: HTML support using BeautifulSoup: title extraction and block-level text chunks.
# ABOUTME: Shared block walker is reused by the EPUB text parser for its XHTML documents.

from pathlib import Path

from bs4 import BeautifulSoup

from bookdrop.formats.base import FileParser, ParseResult, TextParser, new_book, pick_title

BLOCK_TAGS: list[str] = [
    "p", "h1", "h2", "h3", "h4", "h5", "h6",
    "li", "blockquote", "pre", "dt", "dd", "figcaption", "td", "th",
]


def load_soup(markup: bytes | str) -> BeautifulSoup:
    return BeautifulSoup(markup, "html.parser")


def document_title(soup: BeautifulSoup) -> str | None:
    """Text of <head><title>, or None if the document has none."""
    tag = soup.select_one("head > title") or soup.find("title")
    if tag is None:
        return None
    return tag.get_text(" ", strip=True)


def block_texts(soup: BeautifulSoup) -> list[str]:
    """Text of every outermost block element in document order.

    Nested blocks (a <p> inside a <blockquote>) are emitted once, as part of
    their outermost block. Documents without any block tags fall back to the
    non-empty lines of the body text.
    """
    root = soup.body or soup
    texts: list[str] = []
    for tag in root.find_all(BLOCK_TAGS):
        if tag.find_parent(BLOCK_TAGS) is not None:
            continue
        text = " ".join(tag.get_text(" ", strip=True).split())
        if text:
            texts.append(text)

    if texts:
        return texts

    return [
        " ".join(line.split())
        for line in root.get_text("\n").splitlines()
        if line.strip()
    ]


class HtmlFileParser(FileParser):
    format_name = "html"

    def read(self, path: Path) -> ParseResult:
        soup = load_soup(path.read_bytes())
        title = pick_title(document_title(soup), path)
        return new_book(path, title=title), None


class HtmlTextParser(TextParser):
    """One chunk per outermost block element of the page body."""

    def extract(self, path: Path) -> list[str]:
        soup = load_soup(path.read_bytes())
        for tag in soup(["script", "style"]):
            tag.decompose()
        return block_texts(soup)
