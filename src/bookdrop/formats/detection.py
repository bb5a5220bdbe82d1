# ABOUTME: Format detection by file extension and magic-byte signature.
# ABOUTME: Decides which parser a candidate file belongs to before any parsing happens.

from pathlib import Path

FORMAT_EXTENSIONS: dict[str, frozenset[str]] = {
    "txt": frozenset({".txt"}),
    "html": frozenset({".html", ".htm"}),
    "epub": frozenset({".epub"}),
    "pdf": frozenset({".pdf"}),
}

SUPPORTED_EXTENSIONS: frozenset[str] = frozenset().union(*FORMAT_EXTENSIONS.values())

# Formats whose files must start with a known signature
_SIGNATURES: dict[str, tuple[bytes, ...]] = {
    "epub": (b"PK\x03\x04",),
    "pdf": (b"%PDF-",),
}
_SIGNATURE_READ = 8

# Text formats are rejected when their head holds NUL bytes
_TEXT_FORMATS = frozenset({"txt", "html"})
_TEXT_SNIFF_READ = 1024


def is_supported(path: Path) -> bool:
    """Whether the file's extension belongs to any supported format."""
    return path.suffix.lower() in SUPPORTED_EXTENSIONS


def format_for_extension(path: Path) -> str | None:
    """Map a path's extension to a format name, case-insensitively."""
    suffix = path.suffix.lower()
    for name, extensions in FORMAT_EXTENSIONS.items():
        if suffix in extensions:
            return name
    return None


def _read_head(path: Path, size: int) -> bytes:
    with open(path, "rb") as f:
        return f.read(size)


def has_signature(path: Path, format_name: str) -> bool:
    """Check the magic bytes for binary formats, and rule out binary data for text ones."""
    if format_name in _TEXT_FORMATS:
        try:
            head = _read_head(path, _TEXT_SNIFF_READ)
        except OSError:
            return False
        return b"\x00" not in head

    signatures = _SIGNATURES.get(format_name)
    if not signatures:
        return True
    try:
        head = _read_head(path, _SIGNATURE_READ)
    except OSError:
        return False
    return head.startswith(signatures)


def matches_format(path: Path, format_name: str) -> bool:
    """A file belongs to a format when it exists, has the extension, and the signature fits."""
    if format_for_extension(path) != format_name:
        return False
    try:
        if not path.is_file():
            return False
    except OSError:
        # Over-long names and untraversable parents raise instead of reporting False
        return False
    return has_signature(path, format_name)
