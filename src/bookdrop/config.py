# ABOUTME: Default locations and timing knobs for discovery, ingestion, and browsing.
# ABOUTME: Plain module constants; the CLI overrides paths through shared options.

from pathlib import Path

DEFAULT_SCAN_ROOT = Path.home() / "Downloads"

# App-owned drop folder, scanned only when the downloads directory cannot be read
LEGACY_SCAN_ROOT = Path.home() / ".bookdrop" / "inbox"

DEBOUNCE_SECONDS = 0.5

MAX_PARSE_WORKERS = 4

PERMISSION_POLL_ATTEMPTS = 20
PERMISSION_POLL_INTERVAL = 1.0
