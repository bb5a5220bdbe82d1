# ABOUTME: Unit tests for candidate file discovery.
# ABOUTME: Tests flat scanning, extension filtering, query matching, and root fallback.

import asyncio
from pathlib import Path

import pytest

from bookdrop.config import DEFAULT_SCAN_ROOT, LEGACY_SCAN_ROOT
from bookdrop.core.discovery import (
    ScanRootError,
    discover,
    matches_query,
    scan_root,
    select_scan_root,
)
from bookdrop.core.resource import Error, Loading, Success


def _collect(stream) -> list:
    async def _drain() -> list:
        return [item async for item in stream]

    return asyncio.run(_drain())


class TestMatchesQuery:
    def test_empty_query_matches_everything(self) -> None:
        assert matches_query(Path("anything.pdf"), "")

    def test_case_insensitive_substring(self) -> None:
        assert matches_query(Path("Alpha Story.txt"), "STORY")
        assert not matches_query(Path("Alpha Story.txt"), "gamma")


class TestScanRoot:
    def test_lists_only_supported_files(self, downloads_dir: Path) -> None:
        names = [p.name for p in scan_root(downloads_dir)]
        assert names == ["Alpha Story.txt", "beta-notes.HTML", "delta report.pdf", "Gamma.epub"]

    def test_does_not_descend_into_subdirectories(self, downloads_dir: Path) -> None:
        assert all(p.parent == downloads_dir for p in scan_root(downloads_dir))

    def test_query_filters_by_name(self, downloads_dir: Path) -> None:
        assert [p.name for p in scan_root(downloads_dir, "ALPHA")] == ["Alpha Story.txt"]

    def test_no_match_is_empty(self, downloads_dir: Path) -> None:
        assert scan_root(downloads_dir, "zzz") == []

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ScanRootError):
            scan_root(tmp_path / "nope")


class TestSelectScanRoot:
    def test_primary_when_readable(self, downloads_dir: Path, tmp_path: Path) -> None:
        assert select_scan_root(downloads_dir, tmp_path) == downloads_dir

    def test_fallback_when_primary_missing(self, downloads_dir: Path, tmp_path: Path) -> None:
        assert select_scan_root(tmp_path / "missing", downloads_dir) == downloads_dir

    def test_neither_readable(self, tmp_path: Path) -> None:
        with pytest.raises(ScanRootError):
            select_scan_root(tmp_path / "a", tmp_path / "b")


class TestDiscover:
    def test_loading_then_all_candidates(self, downloads_dir: Path) -> None:
        states = _collect(discover("", downloads_dir))
        assert states[0] == Loading(True)
        assert len(states) == 2
        assert isinstance(states[1], Success)
        assert len(states[1].data) == 4

    def test_query_narrows_result(self, downloads_dir: Path) -> None:
        states = _collect(discover("notes", downloads_dir))
        assert [p.name for p in states[-1].data] == ["beta-notes.HTML"]

    def test_no_match_is_empty_success(self, downloads_dir: Path) -> None:
        assert _collect(discover("zzz", downloads_dir))[-1] == Success([])

    def test_unreadable_root_is_error(self, tmp_path: Path) -> None:
        states = _collect(discover("", tmp_path / "missing"))
        assert states[0] == Loading(True)
        assert isinstance(states[-1], Error)
        assert "missing" in states[-1].message

    def test_uses_fallback_root(self, downloads_dir: Path, tmp_path: Path) -> None:
        states = _collect(discover("gamma", tmp_path / "missing", downloads_dir))
        assert [p.name for p in states[-1].data] == ["Gamma.epub"]

    def test_every_call_rescans(self, downloads_dir: Path) -> None:
        first = _collect(discover("", downloads_dir))[-1].data
        (downloads_dir / "epsilon.txt").write_text("new")
        second = _collect(discover("", downloads_dir))[-1].data
        assert len(second) == len(first) + 1


class TestDefaultRoots:
    def test_fallback_is_narrower_than_downloads(self) -> None:
        """The fallback root never contains the downloads directory."""
        assert LEGACY_SCAN_ROOT not in DEFAULT_SCAN_ROOT.parents
        assert LEGACY_SCAN_ROOT != DEFAULT_SCAN_ROOT
