"""Unit tests for the persistent desktop entry cache.

Tests the cache file format, version checking and silent fallback to an
empty cache.
"""

import json
from unittest.mock import patch

from i3_dmenu_desktop.core.cache import (
    CACHE_FILE_NAME,
    CACHE_VERSION,
    get_cache_path,
    load_desktop_entry_cache,
    save_desktop_entry_cache,
)
from i3_dmenu_desktop.models.desktop_entry import DesktopEntry


def make_entry(name: str, path: str) -> DesktopEntry:
    return DesktopEntry(
        name=name,
        exec=f"{name.lower()} %U",
        try_exec=None,
        type="Application",
        hidden=True,
        startup_notify=False,
        source_path=path,
        modified_time=1_700_000_000_123_456_789,
    )


class TestCacheFormat:
    """Tests for cache file location and format."""

    def test_cache_file_location(self, cache_dir):
        assert get_cache_path(cache_dir) == cache_dir / CACHE_FILE_NAME

    def test_cache_json_structure(self, cache_dir):
        save_desktop_entry_cache(cache_dir, [make_entry("Foo", "/apps/foo.desktop")])

        data = json.loads(get_cache_path(cache_dir).read_text())
        assert data["version"] == CACHE_VERSION
        assert len(data["records"]) == 1
        assert data["records"][0]["source_path"] == "/apps/foo.desktop"

    def test_creates_cache_directory(self, cache_dir):
        assert not cache_dir.exists()
        assert save_desktop_entry_cache(cache_dir, []) is True
        assert get_cache_path(cache_dir).exists()

    def test_no_temp_files_left(self, cache_dir):
        save_desktop_entry_cache(cache_dir, [make_entry("Foo", "/apps/foo.desktop")])
        assert [p.name for p in cache_dir.iterdir()] == [CACHE_FILE_NAME]


class TestCacheLoad:
    """Tests for loading and fallback behavior."""

    def test_round_trip_keyed_by_path(self, cache_dir):
        entries = [make_entry("Foo", "/apps/foo.desktop"), make_entry("Bar", "/apps/bar.desktop")]
        save_desktop_entry_cache(cache_dir, entries)

        loaded = load_desktop_entry_cache(cache_dir)
        assert set(loaded) == {"/apps/foo.desktop", "/apps/bar.desktop"}
        assert loaded["/apps/foo.desktop"].model_dump() == entries[0].model_dump()
        assert loaded["/apps/foo.desktop"].modified_time == 1_700_000_000_123_456_789

    def test_missing_file(self, cache_dir):
        assert load_desktop_entry_cache(cache_dir) == {}

    def test_version_mismatch(self, cache_dir):
        save_desktop_entry_cache(cache_dir, [make_entry("Foo", "/apps/foo.desktop")])
        path = get_cache_path(cache_dir)
        data = json.loads(path.read_text())
        data["version"] = CACHE_VERSION + 1
        path.write_text(json.dumps(data))

        assert load_desktop_entry_cache(cache_dir) == {}

    def test_corrupt_json(self, cache_dir):
        cache_dir.mkdir()
        get_cache_path(cache_dir).write_bytes(b"\x00not json{")
        assert load_desktop_entry_cache(cache_dir) == {}

    def test_wrong_shape(self, cache_dir):
        cache_dir.mkdir()
        get_cache_path(cache_dir).write_text(json.dumps([1, 2, 3]))
        assert load_desktop_entry_cache(cache_dir) == {}

    def test_invalid_records(self, cache_dir):
        cache_dir.mkdir()
        get_cache_path(cache_dir).write_text(
            json.dumps({"version": CACHE_VERSION, "records": [{"name": "no type"}]})
        )
        assert load_desktop_entry_cache(cache_dir) == {}

    def test_application_record_without_exec(self, cache_dir):
        cache_dir.mkdir()
        record = {
            "name": "Ghost",
            "type": "Application",
            "source_path": "/x.desktop",
            "modified_time": 1,
        }
        get_cache_path(cache_dir).write_text(
            json.dumps({"version": CACHE_VERSION, "records": [record]})
        )
        assert load_desktop_entry_cache(cache_dir) == {}

    def test_link_record_without_exec_loads(self, cache_dir):
        cache_dir.mkdir()
        record = {
            "name": "Homepage",
            "type": "Link",
            "source_path": "/homepage.desktop",
            "modified_time": 1,
        }
        get_cache_path(cache_dir).write_text(
            json.dumps({"version": CACHE_VERSION, "records": [record]})
        )
        loaded = load_desktop_entry_cache(cache_dir)
        assert list(loaded) == ["/homepage.desktop"]
        assert loaded["/homepage.desktop"].exec is None

    def test_cache_path_is_directory(self, cache_dir):
        get_cache_path(cache_dir).mkdir(parents=True)
        assert load_desktop_entry_cache(cache_dir) == {}


class TestCacheSave:
    """Tests for non-fatal write failures."""

    def test_write_failure_is_logged(self, cache_dir, caplog):
        with patch("i3_dmenu_desktop.core.cache.tempfile.mkstemp", side_effect=PermissionError("denied")):
            assert save_desktop_entry_cache(cache_dir, []) is False
        assert "Could not save desktop entries" in caplog.text

    def test_unwritable_location(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        assert save_desktop_entry_cache(blocker / "cache", []) is False
