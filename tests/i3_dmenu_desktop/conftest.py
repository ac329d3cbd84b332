"""Shared fixtures for i3_dmenu_desktop tests."""

import os
import sys
from pathlib import Path
from typing import Callable, Dict, Optional

import pytest

from i3_dmenu_desktop.models.desktop_entry import DesktopEntry

# Make the shared fixtures package importable from unit/ and integration/
tests_root = Path(__file__).parent
if str(tests_root) not in sys.path:
    sys.path.insert(0, str(tests_root))


@pytest.fixture
def make_env() -> Callable[[Dict[str, str]], Callable[[str], Optional[str]]]:
    """Build an environment accessor backed by a dict."""
    def _make_env(values: Dict[str, str]) -> Callable[[str], Optional[str]]:
        return values.get

    return _make_env


@pytest.fixture
def app_dirs(tmp_path: Path):
    """Two application directories, highest priority first."""
    home_apps = tmp_path / "home" / ".local/share/applications"
    system_apps = tmp_path / "usr/share/applications"
    home_apps.mkdir(parents=True)
    system_apps.mkdir(parents=True)
    return home_apps, system_apps


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache"


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    """Directory with one executable (``present-tool``) and one plain file."""
    directory = tmp_path / "bin"
    directory.mkdir()
    tool = directory / "present-tool"
    tool.write_text("#!/bin/sh\n")
    tool.chmod(0o755)
    (directory / "not-executable").write_text("data\n")
    (directory / "not-executable").chmod(0o644)
    return directory


@pytest.fixture
def write_desktop_file():
    """Write a .desktop file and give it a distinct, explicit mtime."""
    counter = {"mtime_ns": 1_600_000_000_000_000_000}

    def _write(directory: Path, filename: str, content: str) -> Path:
        path = directory / filename
        path.write_text(content)
        counter["mtime_ns"] += 1_000_000_000
        os.utime(path, ns=(counter["mtime_ns"], counter["mtime_ns"]))
        return path

    return _write


@pytest.fixture
def sample_entry() -> DesktopEntry:
    return DesktopEntry(
        name="Image Viewer",
        exec="viewer %f",
        type="Application",
        source_path="/usr/share/applications/viewer.desktop",
        modified_time=1,
    )
