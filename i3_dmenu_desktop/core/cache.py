"""Persistent cache of parsed desktop entries.

The cache maps absolute .desktop paths to parsed entries. Whether a cached
entry is still current is decided by the caller, which compares the stored
mtime against the file on disk. Loading never fails: a missing, unreadable,
corrupt or outdated cache file reads as an empty cache.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Iterable, Union

from pydantic import ValidationError

from i3_dmenu_desktop.models.desktop_entry import DesktopEntry, PersistedCache

logger = logging.getLogger(__name__)

# Bump whenever DesktopEntry changes shape
CACHE_VERSION = 1
CACHE_FILE_NAME = "i3-dmenu-desktop.json"


def get_cache_path(cache_dir: Union[str, Path]) -> Path:
    """Get path to the cache file inside ``cache_dir`` ($XDG_CACHE_HOME)."""
    return Path(cache_dir) / CACHE_FILE_NAME


def load_desktop_entry_cache(cache_dir: Union[str, Path]) -> Dict[str, DesktopEntry]:
    """Load cached entries keyed by source path.

    Args:
        cache_dir: Directory holding the cache file

    Returns:
        Mapping of source path to DesktopEntry; empty when the cache is
        missing, unreadable, corrupt or written by another cache version
    """
    cache_path = get_cache_path(cache_dir)

    try:
        data = json.loads(cache_path.read_bytes())
    except FileNotFoundError:
        logger.debug(f"Cache file does not exist: {cache_path}")
        return {}
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read cache {cache_path}: {e}")
        return {}

    if not isinstance(data, dict) or data.get("version") != CACHE_VERSION:
        logger.debug(f"Ignoring cache {cache_path} with unexpected version")
        return {}

    try:
        cache = PersistedCache.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Could not deserialize {cache_path}: {e.error_count()} error(s)")
        return {}

    logger.debug(f"Loaded cache with {len(cache.records)} entries")
    return {entry.source_path: entry for entry in cache.records}


def save_desktop_entry_cache(cache_dir: Union[str, Path], entries: Iterable[DesktopEntry]) -> bool:
    """Write entries to the cache file.

    Uses a temp file + rename so readers never see a partial file. Write
    failures are logged and otherwise ignored.

    Returns:
        True if the cache was written
    """
    cache_path = get_cache_path(cache_dir)
    cache = PersistedCache(version=CACHE_VERSION, records=list(entries))
    payload = cache.model_dump_json()

    temp_path = None
    try:
        cache_path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(
            dir=cache_path.parent,
            prefix=".i3-dmenu-desktop-",
            suffix=".json",
        )
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())

        os.replace(temp_path, cache_path)
    except OSError as e:
        logger.warning(f"Could not save desktop entries to {cache_path}: {e}")
        if temp_path is not None and Path(temp_path).exists():
            os.unlink(temp_path)
        return False

    logger.debug(f"Saved cache with {len(cache.records)} entries to {cache_path}")
    return True
