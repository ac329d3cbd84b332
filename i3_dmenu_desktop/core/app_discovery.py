"""Application discovery across XDG application directories.

Walks the application directories in priority order, reuses cached entries
whose mtime is unchanged, parses the rest, and builds the mapping of unique
display names to desktop entries offered to the user.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Sequence

from i3_dmenu_desktop.core.cache import load_desktop_entry_cache, save_desktop_entry_cache
from i3_dmenu_desktop.core.desktop_entry_parser import DesktopEntryError, parse_desktop_file
from i3_dmenu_desktop.core.exec_resolver import remove_invalid_try_exec, unescape_exec_keys
from i3_dmenu_desktop.core.locale_keys import resolve_candidates
from i3_dmenu_desktop.models.desktop_entry import DesktopEntry

logger = logging.getLogger(__name__)

DESKTOP_FILE_PATTERN = "*.desktop"

Parser = Callable[[str, List[str]], DesktopEntry]


def unique_name(name: str, existing: Dict[str, DesktopEntry]) -> str:
    """Return ``name``, or ``name (N)`` with the smallest free N >= 2."""
    candidate = name
    counter = 1
    while candidate in existing:
        counter += 1
        candidate = f"{name} ({counter})"
    return candidate


def iter_desktop_files(directory: str) -> Iterator[Path]:
    """Yield .desktop files directly inside ``directory``."""
    app_dir = Path(directory)
    if not app_dir.is_dir():
        return
    try:
        candidates = list(app_dir.glob(DESKTOP_FILE_PATTERN))
    except OSError as e:
        logger.debug(f"Skipping unreadable directory {app_dir}: {e}")
        return
    for desktop_file in candidates:
        if desktop_file.is_file():
            yield desktop_file


class AppDiscovery:
    """Discover launchable applications from .desktop files.

    ``parse_count`` records how many files were parsed (as opposed to taken
    from the cache) during the last :meth:`resolve_all`.
    """

    def __init__(
        self,
        cache_dir: Optional[str] = None,
        parser: Parser = parse_desktop_file,
    ):
        """Initialize app discovery.

        Args:
            cache_dir: Directory for the entry cache; None disables caching
            parser: Function parsing one file given its path and locale keys
        """
        self.cache_dir = cache_dir
        self.parser = parser
        self.parse_count = 0
        self.entries: Dict[str, DesktopEntry] = {}

    def _load_entry(
        self,
        desktop_file: Path,
        cached: Dict[str, DesktopEntry],
        locale_keys: List[str],
        search_path: Sequence[str],
    ) -> Optional[DesktopEntry]:
        """Return the cached entry if its mtime matches, else parse the file."""
        source_path = str(desktop_file)
        try:
            modified_time = os.stat(source_path).st_mtime_ns
        except OSError as e:
            logger.warning(f"Could not stat {source_path}: {e}")
            return None

        entry = cached.get(source_path)
        if entry is not None and entry.modified_time == modified_time:
            return entry

        self.parse_count += 1
        try:
            entry = self.parser(source_path, locale_keys)
        except DesktopEntryError as e:
            logger.warning(f"Could not parse {source_path}: {e}")
            return None

        unescape_exec_keys(entry)
        remove_invalid_try_exec(entry, search_path)
        return entry

    def resolve_all(
        self,
        directories: Sequence[str],
        search_path: Sequence[str],
        locale_id: str,
    ) -> Dict[str, DesktopEntry]:
        """Build the display name -> entry mapping.

        Args:
            directories: Application directories, highest priority first
            search_path: PATH directories used to validate TryExec
            locale_id: Locale used to pick localized names

        Returns:
            Visible applications keyed by unique display name. An earlier
            directory claims a name first; later duplicates get " (2)", " (3)"...
        """
        cached = load_desktop_entry_cache(self.cache_dir) if self.cache_dir else {}
        locale_keys = resolve_candidates(locale_id)
        self.parse_count = 0

        entries: Dict[str, DesktopEntry] = {}
        for directory in directories:
            for desktop_file in iter_desktop_files(directory):
                entry = self._load_entry(desktop_file, cached, locale_keys, search_path)
                if entry is None:
                    continue
                entries[unique_name(entry.name, entries)] = entry

        logger.debug(f"Resolved {len(entries)} entries, {self.parse_count} parsed")

        # Hidden entries are cached too so they stay cheap on the next run
        if self.parse_count and self.cache_dir:
            save_desktop_entry_cache(self.cache_dir, entries.values())

        self.entries = {
            name: entry for name, entry in entries.items()
            if entry.is_visible_application()
        }
        return self.entries
