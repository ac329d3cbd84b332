"""Parser for XDG .desktop files.

Only the ``[Desktop Entry]`` section is read. Parsing happens in two phases:
lines are accumulated without ever failing (malformed lines are skipped),
then the collected keys are validated once at the end.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from i3_dmenu_desktop.models.desktop_entry import DesktopEntry

logger = logging.getLogger(__name__)

MAIN_SECTION = "[Desktop Entry]"

KV_PAIR = re.compile(
    r"""^
    (
        [A-Za-z0-9-]+    # key
        (?:\[[^]]+\])?   # optional locale suffix
    )
    \s* = \s*            # whitespace around '=' is ignored
    (.*)                 # value
    $""",
    re.VERBOSE,
)
LOCALIZED_NAME = re.compile(r"^Name\[([^]]+)\]$")

STRING_KEYS = {
    "Name": "name",
    "Exec": "exec",
    "TryExec": "try_exec",
    "Path": "path",
    "Type": "type",
}
BOOLEAN_KEYS = {
    "NoDisplay": "no_display",
    "Hidden": "hidden",
    "StartupNotify": "startup_notify",
    "Terminal": "terminal",
}


class DesktopEntryError(Exception):
    """Base exception for desktop entries that could not be loaded."""

    pass


class DesktopEntryIOError(DesktopEntryError):
    """The .desktop file could not be opened, read or stat'ed."""

    pass


class DesktopEntryParseError(DesktopEntryError):
    """The .desktop file is missing a required key."""

    pass


class MissingTypeError(DesktopEntryParseError):
    def __init__(self):
        super().__init__("missing Type key")


class MissingNameError(DesktopEntryParseError):
    def __init__(self):
        super().__init__("missing Name key")


class MissingExecError(DesktopEntryParseError):
    def __init__(self):
        super().__init__("missing Exec key")


@dataclass
class _SectionKeys:
    """Keys collected from the main section before validation."""

    name: Optional[str] = None
    exec: Optional[str] = None
    try_exec: Optional[str] = None
    path: Optional[str] = None
    type: Optional[str] = None
    no_display: bool = False
    hidden: bool = False
    startup_notify: bool = True
    terminal: bool = False
    localized_name: Optional[str] = None
    # index into the locale candidates (lower index = higher priority)
    localized_name_idx: int = 0

    def accept(self, key: str, value: str, locale_keys: Sequence[str]) -> None:
        match = LOCALIZED_NAME.match(key)
        if match:
            locale = match.group(1)
            if locale not in locale_keys:
                return
            idx = list(locale_keys).index(locale)
            if self.localized_name is None or idx < self.localized_name_idx:
                self.localized_name = value
                self.localized_name_idx = idx
            return

        if key in STRING_KEYS:
            setattr(self, STRING_KEYS[key], value)
        elif key in BOOLEAN_KEYS:
            setattr(self, BOOLEAN_KEYS[key], value == "true")


def scan_lines(lines, locale_keys: Sequence[str]) -> _SectionKeys:
    """Collect recognized keys from the main section. Never fails."""
    keys = _SectionKeys()
    in_main_section = False
    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            continue
        if line[0] == "[":
            in_main_section = line == MAIN_SECTION
            continue
        if not in_main_section or line[0] == "#":
            continue
        match = KV_PAIR.match(line)
        if match is None:
            continue
        keys.accept(match.group(1), match.group(2), locale_keys)
    return keys


def build_entry(keys: _SectionKeys, source_path: str, modified_time: int) -> DesktopEntry:
    """Validate collected keys and build the entry.

    Raises:
        MissingTypeError: No Type key
        MissingNameError: No Name key (localized or not)
        MissingExecError: Type=Application without an Exec key
    """
    name = keys.localized_name if keys.localized_name is not None else keys.name
    if keys.type is None:
        raise MissingTypeError()
    if name is None:
        raise MissingNameError()
    if keys.type == "Application" and keys.exec is None:
        raise MissingExecError()
    return DesktopEntry(
        name=name,
        exec=keys.exec,
        try_exec=keys.try_exec,
        path=keys.path,
        type=keys.type,
        no_display=keys.no_display,
        hidden=keys.hidden,
        startup_notify=keys.startup_notify,
        terminal=keys.terminal,
        source_path=source_path,
        modified_time=modified_time,
    )


def parse_desktop_file(file_path: Union[str, Path], locale_keys: List[str]) -> DesktopEntry:
    """Parse one .desktop file.

    Args:
        file_path: Path to the .desktop file
        locale_keys: Locale candidates from :func:`resolve_candidates`

    Returns:
        Parsed DesktopEntry with its current mtime

    Raises:
        DesktopEntryIOError: If the file cannot be opened, read or stat'ed
        DesktopEntryParseError: If a required key is missing
    """
    source_path = str(file_path)
    try:
        with open(source_path, "r", encoding="utf-8", newline="\n") as f:
            modified_time = os.fstat(f.fileno()).st_mtime_ns
            keys = scan_lines(f, locale_keys)
    except (OSError, UnicodeDecodeError) as e:
        raise DesktopEntryIOError(f"{source_path}: {e}") from e

    entry = build_entry(keys, source_path, modified_time)
    logger.debug(f"Parsed {source_path}: {entry.name!r} ({entry.type})")
    return entry
