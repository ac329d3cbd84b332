"""Turn a parsed desktop entry into the command handed to i3.

Covers the Exec key handling of the desktop entry format: field code
substitution, TryExec validation against PATH, and final quoting.
"""

import logging
import os
import re
import stat
from typing import Optional, Sequence

from i3_dmenu_desktop.core.escaping import quote_for_exec, unescape_descriptor_value
from i3_dmenu_desktop.models.desktop_entry import DesktopEntry

logger = logging.getLogger(__name__)

DEFAULT_TERMINAL = "i3-sensible-terminal"

FIELD_CODE = re.compile(r"%(.)", re.DOTALL)
WHITESPACE = re.compile(r"\s")


def substitute_field_codes(template: str, extra_args: Sequence[str], entry: DesktopEntry) -> str:
    """Replace ``%f``-style field codes in a single left-to-right pass.

    ``%i`` expands to nothing, so ``"app %f %i end"`` with ``["/tmp/x"]``
    becomes ``"app /tmp/x  end"``.
    """
    first_arg = extra_args[0] if extra_args else ""
    all_args = " ".join(extra_args)

    def replace(match) -> str:
        code = match.group(1)
        if code in ("f", "u"):
            return first_arg
        if code in ("F", "U"):
            return all_args
        if code == "c":
            return entry.name
        if code == "k":
            return entry.source_path
        if code == "%":
            return "%"
        # %i (icon) is not supported; deprecated and unknown codes expand to nothing
        return ""

    return FIELD_CODE.sub(replace, template)


def select_effective_exec(entry: DesktopEntry) -> str:
    """Return TryExec when it survived validation, otherwise Exec.

    Raises:
        ValueError: If the entry has neither key
    """
    if entry.try_exec is not None:
        return entry.try_exec
    if entry.exec is None:
        raise ValueError(f"{entry.source_path} has neither Exec nor TryExec")
    return entry.exec


def extract_arg0(exec_str: str) -> str:
    """Return the program part of a command string.

    A leading double-quoted program is returned without its quotes. An
    unterminated quote yields the whole string unchanged.
    """
    if exec_str.startswith('"'):
        end = exec_str.find('"', 1)
        if end == -1:
            return exec_str
        return exec_str[1:end]
    match = WHITESPACE.search(exec_str)
    return exec_str[:match.start()] if match else exec_str


def is_executable(path: str) -> bool:
    """True if ``path`` is a regular file with at least one execute bit set."""
    try:
        mode = os.stat(path).st_mode
    except OSError:
        return False
    return stat.S_ISREG(mode) and bool(mode & 0o111)


def is_try_exec_valid(try_exec: str, search_path: Sequence[str]) -> bool:
    """Check whether the program named by TryExec exists and is executable.

    Args:
        try_exec: TryExec value (already unescaped)
        search_path: Directories from PATH, searched in order

    Returns:
        True on the first executable match
    """
    arg0 = extract_arg0(try_exec)
    if "/" in arg0:
        return is_executable(arg0)
    return any(is_executable(os.path.join(directory, arg0)) for directory in search_path)


def unescape_exec_keys(entry: DesktopEntry) -> None:
    """Apply the general string escape rule to Exec and TryExec in place."""
    if entry.try_exec is not None:
        entry.try_exec = unescape_descriptor_value(entry.try_exec)
    if entry.exec is not None:
        entry.exec = unescape_descriptor_value(entry.exec)


def remove_invalid_try_exec(entry: DesktopEntry, search_path: Sequence[str]) -> None:
    """Drop TryExec in place when its program cannot be found."""
    if entry.try_exec is None:
        return
    if not is_try_exec_valid(entry.try_exec, search_path):
        logger.debug(f"Dropping TryExec {entry.try_exec!r} from {entry.source_path}")
        entry.try_exec = None


def finalize_launch_command(
    entry: DesktopEntry,
    extra_args: Sequence[str],
    terminal: Optional[str] = DEFAULT_TERMINAL,
) -> str:
    """Build the i3 exec argument for an entry.

    Args:
        entry: Entry chosen by the user
        extra_args: Arguments for %f/%F/%u/%U
        terminal: Terminal wrapper used when the entry has Terminal=true

    Returns:
        Quoted command, wrapped as ``<terminal> -e "<cmd>"`` for terminal apps.
        StartupNotify is not part of it; pass ``entry.startup_notify`` to
        :meth:`I3Client.exec` separately.
    """
    cmd = substitute_field_codes(select_effective_exec(entry), extra_args, entry)
    quoted = quote_for_exec(cmd)
    if entry.terminal:
        return f"{terminal or DEFAULT_TERMINAL} -e {quoted}"
    return quoted
