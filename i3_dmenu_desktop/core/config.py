"""XDG configuration for desktop entry discovery.

All environment access goes through an injected ``get_env`` callable so the
engine can be driven from tests with a plain dict.
"""

import os
from typing import Callable, List, Optional

EnvGetter = Callable[[str], Optional[str]]

DEFAULT_DATA_DIRS = "/usr/local/share/:/usr/share/"
DEFAULT_LOCALE = "C"
# See man:locale(7)
LOCALE_VARIABLES = ("LC_ALL", "LC_MESSAGES", "LANG")


def join_path(directory: str, name: str) -> str:
    """Join without normalizing, keeping XDG values as the user wrote them."""
    if directory.endswith("/"):
        return f"{directory}{name}"
    return f"{directory}/{name}"


class XDGConfig:
    """Resolve XDG base directories, PATH and locale from an environment.

    Variables that are set but empty are treated as unset.
    """

    def __init__(self, get_env: Optional[EnvGetter] = None):
        """Initialize XDG config.

        Args:
            get_env: Callable returning a variable's value or None
                (default: os.environ.get)

        Raises:
            ValueError: If HOME is not set
        """
        self._get_env = get_env if get_env is not None else os.environ.get
        home = self._get("HOME")
        if home is None:
            raise ValueError("HOME environment variable must be set")
        self.home = home

    def _get(self, name: str) -> Optional[str]:
        value = self._get_env(name)
        return value if value else None

    def data_dirs(self) -> List[str]:
        """$XDG_DATA_HOME followed by $XDG_DATA_DIRS, highest priority first."""
        data_home = self._get("XDG_DATA_HOME") or f"{self.home}/.local/share"
        data_dirs = self._get("XDG_DATA_DIRS") or DEFAULT_DATA_DIRS
        return [data_home] + [d for d in data_dirs.split(":") if d]

    def application_dirs(self) -> List[str]:
        """``applications`` subdirectory of every data dir."""
        return [join_path(d, "applications") for d in self.data_dirs()]

    def search_path(self) -> List[str]:
        """Directories from $PATH, in order."""
        path = self._get("PATH")
        if path is None:
            return []
        return [d for d in path.split(":") if d]

    def locale(self) -> str:
        """Locale used for LC_MESSAGES lookups."""
        for name in LOCALE_VARIABLES:
            value = self._get(name)
            if value is not None:
                return value
        return DEFAULT_LOCALE

    def cache_dir(self) -> str:
        """$XDG_CACHE_HOME, defaulting to ~/.cache."""
        return self._get("XDG_CACHE_HOME") or f"{self.home}/.cache"
