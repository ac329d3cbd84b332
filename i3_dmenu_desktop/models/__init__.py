"""Data models for i3-dmenu-desktop."""

from .desktop_entry import DesktopEntry, PersistedCache

__all__ = ["DesktopEntry", "PersistedCache"]
