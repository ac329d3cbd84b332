"""i3-dmenu-desktop - launch XDG desktop applications through dmenu and i3.

This package provides:
- Desktop entry discovery across XDG data directories
- Locale-aware .desktop file parsing
- An mtime-keyed cache of parsed entries
- Exec field code substitution and i3 exec quoting
"""

__version__ = "0.2.0"
__author__ = "i3-dmenu-desktop contributors"
__license__ = "MIT"

__all__ = ["__version__", "__author__", "__license__"]
