"""Command line interface for i3-dmenu-desktop."""
