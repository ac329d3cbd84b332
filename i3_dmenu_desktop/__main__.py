"""Entry point for ``python -m i3_dmenu_desktop``."""

import sys


def main() -> int:
    """Main entry point."""
    from i3_dmenu_desktop.cli.commands import cli_main
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
