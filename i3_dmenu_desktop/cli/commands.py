"""CLI entry point for i3-dmenu-desktop.

Resolves desktop entries, shows them in dmenu and launches the choice
through i3.
"""

import argparse
import sys
from typing import List, Optional

from .. import __version__
from ..core.app_discovery import AppDiscovery
from ..core.config import XDGConfig
from ..core.dmenu import DEFAULT_DMENU_COMMAND, ChoiceError
from ..core.exec_resolver import DEFAULT_TERMINAL
from ..core.i3_client import I3Error
from ..core.launcher import AppLauncher
from .logging_config import log_timing, setup_logging


# ANSI color codes for output
class Colors:
    RESET = "\033[0m"
    RED = "\033[31m"


def print_error(message: str) -> None:
    """Print error message in red when stderr is a terminal."""
    if sys.stderr.isatty():
        print(f"{Colors.RED}Error:{Colors.RESET} {message}", file=sys.stderr)
    else:
        print(f"Error: {message}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="i3-dmenu-desktop",
        description="Launch XDG desktop applications through dmenu and i3",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"i3-dmenu-desktop {__version__}",
    )
    parser.add_argument(
        "--dmenu",
        default=DEFAULT_DMENU_COMMAND,
        metavar="CMD",
        help=f"Chooser command line (default: '{DEFAULT_DMENU_COMMAND}')",
    )
    parser.add_argument(
        "--term",
        default=DEFAULT_TERMINAL,
        metavar="CMD",
        help=f"Terminal used for Terminal=true entries (default: {DEFAULT_TERMINAL})",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the application names and exit",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Parse every .desktop file and leave the cache untouched",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging (INFO level)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (DEBUG level, includes verbose)",
    )
    return parser


def cli_main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    logger = setup_logging(verbose=args.verbose, debug=args.debug)

    try:
        config = XDGConfig()
    except ValueError as e:
        print_error(str(e))
        return 1

    discovery = AppDiscovery(cache_dir=None if args.no_cache else config.cache_dir())
    launcher = AppLauncher(
        config,
        discovery=discovery,
        dmenu_command=args.dmenu,
        terminal=args.term,
    )

    with log_timing("Resolve applications", logger):
        app_map = launcher.get_app_map()

    if args.list:
        for name in sorted(app_map):
            print(name)
        return 0

    try:
        launcher.run(app_map)
    except ChoiceError as e:
        print_error(f"dmenu: {e}")
        return 1
    except I3Error as e:
        print_error(f"launch: {e}")
        return 1

    return 0


def main() -> None:
    """Console script entry point."""
    sys.exit(cli_main())
