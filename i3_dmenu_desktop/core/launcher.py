"""Map the user's dmenu choice to a launch.

The chooser can return three kinds of text:
1. An offered name -> launch that entry
2. An offered name, a space and extra text -> launch it with one argument
3. Anything else -> run it as a raw command
"""

import logging
from typing import Dict, List, Optional, Tuple

from i3_dmenu_desktop.core.app_discovery import AppDiscovery
from i3_dmenu_desktop.core.config import XDGConfig
from i3_dmenu_desktop.core.dmenu import DEFAULT_DMENU_COMMAND, get_dmenu_choice
from i3_dmenu_desktop.core.exec_resolver import DEFAULT_TERMINAL, finalize_launch_command
from i3_dmenu_desktop.core.i3_client import I3Client
from i3_dmenu_desktop.models.desktop_entry import DesktopEntry

logger = logging.getLogger(__name__)


def resolve_choice(
    choice: str,
    app_map: Dict[str, DesktopEntry],
) -> Tuple[Optional[DesktopEntry], List[str]]:
    """Split a chooser result into an entry and its extra arguments.

    Split points are tried from the right, so ``Firefox (2) https://x``
    resolves to ``Firefox (2)`` with ``["https://x"]``.

    Returns:
        (entry, extra_args), or (None, []) when no offered name matches
    """
    if choice in app_map:
        return app_map[choice], []

    idx = choice.rfind(" ")
    while idx != -1:
        left, right = choice[:idx], choice[idx + 1:]
        if left in app_map:
            return app_map[left], [right]
        idx = choice.rfind(" ", 0, idx)

    return None, []


class AppLauncher:
    """Resolve applications, ask dmenu for a choice and launch it via i3."""

    def __init__(
        self,
        config: XDGConfig,
        client: Optional[I3Client] = None,
        discovery: Optional[AppDiscovery] = None,
        dmenu_command: str = DEFAULT_DMENU_COMMAND,
        terminal: str = DEFAULT_TERMINAL,
    ):
        self.config = config
        self.client = client if client is not None else I3Client()
        self.discovery = discovery if discovery is not None else AppDiscovery(cache_dir=config.cache_dir())
        self.dmenu_command = dmenu_command
        self.terminal = terminal

    def get_app_map(self) -> Dict[str, DesktopEntry]:
        return self.discovery.resolve_all(
            self.config.application_dirs(),
            self.config.search_path(),
            self.config.locale(),
        )

    def launch(self, choice: str, app_map: Dict[str, DesktopEntry]) -> None:
        """Launch a chooser result.

        Raises:
            I3Error: If i3 cannot run the command
        """
        entry, extra_args = resolve_choice(choice, app_map)
        if entry is None:
            logger.info(f"Running raw command: {choice}")
            self.client.exec_raw(choice)
            return

        command = finalize_launch_command(entry, extra_args, terminal=self.terminal)
        logger.info(f"Launching {entry.source_path}: {command}")
        self.client.exec(command, startup_notify=entry.startup_notify)

    def run(self, app_map: Optional[Dict[str, DesktopEntry]] = None) -> None:
        """Resolve, choose and launch.

        Args:
            app_map: Result of :meth:`get_app_map`, resolved here when None

        Raises:
            ChoiceError: If dmenu fails
            I3Error: If the launch fails
        """
        if app_map is None:
            app_map = self.get_app_map()
        choice = get_dmenu_choice(sorted(app_map), self.dmenu_command)
        if not choice:
            logger.info("Empty choice, nothing to launch")
            return
        self.launch(choice, app_map)
