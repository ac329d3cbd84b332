"""i3 IPC client used to launch commands.

Commands are sent as RUN_COMMAND ``exec`` messages, so the launched process
is started by i3 itself and gets i3's startup notification handling.
"""

import logging
from typing import Optional

import i3ipc

from i3_dmenu_desktop.core.escaping import quote_for_exec


# Get logger for this module
logger = logging.getLogger(__name__)


class I3Error(Exception):
    """Exception raised for i3 IPC errors."""

    pass


class I3Client:
    """Synchronous wrapper for sending exec commands over i3 IPC."""

    def __init__(self, connection: Optional[i3ipc.Connection] = None):
        """Initialize i3 client.

        Args:
            connection: Existing connection (default: connect on first use)
        """
        self._connection = connection

    def connect(self) -> None:
        """Connect to i3 IPC socket.

        Raises:
            I3Error: If connection fails
        """
        try:
            logger.debug("Connecting to i3 IPC socket")
            self._connection = i3ipc.Connection()
            logger.info("Connected to i3 IPC")
        except Exception as e:
            logger.error(f"Failed to connect to i3 IPC: {e}")
            raise I3Error(f"Failed to connect to i3: {e}") from e

    def command(self, cmd: str) -> None:
        """Send command to i3 (RUN_COMMAND).

        Args:
            cmd: i3 command string

        Raises:
            I3Error: If the command cannot be sent or i3 reports failure
        """
        if self._connection is None:
            self.connect()

        try:
            logger.debug(f"IPC command: {cmd}")
            replies = self._connection.command(cmd)
        except Exception as e:
            logger.error(f"Command failed: {e}")
            raise I3Error(f"Failed to execute command '{cmd}': {e}") from e

        for reply in replies:
            if not reply.success:
                raise I3Error(f"i3 rejected command '{cmd}': {getattr(reply, 'error', None)}")

    def exec(self, command: str, startup_notify: bool = True) -> None:
        """Launch an already quoted command through i3's ``exec``.

        Args:
            command: Result of :func:`finalize_launch_command`
            startup_notify: False adds ``--no-startup-id``
        """
        if startup_notify:
            self.command(f"exec {command}")
        else:
            self.command(f"exec --no-startup-id {command}")

    def exec_raw(self, text: str) -> None:
        """Launch text typed by the user that matched no desktop entry."""
        self.command(f"exec {quote_for_exec(text)}")
