"""dmenu chooser process."""

import logging
import shlex
import subprocess
from typing import Sequence

logger = logging.getLogger(__name__)

DEFAULT_DMENU_COMMAND = "dmenu -i"


class ChoiceError(Exception):
    """Exception raised when the chooser fails or is cancelled."""

    pass


def get_dmenu_choice(names: Sequence[str], dmenu_command: str = DEFAULT_DMENU_COMMAND) -> str:
    """Show ``names`` in dmenu and return what the user picked or typed.

    Args:
        names: Choices, one per line
        dmenu_command: Chooser command line (split with shlex)

    Returns:
        The selected line with trailing whitespace removed

    Raises:
        ChoiceError: If dmenu cannot be started, exits non-zero or
            writes output that is not UTF-8
    """
    try:
        cmd = shlex.split(dmenu_command)
    except ValueError as e:
        raise ChoiceError(f"invalid dmenu command {dmenu_command!r}: {e}") from e

    logger.debug(f"Subprocess call: {' '.join(cmd)} ({len(names)} choices)")
    try:
        result = subprocess.run(
            cmd,
            input="\n".join(names).encode("utf-8"),
            stdout=subprocess.PIPE,
            check=False,
        )
    except (OSError, ValueError) as e:
        raise ChoiceError(f"could not run {cmd[0] if cmd else 'dmenu'}: {e}") from e

    logger.debug(f"  Return code: {result.returncode}")
    if result.returncode != 0:
        raise ChoiceError("dmenu process failed")

    try:
        return result.stdout.decode("utf-8").rstrip()
    except UnicodeDecodeError as e:
        raise ChoiceError(f"dmenu returned invalid output: {e}") from e
