"""Command-line entry point: run the given command and report its status."""

from __future__ import annotations

import logging
import sys
import typing as t

from .command_runner import ShellCommand
from .errors import ShellCommandError

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    import collections.abc as cabc

logger = logging.getLogger(__name__)


def main(argv: cabc.Sequence[str] | None = None) -> int:
    """Run everything after the program name in *argv* as a command.

    *argv* defaults to :data:`sys.argv`. Output goes to this process's own
    stdout and stderr. Returns ``1`` if the command could not be run or
    failed, ``0`` otherwise.
    """
    arguments = list(sys.argv if argv is None else argv)[1:]
    try:
        ShellCommand().run(arguments)
    except ShellCommandError as exc:
        logger.debug("Command failed: %s", exc)
        return 1
    return 0
