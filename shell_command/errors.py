"""Exception hierarchy for shell-command."""

from __future__ import annotations

import enum
import typing as t


class ErrorKind(enum.StrEnum):
    """Categories of failure reported by :class:`~shell_command.ShellCommand`."""

    NO_ARGUMENTS_PASSED = "NO_ARGUMENTS_PASSED"
    SHELL_COMMAND_FAILED = "SHELL_COMMAND_FAILED"
    LAUNCH_FAILED = "LAUNCH_FAILED"


class ShellCommandError(Exception):
    """Base class for every error raised by shell-command.

    ``command`` holds the human-readable descriptor of the invocation: the
    argument tokens joined by single spaces, or the raw command string.
    """

    kind: t.ClassVar[ErrorKind]

    def __init__(self, command: str, message: str | None = None) -> None:
        self.command = command
        super().__init__(message if message is not None else command)


class NoArgumentsPassedError(ShellCommandError):
    """Raised when no command, or an empty one, was passed to ``run``."""

    kind = ErrorKind.NO_ARGUMENTS_PASSED

    def __init__(self, command: str) -> None:
        super().__init__(command, f"No command passed: {command!r}")


class ShellCommandFailedError(ShellCommandError):
    """Raised when the command ran but exited with a non-zero status."""

    kind = ErrorKind.SHELL_COMMAND_FAILED

    def __init__(self, command: str, exit_code: int) -> None:
        self.exit_code = exit_code
        msg = f"Command exited with status {exit_code}: {command}"
        super().__init__(command, msg)


class LaunchFailedError(ShellCommandError):
    """Raised when the operating system could not start the command."""

    kind = ErrorKind.LAUNCH_FAILED

    def __init__(self, command: str, reason: str) -> None:
        self.reason = reason
        super().__init__(command, f"Could not launch {command}: {reason}")


__all__ = [
    "ErrorKind",
    "LaunchFailedError",
    "NoArgumentsPassedError",
    "ShellCommandError",
    "ShellCommandFailedError",
]
