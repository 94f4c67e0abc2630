"""Run external commands, capture their output, and fail loudly on error.

``ShellCommand`` spawns a process, waits for it, hands its error output and
then its standard output to a pluggable output sink, and raises a
:class:`ShellCommandError` subclass when the command cannot be started or
exits with a non-zero status.
"""

from __future__ import annotations

from .command_runner import (
    CommandResult,
    ShellCommand,
    execute,
    run,
    write_to_file,
)
from .errors import (
    ErrorKind,
    LaunchFailedError,
    NoArgumentsPassedError,
    ShellCommandError,
    ShellCommandFailedError,
)
from .output import (
    CapturedOutput,
    ConsoleOutput,
    LoggingOutput,
    OutputChannel,
    OutputSink,
)
from .platform import (
    COMMAND_INTERPRETER,
    PLATFORM_OVERRIDE_ENV,
    is_supported as is_supported_platform,
    skip_if_unsupported,
    unsupported_reason,
)

__all__ = [
    "COMMAND_INTERPRETER",
    "PLATFORM_OVERRIDE_ENV",
    "CapturedOutput",
    "CommandResult",
    "ConsoleOutput",
    "ErrorKind",
    "LaunchFailedError",
    "LoggingOutput",
    "NoArgumentsPassedError",
    "OutputChannel",
    "OutputSink",
    "ShellCommand",
    "ShellCommandError",
    "ShellCommandFailedError",
    "execute",
    "is_supported_platform",
    "run",
    "skip_if_unsupported",
    "unsupported_reason",
    "write_to_file",
]
