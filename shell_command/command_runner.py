"""Run external commands and route their output through an output sink."""

from __future__ import annotations

import dataclasses as dc
import logging
import os
import subprocess
import typing as t
from pathlib import Path

from .errors import (
    LaunchFailedError,
    NoArgumentsPassedError,
    ShellCommandError,
    ShellCommandFailedError,
)
from .output import ConsoleOutput, OutputChannel, OutputSink
from .platform import COMMAND_INTERPRETER

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    import collections.abc as cabc

logger = logging.getLogger(__name__)

Token = str | os.PathLike[str]


@dc.dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of a single :meth:`ShellCommand.execute` call.

    ``exit_code`` is ``None`` when no process was started, either because the
    invocation was rejected or because the operating system refused to
    launch it.
    """

    arguments: tuple[str, ...]
    exit_code: int | None = None
    error: ShellCommandError | None = None

    @property
    def ok(self) -> bool:
        """Return ``True`` when the command ran and exited with status 0."""
        return self.error is None

    def raise_for_error(self) -> None:
        """Raise the carried error, if any."""
        if self.error is not None:
            raise self.error


class ShellCommand:
    """Run a command, wait for it, and send its output to :attr:`output`.

    ::

        command = ShellCommand()
        # Optional: defaults to the current directory
        command.working_directory = "/somewhere/else"
        # Optional: any object with ``write_message`` will do
        command.output = CapturedOutput()
        command.run(["/bin/echo", "hello", "world"])
        command.run(["git", "commit", "-m", "Broke everything"])

    A single string is handed to ``/bin/sh -c``, so redirections and pipes
    work::

        command.run('echo "hello world" >&2')

    Instances keep no state between calls and may be reused, but a single
    instance must not be shared between threads.
    """

    def __init__(
        self,
        *,
        working_directory: Token | None = None,
        output: OutputSink | None = None,
    ) -> None:
        self.working_directory = (
            working_directory if working_directory is not None else os.getcwd()
        )
        self.output: OutputSink = output if output is not None else ConsoleOutput()

    @property
    def working_directory(self) -> str:
        """Directory the next command runs in.

        Changing it never changes the current directory of this process.
        """
        return self._working_directory

    @working_directory.setter
    def working_directory(self, value: Token) -> None:
        self._working_directory = os.fspath(value)

    def run(self, command: str | cabc.Sequence[Token]) -> None:
        """Run *command* and wait for it to finish.

        *command* is either a sequence of tokens whose first element is the
        executable, or a single string run with ``/bin/sh -c``. Tokens in the
        sequence form are passed to the program verbatim; no shell sees them.

        Raises
        ------
        NoArgumentsPassedError
            If *command* is empty or its first token is empty.
        ShellCommandFailedError
            If the command exits with a non-zero status.
        LaunchFailedError
            If the command could not be started.
        """
        self.execute(command).raise_for_error()

    def execute(self, command: str | cabc.Sequence[Token]) -> CommandResult:
        """Run *command* like :meth:`run` but return errors instead of raising."""
        if isinstance(command, str):
            return self._execute_command_line(command)
        return self._execute_arguments([os.fspath(token) for token in command])

    def write_to_file(self, content: str, file_path: Token) -> None:
        """Write *content* to *file_path*; see :func:`write_to_file`."""
        write_to_file(content, file_path)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _execute_command_line(self, command_line: str) -> CommandResult:
        """Hand *command_line* to the command interpreter."""
        if not command_line:
            return _rejected((), command_line)
        return self._execute_arguments([COMMAND_INTERPRETER, "-c", command_line])

    def _execute_arguments(self, arguments: list[str]) -> CommandResult:
        """Spawn ``arguments[0]`` with the remaining tokens as its arguments."""
        descriptor = " ".join(arguments)
        if not arguments or not arguments[0]:
            return _rejected(tuple(arguments), descriptor)

        logger.debug("Running %r in %s", arguments, self.working_directory)
        try:
            completed = spawn_process(arguments, self.working_directory)
        except LaunchFailedError as exc:
            return CommandResult(arguments=tuple(arguments), error=exc)

        self._forward(completed.stderr, OutputChannel.ERROR)
        self._forward(completed.stdout, OutputChannel.STANDARD)

        exit_code = completed.returncode
        logger.debug("Command %r exited with status %d", arguments, exit_code)
        error = (
            ShellCommandFailedError(descriptor, exit_code) if exit_code != 0 else None
        )
        return CommandResult(
            arguments=tuple(arguments), exit_code=exit_code, error=error
        )

    def _forward(self, data: bytes, channel: OutputChannel) -> None:
        """Send *data* to the output sink if it is non-empty UTF-8 text."""
        if not data:
            return
        text = decode_output(data)
        if text is None:
            logger.debug(
                "Dropping %d bytes of %s output that are not valid UTF-8",
                len(data),
                channel,
            )
            return
        self.output.write_message(text, channel)


def _rejected(arguments: tuple[str, ...], descriptor: str) -> CommandResult:
    logger.debug("Rejecting empty command %r", descriptor)
    return CommandResult(arguments=arguments, error=NoArgumentsPassedError(descriptor))


def spawn_process(
    arguments: cabc.Sequence[str], working_directory: str
) -> subprocess.CompletedProcess[bytes]:
    """Run *arguments* in *working_directory* and collect both output streams.

    Both pipes are drained while waiting, so a chatty child cannot fill a
    pipe and stall. Operating system errors raised while creating the child
    are translated into :class:`LaunchFailedError`:

    * missing executable or working directory - ``not found``
    * permission denied - the error text
    * anything else - ``execution failed``

    Tokens or directories the OS cannot represent, such as strings holding a
    NUL byte, are reported as ``invalid argument``.
    """
    descriptor = " ".join(arguments)
    try:
        return subprocess.run(  # noqa: S603 - shell=False prevents injection
            list(arguments),
            cwd=working_directory,
            capture_output=True,
            shell=False,
            check=False,
        )
    except FileNotFoundError as exc:
        raise LaunchFailedError(descriptor, f"not found: {exc}") from exc
    except PermissionError as exc:
        raise LaunchFailedError(descriptor, str(exc)) from exc
    except OSError as exc:
        raise LaunchFailedError(descriptor, f"execution failed: {exc}") from exc
    except ValueError as exc:
        raise LaunchFailedError(descriptor, f"invalid argument: {exc}") from exc


def decode_output(data: bytes) -> str | None:
    """Return *data* decoded as UTF-8, or ``None`` if it is not valid UTF-8."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


def write_to_file(content: str, file_path: Token) -> None:
    """Write *content* (for example a here-doc) to *file_path* as UTF-8.

    The write is not atomic and intermediate directories must already exist.
    Filesystem errors propagate unchanged.
    """
    Path(file_path).write_text(content, encoding="utf-8")


def run(command_line: str, *, output: OutputSink | None = None) -> None:
    """Run *command_line* with ``/bin/sh -c`` using a fresh :class:`ShellCommand`.

    ::

        output = CapturedOutput()
        run('echo "hello world" && echo "hello error" >&2', output=output)
        print(output.stdout)  # hello world
        print(output.stderr)  # hello error

    Raises the same errors as :meth:`ShellCommand.run`.
    """
    ShellCommand(output=output).run(command_line)


def execute(command_line: str, *, output: OutputSink | None = None) -> CommandResult:
    """Like :func:`run` but return a :class:`CommandResult` instead of raising."""
    return ShellCommand(output=output).execute(command_line)


__all__ = [
    "COMMAND_INTERPRETER",
    "CommandResult",
    "ShellCommand",
    "decode_output",
    "execute",
    "run",
    "spawn_process",
    "write_to_file",
]
