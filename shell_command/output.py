"""Output sinks receiving text captured from child processes.

A sink is any object with a ``write_message(message, channel)`` method. The
executor hands each sink the complete error output of a command followed by
its complete standard output; what happens next is up to the sink.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import logging
import sys
import typing as t

logger = logging.getLogger(__name__)


class OutputChannel(enum.StrEnum):
    """Which of the two process output streams a message came from."""

    STANDARD = "STANDARD"
    ERROR = "ERROR"


@t.runtime_checkable
class OutputSink(t.Protocol):
    """Destination for captured process output."""

    def write_message(
        self, message: str, channel: OutputChannel = OutputChannel.STANDARD
    ) -> None:
        """Dispose of *message* received on *channel*."""


class ConsoleOutput:
    """Write messages straight to the calling process's stdout and stderr.

    Streams default to whatever :data:`sys.stdout` and :data:`sys.stderr` are
    at write time, so redirections installed after construction (for example
    by pytest's ``capsys``) are honoured.
    """

    def __init__(
        self,
        *,
        stdout: t.TextIO | None = None,
        stderr: t.TextIO | None = None,
    ) -> None:
        self._stdout = stdout
        self._stderr = stderr

    def write_message(
        self, message: str, channel: OutputChannel = OutputChannel.STANDARD
    ) -> None:
        """Write *message* unchanged to the stream matching *channel*."""
        stream = self._stream_for(channel)
        stream.write(message)
        stream.flush()

    def _stream_for(self, channel: OutputChannel) -> t.TextIO:
        if channel is OutputChannel.ERROR:
            return self._stderr if self._stderr is not None else sys.stderr
        return self._stdout if self._stdout is not None else sys.stdout


@dc.dataclass(slots=True)
class CapturedOutput:
    """Collect messages in memory instead of printing them.

    Handy for tests::

        output = CapturedOutput()
        ShellCommand(output=output).run(["echo", "hello", "world"])
        assert output.stdout.strip() == "hello world"

    Error output is kept separately in :attr:`stderr`. :attr:`messages` keeps
    every ``(channel, message)`` pair in arrival order.
    """

    stdout: str = ""
    stderr: str = ""
    messages: list[tuple[OutputChannel, str]] = dc.field(default_factory=list)

    def write_message(
        self, message: str, channel: OutputChannel = OutputChannel.STANDARD
    ) -> None:
        """Append *message* to the buffer for *channel*."""
        if channel is OutputChannel.ERROR:
            self.stderr += message
        else:
            self.stdout += message
        self.messages.append((channel, message))

    @property
    def called(self) -> bool:
        """Return ``True`` once any message has been received."""
        return bool(self.messages)

    def clear(self) -> None:
        """Forget everything captured so far."""
        self.stdout = ""
        self.stderr = ""
        self.messages.clear()


class LoggingOutput:
    """Forward messages to a :class:`logging.Logger`.

    Standard output is logged at ``INFO`` and error output at ``WARNING``.
    Trailing newlines are stripped since log handlers add their own.
    """

    def __init__(
        self,
        target: logging.Logger | None = None,
        *,
        stdout_level: int = logging.INFO,
        stderr_level: int = logging.WARNING,
    ) -> None:
        self.logger = target if target is not None else logger
        self.stdout_level = stdout_level
        self.stderr_level = stderr_level

    def write_message(
        self, message: str, channel: OutputChannel = OutputChannel.STANDARD
    ) -> None:
        """Log *message* at the level configured for *channel*."""
        level = (
            self.stderr_level if channel is OutputChannel.ERROR else self.stdout_level
        )
        self.logger.log(level, "%s", message.rstrip("\n"))


__all__ = [
    "CapturedOutput",
    "ConsoleOutput",
    "LoggingOutput",
    "OutputChannel",
    "OutputSink",
]
