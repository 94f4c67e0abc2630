"""Unit tests for :mod:`shell_command.output`."""

from __future__ import annotations

import io
import logging

import pytest

from shell_command.output import (
    CapturedOutput,
    ConsoleOutput,
    LoggingOutput,
    OutputChannel,
    OutputSink,
)


def test_captured_output_separates_channels() -> None:
    """Each channel accumulates only its own messages, in order."""
    output = CapturedOutput()
    output.write_message("out 1\n", OutputChannel.STANDARD)
    output.write_message("err 1\n", OutputChannel.ERROR)
    output.write_message("out 2\n")
    assert output.stdout == "out 1\nout 2\n"
    assert output.stderr == "err 1\n"
    assert output.messages == [
        (OutputChannel.STANDARD, "out 1\n"),
        (OutputChannel.ERROR, "err 1\n"),
        (OutputChannel.STANDARD, "out 2\n"),
    ]


def test_captured_output_clear() -> None:
    """``clear`` resets every buffer."""
    output = CapturedOutput()
    output.write_message("x", OutputChannel.ERROR)
    assert output.called
    output.clear()
    assert (output.stdout, output.stderr, output.messages) == ("", "", [])
    assert not output.called


def test_console_output_uses_injected_streams() -> None:
    """Messages are written verbatim to the matching stream."""
    out, err = io.StringIO(), io.StringIO()
    console = ConsoleOutput(stdout=out, stderr=err)
    console.write_message("hello", OutputChannel.STANDARD)
    console.write_message("oops\n", OutputChannel.ERROR)
    assert out.getvalue() == "hello"
    assert err.getvalue() == "oops\n"


def test_console_output_follows_sys_streams(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Without injected streams the current ``sys`` streams are used."""
    console = ConsoleOutput()
    console.write_message("to stdout\n")
    console.write_message("to stderr\n", OutputChannel.ERROR)
    captured = capsys.readouterr()
    assert captured.out == "to stdout\n"
    assert captured.err == "to stderr\n"


def test_logging_output_levels(caplog: pytest.LogCaptureFixture) -> None:
    """Standard text logs at INFO and error text at WARNING."""
    target = logging.getLogger("shell_command.tests.sink")
    sink = LoggingOutput(target)
    with caplog.at_level(logging.INFO, logger=target.name):
        sink.write_message("fine\n")
        sink.write_message("bad\n", OutputChannel.ERROR)
    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [
        (logging.INFO, "fine"),
        (logging.WARNING, "bad"),
    ]


def test_logging_output_custom_levels(caplog: pytest.LogCaptureFixture) -> None:
    """Levels can be overridden per channel."""
    sink = LoggingOutput(stdout_level=logging.DEBUG, stderr_level=logging.ERROR)
    with caplog.at_level(logging.DEBUG, logger="shell_command.output"):
        sink.write_message("quiet")
        sink.write_message("loud", OutputChannel.ERROR)
    assert [r.levelno for r in caplog.records] == [logging.DEBUG, logging.ERROR]


@pytest.mark.parametrize(
    "sink",
    [CapturedOutput(), ConsoleOutput(), LoggingOutput()],
    ids=["captured", "console", "logging"],
)
def test_sinks_satisfy_protocol(sink: object) -> None:
    """Every bundled sink is an :class:`OutputSink`."""
    assert isinstance(sink, OutputSink)
