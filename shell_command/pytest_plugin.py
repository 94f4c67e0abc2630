"""Pytest plugin providing the ``shell_command`` and ``captured_output`` fixtures."""

from __future__ import annotations

import logging
import os
import typing as t

import pytest

from .command_runner import ShellCommand
from .output import CapturedOutput
from .platform import skip_if_unsupported

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from pathlib import Path

logger = logging.getLogger(__name__)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register ini options for the plugin."""
    parser.addini(
        "shell_command_isolate_cwd",
        (
            "Run commands from the shell_command fixture in the test's tmp_path "
            "instead of the current directory."
        ),
        type="bool",
        default=False,
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register plugin-specific markers."""
    config.addinivalue_line(
        "markers",
        (
            "shell_command(working_directory: str | os.PathLike): run commands "
            "from the shell_command fixture in the given directory."
        ),
    )


@pytest.fixture
def captured_output() -> CapturedOutput:
    """Provide an empty :class:`CapturedOutput`."""
    return CapturedOutput()


@pytest.fixture
def shell_command(
    request: pytest.FixtureRequest, captured_output: CapturedOutput, tmp_path: Path
) -> ShellCommand:
    """Provide a :class:`ShellCommand` whose output lands in ``captured_output``."""
    skip_if_unsupported()
    try:
        working_directory = _working_directory(request, tmp_path)
    except Exception:
        logger.exception("Error resolving shell_command working directory")
        raise
    return ShellCommand(working_directory=working_directory, output=captured_output)


def _working_directory(
    request: pytest.FixtureRequest, tmp_path: Path
) -> str | os.PathLike[str]:
    """Pick the fixture's working directory."""
    # Priority order: marker > INI setting > current directory
    marker_value = _get_marker_working_directory(request)
    if marker_value is not None:
        return marker_value

    if request.config.getini("shell_command_isolate_cwd"):
        return tmp_path

    return os.getcwd()


def _get_marker_working_directory(
    request: pytest.FixtureRequest,
) -> str | os.PathLike[str] | None:
    """Return the marker's working directory override if present."""
    marker = request.node.get_closest_marker("shell_command")
    if marker is None:
        return None
    if "working_directory" in marker.kwargs:
        value = marker.kwargs["working_directory"]
    elif marker.args:
        value = marker.args[0]
    else:
        return None
    if not isinstance(value, str | os.PathLike):
        msg = (
            "shell_command marker working_directory must be a str or path, "
            f"got {type(value).__name__}"
        )
        raise TypeError(msg)
    return value
