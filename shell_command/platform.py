"""Platform helpers shared across shell-command modules.

Single-string commands are handed to a POSIX shell at a fixed path. Whether
that shell can exist on the current platform is decided here so the pytest
plug-in and external test suites react consistently.
"""

from __future__ import annotations

import os
import sys
import typing as t

COMMAND_INTERPRETER: t.Final[str] = "/bin/sh"

# Tests set this override to emulate alternative platforms (for example
# Windows) without needing to spawn a different OS.
PLATFORM_OVERRIDE_ENV: t.Final[str] = "SHELL_COMMAND_PLATFORM_OVERRIDE"

# ``sys.platform`` prefixes known to lack a POSIX shell at /bin/sh.
_NON_POSIX_PREFIXES: t.Final[tuple[str, ...]] = ("win",)

_PYTEST_REQUIRED_MESSAGE: t.Final[str] = (
    "pytest is required to automatically skip unsupported platforms."
)


def _current_platform(platform: str | None = None) -> str:
    """Return the effective platform name, honouring test overrides."""
    name = platform or os.getenv(PLATFORM_OVERRIDE_ENV) or sys.platform
    return name.strip().lower()


def interpreter_available(interpreter: str = COMMAND_INTERPRETER) -> bool:
    """Return ``True`` if *interpreter* is an executable file."""
    return os.path.isfile(interpreter) and os.access(interpreter, os.X_OK)


def unsupported_reason(
    platform: str | None = None, *, interpreter: str = COMMAND_INTERPRETER
) -> str | None:
    """Return why commands cannot run on *platform*, or ``None`` if they can."""
    platform_name = _current_platform(platform)
    if platform_name.startswith(_NON_POSIX_PREFIXES):
        return f"shell-command requires a POSIX shell; {platform_name} has none"
    if not interpreter_available(interpreter):
        return f"command interpreter {interpreter} is not available"
    return None


def is_supported(platform: str | None = None) -> bool:
    """Return ``True`` when *platform* (default: current) can run commands."""
    return unsupported_reason(platform) is None


def skip_if_unsupported(
    *, reason: str | None = None, platform: str | None = None
) -> None:
    """Skip the current pytest test when *platform* cannot run commands."""
    skip_reason = unsupported_reason(platform)
    if skip_reason is None:
        return

    try:
        import pytest
    except ModuleNotFoundError as exc:  # pragma: no cover - pytest is a test dep
        raise RuntimeError(_PYTEST_REQUIRED_MESSAGE) from exc

    pytest.skip(reason or skip_reason)


__all__ = [
    "COMMAND_INTERPRETER",
    "PLATFORM_OVERRIDE_ENV",
    "interpreter_available",
    "is_supported",
    "skip_if_unsupported",
    "unsupported_reason",
]
