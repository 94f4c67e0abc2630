"""Global test configuration and shared fixtures."""

from __future__ import annotations

import typing as t

import pytest

import shell_command.platform

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    import collections.abc as cabc

pytest_plugins = ("shell_command.pytest_plugin", "pytester")


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "requires_posix_shell: mark test as needing the POSIX command interpreter",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip tests needing a POSIX shell when the platform has none."""
    reason = shell_command.platform.unsupported_reason()
    if reason is None:
        return
    skip = pytest.mark.skip(reason=reason)
    for item in items:
        if "requires_posix_shell" in item.keywords:
            item.add_marker(skip)


@pytest.fixture(autouse=True)
def clear_platform_override(
    monkeypatch: pytest.MonkeyPatch,
) -> cabc.Iterator[None]:
    """Ensure a stray platform override never leaks between tests."""
    monkeypatch.delenv(shell_command.platform.PLATFORM_OVERRIDE_ENV, raising=False)
    yield
