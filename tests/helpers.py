"""Utilities for running the command-line entry point in tests."""

from __future__ import annotations

import subprocess
import sys
import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - types only
    import collections.abc as cabc
    from pathlib import Path


def run_cli(
    argv: cabc.Iterable[str | Path], *, check: bool = False, **kwargs: object
) -> subprocess.CompletedProcess[str]:
    """Run ``python -m shell_command`` with *argv*, capturing output.

    Extra keyword arguments are forwarded to :func:`subprocess.run`. ``check``
    defaults to ``False`` because most callers want to inspect the exit code.
    """
    return subprocess.run(  # noqa: S603
        [sys.executable, "-m", "shell_command", *(str(a) for a in argv)],
        capture_output=True,
        text=True,
        check=check,
        **kwargs,
    )
