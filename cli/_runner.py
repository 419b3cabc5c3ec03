"""
Shared CLI runner helper.

This module provides a standard way to spawn the dev tools (pytest, ruff)
used by the treekit wrappers, propagating their exit code.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence


def run(cmd: Sequence[str]) -> None:
    """
    Run a command and exit with its exit code.

    Args:
        cmd: Command and arguments to execute

    Example:
        >>> run([sys.executable, "-m", "pytest", "-q"])
    """
    try:
        result = subprocess.run(cmd)
    except FileNotFoundError:
        print(f"Error: command not found: {cmd[0]}")
        raise SystemExit(127) from None
    raise SystemExit(result.returncode)
