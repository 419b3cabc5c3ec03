"""
Minimal .env reader used when `ENV_FILE` points at a local env file.

Foundry projects usually keep a `.env` beside `foundry.toml`; treekit only
reads one when asked to, so variables exported by the shell stay the source
of truth.

Usage:
    from treekit.core.dotenv import load_env_file

    load_env_file(".env", overwrite=False)
"""

from __future__ import annotations

import os
import re
from pathlib import Path

_QUOTES = ("'", '"')
_INLINE_COMMENT = re.compile(r"\s#")


def _clean_value(value: str) -> str:
    """
    Normalize the right-hand side of an assignment.

    Quoted values keep everything between the quotes (including `#`);
    unquoted values lose a trailing ` # comment`.
    """
    value = value.strip()
    if value[:1] in _QUOTES:
        closing = value.find(value[0], 1)
        return value if closing == -1 else value[1:closing]
    return _INLINE_COMMENT.split(value, maxsplit=1)[0].rstrip()


def parse_env_line(line: str) -> tuple[str, str] | None:
    """Parse one `KEY=VALUE` line.

    Accepts an optional leading `export `, as written by shell-oriented
    env files.

    Returns:
        Tuple of (key, value) or None if the line carries no assignment.
    """
    line = line.strip()
    if line.startswith("export "):
        line = line.removeprefix("export ").lstrip()

    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key or key.startswith("#"):
        return None

    return key, _clean_value(value)


def load_env_file(path: str | Path, overwrite: bool = False) -> dict[str, str]:
    """Load environment variables from an env file.

    Args:
        path: Path to the env file. A missing path or a directory loads nothing.
        overwrite: If True, replace variables already present in the
                   environment. If False (default), keep them.

    Returns:
        Dictionary of the variables that were actually set.
    """
    path = Path(path)
    if not path.is_file():
        return {}

    pairs = (parse_env_line(raw_line) for raw_line in path.read_text(encoding="utf-8").splitlines())
    loaded = {
        key: value
        for key, value in filter(None, pairs)
        if overwrite or key not in os.environ
    }
    os.environ.update(loaded)
    return loaded
