"""
Pytest configuration and shared fixtures.

Provides:
- Project root on sys.path so `treekit` and `cli` import without installation
- A clean environment (no treekit settings leaking in from the shell)
- A temporary Foundry-style project directory with a `test/` folder
- A helper for writing `*.t.yaml` definitions
"""

from __future__ import annotations

import sys
import textwrap
from collections.abc import Callable
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402 (import after path setup)

SETTINGS_ENV_VARS = (
    "ENV_FILE",
    "APP_LOG_LEVEL",
    "OBSERVABILITY_STRUCTURED_LOGS",
    "TEST_DIR",
    "FOUNDRY_TOML",
    "TEST_TREE_MARKDOWN",
    "BULLOAK_BIN",
    "SOLC_VERSION",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove treekit settings from the environment for every test."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A temporary project root (cwd) containing an empty `test/` directory."""
    (tmp_path / "test").mkdir()
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def write_definition(project_dir: Path) -> Callable[[str, str], Path]:
    """Write a dedented YAML definition to `test/<name>` and return its path."""

    def _write(name: str, content: str) -> Path:
        path = project_dir / "test" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return path

    return _write
