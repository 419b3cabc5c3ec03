"""
Unit tests for the bulloak adapter.

subprocess and PATH lookups are mocked; no bulloak binary is needed.
"""

import subprocess
from unittest.mock import patch

import pytest

from treekit.core.errors import ToolExecutionError, ToolNotFoundError
from treekit.services.bulloak import BulloakRunner


def _completed(returncode: int = 0) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode)


class TestInstallation:
    """Tests for locating the binary."""

    def test_is_installed(self):
        with patch("treekit.services.bulloak.shutil.which", return_value="/usr/bin/bulloak") as which:
            assert BulloakRunner().is_installed() is True

        which.assert_called_once_with("bulloak")

    def test_ensure_installed_raises_with_hint(self):
        with patch("treekit.services.bulloak.shutil.which", return_value=None):
            with pytest.raises(ToolNotFoundError) as exc_info:
                BulloakRunner("my-bulloak").ensure_installed()

        assert "cargo install bulloak" in exc_info.value.message
        assert exc_info.value.details == {"binary": "my-bulloak"}


class TestCommands:
    """Tests for the spawned command lines."""

    def test_scaffold(self):
        with patch("treekit.services.bulloak.subprocess.run", return_value=_completed()) as run:
            assert BulloakRunner().scaffold("test/Vault.tree", "0.8.28") == 0

        run.assert_called_once_with(
            ["bulloak", "scaffold", "-s", "0.8.28", "--vm-skip", "-w", "test/Vault.tree"],
            check=False,
        )

    def test_check_fix(self):
        with patch("treekit.services.bulloak.subprocess.run", return_value=_completed()) as run:
            BulloakRunner().check(["test/Vault.tree"], fix=True)

        run.assert_called_once_with(["bulloak", "check", "--fix", "test/Vault.tree"], check=False)

    def test_check_many_returns_exit_code(self):
        with patch("treekit.services.bulloak.subprocess.run", return_value=_completed(1)) as run:
            assert BulloakRunner().check(["a.tree", "b.tree"]) == 1

        run.assert_called_once_with(["bulloak", "check", "a.tree", "b.tree"], check=False)

    def test_start_failure_raises(self):
        with patch("treekit.services.bulloak.subprocess.run", side_effect=FileNotFoundError("nope")):
            with pytest.raises(ToolExecutionError) as exc_info:
                BulloakRunner().check(["a.tree"])

        assert exc_info.value.details["command"] == ["bulloak", "check", "a.tree"]
