"""
Thin adapter around the external `bulloak` binary.

bulloak scaffolds Solidity test skeletons from `.tree` files and checks that
existing tests still match their tree. treekit only spawns it; exit codes are
handed back to the caller untouched.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from treekit.core.errors import ToolExecutionError, ToolNotFoundError

logger = logging.getLogger(__name__)

INSTALL_HINT = "cargo install bulloak"


class BulloakRunner:
    """Spawns bulloak subcommands with inherited stdout/stderr."""

    def __init__(self, binary: str = "bulloak") -> None:
        self.binary = binary

    def is_installed(self) -> bool:
        """Check whether the bulloak binary can be found on PATH."""
        return shutil.which(self.binary) is not None

    def ensure_installed(self) -> None:
        """
        Raises:
            ToolNotFoundError: bulloak is not on PATH
        """
        if not self.is_installed():
            raise ToolNotFoundError(
                f"bulloak is not installed. Install it with: {INSTALL_HINT}",
                details={"binary": self.binary},
            )

    def scaffold(self, tree_file: str | Path, solc_version: str) -> int:
        """Write a new `.t.sol` skeleton next to `tree_file`."""
        return self._run(["scaffold", "-s", solc_version, "--vm-skip", "-w", str(tree_file)])

    def check(self, tree_files: Sequence[str | Path], fix: bool = False) -> int:
        """Check (and optionally repair) the tests generated from `tree_files`."""
        args = ["check"]
        if fix:
            args.append("--fix")
        args.extend(str(path) for path in tree_files)
        return self._run(args)

    def _run(self, args: list[str]) -> int:
        cmd = [self.binary, *args]
        logger.info("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, check=False)
        except OSError as exc:
            raise ToolExecutionError(
                f"Failed to start {self.binary}: {exc}",
                details={"command": cmd},
            ) from exc

        if result.returncode != 0:
            logger.warning("%s exited with code %d", " ".join(cmd), result.returncode)
        return result.returncode
