"""CLI wrapper: compile a test definition from stdin to stdout.

Usage:
    cat test/Vault.t.yaml | make-test-tree > test/Vault.tree
"""

from __future__ import annotations

import sys

from cli.main import main as treekit_main


def main() -> None:
    sys.exit(treekit_main(["test-tree", "compile", "-", *sys.argv[1:]]))
