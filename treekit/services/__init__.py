"""
Services package for treekit.

Contains the workflows that combine the compiler with the filesystem and
with external tools (bulloak).
"""

from treekit.services.bulloak import BulloakRunner
from treekit.services.tree_sync import check, generate, sync

__all__ = ["BulloakRunner", "check", "generate", "sync"]
