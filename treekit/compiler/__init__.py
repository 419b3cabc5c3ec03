"""
YAML to `.tree` compiler for treekit.

This package converts human-written YAML test definitions into the ASCII
tree format consumed by bulloak.

Key Components:
- parser: Validates the definition grammar and builds TreeItems
- dedupe: Makes given/when labels unique across the tree
- renderer: Draws the tree with box-drawing connectors
- compiler: YAML loading, the full pipeline and file conversion

Design Principles:
- Determinism: Same input produces byte-for-byte identical output
- All-or-nothing: A definition either compiles fully or raises
"""

from treekit.compiler.compiler import compile_test_tree, process_yaml_file, yaml_to_tree
from treekit.compiler.dedupe import dedupe_node_names
from treekit.compiler.models import TreeItem
from treekit.compiler.parser import parse_document, parse_rules, sanitize_text
from treekit.compiler.renderer import render_tree

__all__ = [
    "TreeItem",
    "compile_test_tree",
    "dedupe_node_names",
    "parse_document",
    "parse_rules",
    "process_yaml_file",
    "render_tree",
    "sanitize_text",
    "yaml_to_tree",
]
