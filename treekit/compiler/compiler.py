"""
Test tree compiler.

Compiles a YAML test definition into the `.tree` text bulloak scaffolds
Solidity tests from:

    YAML text -> parse_document -> dedupe_node_names -> render_tree -> text

Compilation is all-or-nothing: any error (including YAML syntax errors from
the loader) propagates unchanged and no partial output is produced.
"""

import logging
import time
from pathlib import Path

import yaml

from treekit.compiler.dedupe import dedupe_node_names
from treekit.compiler.parser import parse_document
from treekit.compiler.renderer import render_tree
from treekit.core.errors import DefinitionPathError

logger = logging.getLogger(__name__)

YAML_EXT = ".t.yaml"
TREE_EXT = ".tree"
SOL_TEST_EXT = ".t.sol"


def compile_test_tree(document_text: str) -> str:
    """
    Compile a YAML test definition into tree text.

    Args:
        document_text: Full YAML document

    Returns:
        Rendered tree, first line being the definition title

    Raises:
        yaml.YAMLError: The text is not valid YAML
        DefinitionError: The document violates the definition grammar

    Example:
        >>> print(compile_test_tree("Rules:\\n  - given: X\\n    and:\\n      - it: Y\\n"), end="")
        Rules
        └── Given X
            └── It Y
    """
    start_time = time.perf_counter()

    raw = yaml.safe_load(document_text)
    tree = parse_document(raw)
    dedupe_node_names(tree)
    rendered = render_tree(tree)

    logger.debug(
        "Compiled test tree %r: %d nodes in %.4fs",
        tree.content,
        tree.count_nodes(),
        time.perf_counter() - start_time,
    )
    return rendered


def tree_path_for(yaml_path: str | Path) -> Path:
    """
    Map `<name>.t.yaml` to its sibling `<name>.tree`.

    Raises:
        DefinitionPathError: The path does not end with `.t.yaml`
    """
    path = Path(yaml_path)
    if not path.name.endswith(YAML_EXT) or path.name == YAML_EXT:
        raise DefinitionPathError(
            f"Test definition files must end with '{YAML_EXT}': {path}",
            details={"path": str(path)},
        )
    return path.with_name(path.name[: -len(YAML_EXT)] + TREE_EXT)


def solidity_test_path_for(yaml_path: str | Path) -> Path:
    """Map `<name>.t.yaml` to the `<name>.t.sol` bulloak scaffolds."""
    path = Path(yaml_path)
    tree_path = tree_path_for(path)
    return tree_path.with_name(tree_path.name[: -len(TREE_EXT)] + SOL_TEST_EXT)


def yaml_to_tree(yaml_path: str | Path) -> str:
    """Read a definition file and compile it."""
    content = Path(yaml_path).read_text(encoding="utf-8")
    return compile_test_tree(content)


def process_yaml_file(yaml_path: str | Path) -> Path:
    """
    Compile `<name>.t.yaml` and write `<name>.tree` next to it.

    The tree file is only written once compilation succeeded.

    Returns:
        Path of the written tree file
    """
    tree_path = tree_path_for(yaml_path)
    tree_content = yaml_to_tree(yaml_path)
    tree_path.write_text(tree_content, encoding="utf-8")
    logger.info("Wrote %s (%d bytes)", tree_path, len(tree_content.encode("utf-8")))
    return tree_path
