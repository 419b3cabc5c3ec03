"""
Tree-wide label de-duplication.

bulloak derives modifier and test names from the tree labels, so two
`given`/`when` branches that sanitize to the same text would collide. The
pass below suffixes repeated labels with " 2", " 3", ... in pre-order,
depth-first, left-to-right order. `It ...` leaves are never renamed.
"""

from treekit.compiler.models import TreeItem

LEAF_PREFIX = "It "


def dedupe_node_names(node: TreeItem, seen_items: set[str] | None = None) -> set[str]:
    """
    Make every non-leaf label unique across the whole tree, in place.

    The running set of labels is owned by the outermost call and passed
    down explicitly; nothing is shared between two calls that start
    without a set.

    Args:
        node: Subtree whose descendants are processed (the node itself is not)
        seen_items: Labels already used; created by the outermost call

    Returns:
        The set of labels in use after processing this subtree
    """
    if seen_items is None:
        seen_items = set()

    for child in node.children:
        label = child.content.strip()
        if label.startswith(LEAF_PREFIX):
            continue

        if label in seen_items:
            suffix_idx = 2
            while f"{label} {suffix_idx}" in seen_items:
                suffix_idx += 1
            label = f"{label} {suffix_idx}"
            child.content = label

        seen_items.add(label)
        dedupe_node_names(child, seen_items)

    return seen_items
