"""
Tests for tree-wide label de-duplication.

These tests verify:
- Numeric suffixing of repeated given/when labels
- `It` leaves are never renamed
- Uniqueness across the whole tree in pre-order
- Idempotence and per-call ownership of the seen set
"""

import copy

from treekit.compiler.dedupe import dedupe_node_names
from treekit.compiler.models import TreeItem


def _labels(node: TreeItem) -> list[str]:
    labels = []
    for child in node.children:
        labels.append(child.content)
        labels.extend(_labels(child))
    return labels


class TestDedupeNodeNames:
    """Test suffixing behaviour."""

    def test_sibling_duplicates_get_suffixes(self):
        """Test that the second and third copies become 2 and 3."""
        root = TreeItem("root", [TreeItem("When foo"), TreeItem("When foo"), TreeItem("When foo")])
        dedupe_node_names(root)

        assert _labels(root) == ["When foo", "When foo 2", "When foo 3"]

    def test_it_leaves_are_exempt(self):
        """Test that identical `It` labels are left alone."""
        root = TreeItem("Rules", [TreeItem("Given X", [TreeItem("It Y"), TreeItem("It Y")])])
        seen = dedupe_node_names(root)

        assert _labels(root) == ["Given X", "It Y", "It Y"]
        assert seen == {"Given X"}

    def test_it_node_children_are_not_visited(self):
        """Test that the subtree under an `It` node keeps its labels."""
        root = TreeItem(
            "root",
            [
                TreeItem("Given A"),
                TreeItem("It X", [TreeItem("Given A"), TreeItem("Given A")]),
            ],
        )
        seen = dedupe_node_names(root)

        assert _labels(root) == ["Given A", "It X", "Given A", "Given A"]
        assert seen == {"Given A"}

    def test_uniqueness_is_tree_wide(self):
        """Test that a label repeated under different parents is suffixed."""
        root = TreeItem(
            "root",
            [
                TreeItem("Given a", [TreeItem("When x")]),
                TreeItem("Given b", [TreeItem("When x")]),
            ],
        )
        dedupe_node_names(root)

        assert _labels(root) == ["Given a", "When x", "Given b", "When x 2"]

    def test_pre_order_traversal(self):
        """Test that a descendant is visited before its parent's later siblings."""
        root = TreeItem(
            "root",
            [
                TreeItem("Given a", [TreeItem("Given b")]),
                TreeItem("Given b"),
            ],
        )
        dedupe_node_names(root)

        assert root.children[0].children[0].content == "Given b"
        assert root.children[1].content == "Given b 2"

    def test_suffix_skips_taken_values(self):
        """Test that an existing 'X 2' label pushes the next copy to 'X 3'."""
        root = TreeItem("root", [TreeItem("When a"), TreeItem("When a 2"), TreeItem("When a")])
        dedupe_node_names(root)

        assert _labels(root) == ["When a", "When a 2", "When a 3"]

    def test_labels_are_compared_trimmed(self):
        """Test that surrounding whitespace does not make labels distinct."""
        root = TreeItem("root", [TreeItem("When a"), TreeItem("  When a  ")])
        dedupe_node_names(root)

        assert root.children[1].content == "When a 2"

    def test_root_label_is_not_registered(self):
        """Test that a child may share the root title."""
        root = TreeItem("Given a", [TreeItem("Given a")])
        dedupe_node_names(root)

        assert root.children[0].content == "Given a"

    def test_idempotent(self):
        """Test that a second pass changes nothing."""
        root = TreeItem(
            "root",
            [
                TreeItem("When a", [TreeItem("When a"), TreeItem("It z")]),
                TreeItem("When a 2"),
                TreeItem("When a"),
            ],
        )
        dedupe_node_names(root)
        once = copy.deepcopy(root)
        dedupe_node_names(root)

        assert root == once

    def test_fresh_set_per_call(self):
        """Test that two independent calls do not share state."""
        first = TreeItem("root", [TreeItem("When a")])
        second = TreeItem("root", [TreeItem("When a")])

        dedupe_node_names(first)
        dedupe_node_names(second)

        assert second.children[0].content == "When a"

    def test_explicit_seen_set_is_threaded(self):
        """Test that a caller-provided set is used and returned."""
        seen = {"When a"}
        root = TreeItem("root", [TreeItem("When a")])

        result = dedupe_node_names(root, seen)

        assert result is seen
        assert root.children[0].content == "When a 2"
        assert seen == {"When a", "When a 2"}
