"""Tree model produced by the parser and consumed by dedupe and render."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TreeItem:
    """One node of a test tree.

    `content` is the rendered label ("Given ...", "When ...", "It ..."),
    except for the root, whose content is the bare definition title.
    """

    content: str
    children: list[TreeItem] = field(default_factory=list)
    comment: str | None = None

    def count_nodes(self) -> int:
        """Number of nodes in this subtree, self included."""
        return 1 + sum(child.count_nodes() for child in self.children)
