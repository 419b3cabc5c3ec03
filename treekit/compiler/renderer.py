"""Box-drawing rendering of a TreeItem, in the `.tree` format bulloak reads."""

from treekit.compiler.models import TreeItem

BRANCH = "├──"
LAST_BRANCH = "└──"
PIPE_INDENT = "│   "
BLANK_INDENT = "    "
COMMENT_SEPARATOR = " // "


def render_tree(root: TreeItem) -> str:
    """
    Render a tree as text, one line per node, ending with a newline.

    The root line is the bare title; it never carries a connector or a comment.

    Example:
        >>> print(render_tree(TreeItem("root", [TreeItem("A"), TreeItem("B")])), end="")
        root
        ├── A
        └── B
    """
    result = root.content + "\n"

    last_index = len(root.children) - 1
    for i, item in enumerate(root.children):
        lines = _render_item(item, is_last=i == last_index)
        result += "\n".join(lines) + "\n"

    return result


def _render_item(item: TreeItem, is_last: bool, prefix: str = "") -> list[str]:
    content = item.content
    if item.comment:
        content = f"{content}{COMMENT_SEPARATOR}{item.comment}"

    connector = LAST_BRANCH if is_last else BRANCH
    lines = [f"{prefix}{connector} {content}"]

    child_prefix = prefix + (BLANK_INDENT if is_last else PIPE_INDENT)
    last_index = len(item.children) - 1
    for i, child in enumerate(item.children):
        lines.extend(_render_item(child, is_last=i == last_index, prefix=child_prefix))

    return lines
