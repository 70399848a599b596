"""Text rendering of converted trees for terminal display."""

from typing import AbstractSet, List, Optional, Union
from .models import FileNode, FolderNode, TreeNode
from .utils.size_calculator import SizeCalculator


def render_tree(node_or_forest: Union[TreeNode, List[TreeNode]],
                expanded: Optional[AbstractSet[str]] = None,
                show_sizes: bool = True) -> str:
    """
    Render a tree as indented text.

    Args:
        node_or_forest: Single node or list of top-level nodes
        expanded: Paths of folders whose children are shown; None shows all.
            The set belongs to the caller and is never modified.
        show_sizes: Append the content size to file lines

    Returns:
        One line per visible node, folders suffixed with ``/``
    """
    roots = [node_or_forest] if isinstance(node_or_forest, (FileNode, FolderNode)) \
        else list(node_or_forest)
    lines = []
    stack = [(node, 0) for node in reversed(roots)]

    while stack:
        node, level = stack.pop()
        indent = "  " * level
        if isinstance(node, FolderNode):
            is_open = expanded is None or node.path in expanded
            marker = "-" if is_open else "+"
            lines.append(f"{indent}{marker} {node.name}/")
            if is_open:
                stack.extend((child, level + 1) for child in reversed(node.children))
        else:
            line = f"{indent}  {node.name}"
            if show_sizes:
                line += f" ({SizeCalculator.format_file_size(node.size)})"
            lines.append(line)

    return "\n".join(lines)
