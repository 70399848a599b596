"""Size calculation utilities for converted trees and archive output."""

import logging
import math
from typing import Dict, Iterable, List, Optional, Union
from ..models import FileNode, FolderNode, TreeNode


class SizeCalculator:
    """
    Utility class for measuring converted trees.

    Provides total content sizes, file and folder counts, and human
    readable size formatting.
    """

    SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the size calculator.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def calculate_tree_size(self, node_or_forest: Union[TreeNode, List[TreeNode]]) -> int:
        """
        Calculate the total payload size of all files in a tree.

        Args:
            node_or_forest: Single node or list of top-level nodes

        Returns:
            Sum of file sizes in bytes
        """
        return sum(node.size for node in _walk(node_or_forest) if isinstance(node, FileNode))

    def count_tree_items(self, node_or_forest: Union[TreeNode, List[TreeNode]]) -> Dict[str, int]:
        """
        Count files and folders in a tree.

        Returns:
            Dictionary with ``files`` and ``folders`` counts
        """
        counts = {"files": 0, "folders": 0}
        for node in _walk(node_or_forest):
            if isinstance(node, FolderNode):
                counts["folders"] += 1
            else:
                counts["files"] += 1
        return counts

    @classmethod
    def format_file_size(cls, size: int) -> str:
        """
        Format a byte count for display.

        Args:
            size: Size in bytes

        Returns:
            String such as ``"0 Bytes"``, ``"512 Bytes"`` or ``"1.5 KB"``
        """
        if size < 0:
            raise ValueError("size must be non-negative")
        if size == 0:
            return "0 Bytes"

        exponent = min(int(math.log(size, 1024)), len(cls.SIZE_UNITS) - 1)
        # log() can land just below an exact power of 1024
        if exponent + 1 < len(cls.SIZE_UNITS) and size >= 1024 ** (exponent + 1):
            exponent += 1
        value = round(size / 1024 ** exponent, 2)
        text = f"{value:.2f}".rstrip("0").rstrip(".")
        return f"{text} {cls.SIZE_UNITS[exponent]}"


def _walk(node_or_forest: Union[TreeNode, List[TreeNode], Iterable[TreeNode]]):
    """Yield every node depth-first in sibling order."""
    if isinstance(node_or_forest, (FileNode, FolderNode)):
        stack = [node_or_forest]
    else:
        stack = list(reversed(list(node_or_forest)))
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, FolderNode):
            stack.extend(reversed(node.children))
