"""Tree builder converting parsed JSON values into folder/file nodes."""

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union
from .types import (
    ConversionOptions,
    ErrorType,
    NodeShape,
    StructureError,
    TreeBuilderInterface
)
from .models import FileNode, FolderNode, TreeNode, join_path
from .shape_classifier import ShapeClassifier
from .utils.naming import sanitize_filename
from .utils.validation import ValidationUtils


class TreeBuilder(TreeBuilderInterface):
    """
    Builds an ordered tree of FolderNode and FileNode from a JSON value.

    Objects and arrays become folders unless the classifier recognizes
    them as file content. Object keys keep their insertion order and
    array items are named ``<prefix><index>``. The walk uses an explicit
    stack so nesting is bounded by ``max_depth`` instead of the
    interpreter's recursion limit.
    """

    def __init__(self, options: Optional[ConversionOptions] = None,
                 classifier: Optional[ShapeClassifier] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the tree builder.

        Args:
            options: Conversion options (depth limit, naming)
            classifier: Optional ShapeClassifier instance
            logger: Optional logger instance
        """
        self.options = options or ConversionOptions()
        self.logger = logger or logging.getLogger(__name__)
        self.classifier = classifier or ShapeClassifier(indent=self.options.indent,
                                                        logger=self.logger)

    def build(self, value: Any, base_path: str = "") -> Union[TreeNode, List[TreeNode]]:
        """
        Convert a parsed JSON value into tree nodes.

        Args:
            value: Parsed JSON value
            base_path: Path the produced nodes are placed under

        Returns:
            A FileNode for a scalar value, otherwise the ordered list
            of the container's child nodes

        Raises:
            StructureError: On invalid names, unmarked file content or
                nesting deeper than ``max_depth``
        """
        if self.classifier.classify_root(value) is NodeShape.FILE_SCALAR:
            name = self.options.root_file_name
            node = FileNode(
                name=name,
                path=join_path(base_path, name),
                content=self.classifier.coerce_content(value)
            )
            self.logger.info(f"Built single file node '{node.path}'")
            return node

        forest: List[TreeNode] = []
        node_count = 0
        stack: List[Tuple[Any, str, List[TreeNode], int]] = [(value, base_path, forest, 0)]

        while stack:
            container, parent_path, siblings, depth = stack.pop()
            positions: Dict[str, int] = {}
            # Folders are walked only once sibling collisions are settled
            pending: Dict[str, Optional[Tuple[Any, FolderNode]]] = {}

            for raw_name, child in self._iter_entries(container):
                name = self._prepare_name(raw_name, parent_path)
                path = join_path(parent_path, name)
                shape = self.classifier.classify(child, path)

                if shape.is_file:
                    node = FileNode(
                        name=name,
                        path=path,
                        content=self.classifier.extract_content(child, shape)
                    )
                    pending[name] = None
                else:
                    node = FolderNode(name=name, path=path)
                    pending[name] = (child, node)

                self._place(siblings, positions, node)
                node_count += 1

            for item in pending.values():
                if item is None:
                    continue
                child, folder = item
                if depth + 1 > self.options.max_depth:
                    raise StructureError(
                        f"Nesting exceeds the maximum depth of {self.options.max_depth}",
                        path=folder.path,
                        error_type=ErrorType.DEPTH
                    )
                stack.append((child, folder.path, folder.children, depth + 1))

        self.logger.info(f"Built tree with {len(forest)} top-level nodes ({node_count} total)")
        return forest

    def build_forest(self, value: Any, base_path: str = "") -> List[TreeNode]:
        """Like build, but always returns a list of top-level nodes."""
        result = self.build(value, base_path)
        if isinstance(result, list):
            return result
        return [result]

    def _iter_entries(self, container: Any) -> Iterator[Tuple[str, Any]]:
        """Yield (name, value) pairs of an object or array in source order."""
        if isinstance(container, dict):
            yield from container.items()
        else:
            prefix = self.options.array_item_prefix
            for index, item in enumerate(container):
                yield f"{prefix}{index}", item

    def _prepare_name(self, raw_name: str, parent_path: str) -> str:
        name = sanitize_filename(raw_name) if self.options.sanitize_names else raw_name
        problem = ValidationUtils.validate_node_name(name)
        if problem:
            raise StructureError(
                f"Invalid name {raw_name!r}: {problem}",
                path=parent_path or None,
                error_type=ErrorType.NAME
            )
        return name

    def _place(self, siblings: List[TreeNode], positions: Dict[str, int],
               node: TreeNode) -> None:
        """Append a node, or replace an earlier sibling of the same name in place."""
        if node.name in positions:
            self.logger.warning(f"Duplicate name '{node.path}': keeping the last value")
            siblings[positions[node.name]] = node
        else:
            positions[node.name] = len(siblings)
            siblings.append(node)
