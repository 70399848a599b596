"""Shape classification of JSON values into folder or file nodes."""

import json
import logging
from typing import Any, Optional
from .types import NodeShape, StructureError


CONTENT_FIELD = "content"
TYPE_FIELD = "type"
DATA_FIELD = "data"
FILE_TYPE_MARKER = "file"


class ShapeClassifier:
    """
    Decides whether a JSON value becomes a folder or a file.

    Recognized shapes, checked in this order:

    * ``FILE_SCALAR``: string, number, boolean or null
    * ``FILE_CONTENT``: object with a ``content`` key
    * ``FILE_TYPED``: object with ``"type": "file"`` and a ``data`` key
    * ``FOLDER``: every other object, and every array

    An object marked ``"type": "file"`` without ``data`` or ``content``
    is rejected rather than turned into a folder.
    """

    def __init__(self, indent: int = 2, logger: Optional[logging.Logger] = None):
        """
        Initialize the shape classifier.

        Args:
            indent: Indentation used when serializing non-string content
            logger: Optional logger instance
        """
        self.indent = indent
        self.logger = logger or logging.getLogger(__name__)

    def classify(self, value: Any, path: Optional[str] = None) -> NodeShape:
        """
        Classify a value placed as a child of a folder.

        Args:
            value: Parsed JSON value
            path: Path the node will get, used in error messages

        Returns:
            NodeShape of the value

        Raises:
            StructureError: If the value is marked as a file but has no content
        """
        if isinstance(value, list):
            return NodeShape.FOLDER

        if not isinstance(value, dict):
            return NodeShape.FILE_SCALAR

        if CONTENT_FIELD in value:
            return NodeShape.FILE_CONTENT

        if value.get(TYPE_FIELD) == FILE_TYPE_MARKER:
            if DATA_FIELD in value:
                return NodeShape.FILE_TYPED
            raise StructureError(
                f"Object marked as file has neither '{DATA_FIELD}' nor '{CONTENT_FIELD}' field",
                path=path
            )

        return NodeShape.FOLDER

    def classify_root(self, value: Any) -> NodeShape:
        """
        Classify a top-level value.

        Containers at the root are always expanded, so file markers are
        not honored here.
        """
        if isinstance(value, (dict, list)):
            return NodeShape.FOLDER
        return NodeShape.FILE_SCALAR

    def extract_content(self, value: Any, shape: NodeShape) -> str:
        """
        Get the text content of a value classified as a file.

        Args:
            value: Parsed JSON value
            shape: Shape returned by classify

        Returns:
            File content as text
        """
        if shape == NodeShape.FILE_CONTENT:
            return self.coerce_content(value[CONTENT_FIELD])
        elif shape == NodeShape.FILE_TYPED:
            return self.coerce_content(value[DATA_FIELD])
        elif shape == NodeShape.FILE_SCALAR:
            return self.coerce_content(value)
        raise ValueError(f"Shape {shape.value} has no file content")

    def coerce_content(self, value: Any) -> str:
        """
        Convert a JSON value to file text.

        Strings pass through unchanged; everything else is serialized
        as JSON with the configured indentation (``null`` -> ``"null"``).
        """
        if isinstance(value, str):
            return value
        return json.dumps(value, indent=self.indent, ensure_ascii=False)
