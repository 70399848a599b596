"""JSON parser with input limits and positioned diagnostics."""

import json
import logging
from typing import Any, Dict, Optional
from .types import ErrorType, ParseError
from .utils.validation import NonStandardConstantError, ValidationUtils, load_json


DEFAULT_MAX_INPUT_BYTES = 50 * 1024 * 1024


class JSONParser:
    """
    JSON parser that reports failures as ParseError.

    Rejects empty and oversized input before parsing and carries the
    decoder's line, column and character position on syntax errors.
    """

    def __init__(self, max_input_bytes: int = DEFAULT_MAX_INPUT_BYTES,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the JSON parser.

        Args:
            max_input_bytes: Largest accepted input in UTF-8 bytes
            logger: Optional logger instance
        """
        self.max_input_bytes = max_input_bytes
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, json_string: str) -> Any:
        """
        Parse JSON text.

        Args:
            json_string: JSON string to parse

        Returns:
            Parsed JSON value

        Raises:
            ParseError: If the text is empty, too large or not valid JSON
        """
        if not isinstance(json_string, str):
            raise ParseError(f"Input must be a string, got {type(json_string).__name__}")

        if not json_string.strip():
            raise ParseError("JSON string is empty")

        input_size = len(json_string.encode("utf-8", errors="surrogatepass"))
        if input_size > self.max_input_bytes:
            raise ParseError(
                f"Input is {input_size} bytes, above the limit of {self.max_input_bytes} bytes",
                error_type=ErrorType.SIZE
            )

        try:
            data = load_json(json_string)
        except json.JSONDecodeError as e:
            raise ParseError(
                f"JSON parsing failed: {e.msg} at line {e.lineno}, column {e.colno}",
                line=e.lineno,
                column=e.colno,
                position=e.pos
            ) from e
        except NonStandardConstantError as e:
            raise ParseError(f"JSON parsing failed: {e}") from e
        except ValueError as e:
            raise ParseError(f"JSON number is too large to parse: {e}",
                             error_type=ErrorType.SIZE) from e
        except RecursionError as e:
            raise ParseError("JSON nesting is too deep to parse",
                             error_type=ErrorType.DEPTH) from e

        self.logger.info(f"Parsed JSON {self.describe_root(data)} ({input_size} bytes)")
        return data

    @staticmethod
    def describe_root(data: Any) -> str:
        """Name the kind of a parsed root value: object, array or scalar."""
        if isinstance(data, dict):
            return "object"
        elif isinstance(data, list):
            return "array"
        return "scalar"

    def get_structure_statistics(self, data: Any) -> Dict[str, Any]:
        """
        Get statistics about a parsed JSON value.

        Args:
            data: Parsed data to analyze

        Returns:
            Dictionary with structure statistics
        """
        stats = {
            "root_type": self.describe_root(data),
            "max_depth": ValidationUtils.calculate_max_depth(data),
            "object_count": 0,
            "array_count": 0,
            "scalar_count": 0,
            "total_keys": 0,
            "total_items": 0,
        }

        stack = [data]
        while stack:
            value = stack.pop()
            if isinstance(value, dict):
                stats["object_count"] += 1
                stats["total_keys"] += len(value)
                stack.extend(value.values())
            elif isinstance(value, list):
                stats["array_count"] += 1
                stats["total_items"] += len(value)
                stack.extend(value)
            else:
                stats["scalar_count"] += 1

        return stats
