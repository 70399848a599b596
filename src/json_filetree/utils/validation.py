"""Validation utilities for input text and converted trees."""

import json
import re
from typing import Any, List, Optional, Set, Union
from ..types import ValidationResult, ValidationError, ErrorType
from ..models import FileNode, FolderNode, TreeNode, encode_content, join_path


RESERVED_NAMES = {".", ".."}
_SURROGATES = re.compile(r"[\ud800-\udfff]")


class NonStandardConstantError(ValueError):
    """Raised for NaN and Infinity literals, which are not valid JSON."""


def _reject_constant(literal: str) -> Any:
    raise NonStandardConstantError(f"{literal} is not a valid JSON value")


def load_json(json_string: str) -> Any:
    """
    Parse strict JSON text.

    Unlike plain ``json.loads``, the literals ``NaN``, ``Infinity`` and
    ``-Infinity`` are rejected with NonStandardConstantError. Integers
    beyond the interpreter's digit limit raise ValueError.
    """
    return json.loads(json_string, parse_constant=_reject_constant)


class ValidationUtils:
    """Utility class for validating input text, node names and trees."""

    @staticmethod
    def validate_json_string(json_string: str,
                             max_input_bytes: Optional[int] = None) -> ValidationResult:
        """
        Validate JSON string syntax and size.

        Args:
            json_string: JSON string to validate
            max_input_bytes: Optional upper bound on the encoded input size

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        # Check if string is empty
        if not json_string.strip():
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message="JSON string is empty",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        if max_input_bytes is not None:
            input_size = len(json_string.encode("utf-8", errors="surrogatepass"))
            if input_size > max_input_bytes:
                errors.append(ValidationError(
                    type=ErrorType.SIZE,
                    message=f"Input is {input_size} bytes, above the limit of {max_input_bytes} bytes",
                    location="input"
                ))
                return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        # Try to parse JSON
        try:
            data = load_json(json_string)
        except json.JSONDecodeError as e:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"Invalid JSON syntax: {e.msg}",
                location=f"line {e.lineno}, column {e.colno}"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)
        except NonStandardConstantError as e:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"Invalid JSON syntax: {e}",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)
        except ValueError as e:
            errors.append(ValidationError(
                type=ErrorType.SIZE,
                message=f"JSON number is too large: {e}",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)
        except RecursionError:
            errors.append(ValidationError(
                type=ErrorType.DEPTH,
                message="JSON nesting is too deep to parse",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        max_depth = ValidationUtils.calculate_max_depth(data)
        if max_depth > 20:
            warnings.append(f"Deep nesting detected (depth: {max_depth}). This may impact performance.")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def calculate_max_depth(data: Any) -> int:
        """Calculate maximum container nesting depth without recursion."""
        max_depth = 0
        stack = [(data, 0)]
        while stack:
            value, depth = stack.pop()
            if isinstance(value, dict):
                children = value.values()
            elif isinstance(value, list):
                children = value
            else:
                max_depth = max(max_depth, depth)
                continue
            depth += 1
            max_depth = max(max_depth, depth)
            stack.extend((child, depth) for child in children)
        return max_depth

    @staticmethod
    def validate_node_name(name: Any) -> Optional[str]:
        """
        Check that a name can be used as one archive path segment.

        Returns:
            Problem description, or None if the name is usable
        """
        if not isinstance(name, str):
            return f"Name must be a string, got {type(name).__name__}"
        if not name:
            return "Name cannot be empty"
        if name in RESERVED_NAMES:
            return f"Name {name!r} is reserved"
        if "/" in name:
            return f"Name {name!r} contains a path separator"
        if _SURROGATES.search(name):
            return f"Name {name!r} contains an unpaired surrogate"
        return None

    @staticmethod
    def validate_tree(node_or_forest: Union[TreeNode, List[TreeNode]]) -> ValidationResult:
        """
        Validate names, paths and sibling uniqueness across a tree.

        Args:
            node_or_forest: Single node or list of top-level nodes

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if isinstance(node_or_forest, (FileNode, FolderNode)):
            roots = [node_or_forest]
        else:
            roots = list(node_or_forest)

        stack = [("", roots)]
        while stack:
            base_path, siblings = stack.pop()
            seen: Set[str] = set()
            for node in siblings:
                if not isinstance(node, (FileNode, FolderNode)):
                    errors.append(ValidationError(
                        type=ErrorType.STRUCTURE,
                        message=f"Unexpected node type: {type(node).__name__}",
                        location=base_path or "root"
                    ))
                    continue

                problem = ValidationUtils.validate_node_name(node.name)
                if problem:
                    errors.append(ValidationError(
                        type=ErrorType.NAME,
                        message=problem,
                        location=node.path
                    ))

                expected_path = join_path(base_path, node.name)
                if node.path != expected_path:
                    errors.append(ValidationError(
                        type=ErrorType.STRUCTURE,
                        message=f"Path {node.path!r} does not match expected {expected_path!r}",
                        location=node.path
                    ))

                if node.name in seen:
                    errors.append(ValidationError(
                        type=ErrorType.NAME,
                        message=f"Duplicate sibling name {node.name!r}",
                        location=node.path
                    ))
                seen.add(node.name)

                if isinstance(node, FolderNode):
                    stack.append((expected_path, node.children))
                elif node.size != len(encode_content(node.content)):
                    warnings.append(f"Size of {node.path} does not match its content")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )
