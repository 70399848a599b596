"""Core type definitions for the JSON file tree converter."""

import zipfile
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class NodeType(Enum):
    """Enumeration of tree node types."""
    FOLDER = "folder"
    FILE = "file"


class NodeShape(Enum):
    """Shapes recognized when classifying a JSON value."""
    FOLDER = "folder"
    FILE_SCALAR = "file-scalar"
    FILE_CONTENT = "file-content"
    FILE_TYPED = "file-typed"

    @property
    def is_file(self) -> bool:
        return self is not NodeShape.FOLDER


class ErrorType(Enum):
    """Enumeration of error types."""
    SYNTAX = "syntax"
    STRUCTURE = "structure"
    SIZE = "size"
    DEPTH = "depth"
    NAME = "name"
    ARCHIVE = "archive"


@dataclass
class ConversionOptions:
    """
    Tunable settings shared by the parser, builder and packer.

    Attributes:
        max_input_bytes: Largest accepted input, in UTF-8 bytes
        max_depth: Deepest folder nesting accepted by the builder
        array_item_prefix: Name prefix for array items (``item_0``, ...)
        root_file_name: Name of the single file produced for a scalar document
        sanitize_names: Replace characters invalid in filenames with ``_``
        compression: ``zipfile`` compression constant
        compresslevel: Optional compression level passed to ``zipfile``
        indent: Indentation used when serializing non-string scalars
    """
    max_input_bytes: int = 50 * 1024 * 1024
    max_depth: int = 256
    array_item_prefix: str = "item_"
    root_file_name: str = "data"
    sanitize_names: bool = False
    compression: int = zipfile.ZIP_DEFLATED
    compresslevel: Optional[int] = None
    indent: int = 2

    def __post_init__(self):
        self._validate()

    def _validate(self) -> None:
        if self.max_input_bytes <= 0:
            raise ValueError("max_input_bytes must be positive")

        if self.max_depth <= 0:
            raise ValueError("max_depth must be positive")

        if not self.array_item_prefix or "/" in self.array_item_prefix:
            raise ValueError("array_item_prefix must be non-empty and contain no '/'")

        if not self.root_file_name or "/" in self.root_file_name:
            raise ValueError("root_file_name must be non-empty and contain no '/'")

        if self.compression not in (zipfile.ZIP_STORED, zipfile.ZIP_DEFLATED,
                                    zipfile.ZIP_BZIP2, zipfile.ZIP_LZMA):
            raise ValueError(f"Unsupported compression: {self.compression}")

        if self.indent < 0:
            raise ValueError("indent must be non-negative")


@dataclass
class ErrorDetail:
    """Structured description of a failed conversion."""
    kind: ErrorType
    message: str
    location: Optional[str] = None

    def __str__(self) -> str:
        if self.location:
            return f"{self.kind.value}: {self.message} ({self.location})"
        return f"{self.kind.value}: {self.message}"


@dataclass
class ConversionResult:
    """Result of building a tree from JSON text."""
    success: bool
    nodes: List[Any] = field(default_factory=list)
    file_count: int = 0
    folder_count: int = 0
    total_size: int = 0
    errors: Optional[List[ErrorDetail]] = None


@dataclass
class ArchiveResult:
    """Result of packing JSON text into an archive."""
    success: bool
    archive: Optional[bytes] = None
    entry_count: int = 0
    archive_size: int = 0
    errors: Optional[List[ErrorDetail]] = None


@dataclass
class ArchiveEntry:
    """One entry written to (or read from) an archive."""
    path: str
    content: bytes = b""
    is_directory: bool = False


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str


class ProcessingError(Exception):
    """Custom exception for processing errors."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Any] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context


class ConversionError(ProcessingError):
    """Base class for errors raised by the conversion pipeline."""

    location: Optional[str] = None

    def to_detail(self) -> ErrorDetail:
        return ErrorDetail(kind=self.error_type, message=str(self), location=self.location)


class ParseError(ConversionError):
    """Input text is not valid JSON (or is empty, or too large)."""

    def __init__(self, message: str, line: Optional[int] = None,
                 column: Optional[int] = None, position: Optional[int] = None,
                 error_type: ErrorType = ErrorType.SYNTAX):
        super().__init__(message, error_type,
                         context={"line": line, "column": column, "position": position})
        self.line = line
        self.column = column
        self.position = position
        if line is not None:
            self.location = f"line {line}, column {column}"


class StructureError(ConversionError):
    """A JSON value cannot be expressed as a tree node."""

    def __init__(self, message: str, path: Optional[str] = None,
                 error_type: ErrorType = ErrorType.STRUCTURE):
        super().__init__(message, error_type, context={"path": path})
        self.path = path
        self.location = path


class ArchiveError(ConversionError):
    """Writing the archive failed; no buffer is produced."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, ErrorType.ARCHIVE, context={"path": path})
        self.path = path
        self.location = path


# Abstract base classes for interfaces

class TreeBuilderInterface(ABC):
    """Abstract interface for the tree builder."""

    @abstractmethod
    def build(self, value: Any, base_path: str = "") -> Union[Any, List[Any]]:
        """Convert a parsed JSON value into a node or an ordered forest."""
        pass


class ArchivePackerInterface(ABC):
    """Abstract interface for the archive packer."""

    @abstractmethod
    def pack(self, node_or_forest: Union[Any, List[Any]]) -> bytes:
        """Pack a node or forest into archive bytes."""
        pass


class ErrorHandlerInterface(ABC):
    """Abstract interface for error handling."""

    @abstractmethod
    def validate_input(self, input_data: str) -> ValidationResult:
        """Validate input data."""
        pass

    @abstractmethod
    def handle_conversion_error(self, error: ConversionError) -> ErrorResponse:
        """Handle conversion errors."""
        pass
