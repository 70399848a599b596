"""
JSON File Tree - Turn JSON documents into folder/file trees and ZIP archives.

Objects and arrays become folders, scalar values become files, and the
resulting tree is packed into an in-memory ZIP archive.
"""

from .converter import JSONFileTreeConverter
from .tree_builder import TreeBuilder
from .archive_packer import ArchivePacker, read_entries
from .models import FileNode, FolderNode
from .types import (
    ArchiveError,
    ArchiveResult,
    ConversionOptions,
    ConversionResult,
    ParseError,
    StructureError,
)

__version__ = "1.0.0"
__all__ = [
    "JSONFileTreeConverter",
    "TreeBuilder",
    "ArchivePacker",
    "read_entries",
    "FileNode",
    "FolderNode",
    "ConversionOptions",
    "ConversionResult",
    "ArchiveResult",
    "ParseError",
    "StructureError",
    "ArchiveError",
]
