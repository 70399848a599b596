"""Archive packer writing converted trees into in-memory ZIP archives."""

import asyncio
import io
import logging
import zipfile
from typing import Iterator, List, Optional, Tuple, Union
from .types import (
    ArchiveEntry,
    ArchiveError,
    ArchivePackerInterface,
    ConversionOptions
)
from .models import FileNode, FolderNode, TreeNode, encode_content


# Earliest timestamp ZIP can store; fixed so equal trees give equal bytes
FIXED_DATE_TIME = (1980, 1, 1, 0, 0, 0)
DIRECTORY_ATTRIBUTES = (0o40755 << 16) | 0x10
FILE_ATTRIBUTES = 0o100644 << 16


class ArchivePacker(ArchivePackerInterface):
    """
    Packs a tree into a ZIP archive held in memory.

    Files become entries at their full path; folders without children
    become explicit ``path/`` directory entries, while non-empty folders
    are implied by the paths beneath them.
    """

    def __init__(self, options: Optional[ConversionOptions] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the archive packer.

        Args:
            options: Conversion options (compression settings)
            logger: Optional logger instance
        """
        self.options = options or ConversionOptions()
        self.logger = logger or logging.getLogger(__name__)

    def iter_entries(self, node_or_forest: Union[TreeNode, List[TreeNode]]) -> Iterator[ArchiveEntry]:
        """
        Walk a tree depth-first and yield the archive entries it maps to.

        Args:
            node_or_forest: Single node or list of top-level nodes

        Yields:
            ArchiveEntry in packing order
        """
        stack = list(reversed(_as_forest(node_or_forest)))
        while stack:
            node = stack.pop()
            if isinstance(node, FileNode):
                yield ArchiveEntry(path=node.path,
                                   content=encode_content(node.content))
            elif isinstance(node, FolderNode):
                if node.is_empty():
                    yield ArchiveEntry(path=f"{node.path}/", is_directory=True)
                else:
                    stack.extend(reversed(node.children))
            else:
                raise ArchiveError(f"Cannot pack object of type {type(node).__name__}")

    def pack(self, node_or_forest: Union[TreeNode, List[TreeNode]]) -> bytes:
        """
        Pack a tree into ZIP bytes.

        Args:
            node_or_forest: Single node or list of top-level nodes

        Returns:
            The complete archive

        Raises:
            ArchiveError: If any entry cannot be written
        """
        buffer = io.BytesIO()
        entry_count = 0
        current_path = None

        try:
            with zipfile.ZipFile(buffer, "w", compression=self.options.compression,
                                 compresslevel=self.options.compresslevel) as archive:
                for entry in self.iter_entries(node_or_forest):
                    current_path = entry.path
                    archive.writestr(self._make_info(entry), entry.content,
                                     compresslevel=self.options.compresslevel)
                    entry_count += 1
                    self.logger.debug(f"Added archive entry '{entry.path}'")
        except ArchiveError:
            raise
        except (OSError, ValueError, zipfile.LargeZipFile, MemoryError, UnicodeEncodeError) as e:
            raise ArchiveError(f"Failed to generate archive: {e}", path=current_path) from e

        data = buffer.getvalue()
        self.logger.info(f"Packed {entry_count} entries into {len(data)} byte archive")
        return data

    async def pack_async(self, node_or_forest: Union[TreeNode, List[TreeNode]]) -> bytes:
        """Run pack in the event loop's default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.pack, node_or_forest)

    def _make_info(self, entry: ArchiveEntry) -> zipfile.ZipInfo:
        info = zipfile.ZipInfo(entry.path, date_time=FIXED_DATE_TIME)
        if entry.is_directory:
            info.external_attr = DIRECTORY_ATTRIBUTES
            info.compress_type = zipfile.ZIP_STORED
        else:
            info.external_attr = FILE_ATTRIBUTES
            info.compress_type = self.options.compression
        return info


def read_entries(archive_bytes: bytes) -> List[ArchiveEntry]:
    """
    Read every entry of a ZIP archive.

    Args:
        archive_bytes: Archive produced by ArchivePacker.pack

    Returns:
        Entries in archive order

    Raises:
        ArchiveError: If the bytes are not a readable ZIP archive
    """
    entries = []
    try:
        with zipfile.ZipFile(io.BytesIO(archive_bytes)) as archive:
            for info in archive.infolist():
                if info.is_dir():
                    entries.append(ArchiveEntry(path=info.filename, is_directory=True))
                else:
                    entries.append(ArchiveEntry(path=info.filename,
                                                content=archive.read(info)))
    except (zipfile.BadZipFile, OSError) as e:
        raise ArchiveError(f"Failed to read archive: {e}") from e
    return entries


def _as_forest(node_or_forest: Union[TreeNode, List[TreeNode]]) -> List[TreeNode]:
    if isinstance(node_or_forest, (FileNode, FolderNode)):
        return [node_or_forest]
    return list(node_or_forest)
