"""Main converter tying parsing, tree building and archive packing together."""

import logging
from contextlib import nullcontext
from typing import Any, List, Optional, Union
from .types import (
    ArchiveResult,
    ConversionError,
    ConversionOptions,
    ConversionResult,
    ErrorDetail,
    ErrorType,
    ValidationResult
)
from .models import TreeNode
from .parser import JSONParser
from .tree_builder import TreeBuilder
from .archive_packer import ArchivePacker
from .error_handler import ErrorHandler
from .profiler import PerformanceProfiler
from .utils.size_calculator import SizeCalculator


class JSONFileTreeConverter:
    """
    Converts JSON text into a file tree and a ZIP archive.

    Every public method returns a result object; parse, structure and
    archive failures are reported in ``errors`` instead of being raised.
    Each call builds its own tree and buffer, so overlapping calls are
    independent.
    """

    def __init__(self, options: Optional[ConversionOptions] = None,
                 logger: Optional[logging.Logger] = None,
                 enable_profiling: bool = False):
        """
        Initialize the converter.

        Args:
            options: Conversion options shared by all components
            logger: Optional logger instance
            enable_profiling: Record timing and memory metrics per operation
        """
        self.options = options or ConversionOptions()
        self.logger = logger or logging.getLogger(__name__)

        self.error_handler = ErrorHandler(self.options.max_input_bytes, self.logger)
        self.parser = JSONParser(self.options.max_input_bytes, self.logger)
        self.builder = TreeBuilder(self.options, logger=self.logger)
        self.packer = ArchivePacker(self.options, self.logger)
        self.size_calculator = SizeCalculator(self.logger)
        self.profiler = PerformanceProfiler(self.logger) if enable_profiling else None

    def validate_input(self, json_string: str) -> ValidationResult:
        """
        Check JSON text without building a tree.

        Args:
            json_string: Input JSON text

        Returns:
            ValidationResult with errors and deep-nesting warnings
        """
        return self.error_handler.validate_input(json_string)

    def build_tree(self, json_string: str) -> ConversionResult:
        """
        Parse JSON text and build its file tree.

        Args:
            json_string: Input JSON text

        Returns:
            ConversionResult with the top-level nodes on success
        """
        with self._profile("build_tree", json_string) as session:
            try:
                nodes = self._build(json_string)
            except ConversionError as e:
                return ConversionResult(success=False, errors=[self._report(e)])
            except Exception as e:
                return ConversionResult(success=False, errors=[self._report_unexpected(e)])

            counts = self.size_calculator.count_tree_items(nodes)
            total_size = self.size_calculator.calculate_tree_size(nodes)
            if session:
                session.record_output(total_size, counts["files"] + counts["folders"])

            return ConversionResult(
                success=True,
                nodes=nodes,
                file_count=counts["files"],
                folder_count=counts["folders"],
                total_size=total_size
            )

    def pack_tree(self, nodes: Union[TreeNode, List[TreeNode]]) -> ArchiveResult:
        """
        Pack an already built tree into archive bytes.

        Args:
            nodes: Single node or list of top-level nodes

        Returns:
            ArchiveResult with the archive on success
        """
        try:
            data = self.packer.pack(nodes)
            entry_count = sum(1 for _ in self.packer.iter_entries(nodes))
        except ConversionError as e:
            return ArchiveResult(success=False, errors=[self._report(e)])
        except Exception as e:
            return ArchiveResult(success=False, errors=[self._report_unexpected(e, ErrorType.ARCHIVE)])

        return ArchiveResult(success=True, archive=data,
                             entry_count=entry_count, archive_size=len(data))

    async def pack_tree_async(self, nodes: Union[TreeNode, List[TreeNode]]) -> ArchiveResult:
        """
        Pack an already built tree without blocking the event loop.

        Args:
            nodes: Single node or list of top-level nodes

        Returns:
            ArchiveResult with the archive on success
        """
        try:
            data = await self.packer.pack_async(nodes)
            entry_count = sum(1 for _ in self.packer.iter_entries(nodes))
        except ConversionError as e:
            return ArchiveResult(success=False, errors=[self._report(e)])
        except Exception as e:
            return ArchiveResult(success=False, errors=[self._report_unexpected(e, ErrorType.ARCHIVE)])

        return ArchiveResult(success=True, archive=data,
                             entry_count=entry_count, archive_size=len(data))

    async def convert_to_archive(self, json_string: str) -> ArchiveResult:
        """
        Convert JSON text straight into archive bytes.

        Args:
            json_string: Input JSON text

        Returns:
            ArchiveResult with the archive on success
        """
        with self._profile("convert_to_archive", json_string) as session:
            try:
                nodes = self._build(json_string)
            except ConversionError as e:
                return ArchiveResult(success=False, errors=[self._report(e)])
            except Exception as e:
                return ArchiveResult(success=False, errors=[self._report_unexpected(e)])

            result = await self.pack_tree_async(nodes)
            if session and result.success:
                session.record_output(result.archive_size, result.entry_count)
            return result

    def convert_to_archive_sync(self, json_string: str) -> ArchiveResult:
        """Blocking variant of convert_to_archive."""
        with self._profile("convert_to_archive", json_string) as session:
            try:
                nodes = self._build(json_string)
            except ConversionError as e:
                return ArchiveResult(success=False, errors=[self._report(e)])
            except Exception as e:
                return ArchiveResult(success=False, errors=[self._report_unexpected(e)])

            result = self.pack_tree(nodes)
            if session and result.success:
                session.record_output(result.archive_size, result.entry_count)
            return result

    def _build(self, json_string: str) -> List[TreeNode]:
        data: Any = self.parser.parse(json_string)
        return self.builder.build_forest(data)

    def _profile(self, operation_name: str, json_string: Any):
        if self.profiler is None or not isinstance(json_string, str):
            return nullcontext()
        input_size = len(json_string.encode("utf-8", errors="surrogatepass"))
        return self.profiler.profile_operation(operation_name, input_size)

    def _report(self, error: ConversionError) -> ErrorDetail:
        response = self.error_handler.handle_conversion_error(error)
        self.logger.info(f"Suggested action: {response.suggested_action}")
        return error.to_detail()

    def _report_unexpected(self, error: Exception,
                           kind: ErrorType = ErrorType.STRUCTURE) -> ErrorDetail:
        self.logger.exception(f"Unexpected error during conversion: {error}")
        return ErrorDetail(kind=kind, message=f"Unexpected error: {error}")
