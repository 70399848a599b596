"""Integration tests for the JSON file tree converter."""

import asyncio
import io
import json
import logging
import zipfile
import pytest
from json_filetree import JSONFileTreeConverter, ConversionOptions, FileNode, FolderNode
from json_filetree.archive_packer import read_entries
from json_filetree.types import ErrorType


class TestBuildTree:
    """Tests for JSONFileTreeConverter.build_tree."""

    def setup_method(self):
        """Set up test fixtures."""
        self.converter = JSONFileTreeConverter()

    def test_build_nested_example(self):
        result = self.converter.build_tree('{"src":{"index.js":"console.log(1)"}}')

        assert result.success
        assert result.errors is None
        assert result.nodes == [
            FolderNode(name="src", path="src", children=[
                FileNode(name="index.js", path="src/index.js", content="console.log(1)"),
            ])
        ]
        assert result.file_count == 1
        assert result.folder_count == 1
        assert result.total_size == 14

    def test_build_scalar_document(self):
        """Test a scalar document is a single file, not an error."""
        result = self.converter.build_tree("42")

        assert result.success
        assert result.nodes == [FileNode(name="data", path="data", content="42")]

    def test_build_invalid_json(self):
        """Test invalid JSON yields a parse error and no tree."""
        result = self.converter.build_tree("{invalid}")

        assert not result.success
        assert result.nodes == []
        assert len(result.errors) == 1
        assert result.errors[0].kind == ErrorType.SYNTAX
        assert result.errors[0].location == "line 1, column 2"

    @pytest.mark.parametrize("text", ['{"a": NaN}', '{"a": Infinity}', "[-Infinity]"])
    def test_build_rejects_non_standard_constants(self, text):
        result = self.converter.build_tree(text)

        assert not result.success
        assert result.nodes == []
        assert result.errors[0].kind == ErrorType.SYNTAX

    def test_validate_input(self, deep_json_text, caplog):
        with caplog.at_level(logging.WARNING):
            result = self.converter.validate_input(deep_json_text)

        assert result.is_valid
        assert "Deep nesting detected" in caplog.text

    def test_validate_input_invalid(self):
        result = self.converter.validate_input('{"a": NaN}')

        assert not result.is_valid
        assert result.errors[0].type == ErrorType.SYNTAX

    def test_build_structure_error(self):
        result = self.converter.build_tree('{"a": {"b": {"type": "file"}}}')

        assert not result.success
        assert result.nodes == []
        assert result.errors[0].kind == ErrorType.STRUCTURE
        assert result.errors[0].location == "a/b"

    def test_build_depth_limit(self, deep_json_text):
        converter = JSONFileTreeConverter(ConversionOptions(max_depth=10))

        result = converter.build_tree(deep_json_text)

        assert not result.success
        assert result.errors[0].kind == ErrorType.DEPTH

    def test_build_input_size_limit(self):
        converter = JSONFileTreeConverter(ConversionOptions(max_input_bytes=8))

        result = converter.build_tree('{"a": "long value"}')

        assert not result.success
        assert result.errors[0].kind == ErrorType.SIZE

    def test_build_is_idempotent(self, sample_project_text):
        first = self.converter.build_tree(sample_project_text)
        second = self.converter.build_tree(sample_project_text)

        assert first == second

    def test_errors_are_logged(self, caplog):
        with caplog.at_level(logging.ERROR):
            self.converter.build_tree("[1,")

        assert any("Conversion error: syntax" in record.message for record in caplog.records)

    def test_profiling(self, sample_project_text):
        converter = JSONFileTreeConverter(enable_profiling=True)

        converter.build_tree(sample_project_text)
        converter.convert_to_archive_sync(sample_project_text)

        history = converter.profiler.metrics_history
        assert [m.operation_name for m in history] == ["build_tree", "convert_to_archive"]
        assert history[0].items_created == 12


class TestConvertToArchive:
    """Tests for archive conversion."""

    def setup_method(self):
        """Set up test fixtures."""
        self.converter = JSONFileTreeConverter()

    @pytest.mark.asyncio
    async def test_convert_nested_example(self):
        result = await self.converter.convert_to_archive('{"src":{"index.js":"console.log(1)"}}')

        assert result.success
        assert result.entry_count == 1
        assert result.archive_size == len(result.archive)
        with zipfile.ZipFile(io.BytesIO(result.archive)) as zf:
            assert zf.namelist() == ["src/index.js"]
            assert zf.read("src/index.js") == b"console.log(1)"

    @pytest.mark.asyncio
    async def test_convert_array_example(self):
        result = await self.converter.convert_to_archive('{"list":[1,2,{"a":3}]}')

        entries = read_entries(result.archive)
        assert [(e.path, e.content) for e in entries] == [
            ("list/item_0", b"1"),
            ("list/item_1", b"2"),
            ("list/item_2/a", b"3"),
        ]

    @pytest.mark.asyncio
    async def test_convert_empty_object(self):
        """Test an empty object gives an archive without entries."""
        result = await self.converter.convert_to_archive("{}")

        assert result.success
        assert result.entry_count == 0
        assert read_entries(result.archive) == []

    @pytest.mark.asyncio
    async def test_convert_invalid_json(self):
        result = await self.converter.convert_to_archive("{invalid}")

        assert not result.success
        assert result.archive is None
        assert result.errors[0].kind == ErrorType.SYNTAX

    @pytest.mark.asyncio
    async def test_convert_project(self, sample_project_json):
        result = await self.converter.convert_to_archive(json.dumps(sample_project_json))

        entries = {e.path: e.content for e in read_entries(result.archive)}
        assert entries == {
            "src/index.js": b"console.log(1)",
            "src/utils/math.js": b"export const add = (a, b) => a + b",
            "README.md": b"# Demo",
            "package.json": b'{\n  "name": "demo",\n  "version": "1.0.0"\n}',
            "LICENSE": b"MIT",
            "empty/": b"",
            "config/debug": b"true",
            "config/retries": b"3",
            "config/proxy": b"null",
        }

    @pytest.mark.asyncio
    async def test_overlapping_conversions(self):
        """Test concurrent conversions on one converter stay independent."""
        converter = JSONFileTreeConverter(enable_profiling=True)
        texts = [json.dumps({f"doc_{i}": {"value": i}}) for i in range(4)] + ["{bad"]

        results = await asyncio.gather(*(converter.convert_to_archive(t) for t in texts))

        for i, result in enumerate(results[:4]):
            assert result.success
            assert read_entries(result.archive)[0].path == f"doc_{i}/value"
        assert not results[4].success

    def test_convert_sync(self):
        result = self.converter.convert_to_archive_sync('{"a": "b"}')

        assert result.success
        assert read_entries(result.archive)[0].content == b"b"

    def test_pack_existing_tree(self):
        """Test packing a tree built earlier, as a UI would on download."""
        tree = self.converter.build_tree('{"a": {"b": "c"}, "d": {}}')

        result = self.converter.pack_tree(tree.nodes)

        assert result.success
        assert result.entry_count == 2
        assert [e.path for e in read_entries(result.archive)] == ["a/b", "d/"]

    def test_convert_unpaired_surrogate(self):
        """Test valid JSON with an escaped lone surrogate converts."""
        tree = self.converter.build_tree('{"a": "\\ud800"}')
        result = self.converter.convert_to_archive_sync('{"a": "\\ud800"}')

        assert result.success
        entry = read_entries(result.archive)[0]
        assert entry.path == "a"
        assert len(entry.content) == tree.total_size == 3

    def test_pack_failure_is_reported(self, monkeypatch):
        def failing_writestr(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(zipfile.ZipFile, "writestr", failing_writestr)

        result = self.converter.convert_to_archive_sync('{"a": "b"}')

        assert not result.success
        assert result.archive is None
        assert result.errors[0].kind == ErrorType.ARCHIVE
        assert result.errors[0].location == "a"

    @pytest.mark.asyncio
    async def test_pack_tree_async(self):
        tree = self.converter.build_tree('["x"]')

        result = await self.converter.pack_tree_async(tree.nodes)

        assert result.success
        assert read_entries(result.archive)[0].path == "item_0"
