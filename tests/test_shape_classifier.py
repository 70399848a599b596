"""Tests for shape classification."""

import pytest
from json_filetree.shape_classifier import ShapeClassifier
from json_filetree.types import NodeShape, StructureError


class TestShapeClassifier:
    """Tests for ShapeClassifier class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.classifier = ShapeClassifier()

    @pytest.mark.parametrize("value", ["text", "", 42, 3.5, True, False, None])
    def test_scalars_are_files(self, value):
        assert self.classifier.classify(value) == NodeShape.FILE_SCALAR

    def test_plain_object_is_folder(self):
        """Test the default fallback for objects."""
        assert self.classifier.classify({"a": 1}) == NodeShape.FOLDER

    def test_empty_object_is_folder(self):
        assert self.classifier.classify({}) == NodeShape.FOLDER

    def test_array_is_folder(self):
        """Test arrays are folders even when they look like file content."""
        assert self.classifier.classify([{"content": "x"}]) == NodeShape.FOLDER

    def test_content_wrapper(self):
        """Test objects with a content field are files."""
        assert self.classifier.classify({"content": "hello"}) == NodeShape.FILE_CONTENT

    def test_content_wrapper_wins_over_type_marker(self):
        value = {"type": "file", "content": "a", "data": "b"}

        assert self.classifier.classify(value) == NodeShape.FILE_CONTENT
        assert self.classifier.extract_content(value, NodeShape.FILE_CONTENT) == "a"

    def test_typed_file(self):
        """Test objects marked type=file with data are files."""
        value = {"type": "file", "data": "payload"}

        assert self.classifier.classify(value) == NodeShape.FILE_TYPED

    def test_type_other_than_file_is_folder(self):
        assert self.classifier.classify({"type": "folder", "data": "x"}) == NodeShape.FOLDER

    def test_typed_file_without_data(self):
        """Test file markers missing their payload are rejected."""
        with pytest.raises(StructureError, match="neither 'data' nor 'content'") as exc_info:
            self.classifier.classify({"type": "file"}, path="docs/readme")

        assert exc_info.value.path == "docs/readme"

    def test_root_containers_ignore_file_markers(self):
        assert self.classifier.classify_root({"content": "x"}) == NodeShape.FOLDER
        assert self.classifier.classify_root([]) == NodeShape.FOLDER
        assert self.classifier.classify_root(42) == NodeShape.FILE_SCALAR

    def test_shape_is_file_property(self):
        assert NodeShape.FILE_SCALAR.is_file
        assert NodeShape.FILE_CONTENT.is_file
        assert NodeShape.FILE_TYPED.is_file
        assert not NodeShape.FOLDER.is_file


class TestContentCoercion:
    """Tests for converting JSON values to file text."""

    def setup_method(self):
        """Set up test fixtures."""
        self.classifier = ShapeClassifier()

    def test_string_passes_through(self):
        assert self.classifier.coerce_content("line 1\nline 2") == "line 1\nline 2"

    def test_number(self):
        assert self.classifier.coerce_content(42) == "42"

    def test_boolean(self):
        assert self.classifier.coerce_content(True) == "true"

    def test_null(self):
        assert self.classifier.coerce_content(None) == "null"

    def test_object_uses_two_space_indent(self):
        assert self.classifier.coerce_content({"a": 1}) == '{\n  "a": 1\n}'

    def test_non_ascii_is_kept(self):
        assert self.classifier.coerce_content(["é"]) == '[\n  "é"\n]'

    def test_typed_file_content(self):
        value = {"type": "file", "data": {"k": [1]}}

        content = self.classifier.extract_content(value, NodeShape.FILE_TYPED)

        assert content == '{\n  "k": [\n    1\n  ]\n}'

    def test_folder_has_no_content(self):
        with pytest.raises(ValueError, match="has no file content"):
            self.classifier.extract_content({}, NodeShape.FOLDER)
