"""Tests for JSON parser."""

import sys
import pytest
from json_filetree.parser import JSONParser
from json_filetree.types import ErrorType, ParseError


class TestJSONParser:
    """Tests for JSONParser class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.parser = JSONParser()

    def test_parse_object(self):
        data = self.parser.parse('{"src": {"index.js": "console.log(1)"}}')

        assert data == {"src": {"index.js": "console.log(1)"}}

    def test_parse_keeps_key_order(self):
        data = self.parser.parse('{"b": 1, "a": 2}')

        assert list(data) == ["b", "a"]

    def test_parse_scalar_root(self):
        """Test scalar documents are accepted."""
        assert self.parser.parse("42") == 42
        assert self.parser.parse("null") is None

    def test_parse_invalid_json(self):
        """Test invalid JSON raises ParseError with a position."""
        with pytest.raises(ParseError) as exc_info:
            self.parser.parse("{invalid}")

        error = exc_info.value
        assert error.error_type == ErrorType.SYNTAX
        assert error.line == 1
        assert error.column == 2
        assert error.position == 1
        assert error.location == "line 1, column 2"
        assert "JSON parsing failed" in str(error)

    def test_parse_error_on_later_line(self):
        with pytest.raises(ParseError) as exc_info:
            self.parser.parse('{\n  "a": 1\n  "b": 2\n}')

        assert exc_info.value.line == 3

    def test_parse_empty_json(self):
        """Test parsing empty JSON string."""
        with pytest.raises(ParseError, match="empty"):
            self.parser.parse("   ")

    def test_parse_non_string(self):
        with pytest.raises(ParseError, match="Input must be a string"):
            self.parser.parse(b"{}")

    def test_parse_oversized_input(self):
        """Test the input size cap."""
        parser = JSONParser(max_input_bytes=10)

        with pytest.raises(ParseError, match="above the limit of 10 bytes") as exc_info:
            parser.parse('{"key": "value"}')

        assert exc_info.value.error_type == ErrorType.SIZE

    def test_input_size_counts_utf8_bytes(self):
        parser = JSONParser(max_input_bytes=4)

        assert parser.parse('"é"') == "é"
        with pytest.raises(ParseError):
            parser.parse('"éé"')

    def test_parse_pathologically_deep_input(self):
        """Test nesting beyond the decoder's recursion limit is reported."""
        with pytest.raises(ParseError) as exc_info:
            self.parser.parse("[" * 100000 + "]" * 100000)

        assert exc_info.value.error_type == ErrorType.DEPTH

    @pytest.mark.parametrize("text,literal", [
        ('{"a": NaN}', "NaN"),
        ('{"a": Infinity}', "Infinity"),
        ("[-Infinity]", "-Infinity"),
    ])
    def test_parse_rejects_non_standard_constants(self, text, literal):
        """Test NaN and Infinity literals are syntax errors."""
        with pytest.raises(ParseError, match=f"{literal} is not a valid JSON value") as exc_info:
            self.parser.parse(text)

        assert exc_info.value.error_type == ErrorType.SYNTAX

    @pytest.mark.skipif(getattr(sys, "get_int_max_str_digits", lambda: 0)() == 0,
                        reason="interpreter has no integer digit limit")
    def test_parse_integer_beyond_digit_limit(self):
        text = '{"n": ' + "9" * (sys.get_int_max_str_digits() + 100) + "}"

        with pytest.raises(ParseError, match="too large") as exc_info:
            self.parser.parse(text)

        assert exc_info.value.error_type == ErrorType.SIZE

    def test_parse_large_float_literal(self):
        assert self.parser.parse("1.5e300") == 1.5e300

    def test_describe_root(self):
        assert JSONParser.describe_root({}) == "object"
        assert JSONParser.describe_root([]) == "array"
        assert JSONParser.describe_root("x") == "scalar"

    def test_structure_statistics(self):
        """Test structure statistics of a parsed value."""
        stats = self.parser.get_structure_statistics({"a": [1, 2, {"b": None}], "c": "x"})

        assert stats == {
            "root_type": "object",
            "max_depth": 3,
            "object_count": 2,
            "array_count": 1,
            "scalar_count": 4,
            "total_keys": 3,
            "total_items": 3,
        }
