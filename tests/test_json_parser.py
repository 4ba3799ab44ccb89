"""
Tests for the JSON engine.
"""

import pytest

from parselab.errors import ErrorKind, Format, ParseError
from parselab.examples import SAMPLE_JSON
from parselab.json_parser import is_json, parse_json
from parselab.values import VArray, VBool, VNull, VNumber, VObject, VString


class TestParseJson:
    """parse_json."""

    def test_object(self):
        assert parse_json('{"a": 1, "b": [true, null]}') == VObject({
            "a": VNumber(1),
            "b": VArray([VBool(True), VNull()]),
        })

    def test_scalar_root(self):
        assert parse_json('"text"') == VString("text")
        assert parse_json("3.5") == VNumber(3.5)

    def test_integers_stay_integers(self):
        value = parse_json("[10]").items[0]
        assert isinstance(value.value, int)

    def test_sample_document(self):
        value = parse_json(SAMPLE_JSON)
        assert value.get("servers").items[1].get("port") == VNumber(8081)
        assert value.get("owner") == VNull()

    def test_invalid_reports_line(self):
        with pytest.raises(ParseError) as exc_info:
            parse_json('{\n  "a": 1,\n  oops\n}')
        assert exc_info.value.engine == Format.JSON
        assert exc_info.value.kind == ErrorKind.PARSING_FAILED
        assert exc_info.value.line == 3

    def test_empty(self):
        with pytest.raises(ParseError) as exc_info:
            parse_json("")
        assert exc_info.value.kind == ErrorKind.EMPTY_CONTENT

    def test_empty_key(self):
        with pytest.raises(ParseError) as exc_info:
            parse_json('{"": 1}')
        assert exc_info.value.kind == ErrorKind.INVALID_KEY_VALUE

    @pytest.mark.parametrize("text", ['{"a": NaN}', '{"a": Infinity}', "[-Infinity]"])
    def test_non_finite_constants_are_rejected(self, text):
        with pytest.raises(ParseError) as exc_info:
            parse_json(text)
        assert exc_info.value.engine == Format.JSON
        assert exc_info.value.kind == ErrorKind.PARSING_FAILED

    def test_huge_integer_literal_is_rejected(self):
        with pytest.raises(ParseError) as exc_info:
            parse_json("1" + "0" * 400)
        assert exc_info.value.kind == ErrorKind.PARSING_FAILED


class TestIsJson:
    """is_json."""

    @pytest.mark.parametrize("content", ['{"a": 1}', "[1, 2]", "  {}  ", "[]"])
    def test_json(self, content):
        assert is_json(content)

    @pytest.mark.parametrize("content", ["a: 1", "{broken", "[section]", '"bare string"'])
    def test_not_json(self, content):
        assert not is_json(content)
