"""
Tests for the YAML (PyYAML) and property-list (plistlib) backends.
"""

import datetime
import plistlib

import pytest

from parselab.backends import is_plist, is_yaml, parse_plist, parse_yaml
from parselab.errors import ErrorKind, Format, ParseError
from parselab.examples import SAMPLE_PLIST, SAMPLE_YAML
from parselab.values import VArray, VBool, VNull, VNumber, VObject, VString


class TestYamlBackend:
    """parse_yaml / is_yaml."""

    def test_sample_document(self):
        value = parse_yaml(SAMPLE_YAML)
        assert value.get("name") == VString("ParseLab")
        assert value.get("debug") == VBool(False)
        assert value.get("tags") == VArray([VString("viewer"), VString("yaml")])
        assert value.get("servers").items[0].get("port") == VNumber(8080)

    def test_null_values(self):
        assert parse_yaml("a: ~\nb:") == VObject({"a": VNull(), "b": VNull()})

    def test_comment_only_document_is_empty_object(self):
        assert parse_yaml("# nothing\n---\n") == VObject()

    def test_dates_become_strings(self):
        assert parse_yaml("when: 2025-05-16").get("when") == VString("2025-05-16")

    def test_invalid_yaml(self):
        with pytest.raises(ParseError) as exc_info:
            parse_yaml("a: [1, 2\nb: 3")
        assert exc_info.value.engine == Format.YAML
        assert exc_info.value.kind == ErrorKind.PARSING_FAILED
        assert exc_info.value.line is not None

    def test_empty(self):
        with pytest.raises(ParseError) as exc_info:
            parse_yaml("\n")
        assert exc_info.value.kind == ErrorKind.EMPTY_CONTENT

    def test_is_yaml(self):
        assert is_yaml(SAMPLE_YAML)
        assert is_yaml("- a\n- b")
        assert not is_yaml("plain words")
        assert not is_yaml('{"a": 1}')

    def test_shared_anchor_is_copied(self):
        value = parse_yaml("a: &x [1]\nb: *x\n")
        assert value == VObject({"a": VArray([VNumber(1)]), "b": VArray([VNumber(1)])})

    def test_self_referencing_anchor(self):
        with pytest.raises(ParseError) as exc_info:
            parse_yaml("a: &x [1, *x]\n")
        assert exc_info.value.engine == Format.YAML
        assert exc_info.value.kind == ErrorKind.PARSING_FAILED

    @pytest.mark.parametrize("text", ["a: .inf\n", "a: -.inf\n", "a: .nan\n"])
    def test_non_finite_numbers_are_rejected(self, text):
        with pytest.raises(ParseError) as exc_info:
            parse_yaml(text)
        assert exc_info.value.kind == ErrorKind.PARSING_FAILED


class TestPlistBackend:
    """parse_plist / is_plist."""

    def test_xml_plist(self):
        value = parse_plist(SAMPLE_PLIST)
        assert value == VObject({
            "name": VString("ParseLab"),
            "version": VNumber(3),
            "debug": VBool(False),
            "tags": VArray([VString("viewer"), VString("plist")]),
        })

    def test_binary_plist(self):
        data = plistlib.dumps({"a": 1, "b": [True, "x"]}, fmt=plistlib.FMT_BINARY)
        assert is_plist(data)
        assert parse_plist(data) == VObject({
            "a": VNumber(1),
            "b": VArray([VBool(True), VString("x")]),
        })

    def test_dates_and_data(self):
        data = plistlib.dumps({"when": datetime.datetime(2025, 5, 16, 12, 0), "blob": b"hi"})
        value = parse_plist(data)
        assert value.get("when") == VString("2025-05-16T12:00:00")
        assert value.get("blob") == VString("aGk=")

    def test_invalid(self):
        with pytest.raises(ParseError) as exc_info:
            parse_plist(b"definitely not a plist")
        assert exc_info.value.engine == Format.PLIST
        assert exc_info.value.kind == ErrorKind.PARSING_FAILED

    def test_empty(self):
        with pytest.raises(ParseError) as exc_info:
            parse_plist(b"")
        assert exc_info.value.kind == ErrorKind.EMPTY_CONTENT

    def test_is_plist(self):
        assert is_plist(SAMPLE_PLIST)
        assert not is_plist('<?xml version="1.0"?><catalog/>')

    def test_malformed_date(self):
        """plistlib raises a plain ValueError here; it still surfaces as a ParseError."""
        with pytest.raises(ParseError) as exc_info:
            parse_plist("<plist><dict><key>d</key><date>not-a-date</date></dict></plist>")
        assert exc_info.value.engine == Format.PLIST
        assert exc_info.value.kind == ErrorKind.PARSING_FAILED

    def test_malformed_integer(self):
        with pytest.raises(ParseError) as exc_info:
            parse_plist("<plist><dict><key>n</key><integer>12ab</integer></dict></plist>")
        assert exc_info.value.kind == ErrorKind.PARSING_FAILED
