"""
Tests for format dispatch: extensions, sniffing and parse_document.
"""

import plistlib

import pytest

from parselab import convert_to_pretty_json, detect_format, parse_document
from parselab.errors import ErrorKind, Format, ParseError
from parselab.examples import SAMPLES, SAMPLE_CSV, SAMPLE_INI
from parselab.formats import format_from_extension
from parselab.values import VArray, VNumber, VObject, VString


class TestExtensions:
    """format_from_extension."""

    @pytest.mark.parametrize("extension,expected", [
        ("json", Format.JSON),
        (".yaml", Format.YAML),
        ("yml", Format.YAML),
        ("config.TOML", Format.TOML),
        ("settings.ini", Format.INI),
        ("feed.xml", Format.XML),
        ("table.csv", Format.CSV),
        ("Info.plist", Format.PLIST),
    ])
    def test_known(self, extension, expected):
        assert format_from_extension(extension) == expected

    @pytest.mark.parametrize("extension", [None, "", "txt", "notes.md"])
    def test_unknown(self, extension):
        assert format_from_extension(extension) is None


class TestSniffing:
    """detect_format precedence."""

    @pytest.mark.parametrize("fmt", [Format.JSON, Format.YAML, Format.TOML, Format.XML, Format.PLIST])
    def test_samples_sniff_as_themselves(self, fmt):
        assert detect_format(SAMPLES[fmt]) == fmt

    def test_plain_ini(self):
        assert detect_format("name=ParseLab\ncount=3") == Format.INI

    def test_spaced_ini_reads_as_toml(self):
        """' = ' is a TOML marker, so INI needs an extension or explicit format."""
        assert detect_format(SAMPLE_INI) == Format.TOML
        assert detect_format(SAMPLE_INI, extension="app.ini") == Format.INI

    def test_csv_is_never_sniffed(self):
        assert detect_format(SAMPLE_CSV) is None
        assert detect_format(SAMPLE_CSV, extension="csv") == Format.CSV

    def test_extension_wins(self):
        assert detect_format('{"a": 1}', extension="yaml") == Format.YAML

    def test_unrecognised_extension_falls_back_to_sniffing(self):
        assert detect_format('{"a": 1}', extension="txt") == Format.JSON

    def test_binary_plist(self):
        data = plistlib.dumps({"a": 1}, fmt=plistlib.FMT_BINARY)
        assert detect_format(data) == Format.PLIST

    def test_json_bytes_with_bom(self):
        assert detect_format('\ufeff{"a": 1}'.encode("utf-8")) == Format.JSON

    def test_nothing_matches(self):
        assert detect_format("just a sentence") is None


class TestParseDocument:
    """parse_document."""

    def test_explicit_format(self):
        assert parse_document("a=1", fmt=Format.INI) == VObject({"a": VNumber(1)})

    def test_sniffed(self):
        assert parse_document('{"a": [1]}') == VObject({"a": VArray([VNumber(1)])})

    def test_csv_becomes_array_of_objects(self):
        value = parse_document("a,b\n1,2\n", extension="csv")
        assert value == VArray([VObject({"a": VString("1"), "b": VString("2")})])

    def test_bytes(self):
        assert parse_document(b'{"a": 1}') == VObject({"a": VNumber(1)})

    def test_binary_plist_bytes(self):
        data = plistlib.dumps({"a": 1}, fmt=plistlib.FMT_BINARY)
        assert parse_document(data) == VObject({"a": VNumber(1)})

    def test_invalid_utf8(self):
        with pytest.raises(ParseError) as exc_info:
            parse_document(b"\xff\xfe{}", fmt=Format.JSON)
        assert exc_info.value.kind == ErrorKind.PARSING_FAILED

    def test_undetermined_format(self):
        with pytest.raises(ParseError) as exc_info:
            parse_document("just a sentence")
        assert exc_info.value.engine is None
        assert exc_info.value.kind == ErrorKind.PARSING_FAILED
        assert str(exc_info.value).startswith("UNKNOWN")

    def test_engine_error_propagates(self):
        with pytest.raises(ParseError) as exc_info:
            parse_document("[ ]", fmt=Format.INI)
        assert exc_info.value.engine == Format.INI
        assert exc_info.value.kind == ErrorKind.INVALID_SECTION


class TestPrettyJson:
    """convert_to_pretty_json."""

    def test_from_toml(self):
        assert convert_to_pretty_json("b = 2\na = 1", fmt=Format.TOML) == '{\n  "a": 1,\n  "b": 2\n}'

    def test_from_xml(self):
        text = convert_to_pretty_json("<r><i>1</i><i>2</i></r>", indent=0)
        assert text == '{\n"r": {\n"i": [\n"1",\n"2"\n]\n}\n}'

    @pytest.mark.parametrize("fmt", list(Format))
    def test_every_sample_converts(self, fmt):
        assert convert_to_pretty_json(SAMPLES[fmt], fmt=fmt).startswith(("{", "["))
