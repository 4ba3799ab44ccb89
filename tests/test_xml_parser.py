"""
Tests for the XML engine.

We need to:
1. Wrap the result as {rootTag: value}
2. Fold repeated siblings into an Array, but never a single occurrence
3. Keep attributes as "@name" and mixed text as "_text"
4. Reject malformed documents with PARSING_FAILED and no partial tree
"""

import pytest

from parselab.errors import ErrorKind, Format, ParseError
from parselab.examples import SAMPLE_XML
from parselab.values import VArray, VObject, VString
from parselab.xml_parser import is_xml, parse_xml


class TestFolding:
    """Element → Value folding rules."""

    def test_repeated_siblings_fold_into_array(self):
        result = parse_xml("<r><i>1</i><i>2</i></r>")
        assert result == VObject({"r": VObject({"i": VArray([VString("1"), VString("2")])})})

    def test_single_child_is_not_an_array(self):
        result = parse_xml("<r><i>1</i></r>")
        assert result == VObject({"r": VObject({"i": VString("1")})})

    def test_three_siblings_stay_in_order(self):
        result = parse_xml("<r><i>a</i><i>b</i><i>c</i></r>")
        assert result.get("r").get("i") == VArray([VString("a"), VString("b"), VString("c")])

    def test_text_only_root(self):
        assert parse_xml("<greeting> hello </greeting>") == VObject({"greeting": VString("hello")})

    def test_attributes(self):
        result = parse_xml('<book id="7" lang="en"/>')
        assert result == VObject({"book": VObject({"@id": VString("7"), "@lang": VString("en")})})

    def test_attributes_with_text(self):
        result = parse_xml('<price currency="EUR">5.95</price>')
        assert result.get("price") == VObject({"@currency": VString("EUR"), "_text": VString("5.95")})

    def test_text_next_to_children(self):
        result = parse_xml("<p>intro<b>bold</b></p>")
        assert result.get("p") == VObject({"b": VString("bold"), "_text": VString("intro")})

    def test_empty_element(self):
        assert parse_xml("<r><empty/></r>") == VObject({"r": VObject({"empty": VString("")})})

    def test_numbers_stay_strings(self):
        assert parse_xml("<n>42</n>").get("n") == VString("42")

    def test_entities_are_decoded(self):
        assert parse_xml("<t>a &amp; b</t>").get("t") == VString("a & b")

    def test_declaration_after_leading_whitespace(self):
        result = parse_xml('\n  <?xml version="1.0"?>\n<r/>')
        assert result == VObject({"r": VString("")})

    def test_sample_document(self):
        catalog = parse_xml(SAMPLE_XML).get("catalog")
        assert catalog.get("@region") == VString("eu")
        books = catalog.get("book")
        assert isinstance(books, VArray)
        assert len(books) == 2
        assert books.items[0].get("title") == VString("XML Developer's Guide")
        assert books.items[1].get("price").get("_text") == VString("5.95")
        assert catalog.get("publisher") == VString("Example Press")

    def test_child_named_like_the_text_key(self):
        """A <_text> child and the element's own text both survive."""
        result = parse_xml("<p>hi<_text>c</_text></p>")
        assert result.get("p") == VObject({"_text": VArray([VString("c"), VString("hi")])})


class TestErrors:
    """Malformed input."""

    def test_mismatched_tags(self):
        with pytest.raises(ParseError) as exc_info:
            parse_xml("<a>\n<b>\n</a>")
        assert exc_info.value.engine == Format.XML
        assert exc_info.value.kind == ErrorKind.PARSING_FAILED
        assert exc_info.value.line == 3

    def test_unclosed_root(self):
        with pytest.raises(ParseError) as exc_info:
            parse_xml("<a><b>text</b>")
        assert exc_info.value.kind == ErrorKind.PARSING_FAILED

    def test_not_xml(self):
        with pytest.raises(ParseError):
            parse_xml("just text")

    def test_empty(self):
        with pytest.raises(ParseError) as exc_info:
            parse_xml("  ")
        assert exc_info.value.kind == ErrorKind.EMPTY_CONTENT


class TestDetection:
    """is_xml heuristic."""

    def test_declaration(self):
        assert is_xml('<?xml version="1.0"?><r/>')

    def test_tags(self):
        assert is_xml("<r><i>1</i></r>")

    def test_plain_text(self):
        assert not is_xml("a < b > c")
