"""
XML Engine (Raw Input → Value Model).

Event-driven builder over the standard SAX tokenizer. The tokenizer owns
well-formedness; this module owns the FOLDING RULES:

    - attributes become "@name" entries
    - trimmed text becomes "_text", or the whole element when the element
      has no attributes and no children; a child element literally named
      "_text" folds together with the text into an Array
    - repeated sibling tags fold into an Array (a single occurrence does
      NOT become a one-element Array)
    - the result is {rootTag: <folded root>}, not the bare root value

XML is parse-only: there is no serializer back to XML.
"""

import logging
import re
import xml.sax
import xml.sax.handler
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import ErrorKind, Format, ParseError
from .values import VArray, VObject, VString, Value

logger = logging.getLogger(__name__)

ATTRIBUTE_PREFIX = "@"
TEXT_KEY = "_text"


@dataclass
class _OpenElement:
    """An element whose end tag has not been seen yet."""
    name: str
    members: VObject
    has_attributes: bool
    text: List[str] = field(default_factory=list)
    has_children: bool = False


def _merge_child(parent: VObject, name: str, value: Value) -> None:
    existing = parent.get(name)
    if existing is None:
        parent.set(name, value)
    elif isinstance(existing, VArray):
        existing.items.append(value)
    else:
        parent.set(name, VArray([existing, value]))


class _TreeBuilder(xml.sax.handler.ContentHandler):
    """SAX handler that folds elements into the Value Model."""

    def __init__(self):
        super().__init__()
        self.stack: List[_OpenElement] = []
        self.root: Optional[VObject] = None

    def startElement(self, name, attrs):
        members = VObject()
        for attr_name in attrs.getNames():
            members.set(ATTRIBUTE_PREFIX + attr_name, VString(attrs.getValue(attr_name)))
        if self.stack:
            self.stack[-1].has_children = True
        self.stack.append(_OpenElement(name=name, members=members, has_attributes=len(members) > 0))

    def characters(self, content):
        if self.stack:
            self.stack[-1].text.append(content)

    def endElement(self, name):
        element = self.stack.pop()
        text = "".join(element.text).strip()

        value: Value
        if text and not element.has_attributes and not element.has_children:
            value = VString(text)
        else:
            if text:
                _merge_child(element.members, TEXT_KEY, VString(text))
            value = element.members if len(element.members) else VString("")

        if self.stack:
            _merge_child(self.stack[-1].members, name, value)
        else:
            self.root = VObject({name: value})


def parse_xml(xml_content: str) -> VObject:
    """
    Parse XML content into {rootTag: folded value}.

    Args:
        xml_content: XML text

    Returns:
        VObject with the root tag name as its only key

    Raises:
        ParseError: EMPTY_CONTENT for blank input, PARSING_FAILED for any
                    well-formedness violation (no partial tree)
    """
    if not xml_content.strip():
        raise ParseError(Format.XML, ErrorKind.EMPTY_CONTENT, "XML content is empty")

    builder = _TreeBuilder()
    parser = xml.sax.make_parser()
    parser.setFeature(xml.sax.handler.feature_namespaces, False)
    parser.setFeature(xml.sax.handler.feature_external_ges, False)
    parser.setContentHandler(builder)

    # The XML declaration must be the very first thing the tokenizer sees.
    body = xml_content.lstrip()
    skipped_lines = xml_content[: len(xml_content) - len(body)].count("\n")

    try:
        parser.feed(body)
        parser.close()
    except xml.sax.SAXParseException as e:
        raise ParseError(Format.XML, ErrorKind.PARSING_FAILED, e.getMessage(), e.getLineNumber() + skipped_lines) from e
    except xml.sax.SAXException as e:
        raise ParseError(Format.XML, ErrorKind.PARSING_FAILED, str(e)) from e

    if builder.root is None:
        raise ParseError(Format.XML, ErrorKind.PARSING_FAILED, "No root element")

    logger.debug("Parsed XML root <%s>", next(iter(builder.root.members)))
    return builder.root


def is_xml(content: str) -> bool:
    """
    Heuristic: XML declaration, or opening and closing tag markers plus a
    plain opening tag.
    """
    trimmed = content.strip()
    if trimmed.startswith("<?xml"):
        return True
    has_tags = "<" in trimmed and ">" in trimmed
    has_closing = "</" in trimmed or "/>" in trimmed
    has_root = re.search(r"<[^/?>]+>", trimmed) is not None
    return has_tags and has_closing and has_root


__all__ = ["parse_xml", "is_xml"]
