"""
Property-list backend.

Parsing is delegated to the standard library's plistlib, which reads both
XML and binary (bplist00) property lists.
"""

from __future__ import annotations

import logging
import plistlib
import xml.parsers.expat
from typing import Union

from parselab.errors import ErrorKind, Format, ParseError
from parselab.values import Value, from_native

logger = logging.getLogger(__name__)

BINARY_MAGIC = b"bplist00"


def parse_plist(plist_data: Union[str, bytes]) -> Value:
    """
    Parse an XML or binary property list into a Value tree.

    Dates become ISO-8601 strings and <data> becomes base64 text.

    Raises:
        ParseError: EMPTY_CONTENT for an empty buffer, PARSING_FAILED for
                    anything plistlib rejects
    """
    if isinstance(plist_data, str):
        plist_data = plist_data.encode("utf-8")
    if not plist_data.strip():
        raise ParseError(Format.PLIST, ErrorKind.EMPTY_CONTENT, "Property list is empty")

    try:
        data = plistlib.loads(plist_data)
    except (
        plistlib.InvalidFileException,
        xml.parsers.expat.ExpatError,
        ValueError,
        AttributeError,
        TypeError,
        KeyError,
        IndexError,
    ) as e:
        # plistlib surfaces malformed <date>, <integer> and offset tables as
        # plain Python errors rather than InvalidFileException.
        raise ParseError(Format.PLIST, ErrorKind.PARSING_FAILED, str(e)) from e

    return from_native(data, Format.PLIST)


def is_plist(content: Union[str, bytes]) -> bool:
    """Heuristic: binary magic, or an XML declaration plus a <plist element."""
    if isinstance(content, bytes):
        if content.startswith(BINARY_MAGIC):
            return True
        content = content.decode("utf-8", errors="replace")
    return "<?xml" in content and "<plist" in content


__all__ = ["parse_plist", "is_plist"]
