"""
Format dispatch: extension mapping, content sniffing, and one parse entry
point for every engine.

Sniffing precedence (most structurally distinctive first):
    JSON → PLIST → XML → YAML → TOML → INI

Each predicate is only tried when every earlier one failed. CSV is never
sniffed from content; it is only selected by extension or explicitly.
"""

from __future__ import annotations

import logging
import os
from typing import Callable, Dict, List, Optional, Tuple, Union

from .backends import is_plist, is_yaml, parse_plist, parse_yaml
from .csv_parser import csv_to_value, parse_csv_string
from .errors import ErrorKind, Format, ParseError
from .ini_parser import is_ini, parse_ini
from .json_parser import is_json, parse_json
from .serialization import to_pretty_json
from .toml_parser import is_toml, parse_toml
from .values import Value
from .xml_parser import is_xml, parse_xml

logger = logging.getLogger(__name__)

EXTENSIONS: Dict[str, Format] = {
    "json": Format.JSON,
    "yaml": Format.YAML,
    "yml": Format.YAML,
    "toml": Format.TOML,
    "ini": Format.INI,
    "xml": Format.XML,
    "csv": Format.CSV,
    "plist": Format.PLIST,
}

SNIFF_ORDER: List[Tuple[Format, Callable[[str], bool]]] = [
    (Format.JSON, is_json),
    (Format.PLIST, is_plist),
    (Format.XML, is_xml),
    (Format.YAML, is_yaml),
    (Format.TOML, is_toml),
    (Format.INI, is_ini),
]


def _parse_csv(text: str) -> Value:
    return csv_to_value(parse_csv_string(text))


PARSERS: Dict[Format, Callable[[str], Value]] = {
    Format.JSON: parse_json,
    Format.YAML: parse_yaml,
    Format.TOML: parse_toml,
    Format.INI: parse_ini,
    Format.XML: parse_xml,
    Format.CSV: _parse_csv,
    Format.PLIST: parse_plist,
}


def format_from_extension(extension: Optional[str]) -> Optional[Format]:
    """
    Map a file extension (or file name) to a Format.

    Accepts "toml", ".toml" and "config.toml"; case-insensitive.
    """
    if not extension:
        return None
    ext = os.path.splitext(extension)[1] or extension
    return EXTENSIONS.get(ext.lstrip(".").lower())


def detect_format(content: Union[str, bytes], extension: Optional[str] = None) -> Optional[Format]:
    """
    Decide which engine should parse `content`.

    Args:
        content: Text (or raw bytes) of the document
        extension: Optional extension or file name; wins when recognised

    Returns:
        Format, or None if no predicate matched
    """
    by_extension = format_from_extension(extension)
    if by_extension is not None:
        return by_extension

    if isinstance(content, bytes):
        if is_plist(content):
            return Format.PLIST
        content = content.decode("utf-8-sig", errors="replace")

    for fmt, predicate in SNIFF_ORDER:
        if predicate(content):
            logger.debug("Sniffed content as %s", fmt.name)
            return fmt

    logger.debug("No format matched %d characters of content", len(content))
    return None


def parse_document(
    content: Union[str, bytes],
    fmt: Optional[Format] = None,
    extension: Optional[str] = None,
) -> Value:
    """
    Parse a complete buffer into the Value Model.

    Args:
        content: Text or bytes (bytes are decoded as UTF-8, except binary
                 property lists)
        fmt: Declared format; sniffed when omitted
        extension: Extension used for detection when fmt is omitted

    Returns:
        Value tree (CSV comes back as an Array of Objects keyed by header)

    Raises:
        ParseError: From the selected engine, or PARSING_FAILED when the
                    format cannot be determined or bytes are not UTF-8
    """
    if fmt is None:
        fmt = detect_format(content, extension)
        if fmt is None:
            raise ParseError(None, ErrorKind.PARSING_FAILED, "Unable to determine the document format")

    if isinstance(content, bytes):
        if fmt is Format.PLIST:
            return parse_plist(content)
        try:
            content = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError(fmt, ErrorKind.PARSING_FAILED, f"Content is not valid UTF-8: {e}") from e

    logger.debug("Parsing %d characters as %s", len(content), fmt.name)
    return PARSERS[fmt](content)


def convert_to_pretty_json(
    content: Union[str, bytes],
    fmt: Optional[Format] = None,
    extension: Optional[str] = None,
    indent: Optional[int] = None,
) -> str:
    """Parse with parse_document and render indented, key-sorted JSON."""
    return to_pretty_json(parse_document(content, fmt, extension), indent=indent)


__all__ = [
    "EXTENSIONS",
    "format_from_extension",
    "detect_format",
    "parse_document",
    "convert_to_pretty_json",
]
