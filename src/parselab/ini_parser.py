"""
INI Engine (Raw Input → Value Model).

Line-oriented section/key-value parser.

INI Format:
    ; comment            # comment
    key = value          (before any section: goes to the root object)
    [section]
    key: value           (goes to the "section" object)

Value coercion, first match wins:
    integer → float → boolean word → quoted string → verbatim string

Unlike TOML, INI is strict: a line that is not blank, a comment, a
section header, or a key/value pair aborts the parse.
"""

import logging
import re
from typing import Optional

from .errors import ErrorKind, Format, ParseError
from .values import VBool, VObject, VString, Value, coerce_number

logger = logging.getLogger(__name__)

COMMENT_PREFIXES = (";", "#")
SEPARATORS = ("=", ":")

TRUE_WORDS = {"true", "yes", "on", "1"}
FALSE_WORDS = {"false", "no", "off", "0"}

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def _is_skippable(line: str) -> bool:
    return not line or line.startswith(COMMENT_PREFIXES)


def _is_section_header(line: str) -> bool:
    return line.startswith("[") and line.endswith("]")


def _split_key_value(line: str) -> Optional[tuple]:
    """Split on the first '=' if any, otherwise on the first ':'."""
    for separator in SEPARATORS:
        if separator in line:
            key, _, value = line.partition(separator)
            return key.strip(), value.strip()
    return None


def coerce_ini_value(raw: str) -> Value:
    """Convert a raw (trimmed) INI value into a typed Value."""
    number = coerce_number(raw)
    if number is not None:
        return number

    lowered = raw.lower()
    if lowered in TRUE_WORDS:
        return VBool(True)
    if lowered in FALSE_WORDS:
        return VBool(False)

    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in ('"', "'"):
        return VString(raw[1:-1])

    return VString(raw)


def parse_ini(ini_content: str) -> VObject:
    """
    Parse INI content into a root Object.

    Keys before the first section header populate the root directly;
    keys after `[name]` populate a nested Object under "name". A repeated
    section header reopens (does not replace) the section.

    Args:
        ini_content: INI text

    Returns:
        Root VObject (empty for blank input)

    Raises:
        ParseError: INVALID_SECTION for an empty section name,
                    INVALID_KEY_VALUE for an empty key,
                    INVALID_FORMAT for any other unrecognised line
    """
    result = VObject()
    current_section = ""

    for line_number, line in enumerate(_LINE_BREAK_RE.split(ini_content), start=1):
        trimmed = line.strip()

        if _is_skippable(trimmed):
            continue

        if _is_section_header(trimmed):
            section_name = trimmed[1:-1].strip()
            if not section_name:
                raise ParseError(Format.INI, ErrorKind.INVALID_SECTION, "Empty section name", line_number)

            current_section = section_name
            if not isinstance(result.get(current_section), VObject):
                result.set(current_section, VObject())
            continue

        pair = _split_key_value(trimmed)
        if pair is not None:
            key, raw_value = pair
            if not key:
                raise ParseError(Format.INI, ErrorKind.INVALID_KEY_VALUE, "Empty key", line_number)

            target = result.get(current_section) if current_section else result
            target.set(key, coerce_ini_value(raw_value))
            continue

        raise ParseError(
            Format.INI,
            ErrorKind.INVALID_FORMAT,
            f"Invalid INI format: {trimmed}",
            line_number,
        )

    logger.debug("Parsed INI: %d top-level keys", len(result))
    return result


def is_ini(content: str) -> bool:
    """
    Heuristic: INI-like if, ignoring comments, at least one line is a
    bracketed section header or contains '=' or ':'.
    """
    for line in _LINE_BREAK_RE.split(content):
        trimmed = line.strip()
        if _is_skippable(trimmed):
            continue
        if _is_section_header(trimmed) and trimmed[1:-1].strip():
            return True
        if any(separator in trimmed for separator in SEPARATORS):
            return True
    return False


__all__ = ["parse_ini", "is_ini", "coerce_ini_value"]
