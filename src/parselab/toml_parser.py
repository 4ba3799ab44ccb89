"""
TOML Engine (Raw Input → Value Model).

Best-effort, line-oriented subset of TOML:
    [table]              → Object under "table", becomes the active target
    [[name]]             → append a fresh Object to the Array "name"
    key = value          → assign into the active target

Value coercion, first match wins:
    integer → float → true/false → quoted string → [flat, array] → raw string

NOT parsed as TOML structure (kept as raw text or skipped):
    - multi-line (triple-quoted) strings
    - dotted keys ("a.b = 1" assigns the literal key "a.b")
    - inline tables ({ ... })
    - nested arrays (only the outer pair of brackets is understood)

Leniency:
    By default unrecognised lines are skipped, and a header that redefines
    a key of another shape is ignored along with its keys. With strict=True
    the first raises INVALID_FORMAT and the second INVALID_SECTION. Empty
    keys and empty table names always raise.
"""

import logging
import re
from typing import List, Optional

from .config import get_settings
from .errors import ErrorKind, Format, ParseError
from .values import VArray, VBool, VObject, VString, Value, coerce_number

logger = logging.getLogger(__name__)

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def _strip_inline_comment(line: str) -> str:
    """Drop a trailing '# ...' that is not inside a quoted string."""
    quote: Optional[str] = None
    for i, char in enumerate(line):
        if quote:
            if char == quote:
                quote = None
        elif char in ('"', "'"):
            quote = char
        elif char == "#":
            return line[:i].rstrip()
    return line


def _is_quoted(text: str) -> bool:
    return len(text) >= 2 and text[0] == text[-1] and text[0] in ('"', "'")


def _split_top_level(inner: str) -> List[str]:
    """Split array content on commas that are not inside quotes."""
    parts: List[str] = []
    current: List[str] = []
    quote: Optional[str] = None
    for char in inner:
        if quote:
            current.append(char)
            if char == quote:
                quote = None
        elif char in ('"', "'"):
            quote = char
            current.append(char)
        elif char == ",":
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return [p.strip() for p in parts if p.strip()]


def coerce_toml_value(raw: str) -> Value:
    """Convert a raw (trimmed) TOML value into a typed Value."""
    number = coerce_number(raw)
    if number is not None:
        return number

    if raw == "true":
        return VBool(True)
    if raw == "false":
        return VBool(False)

    if _is_quoted(raw):
        return VString(raw[1:-1])

    if len(raw) >= 2 and raw.startswith("[") and raw.endswith("]"):
        return VArray([coerce_toml_value(part) for part in _split_top_level(raw[1:-1])])

    return VString(raw)


def _table_name(header: str, brackets: int, line_number: int) -> str:
    name = header[brackets:-brackets].strip()
    if _is_quoted(name):
        name = name[1:-1]
    if not name:
        raise ParseError(Format.TOML, ErrorKind.INVALID_SECTION, "Empty table name", line_number)
    return name


def _clean_key(key: str) -> str:
    key = key.strip()
    return key[1:-1] if _is_quoted(key) else key


def _shape_conflict(name: str, shape: str, line_number: int, strict: bool) -> VObject:
    """
    Handle a header naming a key that already holds another shape.

    Strict mode raises INVALID_SECTION. Lenient mode keeps the existing
    value and returns a detached table, so the header's keys are dropped.
    """
    message = f"'{name}' is already defined and is not {shape}"
    if strict:
        raise ParseError(Format.TOML, ErrorKind.INVALID_SECTION, message, line_number)
    logger.debug("Ignoring TOML header at line %d: %s", line_number, message)
    return VObject()


def parse_toml(toml_content: str, strict: Optional[bool] = None) -> VObject:
    """
    Parse TOML content into a root Object.

    Args:
        toml_content: TOML text
        strict: Raise on unrecognised lines and header shape conflicts;
                defaults to Settings.toml_strict

    Returns:
        Root VObject

    Raises:
        ParseError: EMPTY_CONTENT for blank input,
                    INVALID_SECTION for an empty table name (or, in strict
                    mode, a header that redefines a key of another shape),
                    INVALID_KEY_VALUE for an empty key,
                    INVALID_FORMAT for unrecognised lines in strict mode
    """
    if strict is None:
        strict = get_settings().toml_strict

    if not toml_content.strip():
        raise ParseError(Format.TOML, ErrorKind.EMPTY_CONTENT, "TOML content is empty")

    result = VObject()
    target = result

    for line_number, line in enumerate(_LINE_BREAK_RE.split(toml_content), start=1):
        trimmed = line.strip()

        if not trimmed or trimmed.startswith("#"):
            continue

        trimmed = _strip_inline_comment(trimmed)

        if trimmed.startswith("[[") and trimmed.endswith("]]"):
            name = _table_name(trimmed, 2, line_number)
            existing = result.get(name)
            if existing is None:
                existing = VArray()
                result.set(name, existing)
            elif not isinstance(existing, VArray):
                target = _shape_conflict(name, "an array of tables", line_number, strict)
                continue
            target = VObject()
            existing.items.append(target)
            continue

        if trimmed.startswith("[") and trimmed.endswith("]"):
            name = _table_name(trimmed, 1, line_number)
            existing = result.get(name)
            if existing is None:
                existing = VObject()
                result.set(name, existing)
            elif not isinstance(existing, VObject):
                target = _shape_conflict(name, "a table", line_number, strict)
                continue
            target = existing
            continue

        if "=" in trimmed:
            key, _, raw_value = trimmed.partition("=")
            key = _clean_key(key)
            if not key:
                raise ParseError(Format.TOML, ErrorKind.INVALID_KEY_VALUE, "Empty key", line_number)
            target.set(key, coerce_toml_value(raw_value.strip()))
            continue

        if strict:
            raise ParseError(Format.TOML, ErrorKind.INVALID_FORMAT, f"Invalid TOML line: {trimmed}", line_number)
        logger.debug("Skipping unrecognised TOML line %d: %r", line_number, trimmed)

    logger.debug("Parsed TOML: %d top-level keys", len(result))
    return result


def is_toml(content: str) -> bool:
    """
    Heuristic: TOML-like if it has ' = ' or bracketed headers and does not
    open like JSON ('{' or '[{').
    """
    trimmed = content.strip()
    if trimmed.startswith("{") or trimmed.startswith("[{"):
        return False
    has_key_value = " = " in trimmed
    has_headers = any(
        line.strip().startswith("[") and line.strip().endswith("]")
        for line in _LINE_BREAK_RE.split(trimmed)
    )
    return has_key_value or has_headers


__all__ = ["parse_toml", "is_toml", "coerce_toml_value"]
