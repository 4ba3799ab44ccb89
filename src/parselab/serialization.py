"""
Serialization helpers for Value trees.

JSON (indented, key-sorted) is the single export format every engine
funnels into for display. YAML, INI and TOML writers exist for save-back;
INI and TOML only represent the shapes their parsers produce.

XML is parse-only and has no writer here; CSV save-back lives with the
CSV document (parselab.csv_parser).
"""

from __future__ import annotations

import json
from typing import List, Optional

import yaml

from parselab.config import get_settings
from parselab.errors import ErrorKind, Format, ParseError
from parselab.ini_parser import coerce_ini_value
from parselab.values import (
    VArray,
    VBool,
    VNull,
    VNumber,
    VObject,
    VString,
    Value,
    is_container,
    number_text,
    to_native,
)


def _dump_json(value: Value, **options) -> str:
    try:
        return json.dumps(to_native(value), ensure_ascii=False, allow_nan=False, **options)
    except ValueError as e:
        raise ParseError(Format.JSON, ErrorKind.CONVERSION_FAILED, str(e)) from e


def to_pretty_json(value: Value, indent: Optional[int] = None) -> str:
    """Indented, key-sorted JSON; indent defaults to Settings.json_indent."""
    if indent is None:
        indent = get_settings().json_indent
    return _dump_json(value, indent=indent, sort_keys=True)


def to_compact_json(value: Value) -> str:
    return _dump_json(value, separators=(",", ":"))


def to_yaml(value: Value) -> str:
    return yaml.safe_dump(to_native(value), allow_unicode=True, sort_keys=False)


def _quote(text: str) -> str:
    return '"' + text + '"'


def _check_single_line(text: str, engine: Format) -> str:
    if "\n" in text or "\r" in text:
        raise ParseError(engine, ErrorKind.CONVERSION_FAILED, f"Line break in {text!r} cannot be written as {engine.name}")
    return text


def _ini_key(key: str) -> str:
    """Keys the INI parser would misread (comments, headers, separators) are rejected."""
    _check_single_line(key, Format.INI)
    if not key or key != key.strip() or key.startswith((";", "#", "[")) or "=" in key:
        raise ParseError(Format.INI, ErrorKind.CONVERSION_FAILED, f"Cannot write {key!r} as an INI key")
    return key


def _ini_scalar(value: Value) -> str:
    if isinstance(value, VBool):
        return "true" if value.value else "false"
    if isinstance(value, VNumber):
        return number_text(value.value)
    if isinstance(value, VNull):
        return ""
    if isinstance(value, VString):
        text = _check_single_line(value.value, Format.INI)
        # Quote anything the INI coercion would otherwise turn into a non-string.
        if text != text.strip() or not isinstance(coerce_ini_value(text), VString) or (
            len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'"
        ):
            return _quote(text)
        return text
    raise ParseError(Format.INI, ErrorKind.CONVERSION_FAILED, f"Cannot write {value.type_name} as an INI value")


def to_ini(value: Value) -> str:
    """
    Write root scalars first, then one [section] per nested Object.

    Raises:
        ParseError: CONVERSION_FAILED for a non-Object root, arrays,
                    objects nested more than one level, line breaks, or
                    keys the parser would read as comments or headers
    """
    if not isinstance(value, VObject):
        raise ParseError(Format.INI, ErrorKind.CONVERSION_FAILED, "INI needs an object at the root")

    lines: List[str] = []
    sections = []
    for key, child in value.members.items():
        if isinstance(child, VObject):
            sections.append((key, child))
        else:
            lines.append(f"{_ini_key(key)} = {_ini_scalar(child)}")

    for name, section in sections:
        if lines:
            lines.append("")
        lines.append(f"[{_ini_key(name)}]")
        for key, child in section.members.items():
            lines.append(f"{_ini_key(key)} = {_ini_scalar(child)}")

    return "\n".join(lines) + "\n" if lines else ""


def _toml_scalar(value: Value) -> str:
    if isinstance(value, VBool):
        return "true" if value.value else "false"
    if isinstance(value, VNumber):
        return number_text(value.value)
    if isinstance(value, VString):
        return _quote(_check_single_line(value.value, Format.TOML))
    if isinstance(value, VArray):
        if any(is_container(item) for item in value.items):
            raise ParseError(Format.TOML, ErrorKind.CONVERSION_FAILED, "Nested arrays cannot be written as TOML")
        return "[" + ", ".join(_toml_scalar(item) for item in value.items) + "]"
    raise ParseError(Format.TOML, ErrorKind.CONVERSION_FAILED, f"Cannot write {value.type_name} as a TOML value")


def _toml_key(key: str) -> str:
    _check_single_line(key, Format.TOML)
    if key != key.strip() or any(ch in key for ch in "=#[]\"'"):
        return _quote(key)
    return key


def _toml_body(table: VObject, lines: List[str]) -> None:
    for key, child in table.members.items():
        if isinstance(child, VObject):
            raise ParseError(Format.TOML, ErrorKind.CONVERSION_FAILED, f"Nested table '{key}' is not supported")
        lines.append(f"{_toml_key(key)} = {_toml_scalar(child)}")


def _is_array_of_tables(value: Value) -> bool:
    return isinstance(value, VArray) and len(value.items) > 0 and all(
        isinstance(item, VObject) for item in value.items
    )


def to_toml(value: Value) -> str:
    """
    Write root key/values, then [tables], then [[arrays of tables]].

    Raises:
        ParseError: CONVERSION_FAILED for shapes the TOML subset cannot hold
    """
    if not isinstance(value, VObject):
        raise ParseError(Format.TOML, ErrorKind.CONVERSION_FAILED, "TOML needs an object at the root")

    lines: List[str] = []
    tables = []
    for key, child in value.members.items():
        if isinstance(child, VObject) or _is_array_of_tables(child):
            tables.append((key, child))
        else:
            lines.append(f"{_toml_key(key)} = {_toml_scalar(child)}")

    for name, child in tables:
        entries = child.items if isinstance(child, VArray) else [child]
        name = _toml_key(name)
        header = f"[[{name}]]" if isinstance(child, VArray) else f"[{name}]"
        for entry in entries:
            if lines:
                lines.append("")
            lines.append(header)
            _toml_body(entry, lines)

    return "\n".join(lines) + "\n" if lines else ""


__all__ = [
    "to_pretty_json",
    "to_compact_json",
    "to_yaml",
    "to_ini",
    "to_toml",
]
