"""
Core Value Model

Defines the canonical tree that every format engine produces and every
consumer (paths, search, serialization, analysis) reads.

This is a CLOSED union of exactly six variants:
    - VNull (absence/empty)
    - VBool
    - VNumber (int preferred, float otherwise)
    - VString
    - VArray (ordered)
    - VObject (string keys, insertion order kept for display)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about the format they were parsed from
        - Perform no validation (engines reject bad input, not the model)
        - Compare structurally; VObject equality ignores key order
"""

from __future__ import annotations

import base64
import datetime
import math
import re
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Set, Tuple, Union

from .errors import ErrorKind, Format, ParseError

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_INT_RE = re.compile(r"^[+-]?[0-9]+$")
_FLOAT_RE = re.compile(r"^[+-]?([0-9]+\.[0-9]*|\.[0-9]+|[0-9]+)([eE][+-]?[0-9]+)?$")


@dataclass(frozen=True)
class VNull:
    """Absence of a value (JSON null, empty YAML node)."""

    type_name: ClassVar[str] = "null"


@dataclass(frozen=True)
class VBool:
    type_name: ClassVar[str] = "bool"

    value: bool


@dataclass(frozen=True)
class VNumber:
    """
    Numeric scalar.

    Properties:
        value: int when the literal had no fractional/exponent part and
               fits in 64 bits, float otherwise
    """

    type_name: ClassVar[str] = "number"

    value: Union[int, float]


@dataclass(frozen=True)
class VString:
    type_name: ClassVar[str] = "string"

    value: str


@dataclass
class VArray:
    """Ordered sequence of values. Order is significant."""

    type_name: ClassVar[str] = "array"

    items: List["Value"] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)


@dataclass
class VObject:
    """
    Mapping from non-empty string keys to values.

    Insertion order is preserved for display. Equality ignores order
    (plain dict comparison). Assigning an existing key replaces the value:
    last write wins.
    """

    type_name: ClassVar[str] = "object"

    members: Dict[str, "Value"] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.members)

    def __contains__(self, key: str) -> bool:
        return key in self.members

    def get(self, key: str) -> Optional["Value"]:
        return self.members.get(key)

    def set(self, key: str, value: "Value") -> None:
        self.members[key] = value

    def items(self) -> Iterator[Tuple[str, "Value"]]:
        return iter(self.members.items())


Value = Union[VNull, VBool, VNumber, VString, VArray, VObject]

SCALAR_TYPES = (VNull, VBool, VNumber, VString)
CONTAINER_TYPES = (VArray, VObject)


def is_container(value: Value) -> bool:
    return isinstance(value, CONTAINER_TYPES)


def coerce_number(text: str) -> Optional[VNumber]:
    """
    Interpret a literal as a number, or return None.

    Integers that fit in 64 bits stay int; larger integer literals and
    literals with a fraction or exponent become float. Literals that
    overflow to infinity are not numbers.
    """
    if _INT_RE.match(text):
        number = int(text)
        if INT64_MIN <= number <= INT64_MAX:
            return VNumber(number)
        as_float = float(number)
        return VNumber(as_float) if math.isfinite(as_float) else None
    if _FLOAT_RE.match(text):
        as_float = float(text)
        if math.isfinite(as_float):
            return VNumber(as_float)
    return None


def number_text(number: Union[int, float]) -> str:
    """Canonical decimal text of a number: 2.0 renders as "2", 1.5 as "1.5"."""
    if isinstance(number, float):
        if math.isfinite(number) and number.is_integer() and abs(number) < 1e15:
            return str(int(number))
        return repr(number)
    return str(number)


def scalar_text(value: Value) -> Optional[str]:
    """
    Textual form of a scalar, as used by search and tabular export.

    Returns:
        Text for VString/VNumber/VBool/VNull, None for containers
    """
    if isinstance(value, VString):
        return value.value
    if isinstance(value, VBool):
        return "true" if value.value else "false"
    if isinstance(value, VNumber):
        return number_text(value.value)
    if isinstance(value, VNull):
        return "null"
    return None


def _native_key(key: Any, engine: Format) -> str:
    if isinstance(key, str):
        text = key
    else:
        text = scalar_text(from_native(key, engine))
        if text is None:
            raise ParseError(engine, ErrorKind.INVALID_KEY_VALUE, f"Unsupported mapping key: {key!r}")
    if text == "":
        raise ParseError(engine, ErrorKind.INVALID_KEY_VALUE, "Empty key")
    return text


def _native_number(number: Union[int, float], engine: Format) -> VNumber:
    if isinstance(number, int) and INT64_MIN <= number <= INT64_MAX:
        return VNumber(number)
    try:
        as_float = float(number)
    except OverflowError:
        as_float = math.inf
    if not math.isfinite(as_float):
        raise ParseError(engine, ErrorKind.PARSING_FAILED, f"Non-finite number: {number!r}")
    return VNumber(as_float)


def from_native(obj: Any, engine: Format = Format.JSON) -> Value:
    """
    Convert a plain Python structure (json/yaml/plistlib output) to a Value.

    Args:
        obj: dict/list/tuple/str/int/float/bool/None, plus dates and bytes
        engine: Engine blamed when a key is empty or unsupported

    Returns:
        Value tree

    Raises:
        ParseError: On an empty mapping key, a NaN/infinite number, or a
                    container that contains itself (YAML anchors can
                    build those)
    """
    return _from_native(obj, engine, set())


def _from_native(obj: Any, engine: Format, active: Set[int]) -> Value:
    if obj is None:
        return VNull()
    if isinstance(obj, bool):
        return VBool(obj)
    if isinstance(obj, (int, float)):
        return _native_number(obj, engine)
    if isinstance(obj, str):
        return VString(obj)
    if isinstance(obj, (dict, list, tuple)):
        if id(obj) in active:
            raise ParseError(engine, ErrorKind.PARSING_FAILED, "Recursive structure")
        active.add(id(obj))
        try:
            if isinstance(obj, dict):
                return VObject({
                    _native_key(k, engine): _from_native(v, engine, active) for k, v in obj.items()
                })
            return VArray([_from_native(item, engine, active) for item in obj])
        finally:
            active.discard(id(obj))
    if isinstance(obj, (datetime.datetime, datetime.date, datetime.time)):
        return VString(obj.isoformat())
    if isinstance(obj, (bytes, bytearray)):
        return VString(base64.b64encode(bytes(obj)).decode("ascii"))
    return VString(str(obj))


def to_native(value: Value) -> Any:
    """Convert a Value to plain Python data, ready for json/yaml dumping."""
    if isinstance(value, VObject):
        return {key: to_native(child) for key, child in value.members.items()}
    if isinstance(value, VArray):
        return [to_native(item) for item in value.items]
    if isinstance(value, VNull):
        return None
    if isinstance(value, (VBool, VNumber, VString)):
        return value.value
    raise TypeError(f"Unsupported Value type: {type(value)}")


__all__ = [
    "VNull",
    "VBool",
    "VNumber",
    "VString",
    "VArray",
    "VObject",
    "Value",
    "is_container",
    "coerce_number",
    "number_text",
    "scalar_text",
    "from_native",
    "to_native",
]
