"""
JSON Engine (Raw Input → Value Model).

JSON is the source-of-truth format: every other engine's tree can be
exported to it (see parselab.serialization), and it is the first format
tried by content sniffing.
"""

import json
import logging

from .errors import ErrorKind, Format, ParseError
from .values import Value, from_native

logger = logging.getLogger(__name__)


def _reject_constant(name: str):
    raise ParseError(Format.JSON, ErrorKind.PARSING_FAILED, f"Non-finite number: {name}")


def parse_json(json_content: str) -> Value:
    """
    Parse JSON text into a Value tree.

    Raises:
        ParseError: EMPTY_CONTENT for blank input, PARSING_FAILED for
                    invalid JSON or NaN/Infinity, INVALID_KEY_VALUE for
                    an empty key
    """
    if not json_content.strip():
        raise ParseError(Format.JSON, ErrorKind.EMPTY_CONTENT, "JSON content is empty")

    try:
        data = json.loads(json_content, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ParseError(Format.JSON, ErrorKind.PARSING_FAILED, e.msg, e.lineno) from e

    value = from_native(data, Format.JSON)
    logger.debug("Parsed JSON root of type %s", value.type_name)
    return value


def is_json(content: str) -> bool:
    """Explicit JSON shape: bounded by {} or [] and actually parseable."""
    trimmed = content.strip()
    bounded = (trimmed.startswith("{") and trimmed.endswith("}")) or (
        trimmed.startswith("[") and trimmed.endswith("]")
    )
    if not bounded:
        return False
    try:
        json.loads(trimmed)
    except ValueError:
        return False
    return True


__all__ = ["parse_json", "is_json"]
