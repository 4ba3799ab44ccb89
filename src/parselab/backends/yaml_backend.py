"""
YAML backend.

YAML parsing is delegated to PyYAML (safe loader); this module only adapts
its output to the Value Model and provides the sniffing predicate.
"""

from __future__ import annotations

import logging

import yaml

from parselab.errors import ErrorKind, Format, ParseError
from parselab.values import VObject, Value, from_native

logger = logging.getLogger(__name__)


def parse_yaml(yaml_content: str) -> Value:
    """
    Parse YAML text into a Value tree.

    An empty-but-valid document (only comments, "---") yields an empty
    Object.

    Raises:
        ParseError: EMPTY_CONTENT for blank input, PARSING_FAILED for
                    invalid YAML
    """
    if not yaml_content.strip():
        raise ParseError(Format.YAML, ErrorKind.EMPTY_CONTENT, "YAML content is empty")

    try:
        data = yaml.safe_load(yaml_content)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        line = mark.line + 1 if mark is not None else None
        raise ParseError(Format.YAML, ErrorKind.PARSING_FAILED, str(e), line) from e

    if data is None:
        return VObject()
    return from_native(data, Format.YAML)


def is_yaml(content: str) -> bool:
    """
    Heuristic: has key/value colons, indentation or list items, does not
    open like JSON, and loads into a mapping or a sequence.
    """
    trimmed = content.strip()
    if trimmed.startswith("{") or trimmed.startswith("["):
        return False
    if not (":" in trimmed or "\n " in trimmed or "\n- " in trimmed or trimmed.startswith("- ")):
        return False
    try:
        data = yaml.safe_load(trimmed)
    except yaml.YAMLError:
        return False
    return isinstance(data, (dict, list))


__all__ = ["parse_yaml", "is_yaml"]
