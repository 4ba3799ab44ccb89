"""
Search Engine

Depth-first traversal of a Value tree producing path-annotated matches
for a substring query, over object keys and/or scalar values.

Results are in traversal order (object insertion order, then array index
order), so searching the same tree twice gives identical results.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .config import get_settings
from .paths import Key, Path, path_to_string
from .values import VArray, VBool, VNumber, VObject, VString, Value, scalar_text


class MatchKind(Enum):
    KEY = "key"
    VALUE = "value"


@dataclass(eq=True, frozen=True)
class SearchMatch:
    """
    One search hit.

    Properties:
        path: Full path to the matching node
        kind: Whether the query matched the node's key or its value
        match_range: (start, end) of the hit within the key/value text
        value: The matching node
    """

    path: Path
    kind: MatchKind
    match_range: Tuple[int, int]
    value: Value

    def __hash__(self) -> int:
        return hash((self.path, self.kind, self.match_range))

    @property
    def is_key(self) -> bool:
        return self.kind is MatchKind.KEY

    @property
    def path_string(self) -> str:
        return path_to_string(self.path)

    @property
    def matched_text(self) -> str:
        """The key or value text the range refers to."""
        if self.is_key:
            last = self.path.last
            return last.name if isinstance(last, Key) else ""
        return scalar_text(self.value) or ""

    @property
    def display_text(self) -> str:
        if self.is_key:
            return f'Key: "{self.matched_text}" at path: {self.path_string}'
        if isinstance(self.value, VString):
            return f'Value: "{self.value.value}" at path: {self.path_string}'
        return f"Value: {self.matched_text} at path: {self.path_string}"


def _find(pattern: "re.Pattern[str]", text: str) -> Optional[Tuple[int, int]]:
    found = pattern.search(text)
    return found.span() if found else None


def _value_text(value: Value) -> Optional[str]:
    if isinstance(value, (VString, VNumber, VBool)):
        return scalar_text(value)
    return None


class _Searcher:
    def __init__(self, pattern: "re.Pattern[str]", match_keys: bool, match_values: bool):
        self.pattern = pattern
        self.match_keys = match_keys
        self.match_values = match_values
        self.results: List[SearchMatch] = []

    def check_value(self, path: Path, value: Value) -> None:
        if not self.match_values:
            return
        text = _value_text(value)
        if text is None:
            return
        span = _find(self.pattern, text)
        if span is not None:
            self.results.append(SearchMatch(path, MatchKind.VALUE, span, value))

    def visit(self, node: Value, path: Path) -> None:
        if isinstance(node, VObject):
            for key, value in node.members.items():
                child_path = path.key(key)
                if self.match_keys:
                    span = _find(self.pattern, key)
                    if span is not None:
                        self.results.append(SearchMatch(child_path, MatchKind.KEY, span, value))
                self.check_value(child_path, value)
                self.visit(value, child_path)
        elif isinstance(node, VArray):
            for position, value in enumerate(node.items):
                child_path = path.index(position)
                self.check_value(child_path, value)
                self.visit(value, child_path)


def search(
    root: Value,
    query: str,
    match_keys: bool = True,
    match_values: bool = True,
    case_sensitive: Optional[bool] = None,
) -> List[SearchMatch]:
    """
    Find every key and/or scalar value containing `query`.

    Args:
        root: Tree to search
        query: Substring to look for (surrounding whitespace ignored)
        match_keys: Report object keys containing the query
        match_values: Report strings/numbers/booleans whose text contains it
        case_sensitive: Defaults to Settings.search_case_sensitive

    Returns:
        Matches in traversal order; [] for a blank query
    """
    query = query.strip()
    if not query:
        return []

    if case_sensitive is None:
        case_sensitive = get_settings().search_case_sensitive

    flags = 0 if case_sensitive else re.IGNORECASE
    searcher = _Searcher(re.compile(re.escape(query), flags), match_keys, match_values)
    searcher.visit(root, Path.root())
    return searcher.results


__all__ = ["MatchKind", "SearchMatch", "search"]
