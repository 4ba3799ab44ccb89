"""
Tree Analyzer: structural metadata for a parsed document.

This module provides lightweight, read-only analysis of a Value tree:
    - Node counts per variant
    - Depth and key inventory
    - Largest array and where it lives
    - Warning flags for shapes that render poorly (mixed arrays, very deep
      nesting, huge arrays)

IMPORTANT: It does NOT modify the tree. It only produces a report.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from parselab.paths import Path, iter_paths, path_to_string
from parselab.values import VArray, VObject, Value

DEEP_NESTING_THRESHOLD = 20
LARGE_ARRAY_THRESHOLD = 10_000


@dataclass
class TreeReport:
    """Analysis report for one Value tree."""

    root_type: str
    total_nodes: int = 0
    max_depth: int = 0

    # Variant inventory
    type_counts: Dict[str, int] = field(default_factory=dict)
    total_keys: int = 0
    distinct_keys: Set[str] = field(default_factory=set)

    # Arrays
    largest_array_length: int = 0
    largest_array_path: Optional[str] = None
    mixed_type_arrays: List[str] = field(default_factory=list)

    # Warnings and flags
    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def _depth(path: Path) -> int:
    return len(path)


def analyze_tree(root: Value) -> TreeReport:
    """
    Perform structural analysis of a Value tree.

    Depth counts steps from the root: a scalar root has depth 0, and
    {"a": [1]} has depth 2.

    Returns a TreeReport with metrics and warnings.
    """
    report = TreeReport(root_type=root.type_name)
    counts: Counter = Counter()

    for path, node in iter_paths(root):
        report.total_nodes += 1
        counts[node.type_name] += 1
        report.max_depth = max(report.max_depth, _depth(path))

        if isinstance(node, VObject):
            report.total_keys += len(node)
            report.distinct_keys.update(node.members)

        elif isinstance(node, VArray):
            if len(node) > report.largest_array_length:
                report.largest_array_length = len(node)
                report.largest_array_path = path_to_string(path)
            item_types = {item.type_name for item in node.items}
            if len(item_types) > 1:
                report.mixed_type_arrays.append(path_to_string(path))

    report.type_counts = dict(counts)

    # =========================================================================
    # WARNING FLAGS
    # =========================================================================

    if report.mixed_type_arrays:
        report.add_warning(
            f"Arrays with mixed element types: {', '.join(report.mixed_type_arrays)}"
        )

    if report.max_depth > DEEP_NESTING_THRESHOLD:
        report.add_warning(f"Deep nesting: max depth {report.max_depth}")

    if report.largest_array_length > LARGE_ARRAY_THRESHOLD:
        report.add_warning(
            f"Large array: {report.largest_array_length} items at {report.largest_array_path}"
        )

    return report


__all__ = ["TreeReport", "analyze_tree"]
