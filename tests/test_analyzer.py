"""
Tests for the Tree Analyzer.

These tests verify:
    - Node, key and variant counts
    - Depth measurement
    - Largest-array tracking
    - Warning flags (mixed arrays, deep nesting, large arrays)
"""

from parselab.analyzer import (
    DEEP_NESTING_THRESHOLD,
    LARGE_ARRAY_THRESHOLD,
    analyze_tree,
)
from parselab.examples import SAMPLE_JSON
from parselab.json_parser import parse_json
from parselab.values import VArray, VNumber, VObject, VString


class TestCounts:
    """Inventory of the tree."""

    def test_small_tree(self):
        report = analyze_tree(parse_json('{"a": [1, "x"], "b": {"c": null}}'))
        assert report.root_type == "object"
        assert report.total_nodes == 6
        assert report.max_depth == 2
        assert report.type_counts == {"object": 2, "array": 1, "number": 1, "string": 1, "null": 1}
        assert report.total_keys == 3
        assert report.distinct_keys == {"a", "b", "c"}

    def test_scalar_root(self):
        report = analyze_tree(VString("only"))
        assert report.root_type == "string"
        assert report.total_nodes == 1
        assert report.max_depth == 0
        assert report.warnings == []

    def test_repeated_keys_count_once_as_distinct(self):
        report = analyze_tree(parse_json(SAMPLE_JSON))
        assert "host" in report.distinct_keys
        assert report.total_keys > len(report.distinct_keys)


class TestArrays:
    """Largest and mixed arrays."""

    def test_largest_array_path(self):
        report = analyze_tree(parse_json('{"small": [1], "big": {"list": [1, 2, 3]}}'))
        assert report.largest_array_length == 3
        assert report.largest_array_path == "$.big.list"

    def test_mixed_array_warning(self):
        report = analyze_tree(parse_json('{"a": [1, "x"]}'))
        assert report.mixed_type_arrays == ["$.a"]
        assert any("mixed" in w for w in report.warnings)

    def test_uniform_array_has_no_warning(self):
        report = analyze_tree(parse_json(SAMPLE_JSON))
        assert report.mixed_type_arrays == []
        assert report.warnings == []

    def test_large_array_warning(self):
        value = VArray([VNumber(i) for i in range(LARGE_ARRAY_THRESHOLD + 1)])
        report = analyze_tree(value)
        assert report.largest_array_path == "$"
        assert any("Large array" in w for w in report.warnings)


class TestDepth:
    """Deep nesting."""

    def test_deep_nesting_warning(self):
        value = VString("leaf")
        for _ in range(DEEP_NESTING_THRESHOLD + 1):
            value = VObject({"k": value})
        report = analyze_tree(value)
        assert report.max_depth == DEEP_NESTING_THRESHOLD + 1
        assert any("Deep nesting" in w for w in report.warnings)

    def test_add_warning_deduplicates(self):
        report = analyze_tree(VString("x"))
        report.add_warning("same")
        report.add_warning("same")
        assert report.warnings == ["same"]
