"""
Demo: Run the tree analyzer on every built-in sample and print the reports.
"""

from parselab import parse_document
from parselab.analyzer import analyze_tree
from parselab.errors import Format
from parselab.examples import sample_document


def print_report(title, report):
    """Pretty-print a TreeReport."""
    print()
    print("=" * 70)
    print(f"TREE ANALYSIS REPORT: {title}")
    print("=" * 70)
    print()

    print("📊 BASIC METRICS")
    print(f"  Root Type:             {report.root_type}")
    print(f"  Total Nodes:           {report.total_nodes}")
    print(f"  Max Depth:             {report.max_depth}")
    print()

    print("🔑 KEYS")
    print(f"  Total Keys:            {report.total_keys}")
    print(f"  Distinct Keys:         {len(report.distinct_keys)}")
    if report.distinct_keys:
        print(f"    {sorted(report.distinct_keys)}")
    print()

    print("📈 VARIANTS")
    for type_name, count in sorted(report.type_counts.items()):
        print(f"    {type_name}: {count}")
    print()

    print("📐 ARRAYS")
    print(f"  Largest Array:         {report.largest_array_length}"
          f"{' at ' + report.largest_array_path if report.largest_array_path else ''}")
    print(f"  Mixed-Type Arrays:     {report.mixed_type_arrays if report.mixed_type_arrays else 'None'}")
    print()

    if report.warnings:
        print("⚠️  WARNINGS")
        for i, warning in enumerate(report.warnings, 1):
            print(f"  {i}. {warning}")
    else:
        print("✨ NO WARNINGS - Tree looks clean!")
    print()


if __name__ == "__main__":
    for fmt in Format:
        tree = parse_document(sample_document(fmt), fmt=fmt)
        print_report(f"sample.{fmt.value}", analyze_tree(tree))
