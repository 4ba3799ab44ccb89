#!/usr/bin/env python3
"""
Complete Pipeline Demo: Raw Text → Value Tree → Paths → Search → Export

Shows the full workflow:
1. Detect the format of each sample and parse it
2. Walk the tree and print every path
3. Search keys and values
4. Edit a node by path and export the result
5. Round-trip a CSV document through edits
"""

from parselab import convert_to_pretty_json, detect_format, parse_document, search
from parselab.config import configure_logging
from parselab.csv_parser import parse_csv_string
from parselab.errors import Format, ParseError
from parselab.examples import SAMPLE_CSV, SAMPLE_TOML, SAMPLES
from parselab.paths import get_value_at, iter_paths, path_to_string, set_value_at
from parselab.serialization import to_toml, to_yaml
from parselab.values import VNumber


def main():
    configure_logging()

    print("=" * 80)
    print("COMPLETE PIPELINE DEMO: Text → Value Tree → Paths → Search → Export")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Detect and parse
    # =========================================================================
    print("\n1. DETECTING AND PARSING SAMPLES...")
    for fmt, text in SAMPLES.items():
        sniffed = detect_format(text)
        label = sniffed.name if sniffed else "undetermined"
        tree = parse_document(text, fmt=fmt)
        print(f"   ✓ {fmt.name:<6} sniffed as {label:<13} root: {tree.type_name}")

    # =========================================================================
    # STEP 2: Paths
    # =========================================================================
    print("\n2. PATHS IN THE TOML SAMPLE:")
    print("-" * 80)
    tree = parse_document(SAMPLE_TOML, fmt=Format.TOML)
    for path, node in iter_paths(tree):
        print(f"   {path_to_string(path):<28} {node.type_name}")

    # =========================================================================
    # STEP 3: Search
    # =========================================================================
    print("\n3. SEARCHING FOR 'example':")
    print("-" * 80)
    for match in search(tree, "example"):
        print(f"   {match.display_text}")

    # =========================================================================
    # STEP 4: Edit and export
    # =========================================================================
    print("\n4. EDITING $.servers[1].port AND EXPORTING:")
    print("-" * 80)
    edited = set_value_at(tree, "$.servers[1].port", VNumber(9090))
    print(f"   before: {get_value_at(tree, '$.servers[1].port')}")
    print(f"   after:  {get_value_at(edited, '$.servers[1].port')}")
    print("\n   TOML:")
    for line in to_toml(edited).splitlines():
        print(f"   {line}")
    print("\n   YAML:")
    for line in to_yaml(edited).splitlines()[:8]:
        print(f"   {line}")

    # =========================================================================
    # STEP 5: CSV editing
    # =========================================================================
    print("\n5. CSV EDITING:")
    print("-" * 80)
    document = parse_csv_string(SAMPLE_CSV)
    document.add_column("location", default_value="shelf")
    document.set_value(2, 2, "7")
    document.add_row(["D-4", "Sprocket"])
    print(document.to_csv_string())

    # =========================================================================
    # STEP 6: Errors
    # =========================================================================
    print("6. ERROR REPORTING:")
    print("-" * 80)
    for text, fmt in [("[ ]", Format.INI), ("<a><b></a>", Format.XML), ("plain words", None)]:
        try:
            convert_to_pretty_json(text, fmt=fmt)
        except ParseError as e:
            print(f"   ✗ {e}")

    print("\n" + "=" * 80)
    print("✅ PIPELINE COMPLETE")
    print("=" * 80)


if __name__ == "__main__":
    main()
