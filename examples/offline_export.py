#!/usr/bin/env python3
"""
Offline export example using the in-memory CATIA stand-ins.

This example demonstrates:
- Building a small assembly without CATIA
- Exporting it in both modes
- Inspecting degraded lookups through a CollectingEventSink
"""

import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from cadtreelib import CollectingEventSink, dumps, export_document
from cadtreelib.testing import Product, ProductDocument, example_part


def build_assembly():
    root = Product("Arm", "ARM-100", "Robot arm")
    bracket = root.add_product("Bracket.1", "BR-1", "Bracket")
    bracket.attach_part(example_part("Bracket"))
    root.add_product("Gripper.1", "GR-7").attach_part(example_part("Gripper"))

    # A member whose reference cannot be read degrades instead of failing
    root.add_product("Broken.1", "BR-X").fail("ReferenceProduct")
    return ProductDocument("Arm.CATProduct", root)


def main():
    document = build_assembly()

    for mode in ("full", "flatten"):
        sink = CollectingEventSink()
        root = export_document(document, mode, sink=sink)
        print(f"=== {mode} ===")
        print(dumps([root]))

        stats = sink.get_statistics()
        print(f"\n{stats['total_events']} event(s):")
        for code, count in stats['by_code'].items():
            print(f"  {code}: {count}")
        print()


if __name__ == "__main__":
    main()
