#!/usr/bin/env python3
"""
Export the document currently active in a running CATIA session.

Usage:
    python export_active_document.py [MODE] [DEPTH]

Requires Windows, CATIA V5 and pywin32.
"""

import logging
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from cadtreelib import CatiaConnection, export_document, write_json


def main():
    mode = sys.argv[1] if len(sys.argv) > 1 else "full"
    depth = int(sys.argv[2]) if len(sys.argv) > 2 else 0
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    with CatiaConnection() as catia:
        document = catia.application.ActiveDocument
        root = export_document(document, mode, depth)

    if root is None:
        print("Active document is neither a part nor an assembly")
        return 1

    target = write_json([root], Path.cwd() / f"{root.name}.json")
    print(f"Wrote {target}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
