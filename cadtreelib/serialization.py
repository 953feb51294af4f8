"""JSON encoding of exported trees.

One exported document is written as a bare object, several as an array,
matching what downstream consumers of the exporter already read.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from .core.node import NormalizedNode


def to_payload(nodes: Sequence[NormalizedNode]) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
    """Convert a node forest to JSON-ready data.

    Args:
        nodes: Exported document roots

    Returns:
        A dict for a single root, otherwise a list of dicts
    """
    if len(nodes) == 1:
        return nodes[0].to_dict()
    return [node.to_dict() for node in nodes]


def dumps(nodes: Sequence[NormalizedNode], indent: int = 2) -> str:
    """Encode a node forest as JSON text."""
    return json.dumps(to_payload(nodes), indent=indent, ensure_ascii=False)


def write_json(nodes: Sequence[NormalizedNode], path: Union[str, Path], indent: int = 2) -> Path:
    """Write a node forest to a UTF-8 (no BOM) JSON file.

    Returns:
        The path written
    """
    target = Path(path)
    if target.parent and not target.parent.exists():
        target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(dumps(nodes, indent=indent), encoding="utf-8")
    return target
