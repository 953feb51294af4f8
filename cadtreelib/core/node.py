"""NormalizedNode - the uniform output unit of cadtreelib.

Every CATIA object, whatever its kind, ends up as one of two shapes:

- a structural node (``kind`` set, ordered ``children``, no ``value``)
- a value leaf (``value`` set, no ``children``, ``kind`` normally absent)

Nodes are plain data. They are built by the traversers and the resolver,
attached to exactly one parent and never mutated after that.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple


@dataclass
class NormalizedNode:
    """A node of the exported tree.

    Children keep insertion order, which mirrors the enumeration order of
    the CATIA object model and must not be sorted.
    """

    name: str
    kind: Optional[str] = None
    value: Optional[str] = None
    children: List["NormalizedNode"] = field(default_factory=list)

    @classmethod
    def leaf(cls, name: str, value: str) -> "NormalizedNode":
        """Create a value leaf."""
        return cls(name=name, value=value)

    @classmethod
    def structural(cls, name: str, kind: str) -> "NormalizedNode":
        """Create a structural node with no children yet."""
        return cls(name=name, kind=kind)

    def is_value_leaf(self) -> bool:
        return self.value is not None

    def add_child(self, node: "NormalizedNode") -> None:
        self.children.append(node)

    def add_value(self, name: str, value: str) -> None:
        """Append a value leaf child."""
        self.children.append(NormalizedNode.leaf(name, value))

    def extend(self, nodes: Iterable["NormalizedNode"]) -> None:
        self.children.extend(nodes)

    def child(self, name: str) -> Optional["NormalizedNode"]:
        """Return the first direct child with the given name."""
        for node in self.children:
            if node.name == name:
                return node
        return None

    def walk(self) -> Iterator[Tuple["NormalizedNode", int]]:
        """Yield ``(node, depth)`` pairs in pre-order, root at depth 0."""
        stack: List[Tuple[NormalizedNode, int]] = [(self, 0)]
        while stack:
            node, depth = stack.pop()
            yield node, depth
            for child in reversed(node.children):
                stack.append((child, depth + 1))

    def to_dict(self) -> Dict[str, Any]:
        """Encode the subtree as plain dicts and lists.

        Absent ``kind``/``value`` and empty ``children`` are omitted rather
        than written as null or an empty list.
        """
        data: Dict[str, Any] = {"name": self.name}
        if self.kind is not None:
            data["kind"] = self.kind
        if self.value is not None:
            data["value"] = self.value
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data

    def __repr__(self) -> str:
        if self.is_value_leaf():
            return f"NormalizedNode(name={self.name!r}, value={self.value!r})"
        return (f"NormalizedNode(name={self.name!r}, kind={self.kind!r}, "
                f"children={len(self.children)})")
