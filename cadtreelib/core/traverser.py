"""Tree builders for cadtreelib.

A TreeBuilder turns a CATIA Part into a NormalizedNode tree by walking the
capability surface of a CapabilityAdapter. HierarchyTraverser keeps the
structural nesting of the part ("full" mode); the flattening variant lives
in flattener.py.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..config import ExportConfig, ExportMode
from .adapter import CapabilityAdapter, CapabilityView
from .events import EventCode, EventSink, NullEventSink
from .handle import CadHandle
from .node import NormalizedNode


def short_parameter_name(name: str) -> str:
    """Strip the owner path from a parameter name.

    CATIA names parameters after their owner chain, e.g.
    ``Part1\\PartBody\\Pad.1\\FirstLimit\\Length``. Only the last segment
    is kept; a trailing separator leaves the name untouched.
    """
    cut = max(name.rfind('\\'), name.rfind('/'))
    if 0 <= cut < len(name) - 1:
        return name[cut + 1:]
    return name


class TreeBuilder(ABC):
    """Abstract base class for part tree builders.

    Builders are independent of the CAD object model, working through the
    CapabilityAdapter.
    """

    mode: ExportMode

    def __init__(self,
                 adapter: CapabilityAdapter,
                 config: Optional[ExportConfig] = None,
                 sink: Optional[EventSink] = None):
        """Initialize builder with an adapter.

        Args:
            adapter: CapabilityAdapter for the object model
            config: Export configuration (defaults to unlimited depth)
            sink: Event sink for degradations and isolated failures
        """
        self.adapter = adapter
        self.config = config or ExportConfig()
        self.sink = sink or NullEventSink()

    @abstractmethod
    def build(self, part: CadHandle, start_depth: int = 0) -> Optional[NormalizedNode]:
        """Build the tree of a part.

        Args:
            part: The root Part handle
            start_depth: Depth the part root stands at (non-zero when the
                part hangs below an assembly member)

        Returns:
            Root NormalizedNode, or None if ``part`` is None
        """
        pass

    def parameter_leaf(self, view: CapabilityView) -> NormalizedNode:
        """Create the value leaf for a parameter handle."""
        name = view.name()
        if self.config.short_parameter_names:
            name = short_parameter_name(name)
        return NormalizedNode.leaf(name, view.scalar_value())

    def _ceiling_reached(self, depth: int, subject: str) -> bool:
        if not self.config.ceiling_reached(depth):
            return False
        self.sink.report(
            EventCode.DEPTH_CEILING_REACHED,
            f"depth ceiling {self.config.depth_ceiling} reached, not descending",
            subject=subject,
        )
        return True

    def _child_failed(self, parent: str, error: Exception) -> None:
        self.sink.report(
            EventCode.CHILD_FAILED,
            "child skipped",
            level=logging.WARNING,
            subject=parent,
            error=error,
        )


class HierarchyTraverser(TreeBuilder):
    """Depth-first pre-order builder keeping the full structural nesting.

    Parameters become value leaves among the children of the object that
    owns them; everything else becomes a structural node.
    """

    mode = ExportMode.FULL

    def build(self, part: CadHandle, start_depth: int = 0) -> Optional[NormalizedNode]:
        return self.traverse(part, part, start_depth)

    def traverse(self,
                 root: Optional[CadHandle],
                 handle: Optional[CadHandle],
                 current_depth: int = 0) -> Optional[NormalizedNode]:
        """Build the subtree below ``handle``.

        Args:
            root: Root Part, scopes parameter lookups
            handle: Object to visit
            current_depth: Depth of ``handle``, root = 0

        Returns:
            NormalizedNode for the handle, or None if handle is None
        """
        if handle is None:
            return None

        view = self.adapter.view(root, handle, self.sink)
        if view.is_parameter():
            return self.parameter_leaf(view)

        node = NormalizedNode.structural(view.name(), view.kind())

        if not self.config.should_explore(current_depth):
            return node
        if self._ceiling_reached(current_depth, node.name):
            return node

        for child in view.children():
            # One broken child must not take its siblings down
            try:
                child_node = self.traverse(root, child, current_depth + 1)
            except Exception as exc:
                self._child_failed(node.name, exc)
                continue
            if child_node is not None:
                node.add_child(child_node)

        return node
