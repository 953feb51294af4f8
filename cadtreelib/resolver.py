"""Document and assembly resolution for cadtreelib.

The DocumentResolver dispatches an open document by kind. Parts go straight
to the tree builder selected by the export mode. Assemblies are walked
member by member: each member becomes a Product node carrying its
PartNumber/Nomenclature, the children of the part it references are
spliced into it, and its own child members follow.
"""

import logging
from typing import Any, Optional, Union

from .adapters.catia import CatiaAdapter
from .config import ExportConfig, ExportMode, parse_mode
from .core.adapter import CapabilityAdapter
from .core.events import EventCode, EventSink, NullEventSink
from .core.flattener import FlatteningTraverser
from .core.handle import CadHandle
from .core.node import NormalizedNode
from .core.traverser import HierarchyTraverser, TreeBuilder
from .documents import DocumentKind, assembly_root, document_kind, part_root


PRODUCT_PROPERTIES = ('PartNumber', 'Nomenclature')


def create_builder(mode: Union[ExportMode, str],
                   adapter: CapabilityAdapter,
                   config: Optional[ExportConfig] = None,
                   sink: Optional[EventSink] = None) -> TreeBuilder:
    """Create the part tree builder for an export mode.

    Args:
        mode: ExportMode or its name (full, all, flatten)
        adapter: CapabilityAdapter for the object model
        config: Export configuration
        sink: Event sink

    Returns:
        TreeBuilder instance

    Raises:
        ExportConfigError: If the mode name is not recognized
    """
    builders = {cls.mode: cls for cls in (HierarchyTraverser, FlatteningTraverser)}
    return builders[parse_mode(mode)](adapter, config, sink)


def _document_name(document: Any) -> str:
    try:
        return str(document.Name)
    except Exception:
        return repr(document)


class DocumentResolver:
    """Turns open CATIA documents into NormalizedNode trees."""

    def __init__(self,
                 adapter: Optional[CapabilityAdapter] = None,
                 config: Optional[ExportConfig] = None,
                 sink: Optional[EventSink] = None):
        """
        Args:
            adapter: Capability adapter (defaults to CatiaAdapter)
            config: Export configuration (defaults to full mode, unlimited)
            sink: Event sink for everything that degrades
        """
        self.adapter = adapter or CatiaAdapter()
        self.config = config or ExportConfig()
        self.sink = sink or NullEventSink()
        self.builder = create_builder(self.config.mode, self.adapter, self.config, self.sink)

    def resolve_document(self, document: Any) -> Optional[NormalizedNode]:
        """Resolve an open document by its kind.

        Args:
            document: Open CATIA document

        Returns:
            Root node, or None for unsupported document kinds
        """
        kind = document_kind(document)
        if kind is DocumentKind.ASSEMBLY:
            return self.resolve_assembly(assembly_root(document))
        if kind is DocumentKind.PART:
            return self.resolve_part(part_root(document))

        self.sink.report(
            EventCode.DOCUMENT_UNSUPPORTED,
            "unsupported document type",
            subject=_document_name(document),
        )
        return None

    def resolve_part(self, part: CadHandle, start_depth: int = 0) -> Optional[NormalizedNode]:
        return self.builder.build(part, start_depth)

    def resolve_assembly(self, member: CadHandle, depth: int = 0) -> NormalizedNode:
        """Resolve an assembly member and everything below it.

        Args:
            member: Product handle
            depth: Depth of the member, assembly root = 0

        Returns:
            Product node with property leaves, spliced part content and
            child members
        """
        view = self.adapter.view(None, member, self.sink)
        node = NormalizedNode.structural(view.name(), view.kind())

        if self.config.include_product_properties:
            for name in PRODUCT_PROPERTIES:
                value = self._product_property(member, name, node.name)
                if value:
                    node.add_value(name, value)

        if not self.config.should_explore(depth):
            return node
        if self.config.ceiling_reached(depth):
            self.sink.report(
                EventCode.DEPTH_CEILING_REACHED,
                f"depth ceiling {self.config.depth_ceiling} reached, not descending",
                subject=node.name,
            )
            return node

        self._attach_part(node, member, depth)

        for index in range(1, self._member_count(member, node.name) + 1):
            try:
                child = self.adapter.member(member, index)
                child_node = self.resolve_assembly(child, depth + 1)
            except Exception as exc:
                self.sink.report(
                    EventCode.MEMBER_FAILED,
                    f"child member {index} skipped",
                    subject=node.name,
                    error=exc,
                )
                continue
            node.add_child(child_node)

        return node

    def _attach_part(self, node: NormalizedNode, member: CadHandle, depth: int) -> None:
        """Merge the part referenced by ``member`` into ``node``.

        By default the part root is replaced by the member, so the part
        stands at the member's depth and its children are spliced in.
        """
        start_depth = depth + 1 if self.config.keep_part_node else depth
        try:
            part = self.adapter.attached_part(member)
            if part is None:
                return
            part_node = self.resolve_part(part, start_depth)
        except Exception as exc:
            self.sink.report(
                EventCode.PART_UNRESOLVED,
                "attached part could not be resolved",
                subject=node.name,
                error=exc,
            )
            return

        if part_node is None:
            return
        if self.config.keep_part_node:
            node.add_child(part_node)
        else:
            node.extend(part_node.children)

    def _product_property(self, member: CadHandle, name: str, subject: str) -> str:
        try:
            return self.adapter.product_property(member, name)
        except Exception as exc:
            self.sink.report(
                EventCode.PROPERTY_DEGRADED,
                f"{name} unavailable",
                level=logging.DEBUG,
                subject=subject,
                error=exc,
            )
            return ""

    def _member_count(self, member: CadHandle, subject: str) -> int:
        try:
            return self.adapter.member_count(member)
        except Exception as exc:
            self.sink.report(
                EventCode.MEMBER_FAILED,
                "child members unavailable",
                subject=subject,
                error=exc,
            )
            return 0
