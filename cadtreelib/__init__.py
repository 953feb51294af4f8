"""cadtreelib - CATIA structure tree export.

cadtreelib reads the feature/parameter hierarchy of CATIA documents through
COM automation and turns it into a normalized, depth-bounded tree that can
be written as JSON.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from cadtreelib import export_documents, write_json

    roots = export_documents(["C:/models/Bracket.CATPart"], "flatten")
    write_json(roots, "bracket.json")
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

__version__ = "0.1.0"

from .config import (
    CadTreeError,
    ExportConfig,
    ExportConfigError,
    ExportMode,
    parse_mode,
)
from .core import (
    NormalizedNode,
    CadHandle,
    Lookup,
    LookupStatus,
    ObjectKind,
    EventCode,
    ExportEvent,
    EventSink,
    NullEventSink,
    LoggingEventSink,
    CollectingEventSink,
    TeeEventSink,
    CapabilityAdapter,
    CapabilityView,
    TreeBuilder,
    HierarchyTraverser,
    FlatteningTraverser,
)
from .adapters import CatiaAdapter
from .documents import DocumentKind, document_kind
from .connection import (
    CatiaConnection,
    CatiaConnectionError,
    DocumentError,
    DocumentNotFoundError,
    DocumentOpenError,
)
from .resolver import DocumentResolver, create_builder
from .api import export_documents, export_document, export_part, parse_paths
from .serialization import to_payload, dumps, write_json

__all__ = [
    "__version__",
    # Config and errors
    "CadTreeError",
    "ExportConfig",
    "ExportConfigError",
    "ExportMode",
    "parse_mode",
    # Core
    "NormalizedNode",
    "CadHandle",
    "Lookup",
    "LookupStatus",
    "ObjectKind",
    "EventCode",
    "ExportEvent",
    "EventSink",
    "NullEventSink",
    "LoggingEventSink",
    "CollectingEventSink",
    "TeeEventSink",
    "CapabilityAdapter",
    "CapabilityView",
    "TreeBuilder",
    "HierarchyTraverser",
    "FlatteningTraverser",
    # CATIA
    "CatiaAdapter",
    "DocumentKind",
    "document_kind",
    "CatiaConnection",
    "CatiaConnectionError",
    "DocumentError",
    "DocumentNotFoundError",
    "DocumentOpenError",
    # Resolution and API
    "DocumentResolver",
    "create_builder",
    "export_documents",
    "export_document",
    "export_part",
    "parse_paths",
    "to_payload",
    "dumps",
    "write_json",
]
