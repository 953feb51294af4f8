"""Core abstractions for cadtreelib.

This package contains the normalized node model, the capability adapter
abstraction, the event sinks and the two part tree builders.
"""

from .node import NormalizedNode
from .handle import CadHandle, Lookup, LookupStatus, ObjectKind
from .events import (
    EventCode,
    ExportEvent,
    EventSink,
    NullEventSink,
    LoggingEventSink,
    CollectingEventSink,
    TeeEventSink,
)
from .adapter import CapabilityAdapter, CapabilityView
from .traverser import TreeBuilder, HierarchyTraverser, short_parameter_name
from .flattener import FlatteningTraverser

__all__ = [
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
    "short_parameter_name",
]
