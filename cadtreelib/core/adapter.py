"""CapabilityAdapter abstraction for cadtreelib.

The adapter is what lets one traversal algorithm handle every CATIA object
kind. It reduces any handle to a narrow capability surface - name, kind,
children, parameters, scalar value - and never raises while doing so:
each query returns a Lookup describing which path produced the answer.

CapabilityView binds an adapter, a root part and one handle together for
the duration of a single visit, and reports degraded lookups to the event
sink so the traversers can stay free of error bookkeeping.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from .events import EventCode, EventSink, NullEventSink
from .handle import CadHandle, Lookup, ObjectKind


class CapabilityAdapter(ABC):
    """Abstract adapter from CAD object handles to the capability surface.

    Query methods (``lookup_*``, ``is_tool_artifact``, ``classify``) must
    never raise. Assembly helpers (``member_count``, ``member``,
    ``attached_part``, ``product_property``) and ``origin_planes`` may
    raise; their callers isolate the failures.
    """

    @abstractmethod
    def type_label(self, obj: Any) -> str:
        """Return the raw type name of a COM object."""
        pass

    @abstractmethod
    def classify(self, handle: CadHandle) -> Optional[ObjectKind]:
        """Return the kind of a handle, or None for unrecognized objects."""
        pass

    @abstractmethod
    def lookup_name(self, handle: CadHandle) -> Lookup[str]:
        pass

    @abstractmethod
    def lookup_kind(self, handle: CadHandle) -> Lookup[str]:
        pass

    @abstractmethod
    def is_tool_artifact(self, handle: CadHandle) -> bool:
        """Check for auxiliary objects excluded from flattened output."""
        pass

    @abstractmethod
    def lookup_children(self, root: Optional[CadHandle],
                        handle: CadHandle) -> Lookup[List[CadHandle]]:
        """Enumerate structural children followed by direct parameters.

        Args:
            root: The Part whose parameter registry scopes parameter lookup
            handle: The object to enumerate

        Returns:
            Lookup of the ordered child handles
        """
        pass

    @abstractmethod
    def lookup_parameters(self, root: Optional[CadHandle],
                          handle: CadHandle) -> Lookup[List[CadHandle]]:
        """Enumerate the parameters directly owned by a handle."""
        pass

    @abstractmethod
    def lookup_value(self, handle: CadHandle) -> Lookup[str]:
        """Return the display value of a parameter handle."""
        pass

    @abstractmethod
    def origin_planes(self, part: CadHandle) -> List[Any]:
        """Return the XY, YZ and ZX reference plane objects of a part."""
        pass

    # Assembly helpers

    @abstractmethod
    def product_property(self, member: CadHandle, name: str) -> str:
        pass

    @abstractmethod
    def member_count(self, member: CadHandle) -> int:
        pass

    @abstractmethod
    def member(self, member: CadHandle, index: int) -> CadHandle:
        """Return the child member at a 1-based index."""
        pass

    @abstractmethod
    def attached_part(self, member: CadHandle) -> Optional[CadHandle]:
        """Return the Part referenced by an assembly member, if any."""
        pass

    def is_parameter(self, handle: CadHandle) -> bool:
        return self.classify(handle) is ObjectKind.PARAMETER

    def view(self, root: Optional[CadHandle], handle: CadHandle,
             sink: Optional[EventSink] = None) -> 'CapabilityView':
        """Create a CapabilityView for one handle."""
        return CapabilityView(self, root, handle, sink)


class CapabilityView:
    """Per-handle view over a CapabilityAdapter.

    Returns plain values and reports every non-OK lookup to the sink.
    Created for a single visit and discarded afterwards.
    """

    def __init__(self, adapter: CapabilityAdapter, root: Optional[CadHandle],
                 handle: CadHandle, sink: Optional[EventSink] = None):
        self.adapter = adapter
        self.root = root
        self.handle = handle
        self.sink = sink or NullEventSink()
        self._name: Optional[str] = None

    def name(self) -> str:
        if self._name is None:
            self._name = self._unwrap(self.adapter.lookup_name(self.handle),
                                      EventCode.NAME_DEGRADED, "name")
        return self._name

    def kind(self) -> str:
        return self._unwrap(self.adapter.lookup_kind(self.handle),
                            EventCode.KIND_DEGRADED, "kind")

    def children(self) -> List[CadHandle]:
        return self._unwrap(self.adapter.lookup_children(self.root, self.handle),
                            EventCode.CHILDREN_DEGRADED, "children")

    def parameters(self) -> List[CadHandle]:
        return self._unwrap(self.adapter.lookup_parameters(self.root, self.handle),
                            EventCode.PARAMETERS_DEGRADED, "parameters")

    def scalar_value(self) -> str:
        return self._unwrap(self.adapter.lookup_value(self.handle),
                            EventCode.VALUE_DEGRADED, "value")

    def is_parameter(self) -> bool:
        return self.adapter.is_parameter(self.handle)

    def is_tool_artifact(self) -> bool:
        return self.adapter.is_tool_artifact(self.handle)

    def _unwrap(self, lookup: Lookup, code: EventCode, what: str) -> Any:
        if not lookup.is_ok:
            # name lookups report against the raw handle to avoid recursion
            subject = repr(self.handle) if what == "name" else self.name()
            level = logging.WARNING if lookup.error is not None else logging.DEBUG
            self.sink.report(
                code,
                f"{what} lookup {lookup.status.value}: {lookup.detail}",
                level=level,
                subject=subject,
                error=lookup.error,
            )
        return lookup.value
