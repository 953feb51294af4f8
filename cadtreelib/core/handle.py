"""Tagged CAD object handles and lookup results.

A CadHandle pairs an opaque COM object with the kind it was enumerated as.
Kinds are assigned by whoever obtained the object: a Body pulled out of
``Part.Bodies`` is known to be a Body without asking the COM server. Objects
reached through the generic probe carry no tag and are classified later
from their type label.

Lookup is the result type returned by every adapter query, so callers can
tell a primary-path answer from a fallback without relying on exceptions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar


T = TypeVar("T")


class ObjectKind(Enum):
    """The fixed set of CATIA object kinds the adapter understands."""
    PART = "Part"
    HYBRID_BODY = "HybridBody"
    BODY = "Body"
    HYBRID_SHAPE = "HybridShape"
    SHAPE = "Shape"
    PARAMETER = "Parameter"
    PRODUCT = "Product"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True, eq=False)
class CadHandle:
    """A borrowed COM object plus the kind it is known to be.

    The handle never owns the object; its lifetime belongs to the
    document that produced it.

    Attributes:
        obj: The underlying COM dispatch object (or a fake in tests)
        kind: Kind tag, or None when the object came from a generic probe
    """
    obj: Any
    kind: Optional[ObjectKind] = None

    def same_object(self, other: Any) -> bool:
        """Check whether two handles (or a handle and a raw object) refer to
        the same COM object.

        win32com dispatch wrappers compare by COM identity, so ``==`` is the
        reference check here; plain Python objects fall back to ``is``.
        """
        other_obj = other.obj if isinstance(other, CadHandle) else other
        if other_obj is None:
            return False
        if self.obj is other_obj:
            return True
        try:
            return bool(self.obj == other_obj)
        except Exception:
            return False

    def __repr__(self) -> str:
        kind = self.kind.label if self.kind else "untagged"
        return f"CadHandle({kind}, {type(self.obj).__name__})"


class LookupStatus(Enum):
    """How a lookup produced its value."""
    OK = "ok"               # Primary path for a known kind
    DEGRADED = "degraded"   # A fallback produced a value
    FAILED = "failed"       # Final literal fallback


@dataclass(frozen=True)
class Lookup(Generic[T]):
    """Outcome of a single adapter query.

    Attributes:
        value: The value to use, always present (fallbacks included)
        status: Which path produced the value
        error: The exception that forced a fallback, if any
        detail: Short description of the fallback taken
    """
    value: T
    status: LookupStatus = LookupStatus.OK
    error: Optional[BaseException] = None
    detail: Optional[str] = None

    @classmethod
    def ok(cls, value: T) -> "Lookup[T]":
        return cls(value)

    @classmethod
    def degraded(cls, value: T, detail: str,
                 error: Optional[BaseException] = None) -> "Lookup[T]":
        return cls(value, LookupStatus.DEGRADED, error, detail)

    @classmethod
    def failed(cls, value: T, detail: str,
               error: Optional[BaseException] = None) -> "Lookup[T]":
        return cls(value, LookupStatus.FAILED, error, detail)

    @property
    def is_ok(self) -> bool:
        return self.status is LookupStatus.OK
