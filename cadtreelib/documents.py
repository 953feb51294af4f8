"""Document-level helpers shared by the connection layer and the resolver.

CATIA documents are recognized by their file suffix, like CATIA itself does.
When the name is not usable the COM type label decides.
"""

from enum import Enum
from typing import Any

from .core.handle import CadHandle, ObjectKind


class DocumentKind(Enum):
    ASSEMBLY = "assembly"
    PART = "part"
    UNSUPPORTED = "unsupported"


_SUFFIXES = {
    '.catproduct': DocumentKind.ASSEMBLY,
    '.catpart': DocumentKind.PART,
}

_TYPE_LABELS = {
    'ProductDocument': DocumentKind.ASSEMBLY,
    'PartDocument': DocumentKind.PART,
}


def com_type_label(obj: Any) -> str:
    """Return the COM interface name of a dispatch object.

    Late-bound win32com objects are all ``CDispatch`` in Python; the real
    interface name lives in the type info. Anything else (including test
    fakes) falls back to the Python class name.
    """
    oleobj = getattr(obj, '_oleobj_', None)
    if oleobj is not None:
        try:
            return str(oleobj.GetTypeInfo().GetDocumentation(-1)[0])
        except Exception:
            pass
    return type(obj).__name__


def document_kind(document: Any) -> DocumentKind:
    """Determine whether a document is an assembly, a part or neither.

    Args:
        document: An open CATIA document

    Returns:
        The DocumentKind; UNSUPPORTED when neither name nor type matches
    """
    try:
        name = str(document.Name)
    except Exception:
        name = ""

    lowered = name.lower()
    for suffix, kind in _SUFFIXES.items():
        if lowered.endswith(suffix):
            return kind

    return _TYPE_LABELS.get(com_type_label(document), DocumentKind.UNSUPPORTED)


def part_root(document: Any) -> CadHandle:
    """Return the root Part of a part document."""
    return CadHandle(document.Part, ObjectKind.PART)


def assembly_root(document: Any) -> CadHandle:
    """Return the root Product of an assembly document."""
    return CadHandle(document.Product, ObjectKind.PRODUCT)
