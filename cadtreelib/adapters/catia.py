"""CATIA adapter for cadtreelib.

Maps CATIA V5 automation objects (MECMOD, Knowledgeware and Product
Structure interfaces, reached late-bound through win32com) onto the
capability surface. Known kinds are handled through their typed
collections; unknown kinds fall back to generic ``Name``/``Children``/
``Value`` probes.

Every CATIA collection is 1-based: ``Item(1)`` .. ``Item(Count)``.
"""

from typing import Any, List, Optional, Tuple

from ..core.adapter import CapabilityAdapter
from ..core.handle import CadHandle, Lookup, ObjectKind
from ..documents import DocumentKind, com_type_label, document_kind, part_root


# Knowledgeware parameter interfaces and their common subtypes
PARAMETER_TYPE_LABELS = frozenset({
    'Parameter', 'RealParam', 'IntParam', 'StrParam', 'BoolParam',
    'Dimension', 'Length', 'Angle', 'Mass', 'Volume', 'Area',
    'EnumParam', 'ListParameter',
})

_EXACT_TYPE_LABELS = {
    'Part': ObjectKind.PART,
    'HybridBody': ObjectKind.HYBRID_BODY,
    'Body': ObjectKind.BODY,
    'Shape': ObjectKind.SHAPE,
    'Product': ObjectKind.PRODUCT,
}

# (collection attribute, kind of its items) per container kind
_CHILD_COLLECTIONS = {
    ObjectKind.PART: (('HybridBodies', ObjectKind.HYBRID_BODY),
                      ('Bodies', ObjectKind.BODY)),
    ObjectKind.HYBRID_BODY: (('HybridBodies', ObjectKind.HYBRID_BODY),
                             ('HybridShapes', ObjectKind.HYBRID_SHAPE)),
    ObjectKind.BODY: (('Shapes', ObjectKind.SHAPE),),
}

UNKNOWN_NAME = "Unknown"

Problem = Tuple[str, BaseException]


class CatiaAdapter(CapabilityAdapter):
    """Capability adapter for CATIA automation objects."""

    def type_label(self, obj: Any) -> str:
        if obj is None:
            return ""
        return com_type_label(obj)

    def classify(self, handle: CadHandle) -> Optional[ObjectKind]:
        if handle.kind is not None:
            return handle.kind
        if handle.obj is None:
            return None

        label = self.type_label(handle.obj)
        if label in _EXACT_TYPE_LABELS:
            return _EXACT_TYPE_LABELS[label]
        if label.startswith('HybridShape'):
            return ObjectKind.HYBRID_SHAPE
        if label in PARAMETER_TYPE_LABELS:
            return ObjectKind.PARAMETER
        return None

    def lookup_name(self, handle: CadHandle) -> Lookup[str]:
        obj = handle.obj
        if obj is None:
            return Lookup.failed(UNKNOWN_NAME, "no object")

        error: Optional[BaseException] = None
        if self.classify(handle) is not None:
            try:
                name = obj.Name
                if name is not None:
                    return Lookup.ok(str(name))
            except Exception as exc:
                error = exc
        else:
            try:
                name = getattr(obj, 'Name')
                if name is not None:
                    return Lookup.degraded(str(name), "generic Name probe")
            except Exception as exc:
                error = exc

        label = self.type_label(obj)
        if label:
            return Lookup.degraded(label, "type label used as name", error)
        return Lookup.failed(UNKNOWN_NAME, "name unavailable", error)

    def lookup_kind(self, handle: CadHandle) -> Lookup[str]:
        kind = self.classify(handle)
        if kind is not None:
            return Lookup.ok(kind.label)

        label = self.type_label(handle.obj)
        if label:
            return Lookup.degraded(label, "unrecognized kind, raw type label")
        return Lookup.failed(UNKNOWN_NAME, "kind unavailable")

    def is_tool_artifact(self, handle: CadHandle) -> bool:
        label = self.type_label(handle.obj)
        return 'MechanicalTool' in label or label == 'OriginElements'

    def lookup_children(self, root: Optional[CadHandle],
                        handle: CadHandle) -> Lookup[List[CadHandle]]:
        children: List[CadHandle] = []
        problems: List[Problem] = []
        if handle.obj is None:
            return Lookup.ok(children)

        kind = self.classify(handle)
        if kind in _CHILD_COLLECTIONS:
            for attribute, item_kind in _CHILD_COLLECTIONS[kind]:
                self._collect(children, problems, handle.obj, attribute, item_kind)
        elif kind is not ObjectKind.PARAMETER:
            self._collect(children, problems, handle.obj, 'Children', None,
                          probe=True)

        # The root part's own parameters are not part of the tree
        if kind not in (ObjectKind.PARAMETER, ObjectKind.PART) and root is not None:
            try:
                owned = root.obj.Parameters.SubList(handle.obj, False)
            except Exception as exc:
                problems.append(("Parameters.SubList", exc))
            else:
                self._collect_items(children, problems, owned, ObjectKind.PARAMETER,
                                    "Parameters.SubList")

        return self._result(children, problems)

    def lookup_parameters(self, root: Optional[CadHandle],
                          handle: CadHandle) -> Lookup[List[CadHandle]]:
        parameters: List[CadHandle] = []
        problems: List[Problem] = []
        kind = self.classify(handle)
        if handle.obj is None or kind is ObjectKind.PARAMETER:
            return Lookup.ok(parameters)

        if kind is ObjectKind.PART:
            self._collect(parameters, problems, handle.obj, 'Parameters',
                          ObjectKind.PARAMETER)
            return self._result(parameters, problems)

        if root is None:
            # No registry to scope against; probe the object itself
            self._collect(parameters, problems, handle.obj, 'Parameters',
                          ObjectKind.PARAMETER, probe=True)
            result = self._result(parameters, problems)
            if result.is_ok:
                return Lookup.degraded(parameters, "no root part, generic Parameters probe")
            return result

        try:
            owned = root.obj.Parameters.SubList(handle.obj, False)
        except Exception as exc:
            return Lookup.failed(parameters, "Parameters.SubList", exc)
        self._collect_items(parameters, problems, owned, ObjectKind.PARAMETER,
                            "Parameters.SubList")
        return self._result(parameters, problems)

    def lookup_value(self, handle: CadHandle) -> Lookup[str]:
        obj = handle.obj
        if obj is None:
            return Lookup.failed("", "no object")

        try:
            return Lookup.ok(str(obj.ValueAsString()))
        except Exception as exc:
            error = exc

        try:
            value = getattr(obj, 'Value')
            return Lookup.degraded("" if value is None else str(value),
                                   "generic Value probe", error)
        except Exception:
            return Lookup.failed("", "value unavailable", error)

    def origin_planes(self, part: CadHandle) -> List[Any]:
        origin = part.obj.OriginElements
        return [origin.PlaneXY, origin.PlaneYZ, origin.PlaneZX]

    def product_property(self, member: CadHandle, name: str) -> str:
        value = getattr(member.obj, name)
        return "" if value is None else str(value)

    def member_count(self, member: CadHandle) -> int:
        return int(member.obj.Products.Count)

    def member(self, member: CadHandle, index: int) -> CadHandle:
        return CadHandle(member.obj.Products.Item(index), ObjectKind.PRODUCT)

    def attached_part(self, member: CadHandle) -> Optional[CadHandle]:
        document = member.obj.ReferenceProduct.Parent
        if document_kind(document) is DocumentKind.PART:
            return part_root(document)
        return None

    # Enumeration helpers

    def _collect(self, out: List[CadHandle], problems: List[Problem], owner: Any,
                 attribute: str, kind: Optional[ObjectKind], probe: bool = False) -> None:
        """Append the items of ``owner.<attribute>`` to ``out``.

        With ``probe`` set a missing attribute or a value that is not a
        collection is simply "no children"; otherwise it is a problem.
        """
        try:
            collection = getattr(owner, attribute)
        except AttributeError as exc:
            if not probe:
                problems.append((attribute, exc))
            return
        except Exception as exc:
            problems.append((attribute, exc))
            return

        if collection is None:
            return
        if probe and not (hasattr(collection, 'Count') and hasattr(collection, 'Item')):
            return
        self._collect_items(out, problems, collection, kind, attribute)

    def _collect_items(self, out: List[CadHandle], problems: List[Problem],
                       collection: Any, kind: Optional[ObjectKind], label: str) -> None:
        if collection is None:
            return
        try:
            count = int(collection.Count)
        except Exception as exc:
            problems.append((f"{label}.Count", exc))
            return

        for index in range(1, count + 1):
            try:
                item = collection.Item(index)
            except Exception as exc:
                problems.append((f"{label}.Item({index})", exc))
                continue
            if item is not None:
                out.append(CadHandle(item, kind))

    @staticmethod
    def _result(items: List[CadHandle], problems: List[Problem]) -> Lookup[List[CadHandle]]:
        if not problems:
            return Lookup.ok(items)
        detail = "; ".join(f"{where} failed" for where, _ in problems)
        return Lookup.degraded(items, detail, problems[0][1])
