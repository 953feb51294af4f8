"""In-memory stand-ins for the CATIA automation object model.

These fakes let cadtreelib (and projects that consume it) exercise the
adapter, traversers and resolver without a CATIA installation. Class names
match the CATIA interface names because the adapter reads type labels from
them, exactly as it reads them from COM type info.

Any public attribute can be made to fail on access:

    shape = HybridShape("Extrude.1").fail("Name")
    shape.Name  # raises FakeComError

Example:
    part = Part("Part1")
    geo = part.add_hybrid_body("Geo1")
    feat = geo.add_hybrid_shape("Feat1")
    part.add_parameter(feat, "P1", "10mm")
"""

from typing import Any, Dict, Iterable, List, Optional

from ..connection import DocumentNotFoundError, DocumentOpenError


class FakeComError(Exception):
    """Raised by fakes where the real server would raise a COM error."""
    pass


class FakeComObject:
    """Base class with attribute-level failure injection."""

    def __init__(self, name: Optional[str] = None, fail: Iterable[str] = ()):
        self._fail = set(fail)
        self.Name = name

    def __getattribute__(self, attr: str) -> Any:
        if not attr.startswith('_'):
            if attr in object.__getattribute__(self, '_fail'):
                raise FakeComError(f"{attr} unavailable")
        return object.__getattribute__(self, attr)

    def fail(self, *attrs: str) -> 'FakeComObject':
        """Make the given attributes raise FakeComError from now on."""
        self._fail.update(attrs)
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}({object.__getattribute__(self, 'Name')!r})"


class FakeCollection(FakeComObject):
    """1-based CATIA collection (``Count`` / ``Item(i)``)."""

    def __init__(self, items: Iterable[Any] = (), fail: Iterable[str] = (),
                 fail_items: Iterable[int] = ()):
        super().__init__(None, fail)
        self._items: List[Any] = list(items)
        self._fail_items = set(fail_items)

    @property
    def Count(self) -> int:
        return len(self._items)

    def Item(self, index: int) -> Any:
        if index in self._fail_items:
            raise FakeComError(f"Item({index}) unavailable")
        if not 1 <= index <= len(self._items):
            raise FakeComError(f"Item({index}) out of range")
        return self._items[index - 1]

    def add(self, item: Any) -> Any:
        self._items.append(item)
        return item

    def fail_item(self, index: int) -> 'FakeCollection':
        self._fail_items.add(index)
        return self


class Parameter(FakeComObject):
    """Knowledgeware parameter owned by some feature."""

    def __init__(self, name: str, value: Any, owner: Any = None, fail: Iterable[str] = ()):
        super().__init__(name, fail)
        self.Value = value
        self._owner = owner

    def ValueAsString(self) -> str:
        return str(self.Value)


class Parameters(FakeCollection):
    """The part-level parameter registry."""

    def SubList(self, owner: Any, recursive: bool) -> FakeCollection:
        return FakeCollection(p for p in self._items if p._owner is owner)


class Plane(FakeComObject):
    pass


class OriginElements(FakeComObject):

    def __init__(self, fail: Iterable[str] = ()):
        super().__init__("OriginElements", fail)
        self.PlaneXY = Plane("xy plane")
        self.PlaneYZ = Plane("yz plane")
        self.PlaneZX = Plane("zx plane")


class MechanicalToolAxis(FakeComObject):
    """Construction helper that flatten mode must skip."""
    pass


class HybridShape(FakeComObject):
    pass


class Shape(FakeComObject):
    pass


class Body(FakeComObject):

    def __init__(self, name: str, fail: Iterable[str] = ()):
        super().__init__(name, fail)
        self.Shapes = FakeCollection()

    def add_shape(self, name: str) -> Shape:
        return self.Shapes.add(Shape(name))


class HybridBody(FakeComObject):

    def __init__(self, name: str, fail: Iterable[str] = ()):
        super().__init__(name, fail)
        self.HybridBodies = FakeCollection()
        self.HybridShapes = FakeCollection()

    def add_hybrid_body(self, name: str) -> 'HybridBody':
        return self.HybridBodies.add(HybridBody(name))

    def add_hybrid_shape(self, name: str) -> HybridShape:
        return self.HybridShapes.add(HybridShape(name))


class Sketch(FakeComObject):
    """An object kind the adapter has no dedicated support for."""

    def __init__(self, name: Optional[str], children: Iterable[Any] = (),
                 fail: Iterable[str] = ()):
        super().__init__(name, fail)
        self.Children = FakeCollection(children)


class Part(FakeComObject):

    def __init__(self, name: str = "Part1", fail: Iterable[str] = ()):
        super().__init__(name, fail)
        self.HybridBodies = FakeCollection()
        self.Bodies = FakeCollection()
        self.Parameters = Parameters()
        self.OriginElements = OriginElements()

    def add_hybrid_body(self, name: str) -> HybridBody:
        return self.HybridBodies.add(HybridBody(name))

    def add_body(self, name: str) -> Body:
        return self.Bodies.add(Body(name))

    def add_parameter(self, owner: Any, name: str, value: Any) -> Parameter:
        """Register a parameter owned by ``owner`` (use the part itself for
        part-level parameters)."""
        return self.Parameters.add(Parameter(name, value, owner))


class _Document(FakeComObject):

    def __init__(self, name: str, fail: Iterable[str] = ()):
        super().__init__(name, fail)
        self.closed = 0

    def Close(self) -> None:
        self.closed += 1


class PartDocument(_Document):

    def __init__(self, name: str, part: Part, fail: Iterable[str] = ()):
        super().__init__(name, fail)
        self.Part = part


class ProductDocument(_Document):

    def __init__(self, name: str, product: 'Product', fail: Iterable[str] = ()):
        super().__init__(name, fail)
        self.Product = product


class DrawingDocument(_Document):
    pass


class _ReferenceProduct(FakeComObject):

    def __init__(self, parent: Any, fail: Iterable[str] = ()):
        super().__init__(None, fail)
        self.Parent = parent


class Product(FakeComObject):

    def __init__(self, name: str, part_number: str = "", nomenclature: str = "",
                 fail: Iterable[str] = ()):
        super().__init__(name, fail)
        self.PartNumber = part_number
        self.Nomenclature = nomenclature
        self.Products = FakeCollection()
        self.ReferenceProduct = _ReferenceProduct(None)

    def add_product(self, name: str, part_number: str = "",
                    nomenclature: str = "") -> 'Product':
        return self.Products.add(Product(name, part_number, nomenclature))

    def attach_part(self, part: Part, document_name: Optional[str] = None) -> PartDocument:
        """Make this member reference a part document."""
        document = PartDocument(document_name or f"{part.Name}.CATPart", part)
        self.ReferenceProduct = _ReferenceProduct(document)
        return document


class FakeApplication(FakeComObject):
    """CATIA Application whose ``Documents.Open`` serves prepared documents.

    Documents are looked up by file name, so a CatiaConnection can be
    tested against real temporary files.
    """

    def __init__(self, documents: Dict[str, Any]):
        super().__init__("CNEXT")
        self.Documents = _Documents(documents)
        self.Visible = True


class _Documents(FakeComObject):

    def __init__(self, documents: Dict[str, Any]):
        super().__init__(None)
        self._documents = documents

    def Open(self, path: str) -> Any:
        name = path.replace('\\', '/').rsplit('/', 1)[-1]
        if name not in self._documents:
            raise FakeComError(f"cannot open {path}")
        return self._documents[name]


class FakeConnection:
    """Connection double for the export API.

    Attributes:
        opened: Paths opened, in order
        closed: Paths whose documents were closed, in order
    """

    def __init__(self, documents: Optional[Dict[str, Any]] = None,
                 unopenable: Iterable[str] = ()):
        self.documents = dict(documents or {})
        self.unopenable = set(unopenable)
        self.opened: List[str] = []
        self.closed: List[str] = []
        self.connected = False

    def connect(self) -> 'FakeConnection':
        self.connected = True
        return self

    def disconnect(self) -> None:
        self.connected = False

    def open_document(self, path: str) -> Any:
        if path not in self.documents:
            raise DocumentNotFoundError(path, "File not found")
        if path in self.unopenable:
            raise DocumentOpenError(path, "Could not open document")
        self.opened.append(path)
        return self.documents[path]

    def close_document(self, document: Any) -> None:
        for path, candidate in self.documents.items():
            if candidate is document:
                self.closed.append(path)
                break
        document.Close()


def example_part(name: str = "Part1") -> Part:
    """Part1 > Geo1 (HybridBody) > Feat1 (HybridShape) with P1=10mm, P2=5mm."""
    part = Part(name)
    feature = part.add_hybrid_body("Geo1").add_hybrid_shape("Feat1")
    part.add_parameter(feature, "P1", "10mm")
    part.add_parameter(feature, "P2", "5mm")
    return part
