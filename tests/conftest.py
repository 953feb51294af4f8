"""Shared fixtures for the cadtreelib test suite."""

import pytest

from cadtreelib import CatiaAdapter, CollectingEventSink, ExportConfig
from cadtreelib.testing.fakes import Part, Product, ProductDocument, example_part


@pytest.fixture
def adapter():
    return CatiaAdapter()


@pytest.fixture
def sink():
    return CollectingEventSink()


@pytest.fixture
def full_config():
    return ExportConfig.create("full", 0)


@pytest.fixture
def part():
    """Part1 > Geo1 > Feat1 (P1=10mm, P2=5mm)."""
    return example_part()


@pytest.fixture
def rich_part():
    """A part exercising every container kind.

    Part1
    ├── Geo1 (HybridBody, param G=1)
    │   ├── Sub (HybridBody, no params)
    │   │   └── F2 (HybridShape, param D=3mm)
    │   └── F1 (HybridShape, params A=1mm, B=2mm)
    └── PartBody (Body)
        ├── Pad.1 (Shape, param Length=20mm)
        └── Fillet.1 (Shape, no params)
    Part-level parameter Mass=1kg
    """
    part = Part("Part1")
    geo = part.add_hybrid_body("Geo1")
    sub = geo.add_hybrid_body("Sub")
    f2 = sub.add_hybrid_shape("F2")
    f1 = geo.add_hybrid_shape("F1")
    body = part.add_body("PartBody")
    pad = body.add_shape("Pad.1")
    body.add_shape("Fillet.1")

    part.add_parameter(part, "Mass", "1kg")
    part.add_parameter(geo, "G", "1")
    part.add_parameter(f2, "D", "3mm")
    part.add_parameter(f1, "A", "1mm")
    part.add_parameter(f1, "B", "2mm")
    part.add_parameter(pad, "Length", "20mm")
    return part


@pytest.fixture
def assembly():
    """Asm (A-001) > Bracket.1 (BR-1, Bracket) referencing example_part."""
    root = Product("Asm", "A-001")
    member = root.add_product("Bracket.1", "BR-1", "Bracket")
    member.attach_part(example_part("Bracket"))
    return root


@pytest.fixture
def assembly_document(assembly):
    return ProductDocument("Asm.CATProduct", assembly)
