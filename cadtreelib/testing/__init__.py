"""Testing utilities for cadtreelib and projects that consume it."""

from .fakes import (
    FakeComError,
    FakeCollection,
    FakeConnection,
    FakeApplication,
    Part,
    PartDocument,
    Product,
    ProductDocument,
    DrawingDocument,
    example_part,
)

__all__ = [
    'FakeComError',
    'FakeCollection',
    'FakeConnection',
    'FakeApplication',
    'Part',
    'PartDocument',
    'Product',
    'ProductDocument',
    'DrawingDocument',
    'example_part',
]
