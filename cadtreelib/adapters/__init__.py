"""Capability adapters for specific CAD object models."""

from .catia import CatiaAdapter, PARAMETER_TYPE_LABELS

__all__ = ['CatiaAdapter', 'PARAMETER_TYPE_LABELS']
