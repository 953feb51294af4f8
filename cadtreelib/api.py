"""High-level API for cadtreelib.

This module provides simple, functional interfaces for the common export
operations. These functions wrap the resolver, connection and configuration
objects for ease of use in simple cases.
"""

import logging
from typing import Any, Iterable, List, Optional, Union

from .config import ExportConfig, ExportConfigError, ExportMode
from .connection import (
    CatiaConnection,
    DocumentNotFoundError,
    DocumentOpenError,
)
from .core.adapter import CapabilityAdapter
from .core.events import EventCode, EventSink, LoggingEventSink
from .core.handle import CadHandle, ObjectKind
from .core.node import NormalizedNode
from .resolver import DocumentResolver


logger = logging.getLogger(__name__)


def parse_paths(value: str) -> List[str]:
    """Split a semicolon-separated path list.

    Entries are stripped and blank entries dropped.

    Example:
        >>> parse_paths("a.CATPart; ;b.CATProduct")
        ['a.CATPart', 'b.CATProduct']
    """
    return [part.strip() for part in value.split(';') if part.strip()]


def _validate_paths(paths: Union[str, Iterable[str]]) -> List[str]:
    if isinstance(paths, str):
        return parse_paths(paths)
    try:
        items = list(paths)
    except TypeError:
        raise ExportConfigError(f"paths must be a list of strings, got {type(paths).__name__}")

    bad = [item for item in items if not isinstance(item, str)]
    if bad:
        raise ExportConfigError(f"paths must be strings, got {bad[0]!r}")
    return [item.strip() for item in items if item.strip()]


def export_documents(
    paths: Union[str, Iterable[str]],
    mode: Union[ExportMode, str] = ExportMode.FULL,
    max_depth: int = 0,
    *,
    connection: Optional[Any] = None,
    sink: Optional[EventSink] = None,
    adapter: Optional[CapabilityAdapter] = None,
    **options
) -> List[NormalizedNode]:
    """Open, resolve and close each document in turn.

    Input is validated before anything is opened. Documents that are
    missing, fail to open, or are of an unsupported kind are reported to
    the sink and left out of the result.

    Args:
        paths: Document paths, or one semicolon-separated string
        mode: full (alias all) or flatten
        max_depth: Depth bound, 0 = unlimited
        connection: Open connection to reuse; a CatiaConnection is created
            (and released afterwards) when omitted
        sink: Event sink (defaults to logging)
        adapter: Capability adapter (defaults to CatiaAdapter)
        **options: Extra ExportConfig fields

    Returns:
        One root node per successfully exported document, in input order

    Raises:
        ExportConfigError: On invalid mode, depth, options or paths
        CatiaConnectionError: If CATIA cannot be reached

    Example:
        >>> roots = export_documents(["C:/models/Bracket.CATPart"], "flatten")
        >>> write_json(roots, "bracket.json")
    """
    config = ExportConfig.create(mode, max_depth, **options)
    path_list = _validate_paths(paths)
    if not path_list:
        return []
    sink = sink or LoggingEventSink()
    resolver = DocumentResolver(adapter, config, sink)

    owns_connection = connection is None
    if owns_connection:
        connection = CatiaConnection()
        connection.connect()

    results: List[NormalizedNode] = []
    try:
        for path in path_list:
            node = _export_path(connection, resolver, path, sink)
            if node is not None:
                results.append(node)
    finally:
        if owns_connection:
            connection.disconnect()

    logger.debug("Exported %d of %d documents", len(results), len(path_list))
    return results


def _export_path(connection: Any, resolver: DocumentResolver, path: str,
                 sink: EventSink) -> Optional[NormalizedNode]:
    try:
        document = connection.open_document(path)
    except DocumentNotFoundError as exc:
        sink.report(EventCode.DOCUMENT_NOT_FOUND, "document not found",
                    subject=path, error=exc)
        return None
    except DocumentOpenError as exc:
        sink.report(EventCode.DOCUMENT_OPEN_FAILED, "document could not be opened",
                    subject=path, error=exc)
        return None

    sink.report(EventCode.DOCUMENT_OPENED, "document opened",
                level=logging.INFO, subject=path)
    try:
        return resolver.resolve_document(document)
    except Exception as exc:
        sink.report(EventCode.DOCUMENT_FAILED, "document export failed",
                    subject=path, error=exc)
        return None
    finally:
        try:
            connection.close_document(document)
        except Exception as exc:
            sink.report(EventCode.DOCUMENT_CLOSE_FAILED, "document could not be closed",
                        subject=path, error=exc)


def export_document(
    document: Any,
    mode: Union[ExportMode, str] = ExportMode.FULL,
    max_depth: int = 0,
    *,
    sink: Optional[EventSink] = None,
    adapter: Optional[CapabilityAdapter] = None,
    **options
) -> Optional[NormalizedNode]:
    """Export a document that is already open.

    Returns:
        Root node, or None if the document kind is unsupported
    """
    config = ExportConfig.create(mode, max_depth, **options)
    resolver = DocumentResolver(adapter, config, sink or LoggingEventSink())
    return resolver.resolve_document(document)


def export_part(
    part: Any,
    mode: Union[ExportMode, str] = ExportMode.FULL,
    max_depth: int = 0,
    *,
    sink: Optional[EventSink] = None,
    adapter: Optional[CapabilityAdapter] = None,
    **options
) -> Optional[NormalizedNode]:
    """Export a Part object (or Part handle) directly.

    Example:
        >>> part = catia.ActiveDocument.Part
        >>> export_part(part, "full", max_depth=2).to_dict()
    """
    config = ExportConfig.create(mode, max_depth, **options)
    resolver = DocumentResolver(adapter, config, sink or LoggingEventSink())
    handle = part if isinstance(part, CadHandle) else CadHandle(part, ObjectKind.PART)
    return resolver.resolve_part(handle)
