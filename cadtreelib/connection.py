"""CATIA connection handling for cadtreelib.

Attaches to a running CATIA V5 session through COM automation (pywin32),
or starts a hidden one, and opens/closes documents on behalf of the export
API. The automation server is not thread-safe: use one connection per
thread.
"""

import os
from pathlib import Path
from typing import Any, Optional, Union

from .config import CadTreeError
from .documents import DocumentKind, assembly_root, document_kind, part_root
from .core.handle import CadHandle


CATIA_PROG_ID = "CATIA.Application"


class CatiaConnectionError(CadTreeError, ConnectionError):
    """Raised when the CATIA automation server cannot be reached."""
    pass


class DocumentError(CadTreeError):
    """Base class for per-document failures."""

    def __init__(self, path: Union[str, Path], message: str):
        super().__init__(f"{message}: {path}")
        self.path = str(path)


class DocumentNotFoundError(DocumentError):
    pass


class DocumentOpenError(DocumentError):
    pass


class CatiaConnection:
    """Connection to a CATIA automation server.

    Example:
        with CatiaConnection() as catia:
            document = catia.open_document("C:/models/Bracket.CATPart")
            try:
                ...
            finally:
                catia.close_document(document)
    """

    def __init__(self, prog_id: str = CATIA_PROG_ID, visible: bool = False):
        """
        Args:
            prog_id: COM ProgID of the application
            visible: Window visibility when a new instance has to be started
        """
        self.prog_id = prog_id
        self.visible = visible
        self.application: Optional[Any] = None

    @property
    def connected(self) -> bool:
        return self.application is not None

    def connect(self) -> Any:
        """Attach to a running instance, starting one if necessary.

        Returns:
            The CATIA Application dispatch object

        Raises:
            CatiaConnectionError: If pywin32 is missing or COM fails
        """
        if self.application is not None:
            return self.application

        try:
            import win32com.client
        except ImportError as exc:
            raise CatiaConnectionError(
                "pywin32 is required to talk to CATIA (Windows only)"
            ) from exc

        try:
            self.application = win32com.client.GetActiveObject(self.prog_id)
        except Exception:
            try:
                self.application = win32com.client.Dispatch(self.prog_id)
                self.application.Visible = self.visible
            except Exception as exc:
                raise CatiaConnectionError(
                    f"Could not connect to {self.prog_id}: {exc}"
                ) from exc

        return self.application

    def disconnect(self) -> None:
        """Release the application reference; CATIA itself keeps running."""
        self.application = None

    def open_document(self, path: Union[str, Path]) -> Any:
        """Open a document by path.

        Raises:
            DocumentNotFoundError: If the file does not exist
            DocumentOpenError: If CATIA refuses to open it
        """
        if not os.path.isfile(path):
            raise DocumentNotFoundError(path, "File not found")

        application = self.connect()
        try:
            return application.Documents.Open(str(Path(path).absolute()))
        except Exception as exc:
            raise DocumentOpenError(path, f"Could not open document ({exc})") from exc

    def close_document(self, document: Any) -> None:
        document.Close()

    # Document-level queries, delegated to the shared helpers

    def document_kind(self, document: Any) -> DocumentKind:
        return document_kind(document)

    def assembly_root(self, document: Any) -> CadHandle:
        return assembly_root(document)

    def part_root(self, document: Any) -> CadHandle:
        return part_root(document)

    def __enter__(self) -> 'CatiaConnection':
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.disconnect()
