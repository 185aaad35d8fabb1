"""The editor: a set of named open documents, one of which is active."""

from __future__ import annotations

import logging
import os

from textforge.core.document import Document
from textforge.core.errors import DocumentError

logger = logging.getLogger(__name__)


class Editor:
    """Keeps the open documents by name and tracks the active one."""

    def __init__(self) -> None:
        self._documents: dict[str, Document] = {}
        self._active: str | None = None

    def open_file(self, path: str | os.PathLike[str]) -> None:
        """Open ``path`` as a document and make it active.

        An already open document with the same file name is replaced.
        Errors from reading the file propagate unchanged.
        """
        document = Document.from_file(path)
        self._documents[document.name] = document
        self._active = document.name

    def new_document(self, name: str) -> None:
        """Create an empty document called ``name`` and make it active.

        An existing document with the same name is replaced.
        """
        if name in self._documents:
            logger.info("Document with name '%s' already exists and will be replaced", name)
        logger.info("Creating new document '%s'", name)
        self._documents[name] = Document(name)
        self._active = name

    @property
    def active_document(self) -> Document | None:
        """The active document, or None when there is none."""
        if self._active is None:
            return None
        return self._documents.get(self._active)

    def set_active_document(self, name: str) -> None:
        """Make the open document ``name`` the active one."""
        if name not in self._documents:
            raise DocumentError(f"Document not found: {name}")
        self._active = name

    def document_names(self) -> list[str]:
        """Names of all open documents."""
        return list(self._documents)

    def has_document(self, name: str) -> bool:
        return name in self._documents

    def __contains__(self, name: object) -> bool:
        return name in self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def close_document(self, name: str) -> None:
        """Close ``name``; if it was active, no document is active afterwards."""
        if name not in self._documents:
            raise DocumentError(f"Cannot close document: {name} not found")
        del self._documents[name]
        if self._active == name:
            self._active = None