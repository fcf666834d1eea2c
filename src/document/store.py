"""Read-only document stores keyed by URI."""

from __future__ import annotations

from typing import TYPE_CHECKING

from document.text_document import TextDocument
from utils import uri_to_path

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path


class FileDocumentStore:
    """Opens documents from disk, restricted to a project root."""

    def __init__(self, root: Path) -> None:
        self.root = root.resolve()

    def open_document(self, uri: str) -> TextDocument:
        path = uri_to_path(uri).resolve()
        try:
            path.relative_to(self.root)
        except ValueError as exc:
            msg = f"{uri} is outside the project root {self.root}"
            raise FileNotFoundError(msg) from exc
        return TextDocument.from_path(path)


class InMemoryDocumentStore:
    """Serves documents a host already holds open."""

    def __init__(self, documents: Iterable[TextDocument] = ()) -> None:
        self._documents = {document.uri: document for document in documents}

    def add(self, document: TextDocument) -> None:
        self._documents[document.uri] = document

    def open_document(self, uri: str) -> TextDocument:
        try:
            return self._documents[uri]
        except KeyError as exc:
            msg = f"No open document for {uri}"
            raise FileNotFoundError(msg) from exc


__all__ = ["FileDocumentStore", "InMemoryDocumentStore"]
