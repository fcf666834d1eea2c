"""Collaborator protocols supplied by the host.

Every provider is best-effort. Raising any exception (``ProviderUnavailable``
is the conventional one) or returning an empty result sends the caller to its
heuristic fallback; it never aborts a lookup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from document.text_document import TextDocument
    from models.symbols import OutlineSymbol, SymbolInformation


class ProviderUnavailable(RuntimeError):
    """Raised when a symbol or outline provider cannot answer."""


class DocumentAccessor(Protocol):
    def open_document(self, uri: str) -> TextDocument: ...


class OutlineProvider(Protocol):
    def document_symbols(self, document: TextDocument) -> list[OutlineSymbol]: ...


class WorkspaceSymbolProvider(Protocol):
    def workspace_symbols(self, query: str) -> list[SymbolInformation]: ...


__all__ = [
    "DocumentAccessor",
    "OutlineProvider",
    "ProviderUnavailable",
    "WorkspaceSymbolProvider",
]
