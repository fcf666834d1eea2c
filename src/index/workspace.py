"""Project-wide symbol index built from tree-sitter outlines."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import structlog

from document.store import FileDocumentStore
from document.text_document import TextDocument
from models.symbols import Location, OutlineSymbol, SymbolInformation
from parse.treesitter_outline import (
    TreeSitterOutlineProvider,
    extract_outline,
    grammar_for_path,
)
from scan.files import find_source_files
from settings.config import XrayConfig

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

log = structlog.get_logger(__name__)


def _flatten(
    symbols: Iterable[OutlineSymbol],
    uri: str,
    container: str | None,
    out: list[SymbolInformation],
) -> None:
    for symbol in symbols:
        out.append(
            SymbolInformation(
                name=symbol.name,
                kind=symbol.kind,
                location=Location(uri=uri, range=symbol.range),
                container_name=container,
            )
        )
        _flatten(symbol.children, uri, symbol.name, out)


def flatten_outline(
    symbols: Iterable[OutlineSymbol], uri: str
) -> list[SymbolInformation]:
    """Flatten an outline tree in pre-order (parents before their children)."""
    out: list[SymbolInformation] = []
    _flatten(symbols, uri, None, out)
    return out


class WorkspaceSymbolIndex:
    """Exact-name symbol lookup over every source file under a root.

    The index is built once, on first query, and is read-only afterwards so
    concurrent queries need no coordination. Results come back in index
    order: files sorted by relative path, symbols in outline pre-order.
    """

    def __init__(self, root: Path, config: XrayConfig | None = None) -> None:
        self.root = root.resolve()
        self.config = config or XrayConfig()
        self._by_name: dict[str, list[SymbolInformation]] | None = None
        self._build_lock = threading.Lock()

    def _iter_files(self) -> Iterable[Path]:
        return find_source_files(
            self.root,
            extensions=self.config.extensions,
            include_patterns=self.config.include,
            exclude_patterns=self.config.exclude,
            nested_gitignore=self.config.nested_gitignore,
        )

    def _index_file(self, path: Path) -> list[SymbolInformation]:
        grammar = grammar_for_path(path.as_posix())
        if grammar is None:
            return []
        try:
            document = TextDocument.from_path(path)
        except OSError as exc:
            log.debug("index_file_unreadable", path=str(path), error=str(exc))
            return []
        return flatten_outline(extract_outline(document.text, grammar), document.uri)

    def build(self) -> dict[str, list[SymbolInformation]]:
        by_name: dict[str, list[SymbolInformation]] = {}
        file_count = 0
        for path in self._iter_files():
            file_count += 1
            for info in self._index_file(path):
                by_name.setdefault(info.name, []).append(info)
        log.debug(
            "workspace_index_built",
            root=str(self.root),
            files=file_count,
            names=len(by_name),
        )
        return by_name

    def _ensure_built(self) -> dict[str, list[SymbolInformation]]:
        if self._by_name is None:
            with self._build_lock:
                if self._by_name is None:
                    self._by_name = self.build()
        return self._by_name

    def refresh(self) -> None:
        """Drop the built index so the next query rescans the project."""
        with self._build_lock:
            self._by_name = None

    def workspace_symbols(self, query: str) -> list[SymbolInformation]:
        if not query:
            return []
        return list(self._ensure_built().get(query, ()))


class Workspace:
    """Document store, outline provider and symbol index for one project."""

    def __init__(
        self,
        root: Path,
        config: XrayConfig | None = None,
    ) -> None:
        self.root = root.resolve()
        self.config = config or XrayConfig()
        self.documents = FileDocumentStore(self.root)
        self.outline = TreeSitterOutlineProvider()
        self.symbols = WorkspaceSymbolIndex(self.root, self.config)

    def open_document(self, uri: str) -> TextDocument:
        return self.documents.open_document(uri)

    def open_path(self, path: Path) -> TextDocument:
        resolved = path if path.is_absolute() else self.root / path
        if not resolved.is_file():
            msg = f"No such source file: {resolved}"
            raise FileNotFoundError(msg)
        return TextDocument.from_path(resolved.resolve())


__all__ = ["Workspace", "WorkspaceSymbolIndex", "flatten_outline"]
