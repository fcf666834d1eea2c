"""Resolve a called name to the source text of its definition."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from models.positions import Position, Range
from models.records import Definition
from models.symbols import CALLABLE_KINDS
from parse.body import extract_body
from resolve.strategy import OrderedStrategy, Tier

if TYPE_CHECKING:
    from collections.abc import Sequence

    from document.text_document import TextDocument
    from index.protocols import DocumentAccessor, WorkspaceSymbolProvider
    from models.symbols import SymbolInformation

_BOUNDARY = r"(?<![A-Za-z0-9_$])"

# Local definition shapes in priority order. ``{name}`` is the escaped name.
LOCAL_SHAPES: tuple[tuple[str, str], ...] = (
    ("function", r"function\s*\*?\s*{name}\s*\("),
    ("arrow", r"(?:const|let|var)\s+{name}\s*=.*=>"),
    ("block", r"{name}\s*\(.*\)\s*\{{"),
    ("typed", r"{name}\s*\(.*\)\s*:\s*"),
)


def local_patterns(name: str) -> list[re.Pattern[str]]:
    escaped = _BOUNDARY + re.escape(name)
    return [re.compile(shape.format(name=escaped)) for _, shape in LOCAL_SHAPES]


def order_candidates(
    name: str, symbols: Sequence[SymbolInformation]
) -> list[SymbolInformation]:
    """Keep callable candidates, exact-name matches first, index order otherwise."""
    callables = [symbol for symbol in symbols if symbol.kind in CALLABLE_KINDS]
    exact = [symbol for symbol in callables if symbol.name == name]
    rest = [symbol for symbol in callables if symbol.name != name]
    return exact + rest


class DefinitionResolver:
    """Two-tier definition lookup.

    The index tier asks a workspace symbol provider and reads the winning
    symbol's document; it is guarded, so a failing provider just falls
    through. The local tier searches the calling document's own text.
    """

    def __init__(
        self,
        documents: DocumentAccessor,
        symbol_index: WorkspaceSymbolProvider | None = None,
    ) -> None:
        self.documents = documents
        self.symbol_index = symbol_index

        tiers: list[Tier] = []
        if symbol_index is not None:
            tiers.append(Tier("index", self.resolve_from_index, guarded=True))
        tiers.append(Tier("local", self.resolve_locally))
        self._strategy: OrderedStrategy = OrderedStrategy("definition", tiers)

    def resolve(self, name: str, origin: TextDocument) -> Definition | None:
        if not name:
            return None
        return self._strategy(name, origin)

    def resolve_from_index(
        self, name: str, origin: TextDocument
    ) -> Definition | None:
        if self.symbol_index is None:
            return None

        candidates = order_candidates(name, self.symbol_index.workspace_symbols(name))
        if not candidates:
            return None

        symbol = candidates[0]
        symbol_range = symbol.location.range
        document = self.documents.open_document(symbol.location.uri)

        extraction = extract_body(document.lines, symbol_range.start.line)
        if extraction is not None:
            content = extraction.content
            end_line = extraction.end_line
        else:
            content = document.get_text(symbol_range)
            end_line = symbol_range.end.line

        if not content:
            return None

        return Definition(
            name=name,
            source_uri=document.uri,
            range=symbol_range,
            content=content,
            start_line=symbol_range.start.line,
            end_line=end_line,
            strategy="index",
        )

    def resolve_locally(self, name: str, origin: TextDocument) -> Definition | None:
        text = origin.text
        for pattern in local_patterns(name):
            for match in pattern.finditer(text):
                start = origin.position_at(match.start())
                extraction = extract_body(origin.lines, start.line)
                if extraction is None:
                    continue

                end = Position(
                    line=extraction.end_line,
                    character=len(origin.line_at(extraction.end_line)),
                )
                return Definition(
                    name=name,
                    source_uri=origin.uri,
                    range=Range(start=start, end=end),
                    content=extraction.content,
                    start_line=start.line,
                    end_line=extraction.end_line,
                    strategy="local",
                )
        return None


__all__ = [
    "DefinitionResolver",
    "LOCAL_SHAPES",
    "local_patterns",
    "order_candidates",
]
