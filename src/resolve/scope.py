"""Enclosing function scope lookup for a cursor position."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from models.positions import Range
from models.records import ANONYMOUS_SCOPE_NAME, EnclosingScope
from parse.body import find_block_end, find_block_start
from parse.keywords import CONTROL_KEYWORDS
from resolve.strategy import OrderedStrategy, Tier

if TYPE_CHECKING:
    from collections.abc import Iterable

    from document.text_document import TextDocument
    from index.protocols import OutlineProvider
    from models.positions import Position
    from models.symbols import OutlineSymbol

DEFAULT_PREAMBLE_WINDOW = 200

_NAME = r"(?<![A-Za-z0-9_$])[A-Za-z_$][A-Za-z0-9_$]*"
_GENERICS = r"(?:<[^<>{}]*>)?"
# Parameter lists may nest one level of parens or braces (defaults, destructuring).
_PARAMS = r"\((?:[^(){}]|\([^(){}]*\)|\{[^(){}]*\})*\)"
_RETURN_TYPE = r"(?:\s*:\s*[^{};=()]+)?"
_FUNCTION_EXPR = (
    rf"function\s*\*?\s*(?:{_NAME})?\s*{_GENERICS}\s*{_PARAMS}{_RETURN_TYPE}"
)
_ARROW = rf"(?:{_GENERICS}\s*{_PARAMS}{_RETURN_TYPE}|{_NAME})\s*=>"
_FUNCTION_VALUE = rf"(?:async\s+)?(?:{_FUNCTION_EXPR}|{_ARROW})"

# Block headers, most specific first. Each must end right before the '{'.
HEADER_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    (
        "assigned",
        re.compile(
            rf"(?P<name>{_NAME})\s*(?::[^=;{{}}()]+)?=\s*{_FUNCTION_VALUE}\s*$"
        ),
    ),
    ("keyed", re.compile(rf"(?P<name>{_NAME})\s*:\s*{_FUNCTION_VALUE}\s*$")),
    (
        "declared",
        re.compile(
            rf"function\s*\*?\s*(?P<name>{_NAME})?\s*{_GENERICS}\s*{_PARAMS}"
            rf"{_RETURN_TYPE}\s*$"
        ),
    ),
    (
        "method",
        re.compile(rf"(?P<name>{_NAME})\s*{_GENERICS}\s*{_PARAMS}{_RETURN_TYPE}\s*$"),
    ),
)

_NON_FUNCTION_HEADERS = CONTROL_KEYWORDS | {"function", "with"}


def _smallest_function_like(
    symbols: Iterable[OutlineSymbol],
    position: Position,
    best: OutlineSymbol | None = None,
) -> OutlineSymbol | None:
    """Depth-first search for the tightest function-like node around position.

    Children of every containing node are visited, function-like or not, so a
    method inside a class or an object literal is still found.
    """
    for symbol in symbols:
        if not symbol.range.contains(position):
            continue
        if symbol.is_function_like and (
            best is None or symbol.range.span_key() < best.range.span_key()
        ):
            best = symbol
        best = _smallest_function_like(symbol.children, position, best)
    return best


def match_block_header(preamble: str) -> tuple[int, str] | None:
    """Match a function header at the end of ``preamble``.

    Returns the header's start index within ``preamble`` and the scope name
    (the anonymous sentinel when the header has no name), or None.
    """
    for shape, pattern in HEADER_PATTERNS:
        match = pattern.search(preamble)
        if match is None:
            continue
        name = match.group("name")
        if shape == "method" and name in _NON_FUNCTION_HEADERS:
            continue
        return match.start(), name or ANONYMOUS_SCOPE_NAME
    return None


class ScopeLocator:
    """Find the smallest function-like block containing a position.

    The outline tier asks the outline provider; the brace tier scans the raw
    text. The first tier that produces a scope wins.
    """

    def __init__(
        self,
        outline: OutlineProvider | None = None,
        *,
        preamble_window: int = DEFAULT_PREAMBLE_WINDOW,
    ) -> None:
        self.outline = outline
        self.preamble_window = preamble_window

        tiers: list[Tier] = []
        if outline is not None:
            tiers.append(Tier("outline", self.locate_from_outline, guarded=True))
        tiers.append(Tier("braces", self.locate_from_braces))
        self._strategy: OrderedStrategy = OrderedStrategy("enclosing_scope", tiers)

    def locate(
        self, document: TextDocument, position: Position
    ) -> EnclosingScope | None:
        return self._strategy(document, position)

    def locate_from_outline(
        self, document: TextDocument, position: Position
    ) -> EnclosingScope | None:
        if self.outline is None:
            return None
        symbols = self.outline.document_symbols(document)
        best = _smallest_function_like(symbols, position)
        if best is None:
            return None
        return EnclosingScope(range=best.range, name=best.name)

    def locate_from_braces(
        self, document: TextDocument, position: Position
    ) -> EnclosingScope | None:
        """Walk outward through enclosing brace blocks until one has a header.

        Blocks whose header is not a function (``if``, ``for``, class bodies,
        bare objects) are skipped in favor of the next enclosing block.
        """
        text = document.text
        offset = document.offset_at(position)

        open_at = find_block_start(text, offset)
        close_at = find_block_end(text, offset)

        while open_at is not None and close_at is not None:
            window_start = max(0, open_at - self.preamble_window)
            header = match_block_header(text[window_start:open_at])
            if header is not None:
                header_start, name = header
                return EnclosingScope(
                    range=_offsets_to_range(
                        document, window_start + header_start, close_at + 1
                    ),
                    name=name,
                )

            open_at = find_block_start(text, open_at)
            close_at = find_block_end(text, close_at + 1)

        return None


def _offsets_to_range(document: TextDocument, start: int, end: int) -> Range:
    start_pos = document.position_at(start)
    end_pos = document.position_at(end)
    return Range(start=start_pos, end=end_pos)


__all__ = [
    "DEFAULT_PREAMBLE_WINDOW",
    "HEADER_PATTERNS",
    "ScopeLocator",
    "match_block_header",
]
