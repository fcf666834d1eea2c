"""In-memory text documents with line and offset conversion."""

from __future__ import annotations

import bisect
import re
from pathlib import Path
from typing import TYPE_CHECKING

from models.positions import Position, Range
from utils import language_for_path, path_to_uri

if TYPE_CHECKING:
    from collections.abc import Sequence

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_WORD = re.compile(r"[A-Za-z0-9_$]+")


def _split_lines(text: str) -> tuple[list[str], list[int]]:
    """Split text into lines and record each line's start offset."""
    lines: list[str] = []
    starts: list[int] = [0]
    cursor = 0
    for match in _LINE_BREAK.finditer(text):
        lines.append(text[cursor : match.start()])
        cursor = match.end()
        starts.append(cursor)
    lines.append(text[cursor:])
    return lines, starts


class TextDocument:
    """Immutable snapshot of a document's text.

    Line breaks are ``\\n``, ``\\r\\n`` or ``\\r``; an empty document still has
    one (empty) line.
    """

    def __init__(
        self,
        uri: str,
        text: str,
        *,
        language_id: str | None = None,
        version: int = 0,
    ) -> None:
        self.uri = uri
        self.language_id = language_id
        self.version = version
        self._text = text
        lines, self._line_starts = _split_lines(text)
        self._lines = tuple(lines)

    @classmethod
    def from_path(cls, path: Path, *, version: int = 0) -> TextDocument:
        text = path.read_text(encoding="utf-8", errors="replace")
        return cls(
            path_to_uri(path),
            text,
            language_id=language_for_path(path),
            version=version,
        )

    @property
    def text(self) -> str:
        return self._text

    @property
    def lines(self) -> Sequence[str]:
        return self._lines

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line_at(self, line: int) -> str:
        if not 0 <= line < len(self._lines):
            msg = f"line {line} out of range (document has {len(self._lines)} lines)"
            raise IndexError(msg)
        return self._lines[line]

    def offset_at(self, position: Position) -> int:
        """Convert a position to a text offset, clamping out-of-range values."""
        if position.line >= len(self._lines):
            return len(self._text)
        line_text = self._lines[position.line]
        character = min(position.character, len(line_text))
        return self._line_starts[position.line] + character

    def position_at(self, offset: int) -> Position:
        """Convert a text offset to a position, clamping out-of-range values."""
        offset = max(0, min(offset, len(self._text)))
        line = bisect.bisect_right(self._line_starts, offset) - 1
        character = min(offset - self._line_starts[line], len(self._lines[line]))
        return Position(line=line, character=character)

    def get_text(self, range_: Range | None = None) -> str:
        if range_ is None:
            return self._text
        return self._text[self.offset_at(range_.start) : self.offset_at(range_.end)]

    def word_range_at(self, position: Position) -> Range | None:
        """Range of the identifier-like word touching ``position``, if any."""
        if position.line >= len(self._lines):
            return None
        line_text = self._lines[position.line]
        for match in _WORD.finditer(line_text):
            if match.start() <= position.character <= match.end():
                return Range.from_points(
                    position.line, match.start(), position.line, match.end()
                )
        return None

    def __repr__(self) -> str:
        return f"TextDocument(uri={self.uri!r}, version={self.version})"


__all__ = ["TextDocument"]
