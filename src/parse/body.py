"""Bracket-depth scanning for brace-delimited source blocks.

The scanners count ``{`` and ``}`` only. They have no notion of string,
template or regular-expression literals, nor of comments, so a brace inside
any of those shifts the count and the block is over- or under-extracted.
That is accepted behavior; the scans are always bounded by the input size
and never fail on malformed text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(frozen=True)
class BodyExtraction:
    """Text of a balanced block and the index of the line that closes it."""

    content: str
    end_line: int


def extract_body(lines: Sequence[str], start_line: int) -> BodyExtraction | None:
    """Extract the block that opens at or after ``start_line``.

    Lines from ``start_line`` are held until the first ``{`` shows up; from
    then on every line is appended verbatim. The scan stops on the first
    character where the depth returns to zero after having been positive, and
    that whole line is kept.

    Returns ``None`` for an empty start range or when the end of ``lines`` is
    reached without balancing.
    """
    if start_line < 0 or start_line >= len(lines):
        return None

    depth = 0
    opened = False
    collected: list[str] = []

    for index in range(start_line, len(lines)):
        line = lines[index]
        collected.append(line)
        for char in line:
            if char == "{":
                depth += 1
                opened = True
            elif char == "}":
                depth -= 1
                if opened and depth == 0:
                    return BodyExtraction(content="\n".join(collected), end_line=index)

    return None


def find_block_end(text: str, offset: int) -> int | None:
    """Offset of the first ``}`` after ``offset`` that is not matched inside it."""
    depth = 0
    for index in range(max(offset, 0), len(text)):
        char = text[index]
        if char == "{":
            depth += 1
        elif char == "}":
            if depth == 0:
                return index
            depth -= 1
    return None


def find_block_start(text: str, offset: int) -> int | None:
    """Offset of the unmatched ``{`` that opens the block around ``offset``.

    Scans backward from the character just before ``offset``.
    """
    depth = 0
    for index in range(min(offset, len(text)) - 1, -1, -1):
        char = text[index]
        if char == "}":
            depth += 1
        elif char == "{":
            if depth == 0:
                return index
            depth -= 1
    return None


__all__ = ["BodyExtraction", "extract_body", "find_block_end", "find_block_start"]
