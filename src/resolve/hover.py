"""Definition lookup for the call name under a hover position."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from document.text_document import TextDocument
    from models.positions import Position
    from models.records import Definition
    from resolve.definitions import DefinitionResolver

MIN_HOVER_WORD = 2


def call_name_at(document: TextDocument, position: Position) -> str | None:
    """Name of the call whose identifier touches ``position``.

    The word must be at least two characters and immediately followed by
    ``(`` on the same line.
    """
    word_range = document.word_range_at(position)
    if word_range is None:
        return None

    word = document.get_text(word_range)
    if len(word) < MIN_HOVER_WORD:
        return None

    line_text = document.line_at(word_range.end.line)
    after = word_range.end.character
    if after >= len(line_text) or line_text[after] != "(":
        return None
    return word


def definition_at(
    document: TextDocument,
    position: Position,
    resolver: DefinitionResolver,
) -> Definition | None:
    name = call_name_at(document, position)
    if name is None:
        return None
    return resolver.resolve(name, document)


__all__ = ["call_name_at", "definition_at"]
