"""Position and range models for document coordinates.

Lines and characters are zero-based; characters count code points, not bytes.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Position(BaseModel):
    """A zero-based (line, character) location in a document."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=0)
    character: int = Field(ge=0)

    def as_tuple(self) -> tuple[int, int]:
        return (self.line, self.character)

    def __lt__(self, other: Position) -> bool:
        return self.as_tuple() < other.as_tuple()

    def __le__(self, other: Position) -> bool:
        return self.as_tuple() <= other.as_tuple()

    def __gt__(self, other: Position) -> bool:
        return self.as_tuple() > other.as_tuple()

    def __ge__(self, other: Position) -> bool:
        return self.as_tuple() >= other.as_tuple()


class Range(BaseModel):
    """A span between two positions, start never after end."""

    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position

    @model_validator(mode="after")
    def _check_order(self) -> Range:
        if self.end < self.start:
            msg = (
                f"range start {self.start.as_tuple()} is after "
                f"end {self.end.as_tuple()}"
            )
            raise ValueError(msg)
        return self

    @classmethod
    def from_points(
        cls, start_line: int, start_char: int, end_line: int, end_char: int
    ) -> Range:
        return cls(
            start=Position(line=start_line, character=start_char),
            end=Position(line=end_line, character=end_char),
        )

    def contains(self, position: Position) -> bool:
        """Half-open containment: ``start <= position < end``."""
        return self.start <= position < self.end

    @property
    def line_span(self) -> int:
        return self.end.line - self.start.line

    def span_key(self) -> tuple[int, int]:
        """Size key where line distance dominates column distance."""
        return (self.line_span, self.end.character - self.start.character)


__all__ = ["Position", "Range"]
