"""Result records produced by scope location, call extraction and resolution."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from models.positions import Position, Range

ANONYMOUS_SCOPE_NAME = "(anonymous)"

IDENTIFIER_PATTERN = r"^[A-Za-z_$][A-Za-z0-9_$]*$"

ResolutionStrategy = Literal["index", "local"]

NO_SCOPE_MESSAGE = "Move cursor inside a function to see its callees here."
NO_CALLS_MESSAGE = "No resolvable function calls found in this scope."
NO_DEFINITIONS_MESSAGE = "No definitions could be resolved for calls in this scope."


class EnclosingScope(BaseModel):
    """The smallest function-like block around a cursor position."""

    model_config = ConfigDict(frozen=True)

    range: Range
    name: str


class CallSite(BaseModel):
    """A lexical ``identifier(`` occurrence inside a scope."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(pattern=IDENTIFIER_PATTERN)
    range: Range
    line: int
    character: int


class Definition(BaseModel):
    """Resolved source text of a callable."""

    model_config = ConfigDict(frozen=True)

    name: str
    source_uri: str
    range: Range
    content: str = Field(min_length=1)
    start_line: int
    end_line: int
    strategy: ResolutionStrategy = Field(
        default="local", description="Tier that produced the definition"
    )


class ScopeReport(BaseModel):
    """Everything one pipeline run knows about a cursor position."""

    model_config = ConfigDict(frozen=True)

    uri: str
    position: Position
    scope: EnclosingScope | None = None
    call_sites: tuple[CallSite, ...] = Field(default_factory=tuple)
    definitions: tuple[Definition, ...] = Field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.definitions

    @property
    def message(self) -> str | None:
        """Text for consumers when there is nothing to show."""
        if self.scope is None:
            return NO_SCOPE_MESSAGE
        if not self.call_sites:
            return NO_CALLS_MESSAGE
        if not self.definitions:
            return NO_DEFINITIONS_MESSAGE
        return None


__all__ = [
    "ANONYMOUS_SCOPE_NAME",
    "CallSite",
    "Definition",
    "EnclosingScope",
    "NO_CALLS_MESSAGE",
    "NO_DEFINITIONS_MESSAGE",
    "NO_SCOPE_MESSAGE",
    "ResolutionStrategy",
    "ScopeReport",
]
