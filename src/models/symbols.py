"""Symbol models shared by outline and workspace symbol providers."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from models.positions import Range

SymbolKind = Literal[
    "file",
    "module",
    "class",
    "interface",
    "method",
    "constructor",
    "function",
    "property",
    "field",
    "variable",
    "object",
]

FUNCTION_LIKE_KINDS: frozenset[str] = frozenset({"function", "method", "constructor"})

# Kinds accepted as call targets when querying the workspace index.
CALLABLE_KINDS: frozenset[str] = frozenset({"function", "method"})


class OutlineSymbol(BaseModel):
    """A node of a document outline tree."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: SymbolKind
    range: Range
    children: tuple[OutlineSymbol, ...] = Field(default_factory=tuple)

    @property
    def is_function_like(self) -> bool:
        return self.kind in FUNCTION_LIKE_KINDS


class Location(BaseModel):
    """A range inside the document identified by ``uri``."""

    model_config = ConfigDict(frozen=True)

    uri: str
    range: Range


class SymbolInformation(BaseModel):
    """A flat workspace symbol query result."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: SymbolKind
    location: Location
    container_name: str | None = None


__all__ = [
    "CALLABLE_KINDS",
    "FUNCTION_LIKE_KINDS",
    "Location",
    "OutlineSymbol",
    "SymbolInformation",
    "SymbolKind",
]
