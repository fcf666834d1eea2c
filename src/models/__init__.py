"""Model namespace for xray-core values."""

from models.positions import Position, Range
from models.records import (
    ANONYMOUS_SCOPE_NAME,
    CallSite,
    Definition,
    EnclosingScope,
    ScopeReport,
)
from models.symbols import (
    CALLABLE_KINDS,
    FUNCTION_LIKE_KINDS,
    Location,
    OutlineSymbol,
    SymbolInformation,
    SymbolKind,
)

__all__ = [
    "ANONYMOUS_SCOPE_NAME",
    "CALLABLE_KINDS",
    "FUNCTION_LIKE_KINDS",
    "CallSite",
    "Definition",
    "EnclosingScope",
    "Location",
    "OutlineSymbol",
    "Position",
    "Range",
    "ScopeReport",
    "SymbolInformation",
    "SymbolKind",
]
