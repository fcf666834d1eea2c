"""Names that look like calls but never point at a user definition.

This is a fixed noise filter, not a soundness guarantee: anything missing from
it is treated as an ordinary call target.
"""

from __future__ import annotations

CONTROL_KEYWORDS: frozenset[str] = frozenset(
    {
        "if",
        "else",
        "for",
        "while",
        "do",
        "switch",
        "case",
        "break",
        "continue",
        "return",
        "throw",
        "try",
        "catch",
        "finally",
    }
)

DECLARATION_KEYWORDS: frozenset[str] = frozenset(
    {
        "new",
        "delete",
        "typeof",
        "instanceof",
        "in",
        "of",
        "void",
        "this",
        "class",
        "extends",
        "super",
        "import",
        "export",
        "from",
        "as",
        "default",
        "function",
        "const",
        "let",
        "var",
        "async",
        "await",
        "yield",
        "static",
        "get",
        "set",
        "constructor",
    }
)

GLOBAL_NAMES: frozenset[str] = frozenset(
    {
        "console",
        "window",
        "document",
        "parseInt",
        "parseFloat",
        "isNaN",
        "Array",
        "Object",
        "String",
        "Number",
        "Boolean",
        "Error",
        "RegExp",
        "Math",
        "Date",
        "JSON",
        "Promise",
        "Map",
        "Set",
        "WeakMap",
        "WeakSet",
        "Symbol",
        "BigInt",
        "Proxy",
        "Reflect",
        "DataView",
        "ArrayBuffer",
        "TypedArray",
        "require",
        "exports",
        "module",
        "process",
        "global",
        "setInterval",
        "setTimeout",
        "clearInterval",
        "clearTimeout",
    }
)

KEYWORDS_AND_BUILTINS: frozenset[str] = (
    CONTROL_KEYWORDS | DECLARATION_KEYWORDS | GLOBAL_NAMES
)


__all__ = [
    "CONTROL_KEYWORDS",
    "DECLARATION_KEYWORDS",
    "GLOBAL_NAMES",
    "KEYWORDS_AND_BUILTINS",
]
