"""Tree-sitter based document outlines for JavaScript and TypeScript."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

import structlog
import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from index.protocols import ProviderUnavailable
from models.positions import Range
from models.symbols import OutlineSymbol, SymbolKind
from utils import uri_to_path

if TYPE_CHECKING:
    from document.text_document import TextDocument

log = structlog.get_logger(__name__)

GRAMMAR_BY_EXTENSION: dict[str, str] = {
    "js": "javascript",
    "jsx": "javascript",
    "mjs": "javascript",
    "cjs": "javascript",
    "ts": "typescript",
    "mts": "typescript",
    "cts": "typescript",
    "tsx": "tsx",
}

GRAMMAR_BY_LANGUAGE_ID: dict[str, str] = {
    "javascript": "javascript",
    "javascriptreact": "javascript",
    "typescript": "typescript",
    "typescriptreact": "tsx",
}

_LANGUAGE_FACTORIES = {
    "javascript": tree_sitter_javascript.language,
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}

_FUNCTION_VALUE_TYPES = frozenset(
    {
        "arrow_function",
        "function",
        "function_expression",
        "generator_function",
    }
)

_FUNCTION_DECLARATION_TYPES = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "function_signature",
    }
)

_CLASS_TYPES = frozenset({"class_declaration", "abstract_class_declaration", "class"})

_METHOD_SIGNATURE_TYPES = frozenset({"method_signature", "abstract_method_signature"})

_FIELD_TYPES = frozenset({"field_definition", "public_field_definition"})

_PARSERS: dict[str, Parser] = {}
_PARSER_LOCK = threading.Lock()


def _get_parser(grammar: str) -> Parser:
    """Return the cached parser for ``grammar``, creating it on first use."""
    parser = _PARSERS.get(grammar)
    if parser is None:
        parser = Parser(Language(_LANGUAGE_FACTORIES[grammar]()))
        _PARSERS[grammar] = parser
    return parser


def grammar_for_path(path: str) -> str | None:
    suffix = PurePosixPath(path).suffix.lower().lstrip(".")
    return GRAMMAR_BY_EXTENSION.get(suffix)


def grammar_for_document(document: TextDocument) -> str | None:
    if document.language_id in GRAMMAR_BY_LANGUAGE_ID:
        return GRAMMAR_BY_LANGUAGE_ID[document.language_id]
    try:
        return grammar_for_path(uri_to_path(document.uri).as_posix())
    except ValueError:
        return None


@dataclass
class _Source:
    """Source bytes split per line, for byte-to-character column mapping."""

    lines: list[bytes]

    def character(self, row: int, byte_column: int) -> int:
        if row >= len(self.lines):
            return byte_column
        prefix = self.lines[row][:byte_column]
        return len(prefix.decode("utf8", errors="replace"))

    def node_range(self, node: Node) -> Range:
        start_row, start_col = node.start_point
        end_row, end_col = node.end_point
        return Range.from_points(
            start_row,
            self.character(start_row, start_col),
            end_row,
            self.character(end_row, end_col),
        )


def _node_text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf8", errors="replace").strip()


def _property_name(node: Node | None) -> str:
    """Name of a property key, with quotes of string keys removed."""
    text = _node_text(node)
    if node is not None and node.type == "string":
        return text.strip("'\"`")
    return text


def _assigned_name(left: Node | None) -> str:
    """Rightmost name of an assignment target such as ``a.b.c``."""
    if left is None:
        return ""
    if left.type == "member_expression":
        return _node_text(left.child_by_field_name("property"))
    if left.type == "identifier":
        return _node_text(left)
    return ""


def _classify(node: Node) -> tuple[SymbolKind, str] | None:
    """Return the outline kind and name for ``node``, or None if unnamed."""
    node_type = node.type

    if node_type in _FUNCTION_DECLARATION_TYPES:
        return "function", _node_text(node.child_by_field_name("name"))

    if node_type in _CLASS_TYPES:
        name = _node_text(node.child_by_field_name("name"))
        return ("class", name) if name else None

    if node_type == "interface_declaration":
        return "interface", _node_text(node.child_by_field_name("name"))

    if node_type == "method_definition":
        name = _property_name(node.child_by_field_name("name"))
        return ("constructor" if name == "constructor" else "method"), name

    if node_type in _METHOD_SIGNATURE_TYPES:
        return "method", _property_name(node.child_by_field_name("name"))

    if node_type == "variable_declarator":
        value = node.child_by_field_name("value")
        name = _node_text(node.child_by_field_name("name"))
        if value is None:
            return None
        if value.type in _FUNCTION_VALUE_TYPES:
            return "function", name
        if value.type in ("object", "class"):
            return "variable", name
        return None

    if node_type == "pair":
        value = node.child_by_field_name("value")
        if value is not None and value.type in _FUNCTION_VALUE_TYPES:
            return "method", _property_name(node.child_by_field_name("key"))
        return None

    if node_type in _FIELD_TYPES:
        value = node.child_by_field_name("value")
        key = node.child_by_field_name("property") or node.child_by_field_name("name")
        if value is not None and value.type in _FUNCTION_VALUE_TYPES:
            return "method", _property_name(key)
        return None

    if node_type == "assignment_expression":
        right = node.child_by_field_name("right")
        if right is not None and right.type in _FUNCTION_VALUE_TYPES:
            name = _assigned_name(node.child_by_field_name("left"))
            return ("function", name) if name else None
        return None

    return None


def _traverse_node(node: Node, source: _Source) -> list[OutlineSymbol]:
    """Collect outline symbols among the descendants of ``node``."""
    symbols: list[OutlineSymbol] = []
    for child in node.children:
        classified = _classify(child)
        if classified is None or not classified[1]:
            symbols.extend(_traverse_node(child, source))
            continue

        kind, name = classified
        symbols.append(
            OutlineSymbol(
                name=name,
                kind=kind,
                range=source.node_range(child),
                children=tuple(_traverse_node(child, source)),
            )
        )
    return symbols


def extract_outline(text: str, grammar: str) -> list[OutlineSymbol]:
    """Parse ``text`` with ``grammar`` and return its outline tree.

    Nested functions are kept as children of their enclosing function so the
    smallest enclosing scope can be found at any depth.
    """
    if grammar not in _LANGUAGE_FACTORIES:
        msg = f"No tree-sitter grammar for '{grammar}'"
        raise ProviderUnavailable(msg)

    source_bytes = text.encode("utf8")
    with _PARSER_LOCK:
        tree = _get_parser(grammar).parse(source_bytes)

    return _traverse_node(tree.root_node, _Source(lines=source_bytes.split(b"\n")))


class TreeSitterOutlineProvider:
    """Outline provider backed by the tree-sitter JavaScript/TypeScript grammars."""

    def document_symbols(self, document: TextDocument) -> list[OutlineSymbol]:
        grammar = grammar_for_document(document)
        if grammar is None:
            msg = f"Unsupported language for {document.uri}"
            raise ProviderUnavailable(msg)
        symbols = extract_outline(document.text, grammar)
        log.debug("outline_extracted", uri=document.uri, symbols=len(symbols))
        return symbols


__all__ = [
    "GRAMMAR_BY_EXTENSION",
    "TreeSitterOutlineProvider",
    "extract_outline",
    "grammar_for_document",
    "grammar_for_path",
]
