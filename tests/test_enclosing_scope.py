from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from document.text_document import TextDocument
from models.positions import Position, Range
from models.records import ANONYMOUS_SCOPE_NAME
from models.symbols import OutlineSymbol
from resolve.scope import ScopeLocator, match_block_header

if TYPE_CHECKING:
    from models.symbols import SymbolKind


def _doc(text: str) -> TextDocument:
    return TextDocument("file:///work/app.js", text, language_id="javascript")


def _position_of(document: TextDocument, needle: str) -> Position:
    return document.position_at(document.text.index(needle))


def _symbol(
    name: str,
    kind: SymbolKind,
    range_: Range,
    children: tuple[OutlineSymbol, ...] = (),
) -> OutlineSymbol:
    return OutlineSymbol(name=name, kind=kind, range=range_, children=children)


class _FakeOutline:
    def __init__(self, symbols: list[OutlineSymbol]) -> None:
        self.symbols = symbols
        self.calls = 0

    def document_symbols(self, document: TextDocument) -> list[OutlineSymbol]:
        self.calls += 1
        return self.symbols


class _BrokenOutline:
    def document_symbols(self, document: TextDocument) -> list[OutlineSymbol]:
        raise TimeoutError("outline request timed out")


def test_outline_function_containing_position_wins() -> None:
    document = _doc("function run() {\n  step();\n}\n")
    outline = _FakeOutline([_symbol("run", "function", Range.from_points(0, 0, 2, 1))])

    scope = ScopeLocator(outline).locate(document, Position(line=1, character=3))

    assert scope is not None
    assert scope.name == "run"
    assert scope.range.contains(Position(line=1, character=3))


def test_outline_picks_smallest_nested_function() -> None:
    document = _doc("x\n" * 12)
    inner = _symbol("inner", "function", Range.from_points(3, 2, 5, 3))
    outer = _symbol(
        "outer", "function", Range.from_points(1, 0, 10, 1), children=(inner,)
    )
    outline = _FakeOutline([outer])

    scope = ScopeLocator(outline).locate(document, Position(line=4, character=0))

    assert scope is not None
    assert scope.name == "inner"


def test_outline_line_span_dominates_column_width() -> None:
    document = _doc("x\n" * 12)
    wide_single_line = _symbol("wide", "function", Range.from_points(4, 0, 4, 400))
    tall_narrow = _symbol("tall", "method", Range.from_points(3, 0, 5, 1))
    outline = _FakeOutline([tall_narrow, wide_single_line])

    scope = ScopeLocator(outline).locate(document, Position(line=4, character=0))

    assert scope is not None
    assert scope.name == "wide"


def test_outline_recurses_through_non_function_containers() -> None:
    document = _doc("x\n" * 12)
    method = _symbol("render", "method", Range.from_points(2, 2, 4, 3))
    klass = _symbol("Widget", "class", Range.from_points(0, 0, 8, 1), (method,))
    outline = _FakeOutline([klass])

    scope = ScopeLocator(outline).locate(document, Position(line=3, character=4))

    assert scope is not None
    assert scope.name == "render"


def test_outline_without_function_falls_back_to_braces() -> None:
    document = _doc("class Widget {\n  render() {\n    paint();\n  }\n}\n")
    klass = _symbol("Widget", "class", Range.from_points(0, 0, 4, 1))
    outline = _FakeOutline([klass])

    scope = ScopeLocator(outline).locate(document, _position_of(document, "paint"))

    assert outline.calls == 1
    assert scope is not None
    assert scope.name == "render"


def test_outline_failure_falls_back_to_braces() -> None:
    document = _doc("function run() {\n  step();\n}\n")

    scope = ScopeLocator(_BrokenOutline()).locate(
        document, _position_of(document, "step")
    )

    assert scope is not None
    assert scope.name == "run"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("function load(path) {\n  read(path);\n}", "load"),
        ("const load = async (path) => {\n  read(path);\n}", "load"),
        ("const load = function (path) {\n  read(path);\n}", "load"),
        ("let load = path => {\n  read(path);\n}", "load"),
        ("obj.load = function (path) {\n  read(path);\n}", "load"),
        ("const api = {\n  load: async (path) => {\n    read(path);\n  },\n};", "load"),
        ("class Store {\n  load(path) {\n    read(path);\n  }\n}", "load"),
        ("function load(path: string): Promise<void> {\n  read(path);\n}", "load"),
        ("function load(path = resolve()) {\n  read(path);\n}", "load"),
        ("function load({ path, mode }) {\n  read(path);\n}", "load"),
        ("const load = ({ path }) => {\n  read(path);\n}", "load"),
        ("const load = ({ path }: Options): void => {\n  read(path);\n}", "load"),
        ("setTimeout(function () {\n  read(path);\n});", ANONYMOUS_SCOPE_NAME),
    ],
)
def test_brace_heuristic_header_shapes(text: str, expected: str) -> None:
    document = _doc(text)

    scope = ScopeLocator().locate(document, _position_of(document, "read"))

    assert scope is not None
    assert scope.name == expected


def test_brace_heuristic_walks_out_of_control_blocks() -> None:
    text = (
        "function check(items) {\n"
        "  for (const item of items) {\n"
        "    if (item) {\n"
        "      use(item);\n"
        "    }\n"
        "  }\n"
        "}\n"
    )
    document = _doc(text)
    position = _position_of(document, "use")

    scope = ScopeLocator().locate(document, position)

    assert scope is not None
    assert scope.name == "check"
    assert scope.range.start == Position(line=0, character=0)
    assert scope.range.end == Position(line=6, character=1)
    assert scope.range.contains(position)


def test_brace_heuristic_range_spans_header_to_closing_brace() -> None:
    document = _doc("  const f = () => {\n    g();\n  };")

    scope = ScopeLocator().locate(document, _position_of(document, "g()"))

    assert scope is not None
    assert scope.range.start == Position(line=0, character=8)
    assert scope.range.end == Position(line=2, character=3)


def test_top_level_position_is_not_found() -> None:
    document = _doc("setup();\nfunction f() {\n  g();\n}\n")

    assert ScopeLocator().locate(document, Position(line=0, character=2)) is None


def test_non_function_block_only_is_not_found() -> None:
    document = _doc("if (ready) {\n  go();\n}\n")

    assert ScopeLocator().locate(document, _position_of(document, "go")) is None


def test_preamble_window_limits_header_search() -> None:
    padding = " " * 50
    document = _doc(f"function far(){padding}{{\n  g();\n}}")

    assert ScopeLocator(preamble_window=10).locate(
        document, _position_of(document, "g()")
    ) is None
    assert ScopeLocator(preamble_window=200).locate(
        document, _position_of(document, "g()")
    ) is not None


@pytest.mark.parametrize("preamble", ["if (x) ", "while (busy) ", "switch (k) "])
def test_control_headers_are_not_method_shorthand(preamble: str) -> None:
    assert match_block_header(preamble) is None


def test_match_block_header_reports_start_offset() -> None:
    preamble = "x = 1;\nfunction named(a, b) "

    header = match_block_header(preamble)

    assert header == (preamble.index("function"), "named")
