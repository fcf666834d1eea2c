from __future__ import annotations

import pytest

from parse.body import BodyExtraction, extract_body, find_block_end, find_block_start


def test_extract_body_three_line_function() -> None:
    lines = ["function f() {", "  return 1;", "}"]

    result = extract_body(lines, 0)

    assert result == BodyExtraction(content="\n".join(lines), end_line=2)


def test_extract_body_unterminated_returns_none() -> None:
    assert extract_body(["function f() {", "  return 1;"], 0) is None


def test_extract_body_keeps_signature_lines_before_brace() -> None:
    lines = [
        "function long(",
        "  a,",
        "  b",
        ") {",
        "  return a + b;",
        "}",
        "trailing();",
    ]

    result = extract_body(lines, 0)

    assert result is not None
    assert result.content.splitlines() == lines[:6]
    assert result.end_line == 5


def test_extract_body_stops_on_first_balance_within_a_line() -> None:
    lines = ["function outer(){ inner(); } function inner(){ return 42; }"]

    result = extract_body(lines, 0)

    assert result is not None
    assert result.end_line == 0
    assert result.content == lines[0]


def test_extract_body_handles_nested_blocks() -> None:
    lines = [
        "function f(x) {",
        "  if (x) {",
        "    return { a: 1 };",
        "  }",
        "  return null;",
        "}",
    ]

    result = extract_body(lines, 0)

    assert result is not None
    assert result.end_line == 5


def test_extract_body_is_blind_to_braces_in_strings() -> None:
    # A brace inside a string literal shifts the depth count.
    lines = [
        "function f() {",
        '  return "}";',
        "}",
    ]

    result = extract_body(lines, 0)

    assert result is not None
    assert result.end_line == 1


@pytest.mark.parametrize("start_line", [-1, 3, 10])
def test_extract_body_out_of_range_start(start_line: int) -> None:
    assert extract_body(["a {", "}", ""], start_line) is None


def test_extract_body_without_any_brace_returns_none() -> None:
    assert extract_body(["const x = 1;", "const y = 2;"], 0) is None


def test_extract_body_starts_mid_document() -> None:
    lines = ["const a = 1;", "function g() {", "  a();", "}"]

    result = extract_body(lines, 1)

    assert result is not None
    assert result.content == "function g() {\n  a();\n}"
    assert result.end_line == 3


def test_find_block_bounds_around_offset() -> None:
    text = "function f() { if (x) { y(); } z(); }"
    offset = text.index("z()")

    start = find_block_start(text, offset)
    end = find_block_end(text, offset)

    assert start == text.index("{")
    assert end == len(text) - 1


def test_find_block_bounds_skip_inner_blocks() -> None:
    text = "{ a { b } c }"

    assert find_block_start(text, text.index("c")) == 0
    assert find_block_end(text, text.index("a")) == len(text) - 1


def test_find_block_bounds_at_top_level() -> None:
    text = "call(); other();"

    assert find_block_start(text, 3) is None
    assert find_block_end(text, 3) is None
