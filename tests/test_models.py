from __future__ import annotations

import pytest
from pydantic import ValidationError

from models.positions import Position, Range
from models.records import (
    NO_CALLS_MESSAGE,
    CallSite,
    EnclosingScope,
    ScopeReport,
)
from models.symbols import OutlineSymbol


def test_positions_order_lexicographically() -> None:
    assert Position(line=1, character=9) < Position(line=2, character=0)
    assert Position(line=2, character=1) > Position(line=2, character=0)
    assert Position(line=3, character=3) <= Position(line=3, character=3)


def test_range_rejects_end_before_start() -> None:
    with pytest.raises(ValidationError):
        Range.from_points(2, 0, 1, 5)


def test_negative_coordinates_rejected() -> None:
    with pytest.raises(ValidationError):
        Position(line=-1, character=0)


def test_range_contains_is_half_open() -> None:
    range_ = Range.from_points(1, 4, 3, 1)

    assert range_.contains(Position(line=1, character=4))
    assert range_.contains(Position(line=3, character=0))
    assert not range_.contains(Position(line=3, character=1))
    assert not range_.contains(Position(line=1, character=3))


def test_span_key_prefers_fewer_lines() -> None:
    one_line = Range.from_points(5, 0, 5, 300)
    two_lines = Range.from_points(5, 0, 6, 0)

    assert one_line.span_key() < two_lines.span_key()
    assert two_lines.line_span == 1


def test_call_site_name_must_be_identifier() -> None:
    with pytest.raises(ValidationError):
        CallSite(name="1abc", range=Range.from_points(0, 0, 0, 4), line=0, character=0)


def test_records_are_hashable_values() -> None:
    scope = EnclosingScope(range=Range.from_points(0, 0, 1, 1), name="f")

    assert scope == EnclosingScope(range=Range.from_points(0, 0, 1, 1), name="f")
    assert len({scope, scope.model_copy()}) == 1


def test_report_message_for_scope_without_calls() -> None:
    scope = EnclosingScope(range=Range.from_points(0, 0, 1, 1), name="f")
    report = ScopeReport(
        uri="file:///a.js", position=Position(line=0, character=1), scope=scope
    )

    assert report.is_empty
    assert report.message == NO_CALLS_MESSAGE


def test_outline_function_like_kinds() -> None:
    range_ = Range.from_points(0, 0, 1, 0)

    assert OutlineSymbol(name="c", kind="constructor", range=range_).is_function_like
    assert not OutlineSymbol(name="K", kind="class", range=range_).is_function_like
