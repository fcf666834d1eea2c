"""Idempotence verification for pipeline runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from render.jsonl import dumps

if TYPE_CHECKING:
    from document.text_document import TextDocument
    from models.positions import Position
    from models.records import Definition
    from resolve.pipeline import XrayPipeline


@dataclass(frozen=True)
class IdempotenceResult:
    ok: bool
    runs: int
    names: tuple[str, ...] = field(default_factory=tuple)
    mismatches: tuple[str, ...] = field(default_factory=tuple)
    missing: tuple[str, ...] = field(default_factory=tuple)
    extra: tuple[str, ...] = field(default_factory=tuple)


def _by_name(definitions: tuple[Definition, ...]) -> dict[str, bytes]:
    return {definition.name: dumps(definition) for definition in definitions}


def verify_idempotence(
    pipeline: XrayPipeline,
    document: TextDocument,
    position: Position,
    *,
    runs: int = 2,
) -> IdempotenceResult:
    """Verify that repeated runs at one position give identical definitions.

    Runs the pipeline ``runs`` times and compares every later run against the
    first: the ordered name list, and each definition's serialized form.

    Args:
        pipeline: Pipeline under test.
        document: Unchanged document to run against.
        position: Cursor position.
        runs: Number of runs, at least two.

    Returns:
        IdempotenceResult with ok status and the names that went missing,
        appeared, or changed content in a later run.

    Raises:
        ValueError: If ``runs`` is less than two.
    """
    if runs < 2:
        msg = f"Idempotence needs at least two runs, got {runs}"
        raise ValueError(msg)

    baseline = pipeline.run(document, position).definitions
    baseline_names = tuple(definition.name for definition in baseline)
    expected = _by_name(baseline)

    missing: set[str] = set()
    extra: set[str] = set()
    mismatches: set[str] = set()
    order_changed = False

    for _ in range(runs - 1):
        current = pipeline.run(document, position).definitions
        names = tuple(definition.name for definition in current)
        actual = _by_name(current)

        missing.update(expected.keys() - actual.keys())
        extra.update(actual.keys() - expected.keys())
        for name in expected.keys() & actual.keys():
            if expected[name] != actual[name]:
                mismatches.add(name)
        if names != baseline_names:
            order_changed = True

    ok = not missing and not extra and not mismatches and not order_changed
    return IdempotenceResult(
        ok=ok,
        runs=runs,
        names=baseline_names,
        mismatches=tuple(sorted(mismatches)),
        missing=tuple(sorted(missing)),
        extra=tuple(sorted(extra)),
    )


__all__ = ["IdempotenceResult", "verify_idempotence"]
