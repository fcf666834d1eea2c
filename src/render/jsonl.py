from __future__ import annotations

from dataclasses import asdict, is_dataclass
from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


def to_payload(obj: object) -> object:
    """Convert a record to plain JSON-compatible data."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json")
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    return obj


def dumps(obj: object, *, indent: bool = False) -> bytes:
    opts = orjson.OPT_SORT_KEYS
    if indent:
        opts |= orjson.OPT_INDENT_2
    return orjson.dumps(to_payload(obj), option=opts)


def write_jsonl(path: Path, records: Sequence[object]) -> None:
    with path.open("wb") as f:
        for rec in records:
            f.write(dumps(rec))
            f.write(b"\n")


__all__ = ["dumps", "to_payload", "write_jsonl"]
