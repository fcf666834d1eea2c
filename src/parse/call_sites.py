"""Lexical call-site extraction for brace-delimited scripting languages."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from models.positions import Range
from models.records import CallSite
from parse.keywords import KEYWORDS_AND_BUILTINS

if TYPE_CHECKING:
    from collections.abc import Collection

    from document.text_document import TextDocument

# An identifier not glued to a preceding identifier character, then ``(``.
# Member calls such as ``obj.method(`` report ``method``.
CALL_PATTERN = re.compile(r"(?<![A-Za-z0-9_$])([A-Za-z_$][A-Za-z0-9_$]*)\s*\(")


def extract_call_sites(
    document: TextDocument,
    range_: Range | None = None,
    *,
    exclude: Collection[str] = (),
    ignored: Collection[str] = KEYWORDS_AND_BUILTINS,
) -> list[CallSite]:
    """Return every call site inside ``range_`` (whole document when ``None``).

    Args:
        document: Document to scan.
        range_: Span to scan; positions are reported in document coordinates.
        exclude: Extra names to drop, typically the enclosing scope's own name.
        ignored: Keyword and builtin denylist.
    """
    if range_ is None:
        base_offset = 0
        text = document.text
    else:
        base_offset = document.offset_at(range_.start)
        text = document.get_text(range_)

    calls: list[CallSite] = []
    for match in CALL_PATTERN.finditer(text):
        name = match.group(1)
        if name in ignored or name in exclude:
            continue

        start = document.position_at(base_offset + match.start(1))
        calls.append(
            CallSite(
                name=name,
                range=Range.from_points(
                    start.line,
                    start.character,
                    start.line,
                    start.character + len(name),
                ),
                line=start.line,
                character=start.character,
            )
        )

    return calls


def dedupe_call_sites(calls: list[CallSite]) -> list[CallSite]:
    """Keep the first occurrence of each name, preserving order."""
    seen: set[str] = set()
    unique: list[CallSite] = []
    for call in calls:
        if call.name in seen:
            continue
        seen.add(call.name)
        unique.append(call)
    return unique


def unique_call_sites(
    document: TextDocument,
    range_: Range | None = None,
    *,
    exclude: Collection[str] = (),
    ignored: Collection[str] = KEYWORDS_AND_BUILTINS,
) -> list[CallSite]:
    return dedupe_call_sites(
        extract_call_sites(document, range_, exclude=exclude, ignored=ignored)
    )


__all__ = [
    "CALL_PATTERN",
    "dedupe_call_sites",
    "extract_call_sites",
    "unique_call_sites",
]
