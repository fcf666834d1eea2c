"""Plain-text rendering of pipeline reports and definitions."""

from __future__ import annotations

import textwrap
from typing import TYPE_CHECKING

from utils import language_for_path, relative_display_path, uri_to_path

if TYPE_CHECKING:
    from pathlib import Path

    from models.records import Definition, EnclosingScope, ScopeReport

ELISION_MARKER = "// ..."


def format_definition_content(content: str, max_lines: int = 20) -> str:
    """Dedent ``content`` and cut it to ``max_lines`` lines.

    Truncated output ends with an elision line naming how many lines were
    dropped.

    >>> format_definition_content("    a()\\n    b()", 1)
    'a()\\n// ... (1 more line)'
    """
    lines = textwrap.dedent(content).splitlines()
    if max_lines < 1 or len(lines) <= max_lines:
        return "\n".join(lines)

    hidden = len(lines) - max_lines
    noun = "line" if hidden == 1 else "lines"
    return "\n".join([*lines[:max_lines], f"{ELISION_MARKER} ({hidden} more {noun})"])


def format_scope(scope: EnclosingScope) -> str:
    start, end = scope.range.start, scope.range.end
    span = f"{start.line + 1}:{start.character + 1}-{end.line + 1}:{end.character + 1}"
    return f"{scope.name} ({span})"


def format_definition(
    definition: Definition,
    root: Path | None = None,
    *,
    max_lines: int | None = None,
) -> str:
    location = relative_display_path(definition.source_uri, root)
    language = _language_label(definition.source_uri)
    header = f"## {definition.name}  {location}:{definition.start_line + 1}"
    if language:
        header = f"{header}  [{language}]"

    content = (
        definition.content
        if max_lines is None
        else format_definition_content(definition.content, max_lines)
    )
    return f"{header}\n{content}"


def _language_label(uri: str) -> str | None:
    try:
        return language_for_path(uri_to_path(uri))
    except ValueError:
        return None


def render_report(
    report: ScopeReport,
    root: Path | None = None,
    *,
    max_lines: int | None = None,
) -> str:
    """Render a report as the scope header followed by one section per definition.

    Reports with nothing to show render as their empty-state message.
    """
    if report.scope is None:
        return f"{report.message}\n"

    call_count = len(report.call_sites)
    noun = "call" if call_count == 1 else "calls"
    parts = [f"inside {report.scope.name} ({call_count} {noun})"]

    if report.is_empty:
        parts.append(report.message or "")
    else:
        parts.extend(
            format_definition(definition, root, max_lines=max_lines)
            for definition in report.definitions
        )

    return "\n\n".join(parts) + "\n"


__all__ = [
    "ELISION_MARKER",
    "format_definition",
    "format_definition_content",
    "format_scope",
    "render_report",
]
