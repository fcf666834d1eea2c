"""Command-line interface for xray-core."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from index.workspace import Workspace
from log_config import configure_logging
from models.positions import Position
from models.records import NO_SCOPE_MESSAGE
from render.jsonl import dumps, write_jsonl
from render.text import format_definition, format_scope, render_report
from resolve.hover import definition_at
from resolve.pipeline import build_pipeline
from settings.config import ConfigError, load_config
from verify.verify import verify_idempotence

if TYPE_CHECKING:
    from document.text_document import TextDocument
    from resolve.pipeline import XrayPipeline
    from settings.config import XrayConfig


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        msg = f"expected a positive integer, got {value!r}"
        raise argparse.ArgumentTypeError(msg) from exc
    if number < 1:
        msg = f"expected a positive integer, got {value!r}"
        raise argparse.ArgumentTypeError(msg)
    return number


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        default=".",
        help="Project root (default: .)",
    )
    parser.add_argument(
        "--no-index",
        action="store_true",
        help="Skip the outline and symbol index; use text heuristics only",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Log level (default: from xray.toml, else WARNING)",
    )


def _add_cursor(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", help="Source file, relative to the root or absolute")
    parser.add_argument("line", type=_positive_int, help="1-based line")
    parser.add_argument("col", type=_positive_int, help="1-based column")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="xray")
    subparsers = parser.add_subparsers(dest="command", required=True)

    scope_parser = subparsers.add_parser("scope", help="Show the enclosing function")
    _add_cursor(scope_parser)
    _add_common_options(scope_parser)

    calls_parser = subparsers.add_parser(
        "calls", help="List unique call sites of the enclosing function"
    )
    _add_cursor(calls_parser)
    _add_common_options(calls_parser)

    resolve_parser = subparsers.add_parser("resolve", help="Resolve one name")
    resolve_parser.add_argument("name", help="Function name to resolve")
    resolve_parser.add_argument(
        "--from",
        dest="origin",
        required=True,
        help="File the call is made from",
    )
    _add_common_options(resolve_parser)

    trace_parser = subparsers.add_parser(
        "trace", help="Resolve every callee of the enclosing function"
    )
    _add_cursor(trace_parser)
    _add_common_options(trace_parser)
    trace_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON",
    )
    trace_parser.add_argument(
        "--out",
        default=None,
        help="Also write resolved definitions as JSONL to this path",
    )

    hover_parser = subparsers.add_parser(
        "hover", help="Show the definition of the call under the cursor"
    )
    _add_cursor(hover_parser)
    _add_common_options(hover_parser)

    verify_parser = subparsers.add_parser(
        "verify", help="Verify that repeated runs give identical results"
    )
    _add_cursor(verify_parser)
    _add_common_options(verify_parser)

    return parser


def _cursor(args: argparse.Namespace) -> Position:
    return Position(line=args.line - 1, character=args.col - 1)


def _handle_scope(
    pipeline: XrayPipeline, document: TextDocument, position: Position
) -> int:
    scope = pipeline.locate(document, position)
    if scope is None:
        sys.stdout.write(f"{NO_SCOPE_MESSAGE}\n")
        return 0
    sys.stdout.write(f"{format_scope(scope)}\n")
    return 0


def _handle_calls(
    pipeline: XrayPipeline, document: TextDocument, position: Position
) -> int:
    scope = pipeline.locate(document, position)
    if scope is None:
        sys.stdout.write(f"{NO_SCOPE_MESSAGE}\n")
        return 0
    for call in pipeline.call_sites(document, scope):
        sys.stdout.write(f"{call.name}\t{call.line + 1}:{call.character + 1}\n")
    return 0


def _handle_resolve(
    pipeline: XrayPipeline, document: TextDocument, name: str, root: Path
) -> int:
    definition = pipeline.resolver.resolve(name, document)
    if definition is None:
        sys.stderr.write(f"no definition found for {name}\n")
        return 1
    sys.stdout.write(f"{format_definition(definition, root)}\n")
    return 0


def _handle_trace(
    pipeline: XrayPipeline,
    document: TextDocument,
    position: Position,
    root: Path,
    *,
    as_json: bool,
    out: str | None,
) -> int:
    report = pipeline.run(document, position)
    if out is not None:
        write_jsonl(Path(out).expanduser(), report.definitions)
    if as_json:
        sys.stdout.write(dumps(report, indent=True).decode("utf-8") + "\n")
    else:
        sys.stdout.write(render_report(report, root))
    return 0


def _handle_hover(
    pipeline: XrayPipeline,
    document: TextDocument,
    position: Position,
    root: Path,
    config: XrayConfig,
) -> int:
    definition = definition_at(document, position, pipeline.resolver)
    if definition is None:
        sys.stderr.write("no call under cursor resolves to a definition\n")
        return 1
    sys.stdout.write(
        f"{format_definition(definition, root, max_lines=config.hover_max_lines)}\n"
    )
    return 0


def _handle_verify(
    pipeline: XrayPipeline, document: TextDocument, position: Position
) -> int:
    result = verify_idempotence(pipeline, document, position)
    if not result.ok:
        for label, names in (
            ("missing", result.missing),
            ("extra", result.extra),
            ("mismatches", result.mismatches),
        ):
            for name in names:
                sys.stderr.write(f"{label}: {name}\n")
        if not (result.missing or result.extra or result.mismatches):
            sys.stderr.write("order: definitions came back in a different order\n")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    root = Path(args.root).expanduser().resolve()

    try:
        config = load_config(root)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    configure_logging(
        level=args.log_level or config.logging.level,
        json_format=config.logging.json_format,
    )

    workspace = Workspace(root, config)
    use_index = False if args.no_index else None
    pipeline = build_pipeline(workspace, config, use_index=use_index)

    source = args.origin if args.command == "resolve" else args.file
    try:
        document = workspace.open_path(Path(source).expanduser())
    except FileNotFoundError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    if args.command == "resolve":
        return _handle_resolve(pipeline, document, args.name, root)

    position = _cursor(args)

    if args.command == "scope":
        return _handle_scope(pipeline, document, position)

    if args.command == "calls":
        return _handle_calls(pipeline, document, position)

    if args.command == "trace":
        return _handle_trace(
            pipeline, document, position, root, as_json=args.json, out=args.out
        )

    if args.command == "hover":
        return _handle_hover(pipeline, document, position, root, config)

    if args.command == "verify":
        return _handle_verify(pipeline, document, position)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
