from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from index.workspace import Workspace, WorkspaceSymbolIndex, flatten_outline
from models.positions import Range
from models.symbols import OutlineSymbol
from settings.config import XrayConfig
from utils import path_to_uri

FIXTURE = Path(__file__).parent / "fixtures" / "js_project"


def _copy_fixture(root: Path) -> None:
    shutil.copytree(FIXTURE, root)


def test_exact_name_lookup_across_files(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _copy_fixture(repo_root)

    index = WorkspaceSymbolIndex(repo_root)

    (info,) = index.workspace_symbols("formatName")
    assert info.kind == "function"
    assert info.location.uri == path_to_uri(repo_root / "src" / "format.js")
    assert index.workspace_symbols("format") == []
    assert index.workspace_symbols("") == []


def test_gitignored_files_are_not_indexed(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _copy_fixture(repo_root)

    uris = [
        info.location.uri
        for info in WorkspaceSymbolIndex(repo_root).workspace_symbols("formatName")
    ]

    assert path_to_uri(repo_root / "vendor" / "ignored.js") not in uris


def test_methods_carry_their_container(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _copy_fixture(repo_root)

    (info,) = WorkspaceSymbolIndex(repo_root).workspace_symbols("decorate")

    assert info.kind == "method"
    assert info.container_name == "Widget"


def test_results_follow_relative_path_order(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    (repo_root / "b").mkdir(parents=True)
    (repo_root / "a").mkdir()
    (repo_root / "b" / "one.js").write_text("function dup() {}\n", encoding="utf-8")
    (repo_root / "a" / "two.ts").write_text(
        "function dup(): void {}\nfunction dup(x: number): void {}\n",
        encoding="utf-8",
    )

    results = WorkspaceSymbolIndex(repo_root).workspace_symbols("dup")

    assert [
        (Path(r.location.uri).name, r.location.range.start.line) for r in results
    ] == [("two.ts", 0), ("two.ts", 1), ("one.js", 0)]


def test_exclude_patterns_apply(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _copy_fixture(repo_root)
    config = XrayConfig(exclude=["src/format.js"])

    assert WorkspaceSymbolIndex(repo_root, config).workspace_symbols("formatName") == []


def test_refresh_picks_up_new_files(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    index = WorkspaceSymbolIndex(repo_root)
    assert index.workspace_symbols("late") == []

    (repo_root / "late.js").write_text("function late() {}\n", encoding="utf-8")
    assert index.workspace_symbols("late") == []

    index.refresh()
    assert len(index.workspace_symbols("late")) == 1


def test_flatten_outline_is_pre_order() -> None:
    leaf = OutlineSymbol(
        name="leaf", kind="method", range=Range.from_points(1, 0, 1, 5)
    )
    root = OutlineSymbol(
        name="Root", kind="class", range=Range.from_points(0, 0, 2, 1), children=(leaf,)
    )

    flat = flatten_outline([root], "file:///a.ts")

    assert [(s.name, s.container_name) for s in flat] == [
        ("Root", None),
        ("leaf", "Root"),
    ]


def test_workspace_open_path(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _copy_fixture(repo_root)
    workspace = Workspace(repo_root)

    document = workspace.open_path(Path("src/app.js"))

    assert document.language_id == "javascript"
    assert workspace.open_document(document.uri).text == document.text
    with pytest.raises(FileNotFoundError):
        workspace.open_path(Path("src/missing.js"))
