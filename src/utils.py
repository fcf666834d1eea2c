"""Shared path, URI and language helpers."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import unquote, urlparse

EXTENSION_LANGUAGES: dict[str, str] = {
    "ts": "typescript",
    "mts": "typescript",
    "cts": "typescript",
    "tsx": "typescriptreact",
    "js": "javascript",
    "mjs": "javascript",
    "cjs": "javascript",
    "jsx": "javascriptreact",
    "py": "python",
    "go": "go",
    "rs": "rust",
    "java": "java",
    "cpp": "cpp",
    "cc": "cpp",
    "cxx": "cpp",
    "c": "c",
    "cs": "csharp",
    "json": "json",
}


def language_for_path(file_path: str | Path) -> str | None:
    """Map a file extension to a language id.

    Examples:
        >>> language_for_path("src/app.tsx")
        'typescriptreact'
        >>> language_for_path(Path("lib/util.mjs"))
        'javascript'
        >>> language_for_path("README") is None
        True
    """
    suffix = Path(file_path).suffix.lower().lstrip(".")
    return EXTENSION_LANGUAGES.get(suffix)


def path_to_uri(file_path: str | Path) -> str:
    return Path(file_path).resolve().as_uri()


def uri_to_path(uri: str) -> Path:
    """Convert a ``file://`` URI (or a plain path) back to a path."""
    parsed = urlparse(uri)
    if parsed.scheme in ("", "file"):
        return Path(unquote(parsed.path) if parsed.scheme else uri)
    msg = f"Unsupported URI scheme '{parsed.scheme}' in {uri}"
    raise ValueError(msg)


def relative_display_path(uri: str, root: Path | None) -> str:
    """Render a URI relative to ``root`` when it lies inside it."""
    try:
        path = uri_to_path(uri)
    except ValueError:
        return uri
    if root is None:
        return path.as_posix()
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except (OSError, ValueError):
        return path.as_posix()
