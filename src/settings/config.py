from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from scan.files import DEFAULT_EXTENSIONS

CONFIG_FILENAME = "xray.toml"

_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    level: LogLevel = Field(default="WARNING", description="Minimum log level")
    json_format: bool = Field(
        default=False,
        alias="json",
        description="Render log events as JSON instead of console text",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v


class XrayConfig(BaseModel):
    """Configuration for scope location and definition resolution."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to index (empty = all source files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to leave out of the index",
    )
    extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTENSIONS),
        description="Source file extensions to index",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    use_symbol_index: bool = Field(
        default=True,
        description="Try outline/workspace symbols before the text heuristics",
    )
    preamble_window: int = Field(
        default=200,
        gt=0,
        description="Characters before a block's '{' searched for a function header",
    )
    max_workers: int = Field(
        default=8,
        ge=1,
        description="Concurrent definition lookups per pipeline run",
    )
    ignored_names: list[str] = Field(
        default_factory=list,
        description="Names never reported as call sites, on top of the builtin list",
    )
    hover_max_lines: int = Field(
        default=20,
        ge=1,
        description="Lines of definition text shown in hover output",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging output settings",
    )

    @field_validator("extensions", mode="before")
    @classmethod
    def normalize_extensions(cls, v: Any) -> Any:
        """Accept extensions with or without a leading dot."""
        if v is None:
            return list(DEFAULT_EXTENSIONS)

        if not isinstance(v, list):
            msg = "extensions must be a list of file extensions"
            raise ValueError(msg)

        normalized: list[str] = []
        for ext in v:
            if not isinstance(ext, str) or not ext.strip(".").strip():
                msg = f"Invalid file extension: {ext!r}"
                raise ValueError(msg)
            normalized.append(ext.strip().lstrip(".").lower())
        return normalized

    @field_validator("ignored_names")
    @classmethod
    def validate_ignored_names(cls, v: list[str]) -> list[str]:
        for name in v:
            if not _IDENTIFIER.fullmatch(name):
                msg = f"ignored_names entry '{name}' is not an identifier"
                raise ValueError(msg)
        return v


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> XrayConfig:
    """Load configuration from xray.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return XrayConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return XrayConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
