from __future__ import annotations

from pathlib import Path

import pytest

from settings.config import ConfigError, XrayConfig, load_config


def _write_config(repo_root: Path, toml_content: str) -> None:
    (repo_root / "xray.toml").write_text(toml_content, encoding="utf-8")


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config == XrayConfig()
    assert config.use_symbol_index is True
    assert config.preamble_window == 200
    assert config.hover_max_lines == 20
    assert "ts" in config.extensions


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_logging_key_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[logging]
level = "debug"
color = true
""".strip(),
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "exclude = [")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_valid_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
exclude = ["dist/**"]
extensions = [".ts", "JS"]
use_symbol_index = false
max_workers = 2
ignored_names = ["describe", "it", "$"]

[logging]
level = "debug"
json = true
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.exclude == ["dist/**"]
    assert config.extensions == ["ts", "js"]
    assert config.use_symbol_index is False
    assert config.max_workers == 2
    assert config.ignored_names == ["describe", "it", "$"]
    assert config.logging.level == "DEBUG"
    assert config.logging.json_format is True


@pytest.mark.parametrize(
    "toml_content",
    [
        "preamble_window = 0",
        "max_workers = 0",
        "hover_max_lines = -1",
        'ignored_names = ["not-an-identifier"]',
        'extensions = [""]',
        'extensions = "ts"',
        '[logging]\nlevel = "loud"',
    ],
)
def test_invalid_values_rejected(tmp_path: Path, toml_content: str) -> None:
    _write_config(tmp_path, toml_content)

    with pytest.raises(ConfigError, match="Invalid config"):
        load_config(tmp_path)
