"""Configuration loading for xray-core."""

from settings.config import (
    CONFIG_FILENAME,
    ConfigError,
    LoggingConfig,
    XrayConfig,
    load_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "LoggingConfig",
    "XrayConfig",
    "load_config",
]
