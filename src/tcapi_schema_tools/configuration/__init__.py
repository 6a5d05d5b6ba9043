"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_settings
from .tool_settings import BUNDLED_SCHEMA_DIR, ToolSettings

__all__ = [
    "ToolSettings",
    "BUNDLED_SCHEMA_DIR",
    "ConfigurationError",
    "load_settings",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
