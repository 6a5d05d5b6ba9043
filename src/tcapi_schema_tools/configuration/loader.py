"""Settings loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .tool_settings import (
    BUNDLED_SCHEMA_DIR,
    DEFAULT_MAX_WORKERS,
    DEFAULT_SCHEMA_NAME_PREFIX,
    ToolSettings,
)

_KNOWN_KEYS = frozenset({"schema_dir", "schema_name_prefix", "validate_schemas", "max_workers"})


class ConfigurationError(Exception):
    """Raised when the settings file is invalid."""


def load_settings(config_path: Path | str | None = None) -> ToolSettings:
    """Load and validate the settings file; without a path, return the defaults."""
    if config_path is None:
        return ToolSettings()

    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Settings file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse settings file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Settings root must be a mapping.")

    unknown = sorted(str(key) for key in parsed if key not in _KNOWN_KEYS)
    if unknown:
        raise ConfigurationError(f"Unknown settings: {', '.join(unknown)}")

    schema_dir = _parse_schema_dir(parsed.get("schema_dir"), path.parent)
    prefix = _require_non_empty_string(
        parsed.get("schema_name_prefix", DEFAULT_SCHEMA_NAME_PREFIX), "schema_name_prefix"
    )
    if ":" in prefix:
        raise ConfigurationError("schema_name_prefix must not contain ':'.")
    validate_schemas = _require_bool(parsed.get("validate_schemas", True), "validate_schemas")
    max_workers = _require_positive_int(
        parsed.get("max_workers", DEFAULT_MAX_WORKERS), "max_workers"
    )

    return ToolSettings(
        schema_dir=schema_dir,
        schema_name_prefix=prefix,
        validate_schemas=validate_schemas,
        max_workers=max_workers,
        source_path=path,
    )


def _parse_schema_dir(value: Any, base_path: Path) -> Path:
    if value is None:
        return BUNDLED_SCHEMA_DIR
    raw_path = _require_non_empty_string(value, "schema_dir")
    schema_dir = _resolve_path(base_path, raw_path)
    if not schema_dir.is_dir():
        raise ConfigurationError(f"Schema directory not found: {schema_dir}")
    return schema_dir


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path).expanduser()
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
