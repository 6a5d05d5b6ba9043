"""Tool settings entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

BUNDLED_SCHEMA_DIR = Path(__file__).resolve().parents[1] / "resources" / "schema" / "1.0.1"
DEFAULT_SCHEMA_NAME_PREFIX = "tcapi"
DEFAULT_MAX_WORKERS = 4


@dataclass(frozen=True)
class ToolSettings:
    """Normalized settings shared by the schema commands."""

    schema_dir: Path = BUNDLED_SCHEMA_DIR
    schema_name_prefix: str = DEFAULT_SCHEMA_NAME_PREFIX
    validate_schemas: bool = True
    max_workers: int = DEFAULT_MAX_WORKERS
    source_path: Path | None = field(default=None, compare=False)
