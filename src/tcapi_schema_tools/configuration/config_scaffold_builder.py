"""Settings scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "tcapi-schema.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Settings template for tcapi-schema.
# Every key is optional; uncomment a line to override its default.

# Directory of fragment files loaded by `validate`; relative to this file.
# Defaults to the bundled tcapi 1.0.1 schema.
# schema_dir: "schema/1.0.1"

# The loaded schema is registered as <schema_name_prefix>:<directory name>.
# schema_name_prefix: "tcapi"

# Check every fragment and composite against the draft-04 metaschema.
# validate_schemas: true

# Threads used to read fragment files in parallel.
# max_workers: 4
"""


def build_placeholder_configuration() -> str:
    """Build a YAML settings template listing every key with its default."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the settings template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Settings file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
