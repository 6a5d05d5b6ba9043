"""Split a composite schema into one fragment file per property."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from tcapi_schema_tools.error_reporting import MissingPropertiesError, SchemaIOError
from tcapi_schema_tools.file_io import JSON_EXTENSION, ensure_directory, write_json_file
from tcapi_schema_tools.validation import SchemaValidator

from .authoring_models import SplitResult
from .schema_files import load_schema, prepare_schema

_LOGGER = logging.getLogger(__name__)

_SEPARATORS = tuple(sep for sep in ("/", "\\", os.sep, os.altsep) if sep)


def split_schema(
    schema: Any,
    destination: Path | str,
    validator: SchemaValidator,
    *,
    validate: bool = True,
) -> SplitResult:
    """Write `<key>.json` for every entry of `schema["properties"]`.

    Every key and fragment is checked before the first file is written.
    """
    properties = schema.get("properties") if isinstance(schema, Mapping) else None
    if properties is None:
        raise MissingPropertiesError("Schema has no 'properties' field")
    if not isinstance(properties, Mapping):
        raise MissingPropertiesError(
            "Schema field 'properties' is not an object", data=properties
        )

    folder = ensure_directory(destination)
    targets = {key: _fragment_path(folder, key) for key in properties}
    for key, fragment in properties.items():
        if not isinstance(fragment, Mapping):
            raise MissingPropertiesError(
                f"Schema property '{key}' is not an object", data={key: fragment}
            )
    prepared = {
        key: prepare_schema(dict(fragment), validator, validate=validate)
        for key, fragment in properties.items()
    }
    written = tuple(write_json_file(fragment, targets[key]) for key, fragment in prepared.items())
    _LOGGER.debug("Split %d fragments into %s", len(written), folder)
    return SplitResult(destination=folder, written=written)


def split_schema_file(
    source: Path | str,
    destination: Path | str,
    validator: SchemaValidator,
    *,
    validate: bool = True,
) -> SplitResult:
    """Load a composite schema file and split it into `destination`."""
    source_path = Path(source)
    if not source_path.exists():
        raise SchemaIOError(
            f"File '{source_path}' does not exist", path=str(source_path), code="ENOENT"
        )
    composite = load_schema(source_path, validator, validate=validate)
    return split_schema(composite, destination, validator, validate=validate)


def _fragment_path(folder: Path, key: Any) -> Path:
    if (
        not isinstance(key, str)
        or key in {"", ".", ".."}
        or any(sep in key for sep in _SEPARATORS)
    ):
        raise MissingPropertiesError(
            f"Schema property '{key}' is not a valid file name", data={"key": key}
        )
    target = folder / f"{key}.{JSON_EXTENSION}"
    if target.resolve().parent != folder.resolve():
        raise MissingPropertiesError(
            f"Schema property '{key}' is not a valid file name", data={"key": key}
        )
    return target
