"""Loading and saving single schema files."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any

from tcapi_schema_tools.error_reporting import ErrorReport, SchemaToolError, add_error
from tcapi_schema_tools.file_io import read_json_file, write_json_file
from tcapi_schema_tools.validation import DRAFT04_SCHEMA_URI, SchemaValidator


def load_schema(
    path: Path | str, validator: SchemaValidator, *, validate: bool = True
) -> Any:
    """Read one schema file, optionally checking it against the metaschema."""
    document = read_json_file(path)
    if validate:
        check_schema(document, path, validator)
    return document


def check_schema(document: Any, path: Path | str, validator: SchemaValidator) -> None:
    """Validate a schema read from `path` against the metaschema."""
    try:
        validator.validate_schema(document)
    except SchemaToolError as exc:
        node = add_error([exc], f"Schema in file {path} failed validation")
        raise ErrorReport(replace(node, data=document, fpath=str(path))) from exc


def prepare_schema(
    document: dict[str, Any], validator: SchemaValidator, *, validate: bool = True
) -> dict[str, Any]:
    """Return a copy of `document` with `$schema` set, validated unless disabled."""
    prepared = dict(document)
    if not prepared.get("$schema"):
        prepared.pop("$schema", None)
        prepared = {"$schema": DRAFT04_SCHEMA_URI, **prepared}
    if validate:
        try:
            validator.validate_schema(prepared)
        except SchemaToolError as exc:
            node = add_error([exc], "Could not save schema; failed validation")
            raise ErrorReport(replace(node, data=prepared)) from exc
    return prepared


def write_schema(
    document: dict[str, Any],
    path: Path | str,
    validator: SchemaValidator,
    *,
    validate: bool = True,
) -> Path:
    """Save `document` to `path` as a draft-04 schema file."""
    prepared = prepare_schema(document, validator, validate=validate)
    return write_json_file(prepared, path)
