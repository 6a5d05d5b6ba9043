"""Conversion of raw engine failures into error trees."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from tcapi_schema_tools.schema_registry.schema_repository import SchemaRepository

from .error_models import DEFAULT_DATA_PATH, ErrorNode
from .schema_path_resolver import relativize_schema_path


def build_error_tree(
    failure: Mapping[str, Any], schema: Any, repository: SchemaRepository
) -> ErrorNode:
    """Return a cleaned ErrorNode for `failure` and all of its sub errors.

    Only the reportable fields are kept; engine internals such as stack
    traces are dropped.
    """
    schema_path = failure.get("schemaPath") or ""
    sub_failures = failure.get("subErrors") or ()
    code = failure.get("code")
    return ErrorNode(
        message=str(failure.get("message", "")),
        data_path=failure.get("dataPath") or DEFAULT_DATA_PATH,
        schema_path=schema_path,
        schema_relative_path=relativize_schema_path(schema_path, schema, repository),
        sub_errors=tuple(
            build_error_tree(sub_failure, schema, repository) for sub_failure in sub_failures
        ),
        data=failure.get("data"),
        code=str(code) if code is not None else None,
    )
