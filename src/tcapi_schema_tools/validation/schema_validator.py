"""Validation orchestration over the validation engine."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from tcapi_schema_tools.error_reporting import (
    ErrorReport,
    MissingSchemasError,
    SchemaToolError,
    SchemaValidationError,
    UnknownSchemaReference,
    add_error,
    build_error_tree,
)
from tcapi_schema_tools.file_io import read_json_file
from tcapi_schema_tools.schema_registry import SchemaRepository

from .validation_engine import JsonSchemaEngine, ValidationEngine

_LOGGER = logging.getLogger(__name__)

DRAFT04_SCHEMA_URI = "http://json-schema.org/draft-04/schema#"
METASCHEMA_URI = "http://json-schema.org/draft-04/schema"
DEFAULT_METASCHEMA_PATH = Path(__file__).resolve().parents[1] / "resources" / "draft-04.json"


class SchemaValidator:
    """Validate instances and schemas, resolving `$ref`s through a repository."""

    def __init__(
        self,
        repository: SchemaRepository,
        engine: ValidationEngine | None = None,
        *,
        metaschema_path: Path | str = DEFAULT_METASCHEMA_PATH,
        metaschema_uri: str = METASCHEMA_URI,
    ) -> None:
        self.repository = repository
        self.engine = engine or JsonSchemaEngine(repository)
        self._metaschema_path = Path(metaschema_path)
        self._metaschema_uri = metaschema_uri
        self._metaschema: Mapping[str, Any] | None = None
        self._metaschema_lock = threading.Lock()

    def validate(self, instance: Any, schema: Any) -> None:
        """Raise when `instance` does not comply with `schema`.

        Raises:
          UnknownSchemaReference: `schema` is a `$ref` the repository does not know.
          MissingSchemasError: the engine could not resolve referenced schemas.
          SchemaValidationError: the instance failed validation.
        """
        if isinstance(schema, Mapping) and "$ref" in schema:
            if not self.repository.is_known(schema["$ref"]):
                raise UnknownSchemaReference(schema["$ref"])

        result = self.engine.validate(instance, schema)
        if result.valid:
            return
        if result.missing:
            raise MissingSchemasError(result.missing)
        if result.error is None:
            raise SchemaValidationError(add_error([], "Validation failed without a report"))
        raise SchemaValidationError(build_error_tree(result.error, schema, self.repository))

    def validate_with_uri(self, instance: Any, uri: str) -> None:
        """Validate against the registered schema `uri`, wrapping failures."""
        try:
            self.validate(instance, {"$ref": uri})
        except UnknownSchemaReference:
            raise
        except SchemaToolError as exc:
            raise ErrorReport(add_error([exc], f"INVALID as '{uri}'")) from exc

    def validate_schema(self, schema: Any) -> None:
        """Raise when `schema` is not a valid draft-04 schema."""
        self.validate(schema, self.ensure_metaschema())

    def ensure_metaschema(self) -> Mapping[str, Any]:
        """Load and register the metaschema once; return it."""
        if self._metaschema is not None:
            return self._metaschema
        with self._metaschema_lock:
            if self._metaschema is None:
                self._metaschema = self._load_metaschema()
        return self._metaschema

    def _load_metaschema(self) -> Mapping[str, Any]:
        _LOGGER.info("Loading metaschema from %s", self._metaschema_path)
        try:
            metaschema = read_json_file(self._metaschema_path)
            self.validate(metaschema, metaschema)
        except SchemaToolError as exc:
            raise ErrorReport(add_error([exc], "METASCHEMA failed to load")) from exc
        self.repository.register(self._metaschema_uri, metaschema)
        return metaschema
