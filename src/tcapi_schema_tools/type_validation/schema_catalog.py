"""Validate JSON documents against the types of a loaded schema directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jsonschema import FormatChecker

from tcapi_schema_tools.configuration import ToolSettings
from tcapi_schema_tools.error_reporting import (
    ErrorReport,
    SchemaToolError,
    UnknownSchemaReference,
    add_error,
)
from tcapi_schema_tools.file_io import read_json_file
from tcapi_schema_tools.schema_authoring import SchemaComposer
from tcapi_schema_tools.schema_registry import SchemaRepository
from tcapi_schema_tools.validation import JsonSchemaEngine, SchemaValidator, load_formats

_LOGGER = logging.getLogger(__name__)


class SchemaCatalog:
    """A schema directory registered as `<prefix>:<dirname>`; its property keys are type ids."""

    def __init__(
        self,
        validator: SchemaValidator,
        composer: SchemaComposer,
        *,
        format_checker: FormatChecker | None = None,
        name_prefix: str = "tcapi",
    ) -> None:
        self._validator = validator
        self._composer = composer
        self._format_checker = format_checker
        self._name_prefix = name_prefix
        self._schema_name: str | None = None
        self._type_ids: tuple[str, ...] = ()

    @classmethod
    def from_settings(cls, settings: ToolSettings) -> SchemaCatalog:
        """Wire a repository, engine, validator and composer for `settings`."""
        repository = SchemaRepository()
        engine = JsonSchemaEngine(repository)
        validator = SchemaValidator(repository, engine)
        composer = SchemaComposer(
            validator,
            validate_schemas=settings.validate_schemas,
            max_workers=settings.max_workers,
        )
        return cls(
            validator,
            composer,
            format_checker=engine.format_checker,
            name_prefix=settings.schema_name_prefix,
        )

    @property
    def schema_name(self) -> str:
        if self._schema_name is None:
            raise RuntimeError("No schema directory loaded")
        return self._schema_name

    def type_ids(self) -> tuple[str, ...]:
        return self._type_ids

    def uri_for(self, type_id: str) -> str:
        return f"{self.schema_name}#{type_id}"

    def load_schema_dir(self, directory: Path | str, name: str | None = None) -> str:
        """Compose `directory`, register it and load its custom formats.

        Returns:
          The name the composite schema was registered under.

        Raises:
          ErrorReport: composing or validating the directory failed.
        """
        folder = Path(directory)
        schema_name = name or f"{self._name_prefix}:{folder.name}"
        _LOGGER.info("Loading schema directory %s as %s", folder, schema_name)
        try:
            composite = self._composer.compose_directory(folder)
        except SchemaToolError as exc:
            not_loaded = add_error([exc], f"Could not load schema directory '{folder}'")
            raise ErrorReport(add_error([not_loaded], "SCHEMA was invalid")) from exc

        self._validator.repository.register(schema_name, composite)
        if self._format_checker is not None:
            load_formats(self._format_checker, folder)
        self._schema_name = schema_name
        self._type_ids = tuple(composite["properties"])
        return schema_name

    def validate_with_id(self, instance: Any, type_id: str) -> str:
        """Validate `instance` as `type_id`; return the schema uri it matched.

        Raises:
          UnknownSchemaReference: the loaded schema has no such type id.
          ErrorReport: the instance is not a valid `type_id`.
        """
        uri = self.uri_for(type_id)
        _LOGGER.debug("Validating as %s", uri)
        self._validator.validate_with_uri(instance, uri)
        return uri

    def validate_as_any(self, instance: Any) -> list[str]:
        """Validate `instance` against every type id; return the uris it matched."""
        matches: list[str] = []
        failures: list[SchemaToolError] = []
        for type_id in self._type_ids:
            try:
                matches.append(self.validate_with_id(instance, type_id))
            except UnknownSchemaReference:
                raise
            except SchemaToolError as exc:
                failures.append(exc)
        if not matches:
            raise ErrorReport(add_error(failures, f"Not valid as any {self.schema_name} object"))
        return matches

    def validate_document(self, instance: Any, type_id: str | None = None) -> list[str]:
        if type_id:
            return [self.validate_with_id(instance, type_id)]
        return self.validate_as_any(instance)

    def validate_json_file(self, path: Path | str, type_id: str | None = None) -> list[str]:
        """Read `path` and validate it as `type_id`, or as any type id when omitted."""
        return self.validate_document(read_json_file(path), type_id)
