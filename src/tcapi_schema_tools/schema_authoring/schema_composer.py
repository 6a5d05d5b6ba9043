"""Compose a composite schema out of one fragment file per property."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Any

from tcapi_schema_tools.error_reporting import (
    DuplicateNameError,
    IdMismatchError,
    JsonParseError,
    MissingIdError,
    NoSchemaFilesError,
)
from tcapi_schema_tools.file_io import (
    JSON_EXTENSION,
    list_files_with_ext,
    read_json_file,
    read_json_text,
    stripped_name,
)
from tcapi_schema_tools.validation import DRAFT04_SCHEMA_URI, SchemaValidator

from .authoring_models import FragmentSource
from .schema_files import check_schema

_LOGGER = logging.getLogger(__name__)


class SchemaComposer:
    """Build `{"properties": {<name>: <fragment>}}` composites from fragment files.

    Fragments are read and checked against the metaschema in parallel; the
    `properties` map is filled afterwards, in file order, by the calling thread.
    """

    def __init__(
        self,
        validator: SchemaValidator,
        *,
        validate_schemas: bool = True,
        max_workers: int = 4,
    ) -> None:
        self._validator = validator
        self._validate_schemas = validate_schemas
        self._max_workers = max_workers

    def compose_directory(self, directory: Path | str) -> dict[str, Any]:
        """Compose every `.json` file directly inside `directory`."""
        files = list_files_with_ext(directory, JSON_EXTENSION)
        if not files:
            raise NoSchemaFilesError(
                f"The directory '{directory}' has no .json files!", fpath=str(directory)
            )
        return self.compose([FragmentSource(path=path) for path in files])

    def compose(self, sources: Sequence[FragmentSource]) -> dict[str, Any]:
        """Return the composite schema; the first fragment error aborts composition."""
        if not sources:
            raise NoSchemaFilesError("No schema files to compose")

        futures: list[Future[Any]] = []
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            for source in sources:
                futures.append(executor.submit(self._load_fragment, source))
            wait(futures)

        properties: dict[str, Any] = {}
        origins: dict[str, Path] = {}
        for source, future in zip(sources, futures):
            document = future.result()
            name = _checked_name(source.path, document)
            if name in origins:
                raise DuplicateNameError(
                    name, fpath=str(source.path), previous_fpath=str(origins[name])
                )
            fragment = dict(document)
            fragment.pop("$schema", None)
            properties[name] = fragment
            origins[name] = source.path
        _LOGGER.debug("Composed %d fragments", len(properties))

        composite = {
            "$schema": DRAFT04_SCHEMA_URI,
            "additionalProperties": False,
            "type": "object",
            "properties": properties,
        }
        if self._validate_schemas:
            self._validator.validate_schema(composite)
        return composite

    def _load_fragment(self, source: FragmentSource) -> Any:
        if source.text is None:
            document = read_json_file(source.path)
        else:
            try:
                document = read_json_text(source.text)
            except JsonParseError as exc:
                raise JsonParseError(
                    f"Could not parse file '{source.path}'",
                    sub_errors=(exc.to_node(),),
                    fpath=str(source.path),
                ) from exc
        if self._validate_schemas:
            check_schema(document, source.path, self._validator)
        return document


def _checked_name(path: Path, document: Any) -> str:
    name = stripped_name(path)
    expected = "#" + name
    current = document.get("id") if isinstance(document, Mapping) else None
    if current is None:
        raise MissingIdError(
            "File has no id field", fpath=str(path), current_id=None, expected_id=expected
        )
    if not isinstance(current, str) or not current:
        raise MissingIdError(
            "File has an invalid id field",
            fpath=str(path),
            current_id=current,
            expected_id=expected,
        )
    if current.removeprefix("#") != name:
        raise IdMismatchError(
            "Field 'id' does not match its filename",
            fpath=str(path),
            current_id=current,
            expected_id=expected,
        )
    return name
