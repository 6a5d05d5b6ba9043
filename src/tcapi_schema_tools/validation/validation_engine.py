"""JSON-Schema draft-04 validation engine adapter."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from jsonschema import Draft4Validator, FormatChecker
from jsonschema.exceptions import ValidationError as JsonSchemaValidationError
from referencing import Registry
from referencing.exceptions import Unresolvable
from referencing.jsonschema import DRAFT4

from tcapi_schema_tools.schema_registry.schema_repository import (
    SchemaRepository,
    split_reference,
)

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineResult:
    """Raw outcome of one engine validation call."""

    valid: bool
    error: dict[str, Any] | None = None
    missing: tuple[str, ...] = field(default_factory=tuple)


class ValidationEngine(Protocol):  # pylint: disable=too-few-public-methods
    """Protocol implemented by the rule-checking layer."""

    def validate(self, instance: Any, schema: Any) -> EngineResult: ...


class JsonSchemaEngine:
    """Draft-04 engine backed by `jsonschema` with repository-driven `$ref` lookup."""

    def __init__(
        self, repository: SchemaRepository, format_checker: FormatChecker | None = None
    ) -> None:
        self._repository = repository
        self.format_checker = format_checker or FormatChecker()
        self._registry_lock = threading.Lock()
        self._registry: Registry | None = None
        self._registry_revision = -1

    def validate(self, instance: Any, schema: Any) -> EngineResult:
        validator = Draft4Validator(
            schema, registry=self._current_registry(), format_checker=self.format_checker
        )
        try:
            errors = list(validator.iter_errors(instance))
        except Unresolvable as exc:
            first = str(getattr(exc, "ref", exc))
            _LOGGER.debug("Unresolvable reference during validation: %s", first)
            missing = unresolved_references(schema, self._repository) or (first,)
            return EngineResult(valid=False, missing=missing)

        if not errors:
            return EngineResult(valid=True)
        if len(errors) == 1:
            return EngineResult(valid=False, error=_failure_from(errors[0]))
        return EngineResult(
            valid=False,
            error={
                "message": f"Instance failed {len(errors)} schema checks",
                "dataPath": "",
                "schemaPath": "",
                "subErrors": [_failure_from(error) for error in errors],
            },
        )

    def _current_registry(self) -> Registry:
        with self._registry_lock:
            revision = self._repository.revision
            if self._registry is None or revision != self._registry_revision:
                self._registry = Registry().with_resources(
                    (name, DRAFT4.create_resource(document))
                    for name, document in self._repository.items()
                )
                self._registry_revision = revision
            return self._registry


def _failure_from(error: JsonSchemaValidationError) -> dict[str, Any]:
    return {
        "message": error.message,
        "dataPath": _to_pointer(error.absolute_path),
        "schemaPath": _to_pointer(error.absolute_schema_path),
        "subErrors": [_failure_from(sub_error) for sub_error in error.context] or None,
        "code": error.validator,
        "data": _keyword_params(error),
    }


def _keyword_params(error: JsonSchemaValidationError) -> dict[str, Any] | None:
    if error.validator in {"required", "dependencies"}:
        return {"required": error.validator_value}
    if error.validator in {"enum", "type", "format", "pattern"}:
        return {error.validator: error.validator_value}
    return None


def _to_pointer(segments: Iterable[Any]) -> str:
    return "".join(
        "/" + str(segment).replace("~", "~0").replace("/", "~1") for segment in segments
    )


def unresolved_references(schema: Any, repository: SchemaRepository) -> tuple[str, ...]:
    """Return every `$ref` reachable from `schema` that the repository cannot resolve.

    Registered schemas reached through a `$ref` are searched as well, each once.
    Fragment-only references resolve against the document they appear in.
    """
    missing: list[str] = []
    visited_names: set[str] = set()
    pending: list[tuple[Any, str | None, Any]] = [(schema, None, schema)]
    while pending:
        node, base, root = pending.pop()
        if isinstance(node, list):
            pending.extend((item, base, root) for item in reversed(node))
            continue
        if not isinstance(node, Mapping):
            continue
        ref = node.get("$ref")
        if isinstance(ref, str):
            name, _ = split_reference(ref)
            target = repository.dereference(ref, base=base, root=root)
            if target is None:
                unresolved = ref if name or not base else f"{base}{ref}"
                if unresolved not in missing:
                    missing.append(unresolved)
            elif name and name not in visited_names:
                visited_names.add(name)
                document = repository.resolve(name)
                pending.append((document, name, document))
        pending.extend(
            (value, base, root) for key, value in reversed(node.items()) if key != "$ref"
        )
    return tuple(missing)
