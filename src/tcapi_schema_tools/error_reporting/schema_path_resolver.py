"""Schema-relative path computation for validation errors."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from tcapi_schema_tools.schema_registry.schema_repository import (
    SchemaRepository,
    split_pointer,
    split_reference,
)

NOT_AVAILABLE = "<N/A>"
ROOT_PATH = "/"

_MISSING = object()


def relativize_schema_path(
    schema_path: str | None, schema: Any, repository: SchemaRepository
) -> str:
    """Shorten a raw schema pointer by rebasing on `$ref` and `id` anchors.

    Every string `id` met while walking the path replaces everything
    accumulated so far. Walking stops at the first undefined key, which is
    marked with `<N/A>`.
    """
    relative = ""
    base: str | None = None
    cursor = schema
    if isinstance(schema, Mapping) and isinstance(schema.get("$ref"), str):
        relative = schema["$ref"]
        base = split_reference(schema["$ref"])[0] or None
    root = schema
    cursor, base, root = _follow_refs(cursor, repository, base=base, root=root)
    if cursor is _MISSING:
        return relative + NOT_AVAILABLE

    for segment in split_pointer(schema_path or ""):
        relative += "/" + segment
        cursor = _step(cursor, segment)
        if cursor is _MISSING:
            return relative + NOT_AVAILABLE
        cursor, base, root = _follow_refs(cursor, repository, base=base, root=root)
        if cursor is _MISSING:
            return relative + NOT_AVAILABLE
        if isinstance(cursor, Mapping) and isinstance(cursor.get("id"), str):
            relative = cursor["id"]
    return relative or ROOT_PATH


def _step(cursor: Any, segment: str) -> Any:
    if isinstance(cursor, Mapping):
        return cursor.get(segment, _MISSING)
    if isinstance(cursor, list) and segment.isdigit():
        index = int(segment)
        return cursor[index] if index < len(cursor) else _MISSING
    return _MISSING


def _follow_refs(
    cursor: Any, repository: SchemaRepository, *, base: str | None, root: Any
) -> tuple[Any, str | None, Any]:
    seen: set[str] = set()
    while isinstance(cursor, Mapping) and isinstance(cursor.get("$ref"), str):
        ref = cursor["$ref"]
        name, fragment = split_reference(ref)
        key = f"{name or base or ''}#{fragment}"
        if key in seen:
            return _MISSING, base, root
        seen.add(key)
        target = repository.dereference(ref, base=base, root=root)
        if target is None:
            return _MISSING, base, root
        if name:
            base = name
            root = repository.resolve(name)
        cursor = target
    return cursor, base, root
