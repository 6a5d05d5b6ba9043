"""Registry of named schema documents."""

from __future__ import annotations

import threading
from collections.abc import Iterator, Mapping
from typing import Any
from urllib.parse import unquote


class SchemaRepository:
    """Process-scoped mapping of schema name to schema document.

    Names may be referenced with an optional fragment: `name#/json/pointer`
    or `name#anchor`, where the anchor matches a draft-04 `id` of `#anchor`.
    """

    def __init__(self) -> None:
        self._schemas: dict[str, Any] = {}
        self._lock = threading.Lock()
        self._revision = 0

    @property
    def revision(self) -> int:
        """Counter bumped on every registration."""
        return self._revision

    def register(self, name: str, schema: Any) -> None:
        """Register `schema` as `name`, replacing any previous entry."""
        with self._lock:
            self._schemas[normalize_name(name)] = schema
            self._revision += 1

    def resolve(self, name: str) -> Any | None:
        with self._lock:
            return self._schemas.get(normalize_name(name))

    def names(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._schemas)

    def items(self) -> Iterator[tuple[str, Any]]:
        with self._lock:
            entries = tuple(self._schemas.items())
        return iter(entries)

    def is_known(self, ref: Any) -> bool:
        """Return True when `ref` is a non-empty string naming a registered schema."""
        if not isinstance(ref, str) or not ref:
            return False
        name, _ = split_reference(ref)
        if not name:
            return False
        return self.dereference(ref) is not None

    def dereference(self, ref: str, *, base: str | None = None, root: Any = None) -> Any | None:
        """Return the document or sub-document addressed by `ref`.

        Fragment-only references resolve against the `base` schema name when
        given, otherwise against `root`.
        """
        name, fragment = split_reference(ref)
        if name:
            document = self.resolve(name)
        elif base:
            document = self.resolve(base)
        else:
            document = root
        if document is None:
            return None
        if not fragment:
            return document
        if fragment.startswith("/"):
            return _resolve_pointer(document, fragment)
        return find_by_id(document, "#" + fragment)


def normalize_name(name: str) -> str:
    return name[:-1] if name.endswith("#") else name


def split_reference(ref: str) -> tuple[str, str]:
    """Split `name#fragment` into its name and unquoted fragment."""
    name, _, fragment = ref.partition("#")
    return name, unquote(fragment)


def split_pointer(pointer: str) -> list[str]:
    """Split a JSON pointer into unescaped, non-empty segments."""
    return [
        segment.replace("~1", "/").replace("~0", "~")
        for segment in pointer.split("/")
        if segment != ""
    ]


def find_by_id(document: Any, schema_id: str) -> Any | None:
    """Depth-first search for the sub-document whose `id` equals `schema_id`."""
    stack = [document]
    visited: set[int] = set()
    while stack:
        node = stack.pop()
        if id(node) in visited:
            continue
        visited.add(id(node))
        if isinstance(node, Mapping):
            if node.get("id") == schema_id:
                return node
            stack.extend(reversed(list(node.values())))
        elif isinstance(node, list):
            stack.extend(reversed(node))
    return None


def _resolve_pointer(document: Any, pointer: str) -> Any | None:
    node = document
    for segment in split_pointer(pointer):
        if isinstance(node, Mapping) and segment in node:
            node = node[segment]
        elif isinstance(node, list) and segment.isdigit() and int(segment) < len(node):
            node = node[int(segment)]
        else:
            return None
    return node
