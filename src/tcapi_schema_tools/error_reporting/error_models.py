"""Error reporting entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

DEFAULT_DATA_PATH = "/"


@dataclass(frozen=True)
class ErrorNode:  # pylint: disable=too-many-instance-attributes
    """One node of a hierarchical error report."""

    message: str
    data_path: str | None = None
    schema_path: str | None = None
    schema_relative_path: str | None = None
    sub_errors: tuple[ErrorNode, ...] = ()
    data: Any = None
    code: str | None = None
    fpath: str | None = None
    suggestion: Mapping[str, Any] | None = None
    kind: str | None = None

    def to_fields(self) -> dict[str, Any]:
        """Return populated non-child fields keyed by their rendered names."""
        candidates = (
            ("message", self.message),
            ("dataPath", self.data_path),
            ("schemaPath", self.schema_path),
            ("schemaRelativePath", self.schema_relative_path),
            ("data", self.data),
            ("code", self.code),
            ("fpath", self.fpath),
            ("suggestion", self.suggestion),
        )
        return {name: value for name, value in candidates if value is not None}

    def to_dict(self) -> dict[str, Any]:
        """Return the full tree as plain JSON-compatible data."""
        fields = self.to_fields()
        if self.sub_errors:
            fields["subErrors"] = [child.to_dict() for child in self.sub_errors]
        return fields
