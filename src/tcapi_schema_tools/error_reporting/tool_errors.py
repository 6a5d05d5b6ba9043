"""Error taxonomy shared by the schema tools."""

from __future__ import annotations

import errno
import json
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar

from .error_models import ErrorNode


class SchemaToolError(Exception):
    """Base class for every failure that renders into an error report."""

    kind: ClassVar[str] = "error"

    def __init__(
        self,
        message: str,
        *,
        sub_errors: Sequence[ErrorNode] = (),
        data: Any = None,
        code: str | None = None,
        fpath: str | None = None,
        suggestion: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.sub_errors = tuple(sub_errors)
        self.data = data
        self.code = code
        self.fpath = fpath
        self.suggestion = suggestion

    def to_node(self) -> ErrorNode:
        return ErrorNode(
            message=self.message,
            sub_errors=self.sub_errors,
            data=self.data,
            code=self.code,
            fpath=self.fpath,
            suggestion=self.suggestion,
            kind=self.kind,
        )


class ErrorReport(SchemaToolError):
    """Raised with an already aggregated error tree."""

    kind = "report"

    def __init__(self, node: ErrorNode) -> None:
        super().__init__(
            node.message,
            sub_errors=node.sub_errors,
            data=node.data,
            code=node.code,
            fpath=node.fpath,
            suggestion=node.suggestion,
        )
        self.node = node

    def to_node(self) -> ErrorNode:
        return self.node


class JsonParseError(SchemaToolError):
    """Raised when text cannot be parsed as JSON."""

    kind = "parse"


class SchemaIOError(SchemaToolError):
    """Raised for filesystem failures; keeps the path and errno name."""

    kind = "io"

    def __init__(self, message: str, *, path: str | None, code: str | None) -> None:
        super().__init__(message, code=code, fpath=path)
        self.path = path

    @classmethod
    def from_os_error(cls, error: OSError, path: object | None = None) -> SchemaIOError:
        code = errno.errorcode.get(error.errno) if error.errno is not None else None
        filename = error.filename if error.filename is not None else path
        return cls(
            error.strerror or str(error),
            path=str(filename) if filename is not None else None,
            code=code,
        )


class FragmentError(SchemaToolError):
    """Base class for fragment/filename inconsistencies."""

    kind = "fragment"

    def __init__(self, message: str, *, fpath: str, current_id: Any, expected_id: str) -> None:
        super().__init__(
            message,
            fpath=fpath,
            suggestion={"id": {"is": current_id, "should_be": expected_id}},
        )
        self.current_id = current_id
        self.expected_id = expected_id


class MissingIdError(FragmentError):
    """Raised when a fragment has no usable id field."""

    kind = "missing_id"


class IdMismatchError(FragmentError):
    """Raised when a fragment id does not match its filename."""

    kind = "id_mismatch"


class DuplicateNameError(SchemaToolError):
    """Raised when two fragment files strip to the same name."""

    kind = "duplicate_name"

    def __init__(self, name: str, *, fpath: str, previous_fpath: str) -> None:
        super().__init__(
            f"Fragment name '{name}' is already provided by '{previous_fpath}'",
            fpath=fpath,
        )
        self.name = name


class NoSchemaFilesError(SchemaToolError):
    """Raised when a schema directory contributes no fragment files."""

    kind = "no_schema_files"


class MissingPropertiesError(SchemaToolError):
    """Raised when a schema to split has no properties mapping."""

    kind = "missing_properties"


class UnknownSchemaReference(SchemaToolError):
    """Raised when a $ref names a schema the repository does not know."""

    kind = "unknown_reference"

    def __init__(self, ref: Any) -> None:
        super().__init__(f"Unknown schema reference: {json.dumps(ref)}")
        self.ref = ref


class MissingSchemasError(SchemaToolError):
    """Raised when the validation engine reports unresolved schema names."""

    kind = "missing_schemas"

    def __init__(self, missing: Sequence[str]) -> None:
        super().__init__(
            "MISSING schemas: " + json.dumps(list(missing), indent=4),
            data=list(missing),
        )
        self.missing = tuple(missing)


class SchemaValidationError(SchemaToolError):
    """Raised when an instance does not comply with its schema."""

    kind = "validation"

    def __init__(self, node: ErrorNode) -> None:
        super().__init__(node.message, sub_errors=node.sub_errors, data=node.data, code=node.code)
        self.node = node

    def to_node(self) -> ErrorNode:
        return self.node


class FormatDefinitionError(SchemaToolError):
    """Raised for unusable custom format definitions."""

    kind = "format_definition"
