"""Error reporting exports."""

from .error_aggregation import add_error, objectify_error
from .error_models import ErrorNode
from .error_simplifier import format_error_report, simplify_error
from .error_tree_builder import build_error_tree
from .schema_path_resolver import NOT_AVAILABLE, relativize_schema_path
from .tool_errors import (
    DuplicateNameError,
    ErrorReport,
    FormatDefinitionError,
    IdMismatchError,
    JsonParseError,
    MissingIdError,
    MissingPropertiesError,
    MissingSchemasError,
    NoSchemaFilesError,
    SchemaIOError,
    SchemaToolError,
    SchemaValidationError,
    UnknownSchemaReference,
)

__all__ = [
    "ErrorNode",
    "add_error",
    "objectify_error",
    "build_error_tree",
    "relativize_schema_path",
    "NOT_AVAILABLE",
    "simplify_error",
    "format_error_report",
    "SchemaToolError",
    "ErrorReport",
    "JsonParseError",
    "SchemaIOError",
    "MissingIdError",
    "IdMismatchError",
    "DuplicateNameError",
    "NoSchemaFilesError",
    "MissingPropertiesError",
    "UnknownSchemaReference",
    "MissingSchemasError",
    "SchemaValidationError",
    "FormatDefinitionError",
]
