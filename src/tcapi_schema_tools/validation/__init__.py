"""Validation exports."""

from .format_registry import compile_format_pattern, load_formats, register_format
from .schema_validator import DRAFT04_SCHEMA_URI, METASCHEMA_URI, SchemaValidator
from .validation_engine import EngineResult, JsonSchemaEngine, ValidationEngine

__all__ = [
    "DRAFT04_SCHEMA_URI",
    "METASCHEMA_URI",
    "EngineResult",
    "JsonSchemaEngine",
    "SchemaValidator",
    "ValidationEngine",
    "compile_format_pattern",
    "load_formats",
    "register_format",
]
