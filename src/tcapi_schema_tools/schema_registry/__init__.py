"""Schema registry exports."""

from .schema_repository import SchemaRepository, find_by_id, split_pointer, split_reference

__all__ = ["SchemaRepository", "find_by_id", "split_pointer", "split_reference"]
