"""Type validation exports."""

from .schema_catalog import SchemaCatalog

__all__ = ["SchemaCatalog"]
