"""Schema authoring exports."""

from .authoring_models import FragmentSource, SplitResult
from .schema_composer import SchemaComposer
from .schema_files import check_schema, load_schema, prepare_schema, write_schema
from .schema_splitter import split_schema, split_schema_file

__all__ = [
    "FragmentSource",
    "SplitResult",
    "SchemaComposer",
    "check_schema",
    "load_schema",
    "prepare_schema",
    "write_schema",
    "split_schema",
    "split_schema_file",
]
