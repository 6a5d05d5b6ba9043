"""File IO exports."""

from .json_files import (
    JSON_EXTENSION,
    dump_json,
    ensure_directory,
    list_files_with_ext,
    read_json_file,
    read_json_text,
    read_text_file,
    stripped_name,
    write_json_file,
)

__all__ = [
    "JSON_EXTENSION",
    "dump_json",
    "ensure_directory",
    "list_files_with_ext",
    "read_json_file",
    "read_json_text",
    "read_text_file",
    "stripped_name",
    "write_json_file",
]
