"""Custom string formats declared by a schema directory."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

from jsonschema import FormatChecker

from tcapi_schema_tools.error_reporting import (
    ErrorReport,
    FormatDefinitionError,
    SchemaIOError,
    add_error,
)
from tcapi_schema_tools.file_io import read_json_file

_LOGGER = logging.getLogger(__name__)

FORMATS_RELATIVE_PATH = Path("formats") / "formats.json"

_REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "u": 0,
    "g": 0,
}


def compile_format_pattern(name: str, definition: Any) -> re.Pattern[str] | None:
    """Compile a format definition: `regex`, `[regex]` or `[regex, flags]`.

    An empty list means the format is declared without a pattern.
    """
    pattern = definition
    flags = 0
    if isinstance(definition, list):
        if not definition:
            return None
        if len(definition) > 2:
            raise FormatDefinitionError(
                "Invalid format value", data={"name": name, "value": definition}
            )
        pattern = definition[0]
        if len(definition) == 2:
            flags = _parse_flags(name, definition[1])
    if not isinstance(pattern, str):
        raise FormatDefinitionError(
            "Invalid format value", data={"name": name, "value": definition}
        )
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise FormatDefinitionError(
            f"Invalid format regex: {exc}", data={"name": name, "value": definition}
        ) from exc


def register_format(checker: FormatChecker, name: str, definition: Any) -> None:
    """Register one regex-backed format on `checker`."""
    compiled = compile_format_pattern(name, definition)
    if compiled is None:
        return

    def _matches(instance: object) -> bool:
        if not isinstance(instance, str):
            return True
        return compiled.search(instance) is not None

    checker.checks(name)(_matches)


def load_formats(checker: FormatChecker, schema_dir: Path | str) -> int:
    """Register every format declared in `<schema_dir>/formats/formats.json`.

    A missing formats file is not an error. Returns the number of formats read.
    """
    formats_path = Path(schema_dir) / FORMATS_RELATIVE_PATH
    try:
        formats = read_json_file(formats_path)
    except SchemaIOError as exc:
        if exc.code == "ENOENT":
            _LOGGER.debug("No formats file at %s", formats_path)
            return 0
        raise

    if not isinstance(formats, Mapping):
        raise FormatDefinitionError("Formats file must contain an object", fpath=str(formats_path))
    for name, definition in formats.items():
        try:
            register_format(checker, name, definition)
        except FormatDefinitionError as exc:
            node = add_error([exc], "Invalid formats file")
            raise ErrorReport(replace(node, fpath=str(formats_path))) from exc
    _LOGGER.debug("Registered %d formats from %s", len(formats), formats_path)
    return len(formats)


def _parse_flags(name: str, raw_flags: Any) -> int:
    if not isinstance(raw_flags, str):
        raise FormatDefinitionError(
            "Invalid format flags", data={"name": name, "value": raw_flags}
        )
    flags = 0
    for flag in raw_flags:
        if flag not in _REGEX_FLAGS:
            raise FormatDefinitionError(
                f"Unsupported regex flag '{flag}'", data={"name": name, "value": raw_flags}
            )
        flags |= _REGEX_FLAGS[flag]
    return flags
