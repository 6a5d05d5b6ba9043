"""JSON file reading/writing and fragment file naming helpers."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from tcapi_schema_tools.error_reporting import ErrorNode, JsonParseError, SchemaIOError

_LOGGER = logging.getLogger(__name__)

JSON_EXTENSION = "json"


def stripped_name(path: Path | str) -> str:
    """Return the basename of `path` with every extension removed.

    A leading dot is part of the name: `.hidden.json` strips to `.hidden`.
    """
    name = Path(path).name
    if name.startswith("."):
        return "." + stripped_name(name[1:])
    return name.split(".")[0]


def has_extension(path: Path | str, extension: str) -> bool:
    suffix = extension if extension.startswith(".") else "." + extension
    return str(path).endswith(suffix)


def list_files_with_ext(directory: Path | str, extension: str = JSON_EXTENSION) -> list[Path]:
    """Return the regular files of `directory` ending with `extension`, sorted by name."""
    folder = Path(directory)
    try:
        entries = sorted(folder.iterdir(), key=lambda entry: entry.name)
    except OSError as exc:
        raise SchemaIOError.from_os_error(exc, folder) from exc
    return [entry for entry in entries if has_extension(entry.name, extension) and entry.is_file()]


def ensure_directory(path: Path | str) -> Path:
    """Create `path` when absent; fail when it exists but is not a directory."""
    folder = Path(path)
    if folder.exists() and not folder.is_dir():
        raise SchemaIOError(f"Not a directory: {folder}", path=str(folder), code="ENOTDIR")
    try:
        folder.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SchemaIOError.from_os_error(exc, folder) from exc
    return folder


def read_text_file(path: Path | str) -> str:
    source = Path(path)
    try:
        return source.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaIOError.from_os_error(exc, source) from exc
    except UnicodeDecodeError as exc:
        raise JsonParseError(f"Could not decode file '{source}' as UTF-8", fpath=str(source)) from exc


def read_json_text(text: str | bytes) -> Any:
    """Parse JSON text, raising JsonParseError on malformed input."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise JsonParseError(
            "Could not parse as JSON", sub_errors=(ErrorNode(message=str(exc)),)
        ) from exc


def read_json_file(path: Path | str) -> Any:
    """Read and parse a UTF-8 JSON file."""
    _LOGGER.info("Reading file:  %s", path)
    text = read_text_file(path)
    try:
        return read_json_text(text)
    except JsonParseError as exc:
        raise JsonParseError(
            f"Could not parse file '{path}'", sub_errors=(exc.to_node(),), fpath=str(path)
        ) from exc


def dump_json(document: Any) -> str:
    return json.dumps(document, indent=4, ensure_ascii=False)


def write_json_file(document: Any, path: Path | str) -> Path:
    """Write `document` as 4-space indented UTF-8 JSON."""
    destination = Path(path)
    try:
        destination.write_text(dump_json(document), encoding="utf-8")
    except OSError as exc:
        raise SchemaIOError.from_os_error(exc, destination) from exc
    _LOGGER.info("Wrote file:  %s", destination)
    return destination
