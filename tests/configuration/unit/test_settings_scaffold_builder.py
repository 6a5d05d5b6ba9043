"""Settings scaffold builder tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from tcapi_schema_tools.configuration import ToolSettings, load_settings
from tcapi_schema_tools.configuration.config_scaffold_builder import (
    build_placeholder_configuration,
    write_placeholder_configuration,
)


def test_build_placeholder_configuration_lists_every_setting() -> None:
    scaffold = build_placeholder_configuration()

    assert "Settings template for tcapi-schema" in scaffold
    for key in ("schema_dir:", "schema_name_prefix:", "validate_schemas:", "max_workers:"):
        assert key in scaffold


def test_write_placeholder_configuration_writes_loadable_file(tmp_path: Path) -> None:
    output_path = tmp_path / "tcapi-schema.yaml"

    written_path = write_placeholder_configuration(output_path)

    assert written_path == output_path.resolve()
    assert load_settings(output_path) == ToolSettings()


def test_write_placeholder_configuration_fails_when_file_exists(tmp_path: Path) -> None:
    output_path = tmp_path / "tcapi-schema.yaml"
    output_path.write_text("existing", encoding="utf-8")

    with pytest.raises(FileExistsError):
        write_placeholder_configuration(output_path)
