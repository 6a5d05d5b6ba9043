"""CLI orchestration integration tests."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner
from tcapi_schema_tools.cli import cli, main
from tcapi_schema_tools.configuration import BUNDLED_SCHEMA_DIR
from tcapi_schema_tools.validation import DRAFT04_SCHEMA_URI

STATEMENT = {
    "actor": {"mbox": "mailto:learner@example.com"},
    "verb": {"id": "http://adlnet.gov/expapi/verbs/attempted"},
    "object": {"id": "http://example.com/activities/quiz"},
}


def _write_json(path: Path, document: object) -> Path:
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def _fragment_dir(tmp_path: Path, fragments: dict[str, dict]) -> Path:
    fragment_dir = tmp_path / "fragments"
    fragment_dir.mkdir()
    for name, fragment in fragments.items():
        _write_json(fragment_dir / f"{name}.json", fragment)
    return fragment_dir


def test_join_writes_the_composite_schema(tmp_path: Path, capsys) -> None:
    source = _fragment_dir(tmp_path, {"agent": {"id": "#agent"}, "verb": {"id": "#verb"}})
    destination = tmp_path / "composite.json"

    exit_code = main(["join", str(source), str(destination)])
    captured = capsys.readouterr()

    assert exit_code == 0
    composite = json.loads(destination.read_text(encoding="utf-8"))
    assert composite["$schema"] == DRAFT04_SCHEMA_URI
    assert composite["additionalProperties"] is False
    assert list(composite["properties"]) == ["agent", "verb"]
    assert f"Wrote file:  {destination}" in captured.err


def test_join_quiet_only_prints_errors(tmp_path: Path, capsys) -> None:
    source = _fragment_dir(tmp_path, {"agent": {"id": "#agent"}})

    exit_code = main(["join", str(source), str(tmp_path / "composite.json"), "--quiet"])
    captured = capsys.readouterr()

    assert exit_code == 0
    assert captured.err == ""


def test_join_reports_id_mismatch_with_suggestion(tmp_path: Path, capsys) -> None:
    source = _fragment_dir(tmp_path, {"a": {"id": "#a"}, "b": {"id": "#wrong"}})
    destination = tmp_path / "composite.json"

    exit_code = main(["join", str(source), str(destination), "--quiet"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert captured.err.startswith("ERROR: ")
    report = json.loads(captured.err[len("ERROR: ") :])
    assert report["message"] == "Field 'id' does not match its filename"
    assert report["suggestion"] == {"id": {"is": "#wrong", "should_be": "#b"}}
    assert not destination.exists()


def test_join_reports_missing_directory(tmp_path: Path, capsys) -> None:
    missing = tmp_path / "absent"

    exit_code = main(["join", str(missing), str(tmp_path / "out.json"), "--quiet"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert f"ERROR: '{missing}' does not exist" in captured.err


def test_join_reports_directory_without_fragments(tmp_path: Path, capsys) -> None:
    exit_code = main(["join", str(tmp_path), str(tmp_path / "out.json"), "--quiet"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "has no .json files!" in captured.err


def test_split_writes_one_file_per_property(tmp_path: Path, capsys) -> None:
    composite = _write_json(
        tmp_path / "composite.json",
        {"type": "object", "properties": {"agent": {"id": "#agent", "type": "object"}}},
    )

    exit_code = main(["split", str(composite), str(tmp_path / "out"), "--quiet"])

    assert exit_code == 0
    fragment = json.loads((tmp_path / "out" / "agent.json").read_text(encoding="utf-8"))
    assert fragment == {"$schema": DRAFT04_SCHEMA_URI, "id": "#agent", "type": "object"}
    assert capsys.readouterr().err == ""


def test_split_reports_missing_source(tmp_path: Path, capsys) -> None:
    missing = tmp_path / "absent.json"

    exit_code = main(["split", str(missing), str(tmp_path / "out")])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert f"File '{missing}' does not exist" in captured.err


def test_split_reports_invalid_composite(tmp_path: Path, capsys) -> None:
    composite = _write_json(tmp_path / "composite.json", {"properties": {"a": True}})

    exit_code = main(["split", str(composite), str(tmp_path / "out")])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert f"Schema in file {composite} failed validation" in captured.err
    assert "Traceback" not in captured.err


def test_split_without_schema_checks_reports_non_object_property(tmp_path: Path, capsys) -> None:
    settings = tmp_path / "settings.yaml"
    settings.write_text("validate_schemas: false\n", encoding="utf-8")
    composite = _write_json(tmp_path / "composite.json", {"properties": {"a": True}})

    exit_code = main(
        ["--config", str(settings), "split", str(composite), str(tmp_path / "out")]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Schema property 'a' is not an object" in captured.err
    assert "Traceback" not in captured.err


def test_join_then_split_round_trip(tmp_path: Path) -> None:
    fragments = {
        "agent": {"$schema": DRAFT04_SCHEMA_URI, "id": "#agent", "type": "object"},
        "verb": {"$schema": DRAFT04_SCHEMA_URI, "id": "#verb", "required": ["id"]},
    }
    source = _fragment_dir(tmp_path, fragments)
    composite = tmp_path / "composite.json"

    assert main(["join", str(source), str(composite), "--quiet"]) == 0
    assert main(["split", str(composite), str(tmp_path / "again"), "--quiet"]) == 0

    for name, fragment in fragments.items():
        written = json.loads((tmp_path / "again" / f"{name}.json").read_text(encoding="utf-8"))
        assert written == fragment


def test_validate_valid_statement(tmp_path: Path, capsys) -> None:
    document = _write_json(tmp_path / "statement.json", STATEMENT)

    exit_code = main(["validate", str(document), "--type", "statement"])
    captured = capsys.readouterr()

    assert exit_code == 0
    assert captured.out.strip() == "VALID as a tcapi:1.0.1#statement"


def test_validate_debug_logs_matches_instead_of_printing(tmp_path: Path, capsys) -> None:
    document = _write_json(tmp_path / "statement.json", STATEMENT)

    exit_code = main(["validate", str(document), "--type", "statement", "--debug"])
    captured = capsys.readouterr()

    assert exit_code == 0
    assert captured.out == ""
    assert "VALID as a tcapi:1.0.1#statement" in captured.err


def test_validate_invalid_statement(tmp_path: Path, capsys) -> None:
    document = _write_json(tmp_path / "statement.json", {"actor": STATEMENT["actor"]})

    exit_code = main(["validate", str(document), "-t", "statement"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert f"INVALID JSON file '{document}' as a tcapi:1.0.1#statement" in captured.out
    assert "required" not in captured.out


def test_validate_verbose_prints_the_error_report(tmp_path: Path, capsys) -> None:
    document = _write_json(tmp_path / "statement.json", {"actor": STATEMENT["actor"]})

    exit_code = main(["validate", str(document), "-t", "statement", "--verbose"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "INVALID as 'tcapi:1.0.1#statement'" in captured.out
    assert "is a required property" in captured.out
    assert f"Processing '{document}' ..." in captured.err


def test_validate_unknown_type_id(tmp_path: Path, capsys) -> None:
    document = _write_json(tmp_path / "statement.json", STATEMENT)

    exit_code = main(["validate", str(document), "--type", "nope"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "UNKNOWN schema type id 'nope'" in captured.out
    assert f"See '{BUNDLED_SCHEMA_DIR}' for allowed type ids." in captured.out


def test_validate_missing_file(tmp_path: Path, capsys) -> None:
    missing = tmp_path / "absent.json"

    exit_code = main(["validate", str(missing), "--type", "statement"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert f"ERROR: '{missing}' does not exist" in captured.err


def test_validate_directory_instead_of_file(tmp_path: Path, capsys) -> None:
    exit_code = main(["validate", str(tmp_path), "--type", "statement"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "ERROR: Is a directory" in captured.err


def test_validate_stdin_against_every_type() -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli, ["validate"], input=json.dumps({"mbox": "mailto:learner@example.com"})
    )

    assert result.exit_code == 0
    assert "WARNING: No schema id provided; trying all possibilities" in result.output
    assert "VALID as a tcapi:1.0.1#agent" in result.output


def test_validate_stdin_matching_no_type() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["validate"], input="[1, 2, 3]")

    assert result.exit_code == 1
    assert "INVALID JSON file '<stdin>'" in result.output


def test_validate_with_custom_schema_directory(tmp_path: Path, capsys) -> None:
    schema_dir = tmp_path / "3.0.0"
    schema_dir.mkdir()
    _write_json(schema_dir / "point.json", {"id": "#point", "required": ["x"]})
    document = _write_json(tmp_path / "point.json", {"x": 1})

    exit_code = main(["validate", str(document), "--schema", str(schema_dir), "-t", "point"])
    captured = capsys.readouterr()

    assert exit_code == 0
    assert "VALID as a tcapi:3.0.0#point" in captured.out


def test_validate_uses_settings_file(tmp_path: Path, capsys) -> None:
    schema_dir = tmp_path / "3.0.0"
    schema_dir.mkdir()
    _write_json(schema_dir / "point.json", {"id": "#point", "required": ["x"]})
    settings = tmp_path / "settings.yaml"
    settings.write_text("schema_dir: 3.0.0\nschema_name_prefix: shapes\n", encoding="utf-8")
    document = _write_json(tmp_path / "point.json", {"y": 1})

    exit_code = main(["--config", str(settings), "validate", str(document), "-t", "point"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "INVALID JSON file" in captured.out
    assert "as a shapes:3.0.0#point" in captured.out


def test_init_config_writes_template(tmp_path: Path, capsys) -> None:
    output = tmp_path / "tcapi-schema.yaml"

    exit_code = main(["init-config", "--output", str(output)])

    assert exit_code == 0
    assert output.exists()
    assert str(output.resolve()) in capsys.readouterr().out
