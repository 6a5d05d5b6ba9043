"""Error tree builder tests."""

from __future__ import annotations

from tcapi_schema_tools.error_reporting import build_error_tree
from tcapi_schema_tools.schema_registry import SchemaRepository

SCHEMA = {
    "type": "object",
    "properties": {
        "agent": {
            "id": "#agent",
            "type": "object",
            "required": ["mbox", "name"],
        }
    },
}


def test_builds_nested_nodes_with_relative_paths() -> None:
    failure = {
        "message": "Instance failed 2 schema checks",
        "dataPath": "",
        "schemaPath": "",
        "stack": "engine internals",
        "subErrors": [
            {
                "message": "'mbox' is a required property",
                "dataPath": "/agent",
                "schemaPath": "/properties/agent/required",
                "code": "required",
                "data": {"required": ["mbox", "name"]},
            },
            {
                "message": "'name' is a required property",
                "dataPath": "/agent",
                "schemaPath": "/properties/agent/required",
                "code": "required",
            },
        ],
    }

    node = build_error_tree(failure, SCHEMA, SchemaRepository())

    assert node.data_path == "/"
    assert node.schema_relative_path == "/"
    assert len(node.sub_errors) == 2
    first, second = node.sub_errors
    assert first.schema_relative_path == "#agent/required"
    assert second.schema_relative_path == "#agent/required"
    assert first.data == {"required": ["mbox", "name"]}
    assert first.code == "required"
    assert "stack" not in node.to_dict()


def test_missing_fields_fall_back_to_defaults() -> None:
    node = build_error_tree({"message": "bad"}, {}, SchemaRepository())

    assert node.data_path == "/"
    assert node.schema_path == ""
    assert node.schema_relative_path == "/"
    assert node.sub_errors == ()
