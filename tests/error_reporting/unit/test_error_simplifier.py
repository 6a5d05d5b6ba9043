"""Error simplifier tests."""

from __future__ import annotations

import json

from tcapi_schema_tools.error_reporting import (
    ErrorNode,
    ErrorReport,
    add_error,
    format_error_report,
    simplify_error,
)


def test_leaf_with_only_a_message_becomes_the_message() -> None:
    assert simplify_error(ErrorNode(message="boom")) == ["boom"]


def test_leaf_with_extra_fields_becomes_a_field_dict() -> None:
    node = ErrorNode(message="boom", data_path="/actor", code="required")

    assert simplify_error(node) == [{"message": "boom", "dataPath": "/actor", "code": "required"}]


def test_single_child_continues_the_chain() -> None:
    node = add_error([add_error([ValueError("root cause")], "middle")], "top")

    assert simplify_error(node) == ["top", "middle", "root cause"]


def test_single_child_chain_applies_below_a_field_dict() -> None:
    node = ErrorNode(
        message="top",
        fpath="a.json",
        sub_errors=(ErrorNode(message="cause"),),
    )

    assert simplify_error(node) == [{"message": "top", "fpath": "a.json"}, "cause"]


def test_several_children_are_grouped_in_one_list() -> None:
    node = add_error(
        [ErrorNode(message="first"), add_error([ValueError("deep")], "second")], "head"
    )

    assert simplify_error(node) == ["head", [["first"], ["second", "deep"]]]


def test_format_error_report_keeps_root_fields_and_simplifies_children() -> None:
    node = add_error([ValueError("a"), ValueError("b")], "Parent")
    report = ErrorReport(node)

    rendered = format_error_report(report)

    assert json.loads(rendered) == {"message": "Parent", "subErrors": [["a"], ["b"]]}
    assert '\n    "message": "Parent"' in rendered


def test_format_error_report_of_single_child_is_a_flat_chain() -> None:
    node = add_error([add_error([ValueError("c")], "b")], "a")

    assert json.loads(format_error_report(node)) == {"message": "a", "subErrors": ["b", "c"]}


def test_format_error_report_accepts_plain_exceptions() -> None:
    assert json.loads(format_error_report(RuntimeError("plain"))) == {"message": "plain"}
