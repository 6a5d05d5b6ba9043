"""Compact rendering of error trees for console output."""

from __future__ import annotations

import json
from typing import Any

from .error_aggregation import objectify_error
from .error_models import ErrorNode

SimplifiedError = str | dict[str, Any] | list[Any]


def simplify_error(node: ErrorNode) -> list[Any]:
    """Collapse `node` into a list headed by its message or field dict.

    A single child continues the list as a flat chain; several children
    are grouped into one nested list.
    """
    result: list[Any] = [_head(node)]
    if len(node.sub_errors) == 1:
        result.extend(simplify_error(node.sub_errors[0]))
    elif node.sub_errors:
        result.append(_simplify_children(node.sub_errors))
    return result


def format_error_report(error: Any) -> str:
    """Return a 4-space indented JSON report for an error or error node."""
    node = objectify_error(error)
    payload: dict[str, Any] = node.to_fields()
    if node.sub_errors:
        payload["subErrors"] = _simplify_children(node.sub_errors)
    return json.dumps(payload, indent=4, ensure_ascii=False, default=str)


def _simplify_children(children: tuple[ErrorNode, ...]) -> list[Any]:
    if len(children) == 1:
        return simplify_error(children[0])
    return [simplify_error(child) for child in children]


def _head(node: ErrorNode) -> SimplifiedError:
    fields = node.to_fields()
    if set(fields) <= {"message"}:
        return node.message
    return dict(fields)
