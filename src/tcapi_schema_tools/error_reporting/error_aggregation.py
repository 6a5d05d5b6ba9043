"""Aggregation of sibling errors into one parent error."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .error_models import ErrorNode
from .tool_errors import SchemaIOError, SchemaToolError


def add_error(sub_errors: Sequence[Any], message: Any) -> ErrorNode:
    """Build a parent error with `message` whose children are `sub_errors`.

    An empty `sub_errors` yields a leaf. When the only sub error is itself a
    sequence, that sequence becomes the children directly.
    """
    if isinstance(sub_errors, (str, bytes)) or not isinstance(sub_errors, Sequence):
        raise TypeError(
            f"Expected sequence for sub_errors, got {type(sub_errors).__name__} "
            f"instead: {sub_errors!r}"
        )
    if not isinstance(message, str):
        message = str(message)
    if not sub_errors:
        return ErrorNode(message=message)

    if len(sub_errors) == 1 and _is_error_sequence(sub_errors[0]):
        children = tuple(objectify_error(item) for item in sub_errors[0])
    else:
        children = tuple(objectify_error(item) for item in sub_errors)
    return ErrorNode(message=message, sub_errors=children)


def objectify_error(error: Any) -> ErrorNode:
    """Turn an exception, error node or group of errors into an ErrorNode."""
    if isinstance(error, ErrorNode):
        return error
    if isinstance(error, SchemaToolError):
        return error.to_node()
    if isinstance(error, OSError):
        return SchemaIOError.from_os_error(error).to_node()
    if isinstance(error, BaseException):
        return ErrorNode(message=str(error) or type(error).__name__)
    if _is_error_sequence(error):
        return add_error(list(error), f"{len(error)} errors")
    return ErrorNode(message=str(error))


def _is_error_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))
