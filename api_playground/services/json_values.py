"""
JSON value kinds.

Response bodies are arbitrary decoded JSON. Rather than sprinkling type
tests through the diff and analysis code, every value is classified into
one of a closed set of kinds and the algorithms dispatch on that.

Walks over values use an explicit stack, so nesting depth is bounded by
memory rather than by the interpreter's recursion limit.
"""

import enum
from typing import Any, Union


JsonValue = Union[None, bool, int, float, str, list["JsonValue"], dict[str, "JsonValue"]]

# Deepest nesting kept as decoded JSON in a history record
MAX_JSON_DEPTH = 200


class JsonKind(enum.Enum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def kind_of(value: Any) -> JsonKind:
    """
    Classify a decoded JSON value.

    Tuples count as arrays. ``bool`` is checked
    before numbers since it subclasses ``int``.

    Raises:
        TypeError: For values that cannot come out of a JSON decoder
    """
    if value is None:
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOL
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    raise TypeError(f"not a JSON value: {type(value).__name__}")


def json_depth(value: Any) -> int:
    """Nesting depth: 0 for scalars, plus one per enclosing container."""
    deepest = 0
    stack = [(value, 0)]
    while stack:
        node, depth = stack.pop()
        kind = kind_of(node)
        if kind is JsonKind.ARRAY:
            children = node
        elif kind is JsonKind.OBJECT:
            children = node.values()
        else:
            deepest = max(deepest, depth)
            continue
        deepest = max(deepest, depth + 1)
        stack.extend((child, depth + 1) for child in children)
    return deepest


def json_equal(a: Any, b: Any) -> bool:
    """
    Deep value equality between two JSON values.

    Unlike ``==`` this keeps ``True`` and ``1`` apart, while ``1`` and
    ``1.0`` compare equal as JSON numbers do.
    """
    stack = [(a, b)]
    while stack:
        x, y = stack.pop()
        kind = kind_of(x)
        if kind is not kind_of(y):
            return False
        if kind is JsonKind.ARRAY:
            if len(x) != len(y):
                return False
            stack.extend(zip(x, y))
        elif kind is JsonKind.OBJECT:
            if x.keys() != y.keys():
                return False
            stack.extend((x[k], y[k]) for k in x)
        elif x != y:
            return False
    return True
