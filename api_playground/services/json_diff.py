"""
Structural diff between two JSON values.

Walks both trees depth-first and reports every addressed difference as a
DiffItem. Paths use ``.key`` for object members (bare ``key`` at the root)
and ``[i]`` for array elements, e.g. ``user.addresses[2].city``.

Behavior worth knowing when reading diff output:

- Two deep-equal roots produce a single ``unchanged`` item at path ``""``.
  Below the root, equal subtrees produce nothing at all.
- Arrays are compared by position. Swapping two elements shows up as two
  ``changed`` items, never as a move.
- An object compared with an array is a ``changed`` node, not a recursion.
"""

from collections import Counter
from typing import Any, Iterator, Union

from ..schemas.diff import DiffItem, DiffKind
from .json_values import JsonKind, JsonValue, json_equal, kind_of


ROOT_PATH = ""

DIFF_KINDS: tuple[DiffKind, ...] = ("added", "removed", "changed", "unchanged")

_Step = Union[DiffItem, tuple[Any, Any, str]]


def key_path(parent: str, key: str) -> str:
    return f"{parent}.{key}" if parent else key


def index_path(parent: str, index: int) -> str:
    return f"{parent}[{index}]"


def _member_steps(previous: dict[str, Any], current: dict[str, Any], path: str) -> list[_Step]:
    # Previous keys keep their order; keys new in current follow
    keys = list(previous)
    keys.extend(k for k in current if k not in previous)

    steps: list[_Step] = []
    for key in keys:
        child = key_path(path, key)
        if key not in previous:
            steps.append(DiffItem(path=child, kind="added", new_value=current[key]))
        elif key not in current:
            steps.append(DiffItem(path=child, kind="removed", old_value=previous[key]))
        else:
            steps.append((previous[key], current[key], child))
    return steps


def _element_steps(previous: list[Any], current: list[Any], path: str) -> list[_Step]:
    steps: list[_Step] = []
    for i in range(max(len(previous), len(current))):
        child = index_path(path, i)
        if i >= len(previous):
            steps.append(DiffItem(path=child, kind="added", new_value=current[i]))
        elif i >= len(current):
            steps.append(DiffItem(path=child, kind="removed", old_value=previous[i]))
        else:
            steps.append((previous[i], current[i], child))
    return steps


def _node_diffs(previous: Any, current: Any, path: str) -> Iterator[DiffItem]:
    # Pending steps are either finished items or (previous, current, path)
    # pairs still to compare; reversed pushes keep depth-first order.
    stack: list[_Step] = [(previous, current, path)]
    while stack:
        step = stack.pop()
        if isinstance(step, DiffItem):
            yield step
            continue

        old, new, at = step
        if json_equal(old, new):
            continue

        kind = kind_of(old)
        if kind is kind_of(new) and kind is JsonKind.OBJECT:
            stack.extend(reversed(_member_steps(old, new, at)))
        elif kind is kind_of(new) and kind is JsonKind.ARRAY:
            stack.extend(reversed(_element_steps(old, new, at)))
        else:
            yield DiffItem(path=at, kind="changed", old_value=old, new_value=new)


def diff(previous: JsonValue, current: JsonValue) -> list[DiffItem]:
    """
    Compute the differences between two JSON values.

    Args:
        previous: The older value
        current: The newer value

    Returns:
        DiffItems in depth-first order, keys before nested keys, indexes
        ascending. Deterministic for a given pair of inputs.

    Example:
        >>> [(d.path, d.kind) for d in diff({"a": 1, "b": [1]}, {"a": 2, "b": [1, 2]})]
        [('a', 'changed'), ('b[1]', 'added')]
        >>> [(d.path, d.kind) for d in diff({"a": 1}, {"a": 1})]
        [('', 'unchanged')]
    """
    if json_equal(previous, current):
        return [DiffItem(path=ROOT_PATH, kind="unchanged", old_value=previous, new_value=current)]

    return list(_node_diffs(previous, current, ROOT_PATH))


def summarize(items: list[DiffItem]) -> dict[DiffKind, int]:
    """Count diff items per kind; every kind is present in the result."""
    counts = Counter(item.kind for item in items)
    return {kind: counts.get(kind, 0) for kind in DIFF_KINDS}
