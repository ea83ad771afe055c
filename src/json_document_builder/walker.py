"""Depth-first traversal of JSON trees for path extraction and search."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from decimal import Decimal
from typing import Optional

from .json_types import JSONValue, kind_name
from .kinds import stringify
from .paths import join_field, join_index

_NUMERIC_KINDS = frozenset({"integer", "number"})


def iter_leaves(root: JSONValue) -> Iterator[tuple[str, JSONValue]]:
    """Yield ``(path, leaf)`` pairs in document order.

    Paths use dotted field names and ``[i]`` array indexes. Inside arrays
    only string elements are leaves; other scalars there are skipped. Empty
    objects and arrays contribute no leaves, and a scalar root has no paths.
    """
    if isinstance(root, (dict, list)):
        yield from _iter_children(root, "")


def leaf_paths(root: JSONValue) -> list[str]:
    """Return the path of every leaf in document order."""
    return [path for path, _ in iter_leaves(root)]


def leaf_path_values(root: JSONValue) -> dict[str, str]:
    """Return an insertion-ordered mapping of leaf path to leaf text."""
    return {path: stringify(leaf) for path, leaf in iter_leaves(root)}


def locate(root: JSONValue, target: JSONValue) -> Optional[str]:
    """Return the path of the first node structurally equal to ``target``.

    The search is depth-first in document order, so when several nodes are
    equal the earliest one wins. The root itself has the empty path.

    Returns:
        Optional[str]: Dotted path of the match, or ``None`` if no node
        matches.
    """
    return _search(root, target, "", structurally_equal)


def structurally_equal(left: JSONValue, right: JSONValue) -> bool:
    """Compare two trees by kind and content, keeping booleans and numbers apart.

    Integers, floats and decimals compare by numeric value, so a committed
    ``Decimal("19.99")`` equals the ``19.99`` read back from its text.
    """
    left_kind, right_kind = kind_name(left), kind_name(right)
    if left_kind in _NUMERIC_KINDS and right_kind in _NUMERIC_KINDS:
        return _as_decimal(left) == _as_decimal(right)
    if left_kind != right_kind:
        return False
    if isinstance(left, dict) and isinstance(right, dict):
        if left.keys() != right.keys():
            return False
        return all(structurally_equal(value, right[key]) for key, value in left.items())
    if isinstance(left, list) and isinstance(right, list):
        if len(left) != len(right):
            return False
        return all(structurally_equal(a, b) for a, b in zip(left, right))
    return left == right


def _iter_children(node: JSONValue, path: str) -> Iterator[tuple[str, JSONValue]]:
    if isinstance(node, dict):
        children = ((join_field(path, key), child) for key, child in node.items())
    elif isinstance(node, list):
        children = ((join_index(path, index), child) for index, child in enumerate(node))
    else:
        return
    for child_path, child in children:
        if isinstance(child, (dict, list)):
            yield from _iter_children(child, child_path)
        elif isinstance(child, str) or not isinstance(node, list):
            yield child_path, child


def _search(
    node: JSONValue,
    target: JSONValue,
    path: str,
    matches: Callable[[JSONValue, JSONValue], bool],
) -> Optional[str]:
    if matches(node, target):
        return path
    if isinstance(node, dict):
        for key, child in node.items():
            found = _search(child, target, join_field(path, key), matches)
            if found is not None:
                return found
    elif isinstance(node, list):
        for index, child in enumerate(node):
            found = _search(child, target, join_index(path, index), matches)
            if found is not None:
                return found
    return None


def _as_decimal(number: JSONValue) -> Decimal:
    # Floats go through their shortest repr, so 19.99 equals Decimal("19.99").
    if isinstance(number, float):
        return Decimal(repr(number))
    return Decimal(number)
