"""Pointer-addressed set and remove on a JSON tree."""

from __future__ import annotations

from .errors import ArrayIndexError, StructuralConflictError
from .json_types import JSONContainer, JSONValue, is_missing, kind_name
from .paths import is_index_segment, resolve_pointer, split_pointer


def set_at(root: JSONContainer, pointer: str, value: JSONValue) -> None:
    """Set ``value`` at ``pointer``, materializing any missing parents.

    A missing or null parent is created as an array when the segment that
    indexes into it is numeric and as an object otherwise, then attached
    to its own parent by the same procedure. Arrays grow with empty-object
    placeholders until the target index exists.

    Args:
        root (JSONContainer): Document root, mutated in place.
        pointer (str): Canonical pointer to the target location.
        value (JSONValue): Node to place at the target location.

    Raises:
        StructuralConflictError: If the target's parent is a scalar, an
            array is addressed by field name, or the pointer is the root.
    """
    if not pointer:
        raise StructuralConflictError(
            "Cannot replace the document root",
            pointer=pointer,
            actual_kind=kind_name(root),
        )
    parent_pointer, segment = split_pointer(pointer)
    parent = resolve_pointer(root, parent_pointer)

    if parent is None or is_missing(parent):
        parent = [] if is_index_segment(segment) else {}
        set_at(root, parent_pointer, parent)

    if isinstance(parent, list):
        index = _array_index(parent, pointer, segment)
        while len(parent) <= index:
            parent.append({})
        parent[index] = value
    elif isinstance(parent, dict):
        parent[segment] = value
    else:
        raise _conflict(pointer, segment, parent)


def remove_at(root: JSONContainer, pointer: str) -> None:
    """Remove the node at ``pointer``.

    Removing beneath a missing or null parent, or an absent object field,
    does nothing.

    Raises:
        ArrayIndexError: If an array index is out of range.
        StructuralConflictError: If the parent is a scalar or an array is
            addressed by field name.
    """
    if not pointer:
        raise StructuralConflictError(
            "Cannot remove the document root",
            pointer=pointer,
            actual_kind=kind_name(root),
        )
    parent_pointer, segment = split_pointer(pointer)
    parent = resolve_pointer(root, parent_pointer)

    if parent is None or is_missing(parent):
        return

    if isinstance(parent, list):
        index = _array_index(parent, pointer, segment)
        if index >= len(parent):
            raise ArrayIndexError(
                f"Index {index} out of range for array of length {len(parent)} at {pointer}"
            )
        del parent[index]
    elif isinstance(parent, dict):
        parent.pop(segment, None)
    else:
        raise _conflict(pointer, segment, parent)


def _array_index(array: list[JSONValue], pointer: str, segment: str) -> int:
    if not is_index_segment(segment):
        raise StructuralConflictError(
            f"Invalid array index {segment!r} at {pointer}: parent is an array",
            pointer=pointer,
            actual_kind=kind_name(array),
        )
    return int(segment)


def _conflict(pointer: str, segment: str, parent: JSONValue) -> StructuralConflictError:
    actual = kind_name(parent)
    return StructuralConflictError(
        f"Invalid parent node type for field {segment!r} at {pointer}: parent is {actual}",
        pointer=pointer,
        actual_kind=actual,
    )
