"""Path normalization and pointer resolution."""

from __future__ import annotations

import re
from typing import Optional, overload

from .json_types import MISSING, JSONValue

_SEPARATOR_CHARS = str.maketrans({".": "/", "[": "/", "]": "/"})
_REPEATED_SEPARATORS = re.compile(r"/{2,}")
_INDEX_SEGMENT = re.compile(r"[0-9]+")


@overload
def normalize_path(path: str) -> str: ...


@overload
def normalize_path(path: None) -> None: ...


def normalize_path(path: Optional[str]) -> Optional[str]:
    """Convert a dotted/bracket path into a slash-delimited pointer.

    ``address.phones[0].number`` becomes ``/address/phones/0/number``. The
    empty path and ``/`` both denote the document root, whose pointer is
    the empty string.

    Args:
        path (Optional[str]): Caller-facing path expression.

    Returns:
        Optional[str]: Canonical pointer, or ``None`` for ``None`` input.
    """
    if path is None:
        return None
    pointer = _REPEATED_SEPARATORS.sub("/", path.translate(_SEPARATOR_CHARS))
    if not pointer.startswith("/"):
        pointer = f"/{pointer}"
    return pointer.removesuffix("/")


def pointer_segments(pointer: str) -> list[str]:
    """Split a canonical pointer into its segments."""
    if not pointer:
        return []
    return pointer[1:].split("/")


def split_pointer(pointer: str) -> tuple[str, str]:
    """Split a non-root pointer into its parent pointer and last segment."""
    parent, _, last = pointer.rpartition("/")
    return parent, last


def is_index_segment(segment: str) -> bool:
    """Return whether a segment is a decimal array index."""
    return _INDEX_SEGMENT.fullmatch(segment) is not None


def resolve_pointer(root: JSONValue, pointer: str) -> JSONValue:
    """Walk ``root`` along ``pointer`` and return the node found there.

    Returns ``MISSING`` when any segment does not exist, when an array is
    addressed with a non-index segment, or when a scalar is traversed.
    """
    node: JSONValue = root
    for segment in pointer_segments(pointer):
        if isinstance(node, dict):
            if segment not in node:
                return MISSING
            node = node[segment]
        elif isinstance(node, list):
            if not is_index_segment(segment):
                return MISSING
            index = int(segment)
            if index >= len(node):
                return MISSING
            node = node[index]
        else:
            return MISSING
    return node


def join_field(parent_path: str, field_name: str) -> str:
    """Append an object field to a dotted path."""
    return field_name if not parent_path else f"{parent_path}.{field_name}"


def join_index(parent_path: str, index: int) -> str:
    """Append an array index to a dotted path."""
    return f"{parent_path}[{index}]"
