"""JSON-compatible typing aliases and the missing-node sentinel."""

from __future__ import annotations

from decimal import Decimal
from typing import Final, Optional, TypeAlias, Union

JSONPrimitive: TypeAlias = Union[str, int, float, Decimal, bool, None]
JSONValue: TypeAlias = Union[JSONPrimitive, list["JSONValue"], dict[str, "JSONValue"]]
JSONObject: TypeAlias = dict[str, JSONValue]
JSONArray: TypeAlias = list[JSONValue]
JSONContainer: TypeAlias = Union[JSONObject, JSONArray]


class _Missing:
    """Marker for a location that does not exist in a document."""

    _instance: Optional[_Missing] = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Missing:
        return self

    def __deepcopy__(self, memo: dict[int, object]) -> _Missing:
        return self


MISSING: Final = _Missing()


def is_missing(value: object) -> bool:
    """Return whether ``value`` is the missing-node sentinel."""
    return value is MISSING


def is_container(value: object) -> bool:
    """Return whether ``value`` is a JSON object or array."""
    return isinstance(value, (dict, list))


def kind_name(value: object) -> str:
    """Describe the JSON kind of a node for diagnostics."""
    if value is MISSING:
        return "missing"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, (float, Decimal)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    return type(value).__name__
