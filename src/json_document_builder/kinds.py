"""Value kinds and coercion of caller values into JSON nodes."""

from __future__ import annotations

import re
from collections.abc import Callable
from decimal import Decimal
from enum import Enum
from typing import Any

import simplejson

from .codec import dumps
from .errors import ValueConversionError
from .json_types import JSONValue

_SKIP_MARKERS = frozenset({"skip", "ignore"})
_EMPTY_TEXT_MARKERS = frozenset({"blank", "empty"})

_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")
_DECIMAL_TEXT = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_INT32_RANGE = (-(2**31), 2**31 - 1)
_INT64_RANGE = (-(2**63), 2**63 - 1)


class NodeKind(Enum):
    """Declared kind of a value staged into a document."""

    NUMBER = "Number"
    INT = "Int"
    INTEGER = "Integer"
    LONG = "Long"
    FLOAT = "Float"
    DECIMAL = "Decimal"
    DOUBLE = "Double"
    TEXT = "Text"
    STRING = "String"
    BOOLEAN = "Boolean"
    NULL = "Null"
    BLANK = "Blank"
    EMPTY = "Empty"
    EMPTY_OBJECT = "ObjectNode"
    EMPTY_ARRAY = "ArrayNode"
    OBJECT_FROM_TEXT = "JsonObject"
    ARRAY_FROM_TEXT = "JsonArray"

    @classmethod
    def from_name(cls, name: str) -> NodeKind:
        """Resolve a kind from its member or display name, ignoring case."""
        wanted = name.strip().casefold()
        for kind in cls:
            if wanted in (kind.value.casefold(), kind.name.casefold()):
                return kind
        raise ValueConversionError(f"Unknown value kind: {name!r}")


def stringify(value: Any) -> str:
    """Render a caller value the way it is read back as text."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return dumps(value)
    return str(value)


def is_skippable(value: Any) -> bool:
    """Return whether a value asks for its edit not to be staged."""
    if value is None:
        return False
    return stringify(value).casefold() in _SKIP_MARKERS


def coerce_value(value: Any, kind: NodeKind = NodeKind.TEXT) -> JSONValue:
    """Convert ``value`` into a JSON node of the declared ``kind``.

    Args:
        value (Any): Caller-supplied value; only its text form is consulted
            for scalar kinds.
        kind (NodeKind): Declared kind of the resulting node.

    Returns:
        JSONValue: A freshly built node owned by the caller.

    Raises:
        ValueConversionError: If the text cannot be parsed as ``kind``.
    """
    coercer = _COERCERS.get(kind, _coerce_text)
    return coercer(value, kind)


def _coerce_integer(value: Any, kind: NodeKind) -> JSONValue:
    if value is None:
        return None
    text = stringify(value).strip()
    if _INTEGER_TEXT.fullmatch(text) is None:
        raise ValueConversionError(f"Cannot convert {text!r} to {kind.value}")
    number = int(text)
    low, high = _INT32_RANGE if kind in (NodeKind.INT, NodeKind.INTEGER) else _INT64_RANGE
    if not low <= number <= high:
        raise ValueConversionError(f"Value {text!r} overflows {kind.value}")
    return number


def _coerce_decimal(value: Any, kind: NodeKind) -> JSONValue:
    if value is None:
        return None
    text = stringify(value).strip()
    if _DECIMAL_TEXT.fullmatch(text) is None:
        raise ValueConversionError(f"Cannot convert {text!r} to {kind.value}")
    return Decimal(text)


def _coerce_boolean(value: Any, kind: NodeKind) -> JSONValue:
    if value is None:
        return None
    # Anything other than "true" is false, never an error.
    return stringify(value).casefold() == "true"


def _coerce_text(value: Any, kind: NodeKind) -> JSONValue:
    if value is None:
        return None
    text = stringify(value)
    if text.casefold() in _EMPTY_TEXT_MARKERS:
        return ""
    return text


def _coerce_blank(value: Any, kind: NodeKind) -> JSONValue:
    return ""


def _coerce_null(value: Any, kind: NodeKind) -> JSONValue:
    return None


def _coerce_empty_object(value: Any, kind: NodeKind) -> JSONValue:
    return {}


def _coerce_empty_array(value: Any, kind: NodeKind) -> JSONValue:
    return []


def _coerce_nested(value: Any, kind: NodeKind) -> JSONValue:
    expected: type = dict if kind is NodeKind.OBJECT_FROM_TEXT else list
    text = "" if value is None else stringify(value)
    if not text.strip():
        return expected()
    try:
        parsed = simplejson.loads(text)
    except simplejson.JSONDecodeError as exc:
        raise ValueConversionError(f"Invalid JSON text for {kind.value}: {exc}") from exc
    if not isinstance(parsed, expected):
        raise ValueConversionError(
            f"{kind.value} expects a JSON {expected.__name__}, got {type(parsed).__name__}"
        )
    return parsed


_COERCERS: dict[NodeKind, Callable[[Any, NodeKind], JSONValue]] = {
    NodeKind.NUMBER: _coerce_integer,
    NodeKind.INT: _coerce_integer,
    NodeKind.INTEGER: _coerce_integer,
    NodeKind.LONG: _coerce_integer,
    NodeKind.FLOAT: _coerce_decimal,
    NodeKind.DECIMAL: _coerce_decimal,
    NodeKind.DOUBLE: _coerce_decimal,
    NodeKind.TEXT: _coerce_text,
    NodeKind.STRING: _coerce_text,
    NodeKind.BOOLEAN: _coerce_boolean,
    NodeKind.NULL: _coerce_null,
    NodeKind.BLANK: _coerce_blank,
    NodeKind.EMPTY: _coerce_blank,
    NodeKind.EMPTY_OBJECT: _coerce_empty_object,
    NodeKind.EMPTY_ARRAY: _coerce_empty_array,
    NodeKind.OBJECT_FROM_TEXT: _coerce_nested,
    NodeKind.ARRAY_FROM_TEXT: _coerce_nested,
}

if set(_COERCERS) != set(NodeKind):
    raise RuntimeError("Every NodeKind needs a coercer")
