"""Conversion between JSON trees and typed Python objects."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from .errors import ValueConversionError
from .json_types import JSONValue

_T = TypeVar("_T")


def to_model(tree: JSONValue, target: type[_T]) -> _T:
    """Validate a tree into ``target``.

    ``target`` may be a pydantic model, a dataclass, a ``TypedDict`` or a
    generic alias such as ``list[Model]``. Fields absent from ``target``
    are ignored unless the model forbids extras.

    Raises:
        ValueConversionError: If the tree does not fit ``target``.
    """
    try:
        return TypeAdapter(target).validate_python(tree)
    except ValidationError as exc:
        raise ValueConversionError(
            f"Cannot transform document into {_type_label(target)}: {exc}"
        ) from exc


def to_tree(value: Any) -> JSONValue:
    """Dump a model, dataclass or plain value into a JSON tree."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    return TypeAdapter(type(value)).dump_python(value, mode="json")


def _type_label(target: Any) -> str:
    return getattr(target, "__name__", None) or repr(target)
