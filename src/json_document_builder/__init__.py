"""Staged, path-addressed construction and editing of JSON documents."""

from __future__ import annotations

from .builder import JsonBuilder, RootKind, array_builder, builder_for, object_builder
from .cli import main
from .errors import (
    ArrayIndexError,
    BuilderInputError,
    DocumentWriteError,
    JsonBuilderError,
    RuleBookError,
    StructuralConflictError,
    ValueConversionError,
)
from .json_types import MISSING, is_missing
from .kinds import NodeKind, coerce_value, is_skippable
from .paths import normalize_path
from .rules import RuleBook, verify, verify_document
from .transform import to_model, to_tree
from .walker import leaf_path_values, leaf_paths, locate

__all__ = [
    "MISSING",
    "ArrayIndexError",
    "BuilderInputError",
    "DocumentWriteError",
    "JsonBuilder",
    "JsonBuilderError",
    "NodeKind",
    "RootKind",
    "RuleBook",
    "RuleBookError",
    "StructuralConflictError",
    "ValueConversionError",
    "array_builder",
    "builder_for",
    "coerce_value",
    "is_missing",
    "is_skippable",
    "leaf_path_values",
    "leaf_paths",
    "locate",
    "main",
    "normalize_path",
    "object_builder",
    "to_model",
    "to_tree",
    "verify",
    "verify_document",
]
