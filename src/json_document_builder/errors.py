"""Exception hierarchy for document building."""

from __future__ import annotations


class JsonBuilderError(RuntimeError):
    """Base class for all document builder failures."""


class BuilderInputError(JsonBuilderError):
    """Raised when a source document cannot be read or parsed."""


class ValueConversionError(JsonBuilderError, ValueError):
    """Raised when a value cannot be coerced into the requested kind."""


class StructuralConflictError(JsonBuilderError):
    """Raised when a container operation targets a non-container node."""

    def __init__(self, message: str, *, pointer: str, actual_kind: str) -> None:
        super().__init__(message)
        self.pointer = pointer
        self.actual_kind = actual_kind


class ArrayIndexError(JsonBuilderError, IndexError):
    """Raised when an array element to remove is out of range."""


class DocumentWriteError(JsonBuilderError):
    """Raised when a document cannot be written to storage."""


class RuleBookError(JsonBuilderError):
    """Raised when a validation rule book is malformed."""
