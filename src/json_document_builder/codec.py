"""JSON text parsing, rendering and file I/O."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Optional, TypeAlias, Union

import simplejson

from .errors import BuilderInputError, DocumentWriteError
from .json_types import JSONValue

logger = logging.getLogger(__name__)

JSONSource: TypeAlias = Union[str, Path, IO[str], IO[bytes]]


def loads(text: Optional[Union[str, bytes]]) -> JSONValue:
    """Parse JSON text into a tree.

    Raises:
        BuilderInputError: If the text is missing, blank or malformed.
    """
    if text is None:
        raise BuilderInputError("JSON text is missing")
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BuilderInputError(f"JSON bytes are not valid UTF-8: {exc}") from exc
    if not text.strip():
        raise BuilderInputError("JSON text is blank")
    try:
        return simplejson.loads(text)
    except simplejson.JSONDecodeError as exc:
        raise BuilderInputError(f"Failed to parse JSON: {exc}") from exc


def load(source: JSONSource) -> JSONValue:
    """Load a JSON tree from a file path or an open file handle.

    Args:
        source (JSONSource): File name, ``Path`` or readable handle.

    Returns:
        JSONValue: Parsed document tree.
    """
    if isinstance(source, (str, Path)):
        path = require_file(source)
        try:
            with path.open("r", encoding="utf-8") as handle:
                text = handle.read()
        except OSError as exc:
            raise BuilderInputError(f"Failed to read JSON file {path}: {exc}") from exc
        logger.debug("Loaded %d characters from %s", len(text), path)
        return loads(text)

    try:
        content = source.read()
    except OSError as exc:
        raise BuilderInputError(f"Failed to read JSON from handle: {exc}") from exc
    return loads(content)


def dumps(tree: JSONValue, *, indent: Optional[int] = None) -> str:
    """Render a tree as compact or indented JSON text.

    Decimal leaves are written with their own digits, so ``Decimal("1.0")``
    stays ``1.0`` and long fractions keep every place.
    """
    if indent is None:
        return simplejson.dumps(
            tree, ensure_ascii=False, separators=(",", ":"), use_decimal=True
        )
    return simplejson.dumps(tree, ensure_ascii=False, indent=indent, use_decimal=True)


def write_text(path: Union[str, Path], content: str) -> Path:
    """Write text to ``path``, creating or overwriting the file."""
    target = Path(path)
    try:
        target.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise DocumentWriteError(f"Failed to write file {target}: {exc}") from exc
    return target


def require_file(source: Union[str, Path]) -> Path:
    """Return ``source`` as a path, failing unless it names an existing file."""
    if isinstance(source, str) and not source.strip():
        raise BuilderInputError("File name is blank")
    path = Path(source)
    if not path.is_file():
        raise BuilderInputError(f"JSON file does not exist: {path}")
    return path

