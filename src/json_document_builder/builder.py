"""Staged, path-addressed editing of a JSON document."""

from __future__ import annotations

import functools
import logging
import threading
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Any, Concatenate, Optional, ParamSpec, TypeAlias, TypeVar, Union

from . import codec
from .codec import JSONSource
from .errors import BuilderInputError, StructuralConflictError, ValueConversionError
from .json_types import MISSING, JSONContainer, JSONValue, is_missing, kind_name
from .kinds import NodeKind, coerce_value, is_skippable, stringify
from .ledger import StagingLedger
from .paths import join_field, join_index, normalize_path, resolve_pointer
from .transform import to_model
from .walker import leaf_path_values, leaf_paths, locate

logger = logging.getLogger(__name__)

_P = ParamSpec("_P")
_R = TypeVar("_R")
_T = TypeVar("_T")

KindLike: TypeAlias = Union[NodeKind, str]


class RootKind(Enum):
    """Container kind at the root of a document."""

    OBJECT = "object"
    ARRAY = "array"

    def empty(self) -> JSONContainer:
        """Return a fresh empty container of this kind."""
        return {} if self is RootKind.OBJECT else []

    def accepts(self, tree: JSONValue) -> bool:
        """Return whether ``tree`` can serve as a root of this kind."""
        return isinstance(tree, dict if self is RootKind.OBJECT else list)


def _exclusive(
    method: Callable[Concatenate[JsonBuilder, _P], _R],
) -> Callable[Concatenate[JsonBuilder, _P], _R]:
    @functools.wraps(method)
    def _wrapper(self: JsonBuilder, *args: _P.args, **kwargs: _P.kwargs) -> _R:
        with self._lock:
            return method(self, *args, **kwargs)

    return _wrapper


class JsonBuilder:
    """Build or edit a JSON document through staged path operations.

    Edits are recorded with :meth:`update` and :meth:`remove` and applied
    together by :meth:`commit`: every set first, in staging order, then
    every removal. Rendering the document as text or as a typed object
    commits implicitly. Reads with :meth:`get` see only committed state.

    Every public method holds the builder's re-entrant lock. Callers that
    share a builder across threads should wrap a whole stage-then-commit
    sequence in :meth:`exclusive`.
    """

    def __init__(self, root_kind: RootKind = RootKind.OBJECT, *, indent: int = 2) -> None:
        self._root_kind = root_kind
        self._indent = indent
        self._root: JSONContainer = root_kind.empty()
        self._ledger = StagingLedger()
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(root_kind={self._root_kind.value!r})"

    @property
    def root_kind(self) -> RootKind:
        """Container kind this builder's root must have."""
        return self._root_kind

    @contextmanager
    def exclusive(self) -> Iterator[JsonBuilder]:
        """Hold the builder lock across several calls."""
        with self._lock:
            yield self

    @_exclusive
    def from_file(self, source: JSONSource) -> JsonBuilder:
        """Replace the document with JSON read from a path or open handle."""
        self._replace_root(codec.load(source))
        return self

    @_exclusive
    def from_text(self, text: Optional[Union[str, bytes]]) -> JsonBuilder:
        """Replace the document with parsed JSON text."""
        self._replace_root(codec.loads(text))
        return self

    @_exclusive
    def from_empty(self) -> JsonBuilder:
        """Replace the document with an empty root container."""
        self._root = self._root_kind.empty()
        return self

    @_exclusive
    def update(
        self,
        path: str,
        value: Any,
        kind: KindLike = NodeKind.TEXT,
    ) -> JsonBuilder:
        """Stage ``value`` coerced to ``kind`` at ``path``.

        Values whose text is ``skip`` or ``ignore`` (any case) are not
        staged.

        Args:
            path (str): Dotted/bracket path such as ``a.b[0].c``.
            value (Any): Value to coerce.
            kind (KindLike): Declared kind, or its name.

        Returns:
            JsonBuilder: This builder, for chaining.

        Raises:
            ValueConversionError: If ``value`` cannot be coerced.
        """
        if not is_skippable(value):
            self._ledger.stage_set(self._pointer(path), coerce_value(value, _as_kind(kind)))
        return self

    set = update

    @_exclusive
    def update_where(
        self,
        predicate: Callable[[JSONValue], bool],
        path: str,
        target_path: str,
        value: Any,
        kind: KindLike = NodeKind.TEXT,
    ) -> JsonBuilder:
        """Stage ``value`` at ``target_path`` beneath nodes matching ``predicate``.

        When ``path`` holds an array, every element satisfying the predicate
        receives the edit. When it holds an object, the object itself is
        tested.

        Raises:
            StructuralConflictError: If ``path`` holds neither.
        """
        node = self.get(path)
        if isinstance(node, list):
            for index, element in enumerate(node):
                if predicate(element):
                    self.update(f"{join_index(path, index)}.{target_path}", value, kind)
        elif isinstance(node, dict):
            if predicate(node):
                self.update(join_field(path, target_path), value, kind)
        else:
            raise StructuralConflictError(
                f"Invalid node type for path {path!r}: {kind_name(node)}",
                pointer=self._pointer(path),
                actual_kind=kind_name(node),
            )
        return self

    @_exclusive
    def remove(self, path: str) -> JsonBuilder:
        """Stage removal of the node at ``path``."""
        self._ledger.stage_remove(self._pointer(path))
        return self

    @_exclusive
    def commit(self) -> JsonBuilder:
        """Apply every staged edit; a failure leaves the document unchanged."""
        self._root = self._ledger.apply(self._root).root
        return self

    @_exclusive
    def discard(self) -> JsonBuilder:
        """Drop staged edits without touching the document."""
        self._ledger.clear()
        return self

    @_exclusive
    def reset(self) -> None:
        """Empty the document and drop every staged edit."""
        self._root = self._root_kind.empty()
        self._ledger.clear()

    @property
    def pending_updates(self) -> Mapping[str, JSONValue]:
        """Staged values keyed by pointer, in staging order."""
        return self._ledger.pending_sets

    @property
    def pending_removals(self) -> tuple[str, ...]:
        """Staged removal pointers, in staging order."""
        return self._ledger.pending_removals

    @_exclusive
    def get(self, path: str) -> JSONValue:
        """Return the committed node at ``path`` or ``MISSING``."""
        return resolve_pointer(self._root, self._pointer(path))

    @_exclusive
    def get_text(self, path: str) -> str:
        """Return the text of the committed node at ``path``, ``"null"`` if missing."""
        node = self.get(path)
        return "null" if is_missing(node) else stringify(node)

    @_exclusive
    def as_tree(self) -> JSONContainer:
        """Commit and return the live document root."""
        self.commit()
        return self._root

    @_exclusive
    def to_text(self) -> str:
        """Commit and render compact JSON text."""
        return codec.dumps(self.as_tree())

    @_exclusive
    def to_pretty_text(self) -> str:
        """Commit and render indented JSON text."""
        return codec.dumps(self.as_tree(), indent=self._indent)

    @_exclusive
    def write_to(self, path: Union[str, Path]) -> JsonBuilder:
        """Commit and write the indented document to ``path``."""
        target = codec.write_text(path, self.to_pretty_text() + "\n")
        logger.debug("Wrote document to %s", target)
        return self

    @_exclusive
    def is_empty(self) -> bool:
        """Return whether the committed root has no members."""
        return not self._root

    @_exclusive
    def to_model(self, target: type[_T]) -> _T:
        """Commit and validate the whole document into ``target``."""
        return to_model(self.as_tree(), target)

    @_exclusive
    def to_model_at(self, path: str, target: type[_T]) -> _T:
        """Commit and validate the node at ``path`` into ``target``."""
        self.commit()
        node = self.get(path)
        if is_missing(node):
            raise ValueConversionError(f"No node at {path!r} to transform")
        return to_model(node, target)

    @_exclusive
    def extract_paths(self) -> list[str]:
        """Return every committed leaf path in document order."""
        return leaf_paths(self._root)

    @_exclusive
    def extract_path_value_map(self) -> dict[str, str]:
        """Return committed leaf paths mapped to their text."""
        return leaf_path_values(self._root)

    @_exclusive
    def locate(self, node: JSONValue) -> Optional[str]:
        """Return the path of the first committed node equal to ``node``."""
        return locate(self._root, node)

    def _replace_root(self, tree: JSONValue) -> None:
        if not self._root_kind.accepts(tree):
            raise BuilderInputError(
                f"Expected a JSON {self._root_kind.value} document, got {kind_name(tree)}"
            )
        self._root = tree
        logger.debug("Loaded %s document", self._root_kind.value)

    @staticmethod
    def _pointer(path: str) -> str:
        pointer = normalize_path(path)
        if pointer is None:
            raise BuilderInputError("Path is missing")
        return pointer


def object_builder(*, indent: int = 2) -> JsonBuilder:
    """Return a builder whose document root is a JSON object."""
    return JsonBuilder(RootKind.OBJECT, indent=indent)


def array_builder(*, indent: int = 2) -> JsonBuilder:
    """Return a builder whose document root is a JSON array."""
    return JsonBuilder(RootKind.ARRAY, indent=indent)


_BUILDER_NAMES: dict[str, RootKind] = {
    "jsonobjectbuilder": RootKind.OBJECT,
    "object": RootKind.OBJECT,
    "jsonarraybuilder": RootKind.ARRAY,
    "array": RootKind.ARRAY,
}


def builder_for(name: Optional[str]) -> Optional[JsonBuilder]:
    """Return a builder by flavor name, or ``None`` for unknown names."""
    if name is None:
        return None
    root_kind = _BUILDER_NAMES.get(name.strip().casefold())
    if root_kind is None:
        return None
    return JsonBuilder(root_kind)


def _as_kind(kind: KindLike) -> NodeKind:
    if isinstance(kind, NodeKind):
        return kind
    return NodeKind.from_name(kind)


__all__ = [
    "MISSING",
    "JsonBuilder",
    "RootKind",
    "array_builder",
    "builder_for",
    "object_builder",
]
