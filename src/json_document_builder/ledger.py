"""Staged edits awaiting commit."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from copy import deepcopy
from dataclasses import dataclass, field
from types import MappingProxyType

from .json_types import JSONContainer, JSONValue
from .mutator import remove_at, set_at

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommitResult:
    """Outcome of applying a batch of staged edits."""

    root: JSONContainer
    applied_sets: int
    applied_removals: int


@dataclass
class StagingLedger:
    """Pointer-keyed pending sets and removals, applied in insertion order.

    Sets and removals live in separate mappings over the same pointer
    space. Staging the same pointer twice keeps the later value in the
    original position.
    """

    _to_set: dict[str, JSONValue] = field(default_factory=dict)
    _to_remove: dict[str, None] = field(default_factory=dict)

    def stage_set(self, pointer: str, value: JSONValue) -> None:
        """Record a value to place at ``pointer``."""
        self._to_set[pointer] = value

    def stage_remove(self, pointer: str) -> None:
        """Record a removal of ``pointer``."""
        self._to_remove[pointer] = None

    @property
    def pending_sets(self) -> Mapping[str, JSONValue]:
        """Read-only view of staged sets."""
        return MappingProxyType(self._to_set)

    @property
    def pending_removals(self) -> tuple[str, ...]:
        """Staged removals in insertion order."""
        return tuple(self._to_remove)

    def is_empty(self) -> bool:
        """Return whether nothing is staged."""
        return not self._to_set and not self._to_remove

    def clear(self) -> None:
        """Drop every staged edit."""
        self._to_set.clear()
        self._to_remove.clear()

    def apply(self, root: JSONContainer) -> CommitResult:
        """Apply all sets, then all removals, to a copy of ``root``.

        The ledger is cleared only when every edit succeeds; on failure
        both ``root`` and the ledger are left untouched.

        Args:
            root (JSONContainer): Current document root.

        Returns:
            CommitResult: The new root and the number of applied edits.
        """
        if self.is_empty():
            return CommitResult(root=root, applied_sets=0, applied_removals=0)

        working = deepcopy(root)
        for pointer, value in self._to_set.items():
            set_at(working, pointer, deepcopy(value))
        for pointer in self._to_remove:
            remove_at(working, pointer)

        result = CommitResult(
            root=working,
            applied_sets=len(self._to_set),
            applied_removals=len(self._to_remove),
        )
        logger.debug(
            "Committed %d set(s) and %d removal(s)",
            result.applied_sets,
            result.applied_removals,
        )
        self.clear()
        return result
