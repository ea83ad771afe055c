"""Unit tests for staged edit application."""

from __future__ import annotations

import pytest

from json_document_builder.errors import StructuralConflictError
from json_document_builder.json_types import JSONContainer
from json_document_builder.ledger import StagingLedger


def test_apply_runs_sets_before_removals() -> None:
    """A path both set and removed in one batch ends up removed."""
    ledger = StagingLedger()
    ledger.stage_remove("/x")
    ledger.stage_set("/x", 1)
    result = ledger.apply({})
    assert result.root == {}
    assert (result.applied_sets, result.applied_removals) == (1, 1)


def test_later_stage_overwrites_earlier_value() -> None:
    """Staging the same pointer twice keeps the last value."""
    ledger = StagingLedger()
    ledger.stage_set("/a", "first")
    ledger.stage_set("/b", "other")
    ledger.stage_set("/a", "second")
    assert dict(ledger.pending_sets) == {"/a": "second", "/b": "other"}
    assert list(ledger.pending_sets) == ["/a", "/b"]


def test_apply_preserves_insertion_order() -> None:
    """Edits are applied in staging order, so later ones see earlier ones."""
    ledger = StagingLedger()
    ledger.stage_set("/list/0", "a")
    ledger.stage_set("/list/1", "b")
    ledger.stage_remove("/list/0")
    assert ledger.apply({}).root == {"list": ["b"]}


def test_apply_clears_ledger_and_is_idempotent() -> None:
    """A second apply with nothing staged returns the same root."""
    ledger = StagingLedger()
    ledger.stage_set("/a", 1)
    first = ledger.apply({})
    assert ledger.is_empty()
    second = ledger.apply(first.root)
    assert second.root is first.root
    assert (second.applied_sets, second.applied_removals) == (0, 0)


def test_failed_apply_leaves_root_and_ledger_untouched() -> None:
    """A structural conflict mid-batch does not leak partial edits."""
    root: JSONContainer = {"a": 1}
    ledger = StagingLedger()
    ledger.stage_set("/b", 2)
    ledger.stage_set("/a/c", 3)
    with pytest.raises(StructuralConflictError):
        ledger.apply(root)
    assert root == {"a": 1}
    assert list(ledger.pending_sets) == ["/b", "/a/c"]


def test_pending_views_are_read_only() -> None:
    """Callers cannot modify staged edits through the views."""
    ledger = StagingLedger()
    ledger.stage_set("/a", 1)
    ledger.stage_remove("/b")
    with pytest.raises(TypeError):
        ledger.pending_sets["/c"] = 2  # type: ignore[index]
    assert ledger.pending_removals == ("/b",)
