"""Unit tests for path normalization and pointer resolution."""

from __future__ import annotations

import pytest

from json_document_builder.json_types import MISSING
from json_document_builder.paths import (
    is_index_segment,
    normalize_path,
    pointer_segments,
    resolve_pointer,
    split_pointer,
)

_PATHS = [
    "",
    "/",
    "name",
    "address.city",
    "address.phones[0].number",
    "address.phones.0.number",
    "/address/phones/0/number",
    "a..b",
    "a[1][2]",
    "a.b[3].",
    "//a///b//",
    "[0].name",
]


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("name", "/name"),
        ("address.city", "/address/city"),
        ("address.phones[0].number", "/address/phones/0/number"),
        ("address.phones.0.number", "/address/phones/0/number"),
        ("a[1][2]", "/a/1/2"),
        ("[0].name", "/0/name"),
        ("a..b", "/a/b"),
        ("//a///b//", "/a/b"),
        ("a.b/", "/a/b"),
        ("", ""),
        ("/", ""),
    ],
)
def test_normalize_path(path: str, expected: str) -> None:
    """Dots and brackets become single slashes with one leading slash."""
    assert normalize_path(path) == expected


@pytest.mark.parametrize("path", _PATHS)
def test_normalize_path_is_idempotent(path: str) -> None:
    """Normalizing a canonical pointer returns it unchanged."""
    once = normalize_path(path)
    assert normalize_path(once) == once


def test_normalize_path_passes_none_through() -> None:
    """A missing path stays missing."""
    assert normalize_path(None) is None


def test_equivalent_notations_share_a_pointer() -> None:
    """Bracket and dotted index notation address the same location."""
    assert normalize_path("a.b[2].c") == normalize_path("a.b.2.c") == normalize_path("/a/b/2/c")


def test_split_pointer_and_segments() -> None:
    """Pointers split into parent and last segment."""
    assert split_pointer("/a/b/0") == ("/a/b", "0")
    assert split_pointer("/a") == ("", "a")
    assert pointer_segments("/a/b/0") == ["a", "b", "0"]
    assert pointer_segments("") == []


def test_is_index_segment() -> None:
    """Only plain ASCII digit runs count as indexes."""
    assert is_index_segment("0")
    assert is_index_segment("12")
    assert not is_index_segment("-1")
    assert not is_index_segment("1a")
    assert not is_index_segment("")


def test_resolve_pointer_walks_objects_and_arrays() -> None:
    """Resolution follows fields and indexes and reports absence as MISSING."""
    tree = {"a": {"b": [10, {"c": None}]}, "s": "text"}
    assert resolve_pointer(tree, "") is tree
    assert resolve_pointer(tree, "/a/b/0") == 10
    assert resolve_pointer(tree, "/a/b/1/c") is None
    assert resolve_pointer(tree, "/a/b/2") is MISSING
    assert resolve_pointer(tree, "/a/b/x") is MISSING
    assert resolve_pointer(tree, "/s/0") is MISSING
    assert resolve_pointer(tree, "/zzz") is MISSING
