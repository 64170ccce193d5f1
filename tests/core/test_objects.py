"""Tests for structural helpers used on task data.

Critical Invariants:
- Clones share no mutable substructure with their source
- Merge overrides nested keys without clobbering siblings
- Lists are replaced wholesale, never concatenated
- Timer is monotonic
"""

import time

import pytest
from hypothesis import given
from hypothesis import strategies as st

from taskrunner.core import (
    Timer,
    clone_object,
    is_plain_mapping,
    is_sequence,
    merge_object,
    unique_id,
)

json_scalars = st.none() | st.booleans() | st.integers() | st.text(max_size=5)
json_values = st.recursive(
    json_scalars,
    lambda children: st.lists(children, max_size=3)
    | st.dictionaries(st.text(max_size=3), children, max_size=3),
    max_leaves=10,
)
json_objects = st.dictionaries(st.text(max_size=3), json_values, max_size=4)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ({}, True),
        ({"type": "x"}, True),
        ([], False),
        ("abc", False),
        (None, False),
        (42, False),
        (object(), False),
    ],
)
def test_is_plain_mapping(value, expected) -> None:
    assert is_plain_mapping(value) is expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ([], True),
        ((1, 2), True),
        ("abc", False),
        (b"abc", False),
        ({}, False),
        (None, False),
    ],
)
def test_is_sequence(value, expected) -> None:
    assert is_sequence(value) is expected


def test_clone_is_independent() -> None:
    """CRITICAL: Mutating a clone never touches the source."""
    source = {"nested": {"items": [1, 2]}, "flag": True}
    clone = clone_object(source)

    clone["nested"]["items"].append(3)
    clone["nested"]["new"] = 1

    assert source == {"nested": {"items": [1, 2]}, "flag": True}


def test_merge_keeps_sibling_keys() -> None:
    target = {"http": {"timeout": 10, "retries": 1}, "name": "a"}
    merge_object(target, {"http": {"timeout": 30}})

    assert target == {"http": {"timeout": 30, "retries": 1}, "name": "a"}


def test_merge_replaces_lists_wholesale() -> None:
    target = {"tags": ["a", "b", "c"]}
    merge_object(target, {"tags": ["z"]})

    assert target["tags"] == ["z"]


def test_merge_mapping_over_scalar_and_back() -> None:
    target = {"a": 1, "b": {"x": 1}}
    merge_object(target, {"a": {"nested": True}, "b": 2})

    assert target == {"a": {"nested": True}, "b": 2}


def test_merge_does_not_share_source_values() -> None:
    source = {"items": [1], "nested": {"deep": [1]}}
    target: dict = {}
    merge_object(target, source)

    target["items"].append(2)
    target["nested"]["deep"].append(2)

    assert source == {"items": [1], "nested": {"deep": [1]}}


@given(base=json_objects, overrides=json_objects)
def test_merge_later_values_win(base, overrides) -> None:
    """Property: every top-level non-mapping override ends up in the result."""
    merged = merge_object(clone_object(base), overrides)

    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            for inner_key in value:
                assert inner_key in merged[key]
        else:
            assert merged[key] == value


@given(base=json_objects)
def test_merge_with_empty_is_identity(base) -> None:
    assert merge_object(clone_object(base), {}) == base


def test_unique_ids_differ() -> None:
    ids = {unique_id() for _ in range(1000)}
    assert len(ids) == 1000
    assert all(isinstance(i, str) and i for i in ids)


def test_timer_is_monotonic() -> None:
    timer = Timer()
    timer.start("mark")
    first = timer.elapsed("mark")
    time.sleep(0.001)
    second = timer.elapsed("mark")

    assert 0 <= first < second


def test_timer_unknown_mark() -> None:
    with pytest.raises(KeyError, match="never started"):
        Timer().elapsed("missing")
