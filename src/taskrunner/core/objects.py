"""Structural helpers for task data: predicates, clone/merge, ids, timing.

Usage:
    options = clone_object(defaults)
    merge_object(options, {"retries": {"max": 3}})

    timer = Timer()
    timer.start("construct")
    ...
    seconds = timer.elapsed("construct")
"""

from __future__ import annotations

import copy
import time
import uuid
from typing import Any, TypeGuard, TypeVar

T = TypeVar("T")


def is_plain_mapping(value: Any) -> TypeGuard[dict[str, Any]]:
    """Check if value is a plain keyed mapping usable as task data.

    Only dict instances qualify. Lists, strings and arbitrary objects
    (dataclasses, models) do not, even when they expose mapping-like
    behaviour.
    """
    return isinstance(value, dict)


def is_sequence(value: Any) -> TypeGuard[list[Any] | tuple[Any, ...]]:
    """Check if value is an ordered sequence of task inputs (list or tuple)."""
    return isinstance(value, (list, tuple))


def clone_object(value: T) -> T:
    """Return a deep copy sharing no mutable substructure with value."""
    return copy.deepcopy(value)


def merge_object(target: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge source into target, in place.

    Nested mappings are merged key by key so sibling keys survive.
    Everything else, lists included, is replaced wholesale by a copy of
    the source value.

    Args:
        target: Mapping to update.
        source: Overrides; later values win.

    Returns:
        The updated target.
    """
    for key, value in source.items():
        existing = target.get(key)
        if is_plain_mapping(existing) and is_plain_mapping(value):
            merge_object(existing, value)
        else:
            target[key] = copy.deepcopy(value)
    return target


def unique_id() -> str:
    """Generate a collision resistant identifier."""
    return uuid.uuid4().hex


class Timer:
    """Monotonic stopwatch with named start marks."""

    def __init__(self) -> None:
        self._marks: dict[str, float] = {}

    def start(self, label: str) -> None:
        """Start (or restart) the measurement named label."""
        self._marks[label] = time.perf_counter()

    def elapsed(self, label: str) -> float:
        """Seconds since label was started.

        Raises:
            KeyError: If label was never started.
        """
        if label not in self._marks:
            raise KeyError(f"Timer mark {label!r} was never started")
        return time.perf_counter() - self._marks[label]
