"""Dispatch input models.

A task map is classified once at each level of recursion into one of
the input variants below. Dispatcher.run matches over the variants
instead of probing types inline.

    [a, b, c]            -> SequenceInput  (run in order)
    {"type": "x", ...}   -> SingleInput    (one task)
    {"k1": a, "k2": b}   -> ParallelInput  (run concurrently, keyed)
    anything else        -> InvalidInput
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TypeAlias

from taskrunner.core.objects import is_plain_mapping, is_sequence

TaskMap: TypeAlias = dict[str, Any] | list[Any] | tuple[Any, ...]
"""Recursive task description: a descriptor, an ordered list, or a keyed map."""

StatsTree: TypeAlias = dict[str, Any] | list[Any] | None
"""Result of running a TaskMap; mirrors the input shape."""


@dataclass(frozen=True, slots=True)
class SingleInput:
    """A single task descriptor (mapping with a ``type`` key)."""

    descriptor: dict[str, Any]


@dataclass(frozen=True, slots=True)
class SequenceInput:
    """Ordered items; each settles before the next starts."""

    items: Sequence[Any]


@dataclass(frozen=True, slots=True)
class ParallelInput:
    """Named branches started together and joined."""

    branches: Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class InvalidInput:
    """Value that is neither a sequence nor a plain mapping."""

    value: Any


TaskInput = SingleInput | SequenceInput | ParallelInput | InvalidInput


def classify(value: Any) -> TaskInput:
    """Classify a task map by shape.

    A mapping counts as a task descriptor when it has a ``type`` key.
    Mappings with an empty or None ``type`` still go to the single task
    path, which rejects them as an invalid task type.

    Args:
        value: Raw task map.

    Returns:
        The matching input variant.
    """
    if is_sequence(value):
        return SequenceInput(value)
    if is_plain_mapping(value):
        if "type" in value:
            return SingleInput(value)
        return ParallelInput(value)
    return InvalidInput(value)
