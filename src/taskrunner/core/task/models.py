"""Task data models: stats records and the task constructor contract."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, NotRequired, Protocol, TypedDict

if TYPE_CHECKING:
    from taskrunner.core.task.core import Task
    from taskrunner.dispatch.dispatcher import Dispatcher


class StatsRecord(TypedDict):
    """Result of a completed task. Subclasses may add their own keys."""

    id: str
    time: float  # Seconds since the task was constructed


class TaskDescriptor(TypedDict):
    """One work item as handed to Dispatcher.task()."""

    type: str
    options: NotRequired[dict[str, Any]]
    args: NotRequired[Any]
    id: NotRequired[str]


class TaskConstructor(Protocol):
    """Anything the dispatcher can register: a Task subclass or factory.

    Called with the owning dispatcher and the normalized options mapping.
    """

    def __call__(self, dispatcher: Dispatcher, options: dict[str, Any] | None) -> Task: ...
