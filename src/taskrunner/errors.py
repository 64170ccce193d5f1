"""Fault types routed through the dispatcher's error sink.

Every fault the dispatcher reports is a TaskRunnerError subclass. The
``kind`` attribute names the fault category, ``task_type`` the registry
key involved (when there is one). Wrapped faults keep the underlying
exception as ``__cause__``.

Usage:
    try:
        await dispatcher.run({"type": "missing"})
    except UnknownTaskTypeError as err:
        print(err.kind, err.task_type)
"""

from __future__ import annotations

from typing import Any


class TaskRunnerError(Exception):
    """Base class for all dispatcher faults."""

    kind: str = "task runner error"

    def __init__(
        self,
        message: str,
        task_type: Any = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.task_type = task_type
        if cause is not None:
            self.__cause__ = cause


# Registration


class NotCallableError(TaskRunnerError):
    kind = "not callable"


class DuplicateTypeError(TaskRunnerError):
    kind = "duplicate type"


# Dispatch shape


class InvalidInputError(TaskRunnerError):
    kind = "invalid task input"


class InvalidSequenceError(TaskRunnerError):
    kind = "invalid sequence type"


class InvalidParallelError(TaskRunnerError):
    kind = "invalid parallel type"


class InvalidTaskTypeError(TaskRunnerError):
    kind = "invalid task type"


# Resolution


class UnknownTaskTypeError(TaskRunnerError):
    kind = "unknown task type"


# Lifecycle


class TaskConstructionError(TaskRunnerError):
    kind = "failed to construct task"


class TaskRunError(TaskRunnerError):
    kind = "failed to run task"


class TaskNotImplementedError(TaskRunnerError, NotImplementedError):
    """Raised by Task.run when a subclass defers to the abstract base."""

    kind = "not implemented"
