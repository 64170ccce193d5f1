"""Task registry and recursive task map runner.

Usage:
    dispatcher = Dispatcher()
    dispatcher.register("build", BuildTask)

    @dispatcher.task_type("deploy")
    class Deploy(Task): ...

    # Lists run in order, keyed maps run concurrently, mappings with a
    # "type" key are single tasks. Results mirror the input shape.
    stats = await dispatcher.run(
        [
            {"type": "build", "args": ["app"]},
            {"eu": {"type": "deploy", "id": "eu"}, "us": {"type": "deploy", "id": "us"}},
        ]
    )

    # Non strict: faults go to notify and the failing branch yields None
    dispatcher = Dispatcher(strict=False, notify=print)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

from taskrunner.core.objects import is_plain_mapping, is_sequence
from taskrunner.core.task import StatsRecord, TaskConstructor
from taskrunner.dispatch.models import (
    InvalidInput,
    ParallelInput,
    SequenceInput,
    SingleInput,
    StatsTree,
    classify,
)
from taskrunner.errors import (
    DuplicateTypeError,
    InvalidInputError,
    InvalidParallelError,
    InvalidSequenceError,
    InvalidTaskTypeError,
    NotCallableError,
    TaskConstructionError,
    TaskRunError,
    TaskRunnerError,
    UnknownTaskTypeError,
)

if TYPE_CHECKING:
    from taskrunner.config import DispatcherSettings

logger = logging.getLogger(__name__)

C = TypeVar("C")

NotifyCallback = Callable[[TaskRunnerError], None]
TaskParser = Callable[[dict[str, Any]], None]


class Dispatcher:
    """Owns the task registry and walks task maps recursively.

    All dispatch happens on the running event loop. Parallel branches are
    started together and joined with asyncio.gather; there is no
    cancellation, timeout or retry.

    Registration is expected during setup. Registering while runs are in
    flight is not synchronized and is the caller's responsibility.

    Args:
        strict: Raise faults to the caller. When False, faults go to notify
            (or the log when notify is unset) and the failing branch yields None.
        notify: Fault callback used in non strict mode.
        parser: Hook called with each task descriptor before it is
            normalized; may mutate it in place.
    """

    def __init__(
        self,
        strict: bool = True,
        notify: NotifyCallback | None = None,
        parser: TaskParser | None = None,
    ) -> None:
        self._strict = strict
        self._notify = notify
        self._parser = parser
        self._types: dict[str, TaskConstructor] = {}

    @classmethod
    def from_settings(
        cls,
        settings: DispatcherSettings,
        notify: NotifyCallback | None = None,
        parser: TaskParser | None = None,
    ) -> Dispatcher:
        """Create a dispatcher configured from DispatcherSettings."""
        return cls(strict=settings.strict, notify=notify, parser=parser)

    @property
    def strict(self) -> bool:
        return self._strict

    def error(self, err: TaskRunnerError) -> None:
        """Central fault sink: raise in strict mode, otherwise report.

        Raises:
            TaskRunnerError: The given fault, in strict mode.
        """
        if self._strict:
            raise err
        if self._notify is None:
            logger.warning("%s: %s", err.kind, err)
            return
        logger.debug("Reporting %s: %s", err.kind, err)
        self._notify(err)

    # Registry

    def register(self, name: str, constructor: Any, replace: bool = False) -> None:
        """Register a task constructor under a type name.

        Args:
            name: Task type used in descriptors.
            constructor: Task subclass or factory taking (dispatcher, options).
            replace: Overwrite an existing registration.
        """
        if not callable(constructor):
            self.error(NotCallableError(f"Task constructor must be callable: {name}", name))
            return
        if not replace and name in self._types:
            self.error(DuplicateTypeError(f"Task constructor already defined: {name}", name))
            return
        self._types[name] = constructor
        logger.debug("Registered task type %r -> %r", name, constructor)

    def task_type(self, name: str, replace: bool = False) -> Callable[[C], C]:
        """Class decorator registering the decorated constructor.

        Usage:
            @dispatcher.task_type("noop")
            class Noop(Task):
                async def run(self):
                    return self.stats()
        """

        def decorator(constructor: C) -> C:
            self.register(name, constructor, replace=replace)
            return constructor

        return decorator

    def get_task_constructor(self, name: str) -> TaskConstructor | None:
        """Look up a registered constructor, None if unknown."""
        return self._types.get(name)

    def registered_types(self) -> tuple[str, ...]:
        """Names of all registered task types, sorted."""
        return tuple(sorted(self._types))

    # Dispatch

    async def run(self, task_map: Any) -> StatsTree:
        """Run a task map of any shape.

        Lists run as a sequence, mappings with a ``type`` key as a single
        task, other mappings in parallel.

        Returns:
            Stats mirroring the input shape, None for a failed single task
            or invalid input.
        """
        match classify(task_map):
            case SequenceInput(items):
                return await self.sequence(items)
            case SingleInput(descriptor):
                return await self.task(descriptor)
            case ParallelInput(branches):
                return await self.parallel(branches)
            case InvalidInput(value):
                self.error(InvalidInputError(f"Invalid task map type: {type(value).__name__}"))
                return None

    def run_sync(self, task_map: Any) -> StatsTree:
        """Synchronous wrapper for run(). Must not be called from a running loop."""
        return asyncio.run(self.run(task_map))

    async def sequence(self, task_list: Any) -> list[Any]:
        """Run items one after another; results keep input positions."""
        if not is_sequence(task_list):
            self.error(InvalidSequenceError(f"Invalid sequence type: {type(task_list).__name__}"))
            return []

        stats: list[Any] = []
        for item in task_list:
            stats.append(await self.run(item))
        return stats

    async def parallel(self, task_map: Any) -> dict[str, Any]:
        """Start every branch, then wait for all of them.

        Branches are started in key order and may finish in any order.
        In strict mode the first raised fault propagates out of the join;
        branches already started keep running.
        """
        if not is_plain_mapping(task_map) or "type" in task_map:
            self.error(InvalidParallelError(f"Invalid parallel type: {type(task_map).__name__}"))
            return {}

        names = list(task_map)
        results = await asyncio.gather(*(self.run(task_map[name]) for name in names))
        return dict(zip(names, results, strict=True))

    async def task(self, task_data: Any) -> StatsRecord | None:
        """Construct and run a single task.

        The descriptor is normalized in place: ``options`` becomes a
        mapping, ``id`` is copied into ``options["id"]`` and ``args``
        becomes a list.

        Returns:
            Whatever the task's run() returned, None on failure.
        """
        task_type = task_data.get("type") if is_plain_mapping(task_data) else None
        if not isinstance(task_type, str) or not task_type:
            self.error(InvalidTaskTypeError(f"Invalid task type: {task_type!r}", task_type))
            return None

        if self._parser is not None:
            self._parser(task_data)

            # The parser may rewrite the type
            task_type = task_data.get("type")
            if not isinstance(task_type, str) or not task_type:
                self.error(InvalidTaskTypeError(f"Invalid task type after parser: {task_type!r}", task_type))
                return None

        if not is_plain_mapping(task_data.get("options")):
            task_data["options"] = {}

        # Descriptor id wins over any id in options
        if task_data.get("id"):
            task_data["options"]["id"] = task_data["id"]

        task_data["args"] = _normalize_args(task_data.get("args"))

        constructor = self.get_task_constructor(task_type)
        if constructor is None:
            self.error(UnknownTaskTypeError(f"Unknown task type: {task_type}", task_type))
            return None

        try:
            task = constructor(self, task_data["options"])
        except Exception as e:
            self.error(TaskConstructionError(f"Failed to construct task: {task_type}", task_type, e))
            return None

        logger.debug("Running task %r (%s)", task_type, task_data["options"].get("id"))
        try:
            stats = await task.run(*task_data["args"])
        except Exception as e:
            self.error(TaskRunError(f"Failed to run task: {task_type}", task_type, e))
            return None

        logger.debug("Finished task %r", task_type)
        return stats


def _normalize_args(args: Any) -> list[Any]:
    if args is None:
        return []
    if isinstance(args, list):
        return args
    if isinstance(args, tuple):
        return list(args)
    return [args]
