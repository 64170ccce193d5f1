"""Task base class: option defaults, identity and stats.

Usage:
    class Fetch(Task):
        def __init__(self, dispatcher, options=None):
            super().__init__(dispatcher, options, {"timeout": 10, "headers": {}})

        async def run(self, url):
            body = await download(url, timeout=self.options["timeout"])
            return self.stats({"bytes": len(body)})

    dispatcher.register("fetch", Fetch)
    await dispatcher.run({"type": "fetch", "args": "https://example.com"})
"""

from __future__ import annotations

import weakref
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from taskrunner.core.objects import (
    Timer,
    clone_object,
    is_plain_mapping,
    merge_object,
    unique_id,
)
from taskrunner.core.task.models import StatsRecord
from taskrunner.errors import TaskNotImplementedError

if TYPE_CHECKING:
    from taskrunner.dispatch.dispatcher import Dispatcher

CONSTRUCT_MARK = "construct"


class Task(ABC):
    """Abstract unit of work run by a Dispatcher.

    Effective options are a deep clone of the subclass defaults with the
    caller options deep-merged on top. When neither carries an ``id``, a
    fresh one is generated. Elapsed time is measured from construction.

    The dispatcher is held by weak reference; a task never keeps its
    dispatcher alive.

    Args:
        dispatcher: Owning dispatcher (or None for standalone use).
        options: Caller overrides. Ignored unless a plain mapping.
        defaults: Subclass defaults. Never mutated.
    """

    def __init__(
        self,
        dispatcher: Dispatcher | None,
        options: dict[str, Any] | None = None,
        defaults: dict[str, Any] | None = None,
    ) -> None:
        self.timer = Timer()
        self.timer.start(CONSTRUCT_MARK)

        self._dispatcher_ref = weakref.ref(dispatcher) if dispatcher is not None else None
        self._defaults: dict[str, Any] = defaults if is_plain_mapping(defaults) else {}

        self._options: dict[str, Any] = clone_object(self._defaults)
        if not self._options.get("id"):
            self._options["id"] = unique_id()

        if options and is_plain_mapping(options):
            merge_object(self._options, options)

    @property
    def dispatcher(self) -> Dispatcher | None:
        """Owning dispatcher, None if it was never set or has been collected."""
        if self._dispatcher_ref is None:
            return None
        return self._dispatcher_ref()

    @property
    def id(self) -> str:
        return str(self._options["id"])

    @property
    def options(self) -> dict[str, Any]:
        """Effective options (defaults merged with caller overrides)."""
        return self._options

    @property
    def defaults(self) -> dict[str, Any]:
        return self._defaults

    def stats(self, data: dict[str, Any] | None = None) -> StatsRecord:
        """Build the stats record for this task.

        Forces ``id`` to the effective id and ``time`` to the seconds
        elapsed since construction. Other keys in data are kept.

        Args:
            data: Partial result to enrich (mutated and returned).

        Returns:
            The enriched record.
        """
        record: dict[str, Any] = data if data is not None else {}
        record["id"] = self.id
        record["time"] = self.timer.elapsed(CONSTRUCT_MARK)
        return record  # type: ignore[return-value]

    @abstractmethod
    async def run(self, *args: Any) -> StatsRecord | None:
        """Perform the work.

        Returns:
            A stats record built with stats(), or None for a non-fatal
            failure handled by the task itself.

        Raises:
            TaskNotImplementedError: Always, for the base implementation.
        """
        raise TaskNotImplementedError(
            f"{type(self).__name__} must implement a run method",
            task_type=type(self).__name__,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"
