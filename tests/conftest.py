"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

import asyncio
from typing import Any

from taskrunner import Dispatcher, Task, TaskRunnerError


class Noop(Task):
    """Resolves immediately with a bare stats record."""

    async def run(self, *args: Any):
        return self.stats({})


class Echo(Task):
    """Records the args and options it ran with."""

    def __init__(self, dispatcher, options=None):
        super().__init__(dispatcher, options, {"label": "echo", "nested": {"a": 1, "b": 2}})

    async def run(self, *args: Any):
        return self.stats({"args": list(args), "options": dict(self.options)})


class Sleep(Task):
    """Sleeps for the given seconds and records start/finish in a shared log.

    The log travels in args; options are deep copied.
    """

    async def run(self, seconds: float = 0.0, log: list | None = None):
        if log is not None:
            log.append(("start", self.id))
        await asyncio.sleep(seconds)
        if log is not None:
            log.append(("end", self.id))
        return self.stats({"slept": seconds})


class Explode(Task):
    """Fails while running."""

    async def run(self, *args: Any):
        raise RuntimeError("boom")


class Unbuildable(Task):
    """Fails during construction."""

    def __init__(self, dispatcher, options=None):
        raise ValueError("bad options")

    async def run(self, *args: Any):  # pragma: no cover
        return None


class Declines(Task):
    """Handles its own failure and reports no result."""

    async def run(self, *args: Any):
        return None


def register_all(dispatcher: Dispatcher) -> Dispatcher:
    dispatcher.register("noop", Noop)
    dispatcher.register("echo", Echo)
    dispatcher.register("sleep", Sleep)
    dispatcher.register("explode", Explode)
    dispatcher.register("unbuildable", Unbuildable)
    dispatcher.register("declines", Declines)
    return dispatcher


@pytest.fixture
def faults() -> list[TaskRunnerError]:
    """Faults collected by the lenient dispatcher's notify callback."""
    return []


@pytest.fixture
def dispatcher() -> Dispatcher:
    """Strict dispatcher with the test task types registered."""
    return register_all(Dispatcher())


@pytest.fixture
def lenient(faults) -> Dispatcher:
    """Non strict dispatcher reporting into ``faults``."""
    return register_all(Dispatcher(strict=False, notify=faults.append))
