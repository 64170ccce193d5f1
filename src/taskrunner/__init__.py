"""taskrunner: recursive async task dispatcher.

Usage:
    from taskrunner import Dispatcher, Task

    class Noop(Task):
        async def run(self):
            return self.stats()

    dispatcher = Dispatcher()
    dispatcher.register("noop", Noop)

    # Single task, ordered sequence, or keyed parallel map
    await dispatcher.run({"type": "noop"})
    await dispatcher.run([{"type": "noop"}, {"type": "noop", "id": "second"}])
    await dispatcher.run({"a": {"type": "noop"}, "b": {"type": "noop"}})
"""

__version__ = "0.1.0"

# Core primitives
from taskrunner.core import (
    StatsRecord,
    Task,
    TaskConstructor,
    TaskDescriptor,
    Timer,
    clone_object,
    is_plain_mapping,
    is_sequence,
    merge_object,
    unique_id,
)

# Dispatch
from taskrunner.dispatch import (
    Dispatcher,
    InvalidInput,
    ParallelInput,
    SequenceInput,
    SingleInput,
    StatsTree,
    TaskInput,
    TaskMap,
    classify,
)

# Errors
from taskrunner.errors import (
    DuplicateTypeError,
    InvalidInputError,
    InvalidParallelError,
    InvalidSequenceError,
    InvalidTaskTypeError,
    NotCallableError,
    TaskConstructionError,
    TaskNotImplementedError,
    TaskRunError,
    TaskRunnerError,
    UnknownTaskTypeError,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "Task",
    "StatsRecord",
    "TaskDescriptor",
    "TaskConstructor",
    "Timer",
    "clone_object",
    "is_plain_mapping",
    "is_sequence",
    "merge_object",
    "unique_id",
    # Dispatch
    "Dispatcher",
    "TaskMap",
    "StatsTree",
    "TaskInput",
    "SingleInput",
    "SequenceInput",
    "ParallelInput",
    "InvalidInput",
    "classify",
    # Errors
    "TaskRunnerError",
    "NotCallableError",
    "DuplicateTypeError",
    "InvalidInputError",
    "InvalidSequenceError",
    "InvalidParallelError",
    "InvalidTaskTypeError",
    "UnknownTaskTypeError",
    "TaskConstructionError",
    "TaskRunError",
    "TaskNotImplementedError",
]
