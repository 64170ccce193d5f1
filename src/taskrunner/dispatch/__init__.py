"""Task registry and recursive dispatch."""

from taskrunner.dispatch.dispatcher import Dispatcher, NotifyCallback, TaskParser
from taskrunner.dispatch.models import (
    InvalidInput,
    ParallelInput,
    SequenceInput,
    SingleInput,
    StatsTree,
    TaskInput,
    TaskMap,
    classify,
)

__all__ = [
    # Dispatcher
    "Dispatcher",
    "NotifyCallback",
    "TaskParser",
    # Models
    "TaskMap",
    "StatsTree",
    "TaskInput",
    "SingleInput",
    "SequenceInput",
    "ParallelInput",
    "InvalidInput",
    "classify",
]
