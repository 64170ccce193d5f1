"""Core functionalities: the task base class and stateless helpers.

Architecture Note:
    core/ holds the task lifecycle and pure helpers with no dispatch state.
    For the registry and recursive runner, see dispatch/.
"""

from taskrunner.core.objects import (
    Timer,
    clone_object,
    is_plain_mapping,
    is_sequence,
    merge_object,
    unique_id,
)
from taskrunner.core.task import StatsRecord, Task, TaskConstructor, TaskDescriptor

__all__ = [
    # Task
    "Task",
    "StatsRecord",
    "TaskDescriptor",
    "TaskConstructor",
    # Objects
    "Timer",
    "clone_object",
    "is_plain_mapping",
    "is_sequence",
    "merge_object",
    "unique_id",
]
