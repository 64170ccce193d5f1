"""Task functionality: lifecycle base class and data models."""

from taskrunner.core.task.core import Task
from taskrunner.core.task.models import StatsRecord, TaskConstructor, TaskDescriptor

__all__ = [
    # Models
    "StatsRecord",
    "TaskDescriptor",
    "TaskConstructor",
    # Core
    "Task",
]
