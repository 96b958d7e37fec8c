"""taskdice - topic-grouped task tracker with random picks."""

__version__ = "0.1.0"
__author__ = "taskdice Contributors"

from .state.errors import TaskStoreError
from .state.tasks import Selection, TaskStore

__all__ = ["Selection", "TaskStore", "TaskStoreError"]
