"""State management modules."""

from .errors import CorruptStoreError, StoreIOError, TaskStoreError, TopicNotFoundError
from .models import Store, Task, Topic
from .persistence import Persistence
from .tasks import Selection, TaskStore

__all__ = [
    "CorruptStoreError",
    "Persistence",
    "Selection",
    "Store",
    "StoreIOError",
    "Task",
    "TaskStore",
    "TaskStoreError",
    "Topic",
    "TopicNotFoundError",
]
