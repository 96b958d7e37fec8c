"""Topic and task data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from .errors import CorruptStoreError


@dataclass
class Task:
    """A named unit of work. Two tasks with the same name are the same task."""

    name: str
    description: Optional[str] = None
    link: Optional[str] = None

    @property
    def key(self) -> str:
        """Identity used for uniqueness inside a topic."""
        return self.name

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the stored dictionary form."""
        return {
            "task_name": self.name,
            "task_description": self.description,
            "link": self.link,
        }

    @staticmethod
    def from_dict(data: Any) -> "Task":
        """Create from the stored dictionary form."""
        if not isinstance(data, dict):
            raise CorruptStoreError(f"Task entry must be an object, got {type(data).__name__}")
        name = data.get("task_name")
        if not isinstance(name, str):
            raise CorruptStoreError("Task entry is missing a string 'task_name'")
        description = data.get("task_description")
        link = data.get("link")
        for label, value in (("task_description", description), ("link", link)):
            if value is not None and not isinstance(value, str):
                raise CorruptStoreError(f"Task '{name}' has a non-string '{label}'")
        return Task(name=name, description=description, link=link)


@dataclass
class Topic:
    """Tasks grouped under one topic name, unique by task name."""

    tasks: Dict[str, Task] = field(default_factory=dict)

    @classmethod
    def from_task(cls, task: Task) -> "Topic":
        topic = cls()
        topic.add(task)
        return topic

    def add(self, task: Task) -> None:
        """Insert a task, replacing any stored task with the same name."""
        self.tasks[task.key] = task

    def remove(self, name: str) -> bool:
        return self.tasks.pop(name, None) is not None

    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks.values())

    def __contains__(self, name: object) -> bool:
        return name in self.tasks

    def to_dict(self) -> Dict[str, Any]:
        ordered: List[Task] = sorted(self.tasks.values(), key=lambda t: t.key)
        return {"tasks": [task.to_dict() for task in ordered]}

    @staticmethod
    def from_dict(data: Any) -> "Topic":
        if not isinstance(data, dict) or not isinstance(data.get("tasks"), list):
            raise CorruptStoreError("Topic entry must be an object with a 'tasks' array")
        topic = Topic()
        for entry in data["tasks"]:
            topic.add(Task.from_dict(entry))
        return topic


@dataclass
class Store:
    """Root document: topic name -> topic."""

    topics: Dict[str, Topic] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"topics": {name: topic.to_dict() for name, topic in self.topics.items()}}

    @staticmethod
    def from_dict(data: Any) -> "Store":
        """Create from the stored document, raising CorruptStoreError on a bad shape."""
        if not isinstance(data, dict) or not isinstance(data.get("topics"), dict):
            raise CorruptStoreError("Store document must be an object with a 'topics' object")
        topics: Dict[str, Topic] = {}
        for name, entry in data["topics"].items():
            try:
                topics[name] = Topic.from_dict(entry)
            except CorruptStoreError as exc:
                raise CorruptStoreError(f"Topic '{name}': {exc}") from exc
        return Store(topics=topics)
