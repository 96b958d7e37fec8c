"""Task store: topic and task operations over a loaded document."""

from __future__ import annotations

import json
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .errors import TopicNotFoundError
from .models import Store, Task, Topic
from .persistence import Persistence

logger = logging.getLogger(__name__)


@dataclass
class Selection:
    """A randomly picked task together with its topic."""

    topic: str
    task: Task


class TaskStore:
    """
    Owns one loaded store for the lifetime of a single command.

    Callers load, apply one operation, then save. Nothing here locks the
    document, so concurrent invocations overwrite each other (last write wins).
    """

    def __init__(
        self,
        store: Optional[Store] = None,
        path: Optional[Path] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.store = store if store is not None else Store()
        self.path = path
        self.rng = rng or random.Random()

    @classmethod
    def load(cls, path: Path, rng: Optional[random.Random] = None) -> "TaskStore":
        """Load the store document at path."""
        logger.info("Loading store from %s", path)
        return cls(Persistence.load_store(path), path=path, rng=rng)

    def save(self) -> None:
        """Write the store back to the path it was loaded from."""
        if self.path is None:
            raise ValueError("TaskStore has no storage path to save to")
        Persistence.save_store(self.store, self.path)

    def create(
        self,
        topic: str,
        name: str,
        description: Optional[str] = None,
        link: Optional[str] = None,
    ) -> Task:
        """Add a task to a topic, replacing any task with the same name."""
        logger.info("Creating %s for %s", name, topic)
        task = Task(name=name, description=description, link=link)
        existing = self.store.topics.get(topic)
        if existing is None:
            self.store.topics[topic] = Topic.from_task(task)
        else:
            existing.add(task)
        return task

    def read(self, topic: Optional[str] = None, task: Optional[str] = None) -> str:
        """
        Render one topic, or the whole store when no topic is given.

        The task argument is accepted for symmetry with the command line but
        does not narrow the view.
        """
        if topic is not None:
            logger.info("Reading topic: %s", topic)
            found = self.store.topics.get(topic)
            if found is None:
                raise TopicNotFoundError(topic)
            return self.render(found.to_dict())

        if task is not None:
            logger.debug("Ignoring task filter %r without a topic", task)
        logger.info("Reading entire store")
        return self.render(self.store.to_dict())

    def delete(self, topic: str, task: Optional[str] = None) -> bool:
        """Remove a topic, or one task from it. Missing targets are a no-op."""
        if task is None:
            logger.info("Deleting topic: %s", topic)
            return self.store.topics.pop(topic, None) is not None

        logger.info("Deleting task %s from topic %s", task, topic)
        found = self.store.topics.get(topic)
        if found is None:
            return False
        return found.remove(task)

    def randomise(self, topic: Optional[str] = None) -> Optional[Selection]:
        """
        Pick one task uniformly at random.

        Returns None when there is nothing to pick from: the store has no
        topics, or the chosen topic has no tasks. A requested topic that does
        not exist falls back to a random topic.
        """
        if not self.store.topics:
            logger.info("Trying to randomise on an empty store")
            return None

        if topic is not None and topic in self.store.topics:
            chosen = topic
        else:
            if topic is not None:
                logger.warning("Topic %s not found, picking a random topic instead", topic)
            chosen = self._pick(sorted(self.store.topics))

        tasks = sorted(self.store.topics[chosen], key=lambda t: t.key)
        if not tasks:
            logger.info("Topic %s has no tasks", chosen)
            return None

        return Selection(topic=chosen, task=self._pick(tasks))

    def _pick(self, items: list) -> Any:
        return items[self.rng.randrange(len(items))]

    @staticmethod
    def render(data: Any) -> str:
        """Deterministic text form of a store or topic."""
        return json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False)
