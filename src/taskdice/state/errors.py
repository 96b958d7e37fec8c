"""Errors raised by the task store and its persistence layer."""

from __future__ import annotations


class TaskStoreError(Exception):
    """Base exception for task store errors."""


class TopicNotFoundError(TaskStoreError):
    """Raised when a read targets a topic that is not in the store."""

    def __init__(self, topic: str) -> None:
        super().__init__(f"Topic not found: {topic}")
        self.topic = topic


class CorruptStoreError(TaskStoreError):
    """Raised when the storage document cannot be parsed into a store."""


class StoreIOError(TaskStoreError):
    """Raised when the storage document cannot be opened, created or written."""
