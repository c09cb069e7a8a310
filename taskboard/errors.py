"""Exceptions raised by the task board core."""

from __future__ import annotations


class TaskboardError(Exception):
    """Base class for task board errors."""


class ValidationError(TaskboardError):
    """Input to a repository operation was rejected (e.g. empty title)."""


class NotFoundError(TaskboardError):
    """No task exists with the requested id."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class CorruptStateError(TaskboardError):
    """Persisted state could not be parsed as a task collection."""
