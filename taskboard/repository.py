"""Task repository: create/read/update/delete over the stored collection.

Each operation re-reads the full collection from storage, applies its change
in memory, and writes the full collection back. Nothing is cached between
calls, so a single process always sees current state; separate processes
sharing one store are not coordinated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .errors import NotFoundError, ValidationError
from .models import Task
from .storage import StorageAdapter

logger = logging.getLogger(__name__)


class TaskRepository:
    """CRUD over the task collection persisted by a StorageAdapter."""

    def __init__(self, storage: StorageAdapter, statuses: Iterable[str]) -> None:
        self.storage = storage
        self.statuses: list[str] = list(statuses)
        if not self.statuses:
            raise ValueError("TaskRepository needs at least one status")

    def list_all(self) -> list[Task]:
        return self.storage.load()

    def get(self, task_id: int) -> Task:
        for task in self.storage.load():
            if task.id == task_id:
                return task
        raise NotFoundError(task_id)

    def create(
        self,
        title: str,
        description: str = "",
        status: str | None = None,
        board: str | None = None,
    ) -> Task:
        """Append a new task and persist it.

        The id is one greater than the highest existing id (1 when empty), so
        ids freed by deletion are not handed out again while a higher id
        survives.

        Raises:
            ValidationError: empty title or unknown status
        """
        title = self._check_title(title)
        status = self._check_status(status if status is not None else self.statuses[0])

        tasks = self.storage.load()
        next_id = max((t.id for t in tasks), default=0) + 1
        task = Task(
            id=next_id,
            title=title,
            status=status,
            description=description or "",
            board=(board or "").strip() or None,
        )
        tasks.append(task)
        self.storage.save(tasks)
        logger.info("Created task %d '%s' on board %s", task.id, task.title, task.board)
        return task

    def patch(
        self,
        task_id: int,
        *,
        title: str | None = None,
        description: str | None = None,
        status: str | None = None,
    ) -> Task:
        """Merge the given fields into task ``task_id`` and persist.

        Fields left as None are unchanged. The board and id are never
        modified here.

        Raises:
            NotFoundError: no task with this id
            ValidationError: empty title or unknown status
        """
        if title is not None:
            title = self._check_title(title)
        if status is not None:
            status = self._check_status(status)

        tasks = self.storage.load()
        for task in tasks:
            if task.id == task_id:
                break
        else:
            raise NotFoundError(task_id)

        if title is not None:
            task.title = title
        if description is not None:
            task.description = description
        if status is not None:
            if status != task.status:
                logger.debug("Task %d status: %s -> %s", task_id, task.status, status)
            task.status = status

        self.storage.save(tasks)
        logger.info("Updated task %d '%s'", task.id, task.title)
        return task

    def remove(self, task_id: int) -> None:
        """Delete task ``task_id``. Deleting a missing id is a no-op."""
        tasks = self.storage.load()
        remaining = [t for t in tasks if t.id != task_id]
        if len(remaining) == len(tasks):
            logger.debug("Task %d already absent; nothing to remove", task_id)
            return
        self.storage.save(remaining)
        logger.info("Removed task %d", task_id)

    def _check_title(self, title: str) -> str:
        if not isinstance(title, str) or not title.strip():
            raise ValidationError("Task title must not be empty")
        return title.strip()

    def _check_status(self, status: str) -> str:
        if status not in self.statuses:
            raise ValidationError(
                f"Unknown status {status!r}; expected one of {', '.join(self.statuses)}"
            )
        return status
