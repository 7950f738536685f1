"""Task state store for upload sessions.

Holds the per-file records of the current batch. The scheduler writes to it
from the event loop while a renderer may read snapshots from another thread,
so every update replaces one immutable record under a lock.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from collections.abc import Callable, Iterable
from typing import Any

from sharectl.core.exceptions import TaskStateError
from sharectl.models.progress import TaskStatus, UploadTask

logger = logging.getLogger(__name__)

Subscriber = Callable[[UploadTask], None]

_UPDATABLE_FIELDS = frozenset({"status", "progress"})


class TaskStateStore:
    """Ordered collection of upload task records with change notification."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tasks: dict[int, UploadTask] = {}
        self._next_id = 1
        self._subscribers: list[Subscriber] = []

    # =========================================================================
    # Mutation
    # =========================================================================

    def create(self, names: Iterable[str]) -> list[UploadTask]:
        """Create pending tasks for a batch, in submission order.

        Ids come from a counter that survives :meth:`clear`, so they are
        contiguous within a batch and never reused by a later one.

        Args:
            names: Display names of the submitted files. Duplicates are fine.

        Returns:
            The created records.
        """
        with self._lock:
            created = []
            for name in names:
                task = UploadTask(id=self._next_id, name=name)
                self._tasks[task.id] = task
                self._next_id += 1
                created.append(task)
        for task in created:
            self._notify(task)
        return created

    def update(self, task_id: int, **changes: Any) -> UploadTask:
        """Atomically replace one task record.

        Args:
            task_id: Id of the task.
            **changes: New ``status`` and/or ``progress`` values. A task moving
                to ``completed`` always ends at 100.

        Returns:
            The new record.

        Raises:
            TaskStateError: For an unknown id or field, an illegal status
                transition, progress that drops while uploading, or progress
                of 100 on a task that is not completed.
        """
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise TaskStateError(task_id, f"cannot update fields {sorted(unknown)}")

        requested = changes.get("progress")
        if requested is not None and not 0 <= requested <= 100:
            raise TaskStateError(task_id, f"progress out of range: {requested}")

        with self._lock:
            current = self._tasks.get(task_id)
            if current is None:
                raise TaskStateError(task_id, "unknown task")

            status = changes.get("status", current.status)
            if not current.status.can_transition_to(status):
                raise TaskStateError(
                    task_id,
                    f"illegal transition {current.status.value} -> {status.value}",
                )

            progress = changes.get("progress", current.progress)
            if status is TaskStatus.COMPLETED:
                progress = 100
            elif progress == 100:
                raise TaskStateError(task_id, f"progress 100 while {status.value}")
            if current.status is TaskStatus.UPLOADING and progress < current.progress:
                raise TaskStateError(
                    task_id,
                    f"progress went backwards: {current.progress} -> {progress}",
                )

            task = dataclasses.replace(current, status=status, progress=progress)
            self._tasks[task_id] = task

        self._notify(task)
        return task

    def clear(self) -> None:
        """Drop every record. Ids keep counting from where they were."""
        with self._lock:
            self._tasks.clear()

    # =========================================================================
    # Reads
    # =========================================================================

    def get(self, task_id: int) -> UploadTask:
        """Return one record.

        Raises:
            TaskStateError: For an unknown id.
        """
        with self._lock:
            try:
                return self._tasks[task_id]
            except KeyError:
                raise TaskStateError(task_id, "unknown task") from None

    def snapshot(self) -> list[UploadTask]:
        """Return all records in id (submission) order."""
        with self._lock:
            return [self._tasks[task_id] for task_id in sorted(self._tasks)]

    def counts(self) -> dict[TaskStatus, int]:
        """Return the number of records in each status."""
        totals = {status: 0 for status in TaskStatus}
        for task in self.snapshot():
            totals[task.status] += 1
        return totals

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    # =========================================================================
    # Subscription
    # =========================================================================

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback invoked with every new record.

        Returns:
            Function that removes the subscription.
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, task: UploadTask) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(task)
            except Exception:
                # Observer failures never reach the scheduler
                logger.exception("Task state subscriber failed for task %s", task.id)
