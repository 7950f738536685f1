"""Progress models for tracking upload sessions.

Provides the per-file task record, its status state machine, and the
summaries produced by upload sessions and bulk operations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class TaskStatus(Enum):
    """Lifecycle of a single file upload."""

    PENDING = "pending"
    UPLOADING = "uploading"
    COMPLETED = "completed"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        """Check if no further transition can occur."""
        return self in (TaskStatus.COMPLETED, TaskStatus.ERROR)

    def can_transition_to(self, target: TaskStatus) -> bool:
        """Check whether a record in this status may be updated to ``target``.

        Staying in ``uploading`` is allowed so progress can be reported.
        """
        return target in _TRANSITIONS[self]


_TRANSITIONS: dict[TaskStatus, frozenset[TaskStatus]] = {
    TaskStatus.PENDING: frozenset({TaskStatus.PENDING, TaskStatus.UPLOADING}),
    TaskStatus.UPLOADING: frozenset(
        {TaskStatus.UPLOADING, TaskStatus.COMPLETED, TaskStatus.ERROR}
    ),
    TaskStatus.COMPLETED: frozenset(),
    TaskStatus.ERROR: frozenset(),
}


@dataclass(frozen=True)
class UploadTask:
    """One file queued for transfer.

    Records are immutable; the task state store swaps in a new record on
    every update so readers never observe a half-written task.
    """

    id: int
    name: str
    status: TaskStatus = TaskStatus.PENDING
    progress: int = 0

    @property
    def is_terminal(self) -> bool:
        """Check if the task reached completed or error."""
        return self.status.is_terminal


@dataclass
class SessionSummary:
    """Outcome of one upload session."""

    success_count: int = 0
    failed_count: int = 0
    archived: bool = False
    archive_accepted: bool = False
    total: int = 0
    duration: float = 0.0

    @property
    def success(self) -> bool:
        """Check if every file (or the archive request) went through."""
        if self.archived:
            return self.archive_accepted
        return self.failed_count == 0

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON output."""
        return {
            "total": self.total,
            "success_count": self.success_count,
            "failed_count": self.failed_count,
            "archived": self.archived,
            "archive_accepted": self.archive_accepted,
            "duration": round(self.duration, 2),
        }


@dataclass
class OperationResult:
    """Generic result of a bulk operation over named files."""

    total: int = 0
    succeeded: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    duration: float = 0.0

    @property
    def success(self) -> bool:
        """Check if no item failed."""
        return not self.failed

    @property
    def success_rate(self) -> float:
        """Calculate success rate percentage."""
        if self.total == 0:
            return 100.0
        return (len(self.succeeded) / self.total) * 100
