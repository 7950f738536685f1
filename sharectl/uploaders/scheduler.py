"""Upload scheduler.

Takes a batch of files and either uploads them one by one in
concurrency-bounded windows or, for very large batches, hands the whole
batch to the server-side archive request.

Windows run strictly one after another. Every task in a window is started
together, in submission order, and the next window only begins once all of
them are completed or failed. A failed task never cancels its siblings and
is never retried.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path
from typing import Protocol

from sharectl.core.logging import LogContext
from sharectl.models.progress import SessionSummary, TaskStatus, UploadTask
from sharectl.uploaders.common import clamp_progress, split_into_windows
from sharectl.uploaders.constants import (
    ARCHIVE_THRESHOLD,
    DEFAULT_UPLOAD_DEADLINE,
    MAX_IN_FLIGHT_PERCENT,
)
from sharectl.uploaders.platform import PlatformProfile, detect
from sharectl.uploaders.state import TaskStateStore
from sharectl.uploaders.transport import Outcome, TransportAdapter

logger = logging.getLogger(__name__)


class ArchiveRequester(Protocol):
    """Anything that can issue the server-side archive request."""

    async def request_archive(self, file_count: int, note: str) -> bool: ...


class UploadScheduler:
    """Drives one upload session per :meth:`run` call."""

    def __init__(
        self,
        transport: TransportAdapter,
        archive_client: ArchiveRequester,
        *,
        store: TaskStateStore | None = None,
        profile: PlatformProfile | None = None,
        profile_provider: Callable[[], PlatformProfile] = detect,
        deadline_seconds: float = DEFAULT_UPLOAD_DEADLINE,
        archive_threshold: int = ARCHIVE_THRESHOLD,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize the scheduler.

        Args:
            transport: Uploads a single file.
            archive_client: Used instead of the transport for oversized batches.
            store: Receives every task status change (a new store by default).
            profile: Fixed platform profile. When None, ``profile_provider``
                is asked once per session.
            profile_provider: Computes the profile from the environment.
            deadline_seconds: Budget for each file, from the moment it starts.
            archive_threshold: Batches larger than this use the archive request.
            sleep: Coroutine used for inter-window pacing.
        """
        self.transport = transport
        self.archive_client = archive_client
        self.store = store if store is not None else TaskStateStore()
        self.profile = profile
        self.profile_provider = profile_provider
        self.deadline_seconds = deadline_seconds
        self.archive_threshold = archive_threshold
        self._sleep = sleep

    async def run(self, files: Sequence[Path]) -> SessionSummary:
        """Upload a batch of files.

        Args:
            files: Files in submission order. Names may repeat.

        Returns:
            Aggregate summary. Never raises for per-file or archive failures.
        """
        start_time = time.time()
        files = list(files)
        total = len(files)

        if total > self.archive_threshold:
            accepted = await self._archive(total)
            return SessionSummary(
                archived=True,
                archive_accepted=accepted,
                total=total,
                duration=time.time() - start_time,
            )

        summary = SessionSummary(total=total)
        if not files:
            return summary

        tasks = self.store.create(path.name for path in files)
        profile = self.profile or self.profile_provider()
        windows = split_into_windows(list(zip(tasks, files)), profile.concurrency_limit)

        with LogContext(
            "upload session",
            logger,
            files=total,
            concurrency=profile.concurrency_limit,
            windows=len(windows),
        ) as session:
            for index, window in enumerate(windows):
                if index > 0 and profile.inter_batch_delay_ms > 0:
                    await self._sleep(profile.inter_batch_delay_ms / 1000)

                session.debug("window %d/%d: %d files", index + 1, len(windows), len(window))

                results = await asyncio.gather(
                    *(self._run_task(task, path) for task, path in window)
                )
                for succeeded in results:
                    if succeeded:
                        summary.success_count += 1
                    else:
                        summary.failed_count += 1

        summary.duration = time.time() - start_time
        if summary.failed_count:
            logger.warning(
                "Upload session finished with %d of %d failures",
                summary.failed_count,
                total,
            )
        return summary

    async def _archive(self, total: int) -> bool:
        note = (
            f"Batch of {total} files exceeds the per-file upload limit of "
            f"{self.archive_threshold}; requesting server-side archive"
        )
        logger.info(note)
        accepted = await self.archive_client.request_archive(total, note)
        if not accepted:
            logger.error("Archive request for %d files was not accepted", total)
        return accepted

    async def _run_task(self, task: UploadTask, path: Path) -> bool:
        """Upload one file and record its terminal state.

        Returns:
            True if the file was accepted by the server.
        """
        task_id = task.id
        self.store.update(task_id, status=TaskStatus.UPLOADING, progress=0)

        def on_progress(percent: float) -> None:
            current = self.store.get(task_id)
            if current.status is not TaskStatus.UPLOADING:
                return
            value = clamp_progress(percent, current.progress, MAX_IN_FLIGHT_PERCENT)
            if value != current.progress:
                self.store.update(task_id, progress=value)

        deadline = asyncio.get_running_loop().time() + self.deadline_seconds
        try:
            outcome = await self.transport.upload(path, on_progress, deadline)
        except Exception as e:
            logger.exception("Transport raised for %s", path.name)
            outcome = Outcome(success=False, error=str(e))

        if outcome.success:
            self.store.update(task_id, status=TaskStatus.COMPLETED, progress=100)
        else:
            self.store.update(task_id, status=TaskStatus.ERROR)
            logger.warning("Upload failed for %s: %s", path.name, outcome.error)

        return outcome.success
