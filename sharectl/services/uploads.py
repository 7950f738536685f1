"""Upload service: public entry point of the upload engine.

Wires an async HTTP client, the chosen transport, the platform profile and
the task state store into an :class:`UploadScheduler` for one session.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import httpx

from sharectl.models.progress import SessionSummary
from sharectl.uploaders.archive import ArchiveFallbackClient
from sharectl.uploaders.constants import ARCHIVE_THRESHOLD, DEFAULT_UPLOAD_DEADLINE
from sharectl.uploaders.platform import PlatformProfile, detect
from sharectl.uploaders.scheduler import UploadScheduler
from sharectl.uploaders.state import TaskStateStore
from sharectl.uploaders.transport import select_transport

if TYPE_CHECKING:
    from sharectl.core.client import FileStoreClient


class UploadService:
    """Uploads batches of local files to the file store."""

    def __init__(
        self,
        client: "FileStoreClient",
        *,
        mode: str = "auto",
        profile: PlatformProfile | None = None,
        user_agent: str | None = None,
        deadline_seconds: float = DEFAULT_UPLOAD_DEADLINE,
        archive_threshold: int = ARCHIVE_THRESHOLD,
        store: TaskStateStore | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the upload service.

        Args:
            client: Client whose base URL and TLS settings are reused.
            mode: Transport progress mode (auto, coarse, fine).
            profile: Fixed platform profile; detected from the environment
                (and ``user_agent``) when None.
            user_agent: User agent of the client being served, if any.
            deadline_seconds: Per-file upload deadline.
            archive_threshold: Batches larger than this use the archive request.
            store: Task state store observed by the caller.
            http_transport: Custom httpx transport (used by tests).
        """
        self.client = client
        self.mode = mode
        self.profile = profile
        self.user_agent = user_agent
        self.deadline_seconds = deadline_seconds
        self.archive_threshold = archive_threshold
        self.store = store if store is not None else TaskStateStore()
        self.http_transport = http_transport

    def resolve_profile(self) -> PlatformProfile:
        """Return the profile the next session will use."""
        return self.profile or detect(user_agent=self.user_agent)

    async def upload(self, paths: Sequence[Path]) -> SessionSummary:
        """Run one upload session.

        Args:
            paths: Local files in submission order.

        Returns:
            Session summary; per-file failures are counted, not raised.
        """
        async with self.client.make_async_client(self.http_transport) as http:
            scheduler = UploadScheduler(
                select_transport(self.mode, http),
                ArchiveFallbackClient(http),
                store=self.store,
                profile=self.resolve_profile(),
                deadline_seconds=self.deadline_seconds,
                archive_threshold=self.archive_threshold,
            )
            return await scheduler.run(paths)

    def upload_files(self, paths: Sequence[Path]) -> SessionSummary:
        """Synchronous wrapper around :meth:`upload`."""
        return asyncio.run(self.upload(paths))


def summary_message(summary: SessionSummary) -> tuple[str, str]:
    """Build the end-of-session message.

    Returns:
        Tuple of (text, kind) where kind is ``success``, ``warning`` or ``error``.
    """
    if summary.archived:
        if summary.archive_accepted:
            return (
                f"{summary.total} files exceed the per-file limit; "
                "server-side archive requested",
                "success",
            )
        return (f"Archive request for {summary.total} files failed", "error")

    if summary.total == 0:
        return ("No files to upload", "warning")

    if summary.failed_count == 0:
        noun = "file" if summary.success_count == 1 else "files"
        return (f"{summary.success_count} {noun} uploaded successfully", "success")

    if summary.success_count == 0:
        return (f"All {summary.failed_count} uploads failed", "error")

    return (
        f"{summary.success_count} uploaded, {summary.failed_count} failed",
        "warning",
    )
