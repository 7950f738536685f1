"""Archive fallback client.

Very large batches are not uploaded file by file. Instead a single request
asks the server to pack the batch on its side. The request is a signal only:
it carries the file count and a note, not the file bytes.
"""

from __future__ import annotations

import logging

import httpx

from sharectl.models.file import ApiResponse
from sharectl.uploaders.constants import ARCHIVE_PATH

logger = logging.getLogger(__name__)


class ArchiveFallbackClient:
    """Issues the server-side archive request for an oversized batch."""

    def __init__(self, client: httpx.AsyncClient, *, path: str = ARCHIVE_PATH) -> None:
        self.client = client
        self.path = path

    async def request_archive(self, file_count: int, note: str) -> bool:
        """Ask the server to archive ``file_count`` files.

        Args:
            file_count: Number of files in the batch.
            note: Human-readable message logged by the server.

        Returns:
            True if the server accepted the job. Any failure (network,
            non-200, ``success: false``, unparsable body) returns False.
        """
        try:
            resp = await self.client.post(
                self.path,
                json={"fileCount": file_count, "message": note},
            )
        except httpx.HTTPError as e:
            logger.warning("Archive request failed: %s", e)
            return False

        if resp.status_code != 200:
            logger.warning("Archive request rejected: HTTP %d", resp.status_code)
            return False

        try:
            envelope = ApiResponse.model_validate_json(resp.content)
        except ValueError:
            logger.warning("Archive request returned an unreadable body")
            return False

        if not envelope.success:
            logger.warning("Archive request rejected: %s", envelope.message or "no reason given")
        return envelope.success
