"""Single-file upload transports.

Both transports POST one file as ``multipart/form-data`` to the store and
resolve to an :class:`Outcome`; they never raise. They differ only in how
they report progress:

- ``CoarseTransport`` reports a fixed midpoint while the request is in
  flight and 100 on success.
- ``FineTransport`` reports the ratio of body bytes handed to httpx as the
  multipart encoder streams the file.

The deadline is an absolute event loop time. When it elapses the in-flight
request is cancelled and the upload resolves as failed.
"""

from __future__ import annotations

import asyncio
import logging
import mimetypes
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any, Protocol

import httpx

from sharectl.core.exceptions import ValidationError
from sharectl.uploaders.common import is_success_status
from sharectl.uploaders.constants import (
    COARSE_MIDPOINT_PERCENT,
    UPLOAD_FIELD_NAME,
    UPLOAD_PATH,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class Outcome:
    """Result of one file upload."""

    success: bool
    status_code: int | None = None
    error: str = ""


class TransportAdapter(Protocol):
    """Anything that can upload one file before a deadline."""

    async def upload(
        self,
        file: Path,
        on_progress: ProgressCallback,
        deadline: float,
    ) -> Outcome: ...


# =============================================================================
# Progress Reader
# =============================================================================


class ProgressReader:
    """Binary file wrapper that reports how much of it has been read.

    httpx's multipart encoder pulls file fields through ``read()`` in chunks,
    so counting bytes here tracks how far the request body has streamed.
    Reads are blocking disk reads on the event loop thread, so a slow disk
    stalls the other uploads in the same window.
    """

    def __init__(self, raw: IO[bytes], total: int, on_progress: ProgressCallback) -> None:
        self._raw = raw
        self._total = total
        self._on_progress = on_progress
        self._sent = 0

    @property
    def bytes_sent(self) -> int:
        return self._sent

    def read(self, size: int = -1) -> bytes:
        chunk = self._raw.read(size)
        if chunk and self._total > 0:
            self._sent += len(chunk)
            self._on_progress(self._sent * 100 / self._total)
        return chunk

    def seek(self, offset: int, whence: int = 0) -> int:
        position = self._raw.seek(offset, whence)
        # The encoder rewinds before streaming; counting restarts with it
        if position == 0:
            self._sent = 0
        return position

    def tell(self) -> int:
        return self._raw.tell()

    def fileno(self) -> int:
        return self._raw.fileno()


# =============================================================================
# Transports
# =============================================================================


class _HttpTransport:
    """Shared request logic for the multipart upload transports."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        path: str = UPLOAD_PATH,
        field_name: str = UPLOAD_FIELD_NAME,
    ) -> None:
        self.client = client
        self.path = path
        self.field_name = field_name

    def _start(self, on_progress: ProgressCallback) -> None:
        """Report the transition into uploading."""
        on_progress(0)

    def _body(self, handle: IO[bytes], file: Path, on_progress: ProgressCallback) -> Any:
        return handle

    async def _post(self, file: Path, body: Any) -> httpx.Response:
        content_type = mimetypes.guess_type(file.name)[0] or "application/octet-stream"
        return await self.client.post(
            self.path,
            files={self.field_name: (file.name, body, content_type)},
        )

    async def upload(
        self,
        file: Path,
        on_progress: ProgressCallback,
        deadline: float,
    ) -> Outcome:
        """Upload one file.

        Args:
            file: Local file to send.
            on_progress: Called with a percent in [0, 100].
            deadline: Absolute ``loop.time()`` after which the upload is abandoned.

        Returns:
            Outcome; ``success`` is True only for a 2xx response.
        """
        self._start(on_progress)

        remaining = deadline - asyncio.get_running_loop().time()
        if remaining <= 0:
            return Outcome(success=False, error="Deadline elapsed before upload started")

        try:
            with file.open("rb") as handle:
                body = self._body(handle, file, on_progress)
                resp = await asyncio.wait_for(self._post(file, body), timeout=remaining)
        except asyncio.TimeoutError:
            logger.warning("%s: upload deadline exceeded", file.name)
            return Outcome(success=False, error="Upload deadline exceeded")
        except httpx.HTTPError as e:
            logger.warning("%s: %s", file.name, type(e).__name__)
            return Outcome(success=False, error=f"{type(e).__name__}: {e}")
        except OSError as e:
            logger.warning("%s: cannot read file: %s", file.name, e)
            return Outcome(success=False, error=f"Cannot read file: {e}")
        except Exception as e:
            logger.warning("%s: unexpected upload failure: %s", file.name, e)
            return Outcome(success=False, error=str(e))

        if not is_success_status(resp.status_code):
            return Outcome(
                success=False,
                status_code=resp.status_code,
                error=f"HTTP {resp.status_code}",
            )

        on_progress(100)
        return Outcome(success=True, status_code=resp.status_code)


class CoarseTransport(_HttpTransport):
    """Upload transport that only reports start and completion."""

    def _start(self, on_progress: ProgressCallback) -> None:
        on_progress(COARSE_MIDPOINT_PERCENT)


class FineTransport(_HttpTransport):
    """Upload transport that reports byte-level progress."""

    def _body(self, handle: IO[bytes], file: Path, on_progress: ProgressCallback) -> Any:
        return ProgressReader(handle, file.stat().st_size, on_progress)


TRANSPORTS: dict[str, type[_HttpTransport]] = {
    "coarse": CoarseTransport,
    "fine": FineTransport,
    # httpx streams multipart bodies, so byte-level progress is always available
    "auto": FineTransport,
}


def select_transport(mode: str, client: httpx.AsyncClient) -> _HttpTransport:
    """Build the transport for a progress mode.

    Args:
        mode: ``coarse``, ``fine`` or ``auto``.
        client: Async client bound to the store's base URL.

    Raises:
        ValidationError: For an unknown mode.
    """
    try:
        transport_cls = TRANSPORTS[mode]
    except KeyError:
        raise ValidationError(f"Unknown transport mode: {mode}", field="mode", value=mode)
    return transport_cls(client)
