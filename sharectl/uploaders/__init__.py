"""Upload orchestration for sharectl.

This package provides the pieces of an upload session:
- Platform profile detection (concurrency budget and pacing)
- Single-file transports (coarse and byte-level progress)
- Task state store observed by the CLI
- Windowed upload scheduler with archive fallback

These are internal implementation details. Use `UploadService` from
`sharectl.services.uploads` as the public API.
"""

from sharectl.uploaders.archive import ArchiveFallbackClient
from sharectl.uploaders.common import clamp_progress, is_success_status, split_into_windows
from sharectl.uploaders.constants import (
    ARCHIVE_THRESHOLD,
    CONSTRAINED_CONCURRENCY,
    CONSTRAINED_INTER_BATCH_DELAY_MS,
    DEFAULT_UPLOAD_DEADLINE,
    STANDARD_CONCURRENCY,
)
from sharectl.uploaders.platform import (
    CONSTRAINED_PROFILE,
    STANDARD_PROFILE,
    PlatformProfile,
    detect,
)
from sharectl.uploaders.scheduler import UploadScheduler
from sharectl.uploaders.state import TaskStateStore
from sharectl.uploaders.transport import (
    CoarseTransport,
    FineTransport,
    Outcome,
    TransportAdapter,
    select_transport,
)

__all__ = [
    # Constants
    "ARCHIVE_THRESHOLD",
    "CONSTRAINED_CONCURRENCY",
    "CONSTRAINED_INTER_BATCH_DELAY_MS",
    "DEFAULT_UPLOAD_DEADLINE",
    "STANDARD_CONCURRENCY",
    # Common utilities
    "clamp_progress",
    "is_success_status",
    "split_into_windows",
    # Platform
    "PlatformProfile",
    "CONSTRAINED_PROFILE",
    "STANDARD_PROFILE",
    "detect",
    # Transport
    "Outcome",
    "TransportAdapter",
    "CoarseTransport",
    "FineTransport",
    "select_transport",
    # State and scheduling
    "TaskStateStore",
    "UploadScheduler",
    "ArchiveFallbackClient",
]
