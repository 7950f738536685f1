"""Data models for sharectl.

Provides Pydantic models for file store payloads and dataclasses for
upload progress tracking.
"""

from __future__ import annotations

from .base import BaseModel
from .file import ApiResponse, RemoteFile, format_size
from .progress import OperationResult, SessionSummary, TaskStatus, UploadTask
from .selection import SelectionSet

__all__ = [
    # Base
    "BaseModel",
    # Files
    "RemoteFile",
    "ApiResponse",
    "format_size",
    # Progress
    "TaskStatus",
    "UploadTask",
    "SessionSummary",
    "OperationResult",
    # Selection
    "SelectionSet",
]
