"""Service layer for file store operations."""

from .base import BaseService
from .files import FileService
from .uploads import UploadService, summary_message

__all__ = [
    "BaseService",
    "FileService",
    "UploadService",
    "summary_message",
]
