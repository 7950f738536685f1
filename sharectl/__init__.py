"""sharectl - A CLI for a local file-sharing REST store.

This package provides a command-line interface for a small file store,
supporting common workflows like:
- List, download and delete stored files
- Download several files as one server-built archive
- Upload batches of files with bounded concurrency and live progress
"""

__version__ = "0.1.0"

from sharectl.core.client import FileStoreClient
from sharectl.core.config import Config, Profile
from sharectl.core.exceptions import (
    ConfigurationError,
    ConnectionError,
    NetworkError,
    ResourceNotFoundError,
    ShareCtlError,
    ValidationError,
)

__all__ = [
    "__version__",
    "FileStoreClient",
    "Config",
    "Profile",
    "ShareCtlError",
    "ConfigurationError",
    "ConnectionError",
    "NetworkError",
    "ResourceNotFoundError",
    "ValidationError",
]
