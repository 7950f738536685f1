"""Core modules for sharectl."""

from sharectl.core.client import FileStoreClient
from sharectl.core.config import CONFIG_DIR, CONFIG_FILE, Config, Profile
from sharectl.core.exceptions import (
    ConfigurationError,
    ConnectionError,
    DownloadError,
    NetworkError,
    OperationError,
    ResourceNotFoundError,
    ServerUnreachableError,
    ShareCtlError,
    TaskStateError,
    ValidationError,
)
from sharectl.core.logging import LogContext, get_logger, setup_logging
from sharectl.core.output import (
    OutputFormat,
    console,
    print_error,
    print_json,
    print_output,
    print_success,
    print_table,
    print_warning,
)
from sharectl.core.validation import (
    validate_file_name,
    validate_server_url,
    validate_timeout,
    validate_upload_paths,
)

__all__ = [
    # Exceptions
    "ShareCtlError",
    "ConfigurationError",
    "ConnectionError",
    "NetworkError",
    "ServerUnreachableError",
    "ResourceNotFoundError",
    "ValidationError",
    "TaskStateError",
    "OperationError",
    "DownloadError",
    # Validation
    "validate_server_url",
    "validate_file_name",
    "validate_upload_paths",
    "validate_timeout",
    # Config
    "Config",
    "Profile",
    "CONFIG_DIR",
    "CONFIG_FILE",
    # Client
    "FileStoreClient",
    # Output
    "OutputFormat",
    "print_output",
    "print_table",
    "print_json",
    "print_error",
    "print_warning",
    "print_success",
    "console",
    # Logging
    "get_logger",
    "setup_logging",
    "LogContext",
]
