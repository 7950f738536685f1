"""Input validation helpers for sharectl."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse

from sharectl.core.exceptions import (
    InvalidFileNameError,
    InvalidURLError,
    PathValidationError,
    ValidationError,
)


def validate_server_url(url: str) -> str:
    """Validate and normalize a file store base URL.

    Args:
        url: URL as typed by the user, e.g. ``http://192.168.0.10:6061/api``.

    Returns:
        URL without a trailing slash.

    Raises:
        InvalidURLError: If the scheme or host is missing.
    """
    if not url or not url.strip():
        raise InvalidURLError(url or "", "URL is empty")

    url = url.strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise InvalidURLError(url, "scheme must be http or https")
    if not parsed.netloc:
        raise InvalidURLError(url, "missing host")

    return url.rstrip("/")


def validate_file_name(name: str) -> str:
    """Validate a remote file name.

    The store keeps a flat directory, so names must not contain path
    separators or be relative references.
    """
    if not name or not name.strip():
        raise InvalidFileNameError(name, "name is empty")
    if "/" in name or "\\" in name:
        raise InvalidFileNameError(name, "name must not contain path separators")
    if name in (".", ".."):
        raise InvalidFileNameError(name, "relative references are not allowed")
    return name


def validate_upload_paths(paths: list[str] | tuple[str, ...]) -> list[Path]:
    """Resolve upload arguments to regular files, preserving order.

    Directories are expanded to the regular files directly inside them,
    sorted by name.

    Raises:
        PathValidationError: If a path does not exist or is not a file/directory.
    """
    files: list[Path] = []
    for raw in paths:
        path = Path(raw).expanduser()
        if not path.exists():
            raise PathValidationError(str(path), "does not exist")
        if path.is_dir():
            files.extend(sorted(p for p in path.iterdir() if p.is_file()))
        elif path.is_file():
            files.append(path)
        else:
            raise PathValidationError(str(path), "not a regular file")
    return files


def validate_timeout(timeout: int | float) -> float:
    """Validate a positive timeout in seconds."""
    if isinstance(timeout, bool) or timeout <= 0:
        raise ValidationError(
            f"Invalid timeout: {timeout} (must be positive)",
            field="timeout",
            value=timeout,
        )
    return float(timeout)
