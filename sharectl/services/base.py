"""Base service with common methods for all file store services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from sharectl.core.client import envelope_data

if TYPE_CHECKING:
    from sharectl.core.client import FileStoreClient


class BaseService:
    """Base service class with common functionality."""

    def __init__(self, client: "FileStoreClient") -> None:
        """Initialize service with a file store client.

        Args:
            client: FileStoreClient instance
        """
        self.client = client

    def _get(self, path: str, **kwargs: Any) -> Any:
        """Execute GET request and return the envelope's data.

        Args:
            path: API endpoint path
            **kwargs: Additional request parameters

        Returns:
            ``data`` field of the JSON envelope
        """
        resp = self.client.get(path, **kwargs)
        return envelope_data(resp)

    def _delete(self, path: str, **kwargs: Any) -> bool:
        """Execute DELETE request.

        Returns:
            True if the server reported success

        Raises:
            OperationError: If the envelope reports ``success: false``
        """
        resp = self.client.delete(path, **kwargs)
        envelope_data(resp)
        return True

    def _build_path(self, *parts: str) -> str:
        """Build API path from parts, quoting the last segment.

        Args:
            *parts: Path segments; the final one is a file name

        Returns:
            Joined path string
        """
        segments = [p.strip("/") for p in parts[:-1] if p]
        segments.append(quote(parts[-1], safe=""))
        return "/" + "/".join(segments)
