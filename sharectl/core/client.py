"""HTTP client for the file store REST API.

Provides error mapping and the envelope handling shared by every endpoint.
Requests are never retried: a failed listing, download or delete is reported
once and left to the user.
"""

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

import httpx

from sharectl.core.exceptions import (
    NetworkError,
    OperationError,
    ResourceNotFoundError,
    ServerUnreachableError,
)
from sharectl.core.validation import validate_server_url

# =============================================================================
# Constants
# =============================================================================

DEFAULT_TIMEOUT = 30


# =============================================================================
# FileStoreClient
# =============================================================================


@dataclass
class FileStoreClient:
    """HTTP client for the file store REST API."""

    base_url: str
    timeout: int = DEFAULT_TIMEOUT
    verify_ssl: bool = True
    transport: httpx.BaseTransport | None = field(default=None, repr=False)
    _client: httpx.Client | None = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        """Validate and normalize URL."""
        self.base_url = validate_server_url(self.base_url)

    # =========================================================================
    # Client Management
    # =========================================================================

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                verify=self.verify_ssl,
                follow_redirects=True,
                transport=self.transport,
            )
        return self._client

    def make_async_client(
        self,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> httpx.AsyncClient:
        """Create an async client with the same server settings.

        Upload scheduling runs on an event loop, so it needs its own client.
        The caller owns the returned client and must close it.
        """
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            verify=self.verify_ssl,
            follow_redirects=True,
            transport=transport,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> FileStoreClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # =========================================================================
    # HTTP Methods
    # =========================================================================

    def _check_response(self, resp: httpx.Response, path: str) -> httpx.Response:
        """Map non-success responses to typed errors."""
        if resp.status_code == 404:
            raise ResourceNotFoundError("file", path)

        if not resp.is_success:
            message = error_message(resp) or resp.reason_phrase
            raise OperationError(
                "request",
                f"HTTP {resp.status_code}: {message}",
                {"path": path},
            )
        return resp

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any | None = None,
        headers: dict[str, str] | None = None,
        timeout: int | None = None,
    ) -> httpx.Response:
        """Execute an HTTP request.

        Args:
            method: HTTP method.
            path: API path relative to the base URL.
            params: Query parameters.
            json: JSON body.
            headers: Additional headers.
            timeout: Request timeout override.

        Returns:
            HTTP response with a 2xx status.

        Raises:
            ServerUnreachableError: If the server refuses the connection.
            NetworkError: If the request times out.
            ResourceNotFoundError: On HTTP 404.
            OperationError: On any other non-2xx status.
        """
        client = self._get_client()
        request_timeout = timeout or self.timeout

        try:
            resp = client.request(
                method,
                path,
                params=params,
                json=json,
                headers=headers,
                timeout=request_timeout,
            )
        except httpx.ConnectError as e:
            raise ServerUnreachableError(self.base_url) from e
        except httpx.TimeoutException as e:
            raise NetworkError(self.base_url, f"Timeout after {request_timeout}s") from e
        except httpx.HTTPError as e:
            raise NetworkError(self.base_url, str(e)) from e

        return self._check_response(resp, path)

    def get(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        timeout: int | None = None,
    ) -> httpx.Response:
        """GET request."""
        return self._request("GET", path, params=params, timeout=timeout)

    def delete(
        self,
        path: str,
        *,
        timeout: int | None = None,
    ) -> httpx.Response:
        """DELETE request."""
        return self._request("DELETE", path, timeout=timeout)

    @contextmanager
    def stream(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
    ) -> Iterator[httpx.Response]:
        """Stream a response body, e.g. for downloads.

        Yields:
            Response whose status has already been checked.
        """
        client = self._get_client()
        try:
            with client.stream(method, path, json=json) as resp:
                if not resp.is_success:
                    resp.read()
                self._check_response(resp, path)
                yield resp
        except httpx.ConnectError as e:
            raise ServerUnreachableError(self.base_url) from e
        except httpx.TimeoutException as e:
            raise NetworkError(self.base_url, f"Timeout after {self.timeout}s") from e

    # =========================================================================
    # Convenience Methods
    # =========================================================================

    def ping(self) -> dict[str, Any]:
        """Check server connectivity.

        The store has no dedicated health endpoint, so the listing is used.

        Returns:
            Dict with server info.
        """
        start = time.time()
        resp = self.get("/files")
        latency = int((time.time() - start) * 1000)

        return {
            "url": self.base_url,
            "status": "ok",
            "files": len(envelope_data(resp) or []),
            "latency_ms": latency,
        }


# =============================================================================
# Envelope Helpers
# =============================================================================


def _envelope(resp: httpx.Response) -> dict[str, Any]:
    try:
        body = resp.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def error_message(resp: httpx.Response) -> str:
    """Extract the ``message`` field of a JSON envelope, if any."""
    message = _envelope(resp).get("message")
    return str(message) if message else ""


def envelope_data(resp: httpx.Response) -> Any:
    """Return the ``data`` field of a successful JSON envelope.

    Raises:
        OperationError: If the envelope reports ``success: false``.
    """
    body = _envelope(resp)
    if not body.get("success", False):
        raise OperationError(
            "request",
            body.get("message") or "Server reported failure",
            {"path": resp.request.url.path},
        )
    return body.get("data")
