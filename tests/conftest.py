"""Pytest configuration and fixtures for sharectl tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Callable, Generator

import httpx
import pytest

from sharectl.core.client import FileStoreClient

BASE_URL = "http://localhost:6061/api"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host environment variables out of config and platform detection."""
    for name in (
        "SHARECTL_URL",
        "SHARECTL_PROFILE",
        "SHARECTL_VERIFY_SSL",
        "SHARECTL_TIMEOUT",
        "SHARECTL_PLATFORM",
        "ANDROID_ROOT",
        "TERMUX_VERSION",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_config_yaml() -> str:
    """Sample config YAML content."""
    return """
default_profile: test
output_format: table

profiles:
  test:
    url: http://192.168.1.20:6061/api
    verify_ssl: false
    timeout: 10
    transport: coarse

  laptop:
    url: http://localhost:6061/api
    upload_deadline: 120
"""


@pytest.fixture
def make_files(temp_dir: Path) -> Callable[..., list[Path]]:
    """Factory that writes ``count`` small files and returns them in order."""

    def _make(count: int, size: int = 16, prefix: str = "file") -> list[Path]:
        paths = []
        for i in range(count):
            path = temp_dir / f"{prefix}{i:04d}.bin"
            path.write_bytes(b"x" * size)
            paths.append(path)
        return paths

    return _make


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], FileStoreClient]:
    """Factory for a FileStoreClient backed by an httpx.MockTransport."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> FileStoreClient:
        return FileStoreClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))

    return _make
