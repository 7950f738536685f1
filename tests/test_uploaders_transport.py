"""Tests for sharectl.uploaders.transport and common helpers."""

from __future__ import annotations

import asyncio
import io
from pathlib import Path
from typing import Awaitable, Callable, Union

import httpx
import pytest

from sharectl.core.exceptions import ValidationError
from sharectl.uploaders.common import clamp_progress, is_success_status, split_into_windows
from sharectl.uploaders.transport import (
    CoarseTransport,
    FineTransport,
    Outcome,
    ProgressReader,
    select_transport,
)

Handler = Callable[[httpx.Request], Union[httpx.Response, Awaitable[httpx.Response]]]


def _upload(
    transport_cls: type,
    handler: Handler,
    file: Path,
    *,
    deadline_in: float = 5.0,
) -> tuple[Outcome, list[float]]:
    """Run one upload against a mock server and collect progress reports."""
    reports: list[float] = []

    async def run() -> Outcome:
        async with httpx.AsyncClient(
            base_url="http://localhost:6061/api",
            transport=httpx.MockTransport(handler),
        ) as client:
            transport = transport_cls(client)
            deadline = asyncio.get_running_loop().time() + deadline_in
            return await transport.upload(file, reports.append, deadline)

    return asyncio.run(run()), reports


def _accept(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"success": True, "message": "File uploaded successfully"})


@pytest.fixture
def sample_file(temp_dir: Path) -> Path:
    path = temp_dir / "photo.jpg"
    path.write_bytes(b"\xff\xd8" + b"a" * 300_000)
    return path


# =============================================================================
# Common Helpers
# =============================================================================


class TestSplitIntoWindows:
    """Tests for split_into_windows."""

    def test_contiguous_windows(self):
        assert split_into_windows([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]

    def test_single_item_windows(self):
        assert split_into_windows(["a", "b"], 1) == [["a"], ["b"]]

    def test_empty_input(self):
        assert split_into_windows([], 3) == []

    def test_non_positive_size_is_one_window(self):
        assert split_into_windows([1, 2, 3], 0) == [[1, 2, 3]]


class TestProgressHelpers:
    """Tests for is_success_status and clamp_progress."""

    @pytest.mark.parametrize("code,expected", [(200, True), (201, True), (204, True), (302, False), (500, False)])
    def test_success_status(self, code: int, expected: bool):
        assert is_success_status(code) is expected

    def test_clamp_never_moves_backwards(self):
        assert clamp_progress(10, previous=40, ceiling=99) == 40

    def test_clamp_respects_ceiling(self):
        assert clamp_progress(100, previous=50, ceiling=99) == 99

    def test_clamp_truncates(self):
        assert clamp_progress(33.9, previous=0, ceiling=99) == 33


# =============================================================================
# Progress Reader
# =============================================================================


class TestProgressReader:
    """Tests for ProgressReader."""

    def test_reports_ratio_of_bytes_read(self):
        reports: list[float] = []
        reader = ProgressReader(io.BytesIO(b"x" * 100), 100, reports.append)

        reader.read(25)
        reader.read(75)
        reader.read(10)

        assert reports == [25.0, 100.0]
        assert reader.bytes_sent == 100

    def test_rewind_restarts_count(self):
        reader = ProgressReader(io.BytesIO(b"x" * 10), 10, lambda p: None)
        reader.read(10)

        reader.seek(0)

        assert reader.bytes_sent == 0
        assert reader.tell() == 0

    def test_empty_file_reports_nothing(self):
        reports: list[float] = []
        reader = ProgressReader(io.BytesIO(b""), 0, reports.append)
        reader.read()
        assert reports == []


# =============================================================================
# Transports
# =============================================================================


class TestCoarseTransport:
    """Tests for CoarseTransport."""

    def test_success_reports_midpoint_then_done(self, sample_file: Path):
        outcome, reports = _upload(CoarseTransport, _accept, sample_file)

        assert outcome == Outcome(success=True, status_code=200)
        assert reports == [50, 100]

    def test_sends_multipart_file_field(self, sample_file: Path):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return _accept(request)

        _upload(CoarseTransport, handler, sample_file)

        request = seen[0]
        assert request.method == "POST"
        assert request.url.path == "/api/upload"
        assert request.headers["content-type"].startswith("multipart/form-data")
        assert b'name="file"; filename="photo.jpg"' in request.content

    def test_non_2xx_is_failure(self, sample_file: Path):
        outcome, reports = _upload(
            CoarseTransport,
            lambda request: httpx.Response(500, json={"success": False}),
            sample_file,
        )

        assert outcome.success is False
        assert outcome.status_code == 500
        assert 100 not in reports

    def test_connect_error_is_failure(self, sample_file: Path):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        outcome, _ = _upload(CoarseTransport, handler, sample_file)

        assert outcome.success is False
        assert "ConnectError" in outcome.error

    def test_missing_file_is_failure(self, temp_dir: Path):
        outcome, _ = _upload(CoarseTransport, _accept, temp_dir / "vanished.txt")

        assert outcome.success is False
        assert "Cannot read file" in outcome.error


class TestFineTransport:
    """Tests for FineTransport."""

    def test_reports_increasing_byte_progress(self, sample_file: Path):
        outcome, reports = _upload(FineTransport, _accept, sample_file)

        assert outcome.success is True
        assert reports[0] == 0
        assert reports[-1] == 100
        assert len(reports) > 2
        assert reports == sorted(reports)

    def test_deadline_cancels_slow_upload(self, sample_file: Path):
        async def slow(request: httpx.Request) -> httpx.Response:
            await request.aread()
            await asyncio.sleep(5)
            return _accept(request)

        outcome, _ = _upload(FineTransport, slow, sample_file, deadline_in=0.05)

        assert outcome.success is False
        assert outcome.status_code is None
        assert "deadline" in outcome.error

    def test_elapsed_deadline_fails_without_request(self, sample_file: Path):
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return _accept(request)

        outcome, _ = _upload(FineTransport, handler, sample_file, deadline_in=-1)

        assert outcome.success is False
        assert calls == 0


class TestSelectTransport:
    """Tests for select_transport."""

    @pytest.mark.parametrize(
        "mode,expected",
        [("coarse", CoarseTransport), ("fine", FineTransport), ("auto", FineTransport)],
    )
    def test_modes(self, mode: str, expected: type):
        client = httpx.AsyncClient()
        assert isinstance(select_transport(mode, client), expected)

    def test_unknown_mode(self):
        with pytest.raises(ValidationError):
            select_transport("pigeon", httpx.AsyncClient())
