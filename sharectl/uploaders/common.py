"""Common utilities for uploader modules."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def split_into_windows(items: Sequence[T], window_size: int) -> list[list[T]]:
    """Split items into contiguous windows of at most ``window_size``.

    Order is preserved both across and within windows.

    Args:
        items: Sequence to split.
        window_size: Maximum items per window.

    Returns:
        List of windows. A non-positive size yields a single window.
    """
    if not items:
        return []

    if window_size <= 0:
        return [list(items)]

    return [list(items[i : i + window_size]) for i in range(0, len(items), window_size)]


def is_success_status(status_code: int) -> bool:
    """Check if an HTTP status code counts as an accepted upload."""
    return 200 <= status_code < 300


def clamp_progress(percent: float, previous: int, ceiling: int) -> int:
    """Clamp a reported percent so task progress never moves backwards.

    Args:
        percent: Percent reported by a transport.
        previous: Progress already recorded for the task.
        ceiling: Highest value allowed for the current status.

    Returns:
        Integer percent in ``[previous, ceiling]``.
    """
    value = int(percent)
    value = min(max(value, 0), ceiling)
    return max(value, previous)
