"""Logging utilities for sharectl.

Log setup for the CLI plus a timed context for long-running operations.
"""

from __future__ import annotations

import logging
import sys
import time
from typing import Any, Optional

# =============================================================================
# Constants
# =============================================================================

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# =============================================================================
# Logger Setup
# =============================================================================


def setup_logging(
    level: int = logging.WARNING,
    *,
    quiet: bool = False,
    verbose: bool = False,
) -> None:
    """Configure logging for sharectl.

    Args:
        level: Base logging level.
        quiet: If True, only show errors.
        verbose: If True, show debug messages.
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
    )

    # Suppress noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


# =============================================================================
# Log Context
# =============================================================================


class LogContext:
    """Time a named operation and tag its log lines with context fields.

    Example:
        with LogContext("upload session", logger, files=12) as session:
            session.debug("window %d started", 1)
    """

    def __init__(self, operation: str, logger: Optional[logging.Logger] = None, **context: Any):
        self.operation = operation
        self.logger = logger or get_logger(__name__)
        self.context = context
        self._started: Optional[float] = None

    @property
    def fields(self) -> str:
        return ", ".join(f"{k}={v}" for k, v in self.context.items())

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self._started if self._started is not None else 0.0

    def __enter__(self) -> "LogContext":
        self._started = time.monotonic()
        self.logger.info("Starting %s (%s)", self.operation, self.fields)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if exc_type is None:
            self.logger.info("%s finished in %.2fs", self.operation, self.elapsed)
        else:
            self.logger.error("%s failed after %.2fs: %s", self.operation, self.elapsed, exc_val)

    def log(self, level: int, message: str, *args: Any) -> None:
        """Log ``message`` prefixed with the operation and suffixed with its fields."""
        self.logger.log(level, f"[{self.operation}] {message} ({self.fields})", *args)

    def debug(self, message: str, *args: Any) -> None:
        self.log(logging.DEBUG, message, *args)
