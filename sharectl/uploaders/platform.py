"""Platform profile detection.

Inspects the execution environment and yields the concurrency budget and
inter-window pacing the upload scheduler should use.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass

from sharectl.core.config import ENV_PLATFORM
from sharectl.core.exceptions import ValidationError
from sharectl.uploaders.constants import (
    CONSTRAINED_CONCURRENCY,
    CONSTRAINED_INTER_BATCH_DELAY_MS,
    STANDARD_CONCURRENCY,
)

MOBILE_AGENT_PATTERN = re.compile(
    r"Android|webOS|iPhone|iPad|iPod|BlackBerry|IEMobile|Opera Mini",
    re.IGNORECASE,
)

# Variables set by Android and the Termux terminal emulator
ANDROID_ENV_MARKERS = ("ANDROID_ROOT", "TERMUX_VERSION")


@dataclass(frozen=True)
class PlatformProfile:
    """Concurrency budget for one upload session."""

    concurrency_limit: int
    inter_batch_delay_ms: int = 0

    def __post_init__(self) -> None:
        if self.concurrency_limit < 1:
            raise ValidationError(
                "Concurrency limit must be positive",
                field="concurrency_limit",
                value=self.concurrency_limit,
            )
        if self.inter_batch_delay_ms < 0:
            raise ValidationError(
                "Inter-batch delay must not be negative",
                field="inter_batch_delay_ms",
                value=self.inter_batch_delay_ms,
            )

    @property
    def is_constrained(self) -> bool:
        """Check if this profile serializes uploads."""
        return self.concurrency_limit == 1 and self.inter_batch_delay_ms > 0


STANDARD_PROFILE = PlatformProfile(concurrency_limit=STANDARD_CONCURRENCY)
CONSTRAINED_PROFILE = PlatformProfile(
    concurrency_limit=CONSTRAINED_CONCURRENCY,
    inter_batch_delay_ms=CONSTRAINED_INTER_BATCH_DELAY_MS,
)


def is_constrained_environment(
    environ: Mapping[str, str] | None = None,
    user_agent: str | None = None,
) -> bool:
    """Check whether the environment looks like a mobile-class host.

    Args:
        environ: Environment mapping (defaults to ``os.environ``).
        user_agent: Optional user agent of the client being served.

    Returns:
        True for mobile agents and Android hosts, or when forced via
        ``SHARECTL_PLATFORM=constrained``.
    """
    env = os.environ if environ is None else environ

    override = env.get(ENV_PLATFORM, "").strip().lower()
    if override == "constrained":
        return True
    if override == "standard":
        return False

    if user_agent and MOBILE_AGENT_PATTERN.search(user_agent):
        return True

    return any(marker in env for marker in ANDROID_ENV_MARKERS)


def detect(
    environ: Mapping[str, str] | None = None,
    user_agent: str | None = None,
) -> PlatformProfile:
    """Return the platform profile for the current environment.

    Pure function of its inputs; safe to call repeatedly.
    """
    if is_constrained_environment(environ, user_agent):
        return CONSTRAINED_PROFILE
    return STANDARD_PROFILE
