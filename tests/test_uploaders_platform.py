"""Tests for sharectl.uploaders.platform."""

from __future__ import annotations

import pytest

from sharectl.core.exceptions import ValidationError
from sharectl.uploaders.platform import (
    CONSTRAINED_PROFILE,
    STANDARD_PROFILE,
    PlatformProfile,
    detect,
    is_constrained_environment,
)

IPHONE_AGENT = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)
DESKTOP_AGENT = "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 Chrome/120.0 Safari/537.36"


class TestPlatformProfile:
    """Tests for PlatformProfile."""

    def test_builtin_profiles(self):
        assert STANDARD_PROFILE.concurrency_limit == 3
        assert STANDARD_PROFILE.inter_batch_delay_ms == 0
        assert not STANDARD_PROFILE.is_constrained
        assert CONSTRAINED_PROFILE.concurrency_limit == 1
        assert CONSTRAINED_PROFILE.inter_batch_delay_ms == 500
        assert CONSTRAINED_PROFILE.is_constrained

    def test_rejects_zero_concurrency(self):
        with pytest.raises(ValidationError):
            PlatformProfile(concurrency_limit=0)

    def test_rejects_negative_delay(self):
        with pytest.raises(ValidationError):
            PlatformProfile(concurrency_limit=2, inter_batch_delay_ms=-1)


class TestDetect:
    """Tests for detect and is_constrained_environment."""

    def test_plain_host_is_standard(self):
        assert detect(environ={}) is STANDARD_PROFILE

    def test_desktop_agent_is_standard(self):
        assert detect(environ={}, user_agent=DESKTOP_AGENT) is STANDARD_PROFILE

    def test_mobile_agent_is_constrained(self):
        assert detect(environ={}, user_agent=IPHONE_AGENT) is CONSTRAINED_PROFILE

    @pytest.mark.parametrize("marker", ["ANDROID_ROOT", "TERMUX_VERSION"])
    def test_android_host_is_constrained(self, marker: str):
        assert detect(environ={marker: "1"}) is CONSTRAINED_PROFILE

    def test_override_forces_standard(self):
        env = {"SHARECTL_PLATFORM": "standard", "TERMUX_VERSION": "0.118"}
        assert not is_constrained_environment(env, IPHONE_AGENT)

    def test_override_forces_constrained(self):
        assert is_constrained_environment({"SHARECTL_PLATFORM": "Constrained"})

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("TERMUX_VERSION", "0.118")
        assert detect() is CONSTRAINED_PROFILE

    def test_is_pure(self):
        env = {"ANDROID_ROOT": "/system"}
        assert detect(environ=env) == detect(environ=env)
