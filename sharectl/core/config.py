"""Profile storage for sharectl.

Profiles live in a YAML file under ``~/.config/sharectl``. A ``SHARECTL_URL``
in the environment replaces the ``default`` profile for one invocation.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from sharectl.core.exceptions import ConfigurationError, ProfileNotFoundError

# =============================================================================
# Constants
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "sharectl"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

DEFAULT_URL = "http://localhost:6061/api"
DEFAULT_TIMEOUT = 30
DEFAULT_UPLOAD_DEADLINE = 60
TRANSPORT_MODES = ("auto", "coarse", "fine")

ENV_URL = "SHARECTL_URL"
ENV_PROFILE = "SHARECTL_PROFILE"
ENV_VERIFY_SSL = "SHARECTL_VERIFY_SSL"
ENV_TIMEOUT = "SHARECTL_TIMEOUT"
ENV_UPLOAD_DEADLINE = "SHARECTL_UPLOAD_DEADLINE"
ENV_PLATFORM = "SHARECTL_PLATFORM"

_TRUTHY = ("true", "1", "yes", "on")


def _env_seconds(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a whole number of seconds", field=name, value=raw)


# =============================================================================
# Profile
# =============================================================================


@dataclass
class Profile:
    """Connection and upload settings for one file store server."""

    url: str
    verify_ssl: bool = True
    timeout: int = DEFAULT_TIMEOUT
    upload_deadline: int = DEFAULT_UPLOAD_DEADLINE
    transport: str = "auto"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        """Build a profile from a YAML mapping, rejecting unknown transports."""
        transport = data.get("transport", "auto")
        if transport not in TRANSPORT_MODES:
            raise ConfigurationError(
                f"Unknown transport mode: {transport}",
                field="transport",
                value=transport,
            )
        return cls(
            url=data.get("url", ""),
            verify_ssl=bool(data.get("verify_ssl", True)),
            timeout=data.get("timeout", DEFAULT_TIMEOUT),
            upload_deadline=data.get("upload_deadline", DEFAULT_UPLOAD_DEADLINE),
            transport=transport,
        )

    @classmethod
    def from_env(cls, url: str) -> "Profile":
        """Build the ad-hoc profile described by ``SHARECTL_*`` variables."""
        return cls(
            url=url,
            verify_ssl=os.getenv(ENV_VERIFY_SSL, "true").lower() in _TRUTHY,
            timeout=_env_seconds(ENV_TIMEOUT, DEFAULT_TIMEOUT),
            upload_deadline=_env_seconds(ENV_UPLOAD_DEADLINE, DEFAULT_UPLOAD_DEADLINE),
        )


# =============================================================================
# Config
# =============================================================================


@dataclass
class Config:
    """All saved profiles plus the name of the active one."""

    default_profile: str = "default"
    output_format: str = "table"
    profiles: dict[str, Profile] = field(default_factory=dict)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """Read the config file, then apply environment overrides.

        A missing file yields an empty config. ``SHARECTL_URL`` replaces the
        ``default`` profile and ``SHARECTL_PROFILE`` picks the active one.

        Args:
            config_path: File to read instead of ``CONFIG_FILE``.

        Returns:
            Loaded configuration.

        Raises:
            ConfigurationError: If the file or an override cannot be parsed.
        """
        config = cls()
        config._read(config_path or CONFIG_FILE)

        url = os.getenv(ENV_URL)
        if url:
            config.profiles["default"] = Profile.from_env(url)

        active = os.getenv(ENV_PROFILE)
        if active:
            config.default_profile = active

        return config

    def _read(self, path: Path) -> None:
        if not path.exists():
            return
        try:
            raw = yaml.safe_load(path.read_text()) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load config {path}: {e}")
        if not isinstance(raw, dict):
            raise ConfigurationError(f"Config {path} must be a mapping")

        self.default_profile = raw.get("default_profile", self.default_profile)
        self.output_format = raw.get("output_format", self.output_format)
        for name, entry in (raw.get("profiles") or {}).items():
            self.profiles[name] = Profile.from_dict(entry or {})

    def save(self, config_path: Optional[Path] = None) -> None:
        """Write every profile back to disk, creating the directory if needed."""
        path = config_path or CONFIG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)
        document = {
            "default_profile": self.default_profile,
            "output_format": self.output_format,
            "profiles": {name: p.to_dict() for name, p in self.profiles.items()},
        }
        path.write_text(yaml.safe_dump(document, default_flow_style=False, sort_keys=False))

    def get_profile(self, name: Optional[str] = None) -> Profile:
        """Look up a profile, defaulting to the active one.

        Raises:
            ProfileNotFoundError: If no profile has that name.
        """
        key = name or self.default_profile
        try:
            return self.profiles[key]
        except KeyError:
            raise ProfileNotFoundError(key) from None

    def has_profile(self, name: str) -> bool:
        return name in self.profiles

    def add_profile(
        self,
        name: str,
        url: str,
        verify_ssl: bool = True,
        timeout: int = DEFAULT_TIMEOUT,
        upload_deadline: int = DEFAULT_UPLOAD_DEADLINE,
        transport: str = "auto",
    ) -> Profile:
        """Create or replace the profile called ``name``."""
        profile = Profile(
            url=url,
            verify_ssl=verify_ssl,
            timeout=timeout,
            upload_deadline=upload_deadline,
            transport=transport,
        )
        self.profiles[name] = profile
        return profile

    def remove_profile(self, name: str) -> bool:
        """Drop a profile. Returns False when it was not there."""
        return self.profiles.pop(name, None) is not None

    def set_default_profile(self, name: str) -> None:
        """Make ``name`` the active profile.

        Raises:
            ProfileNotFoundError: If no profile has that name.
        """
        self.get_profile(name)
        self.default_profile = name
