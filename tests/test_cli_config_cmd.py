"""Tests for sharectl CLI config commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from sharectl.cli.main import cli
from sharectl.core.config import Config, Profile


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def config_file(tmp_path: Path) -> Generator[Path, None, None]:
    """Point both the loader and the commands at a temporary config file."""
    path = tmp_path / "sharectl" / "config.yaml"
    with patch("sharectl.core.config.CONFIG_FILE", path):
        with patch("sharectl.cli.config_cmd.CONFIG_FILE", path):
            yield path


def _mock_config() -> Config:
    """Build a Config with two profiles."""
    return Config(
        default_profile="default",
        profiles={
            "default": Profile(url="http://localhost:6061/api"),
            "phone": Profile(url="http://192.168.1.31:6061/api", transport="coarse"),
        },
    )


class TestConfigInit:
    """Tests for config init command."""

    def test_init_writes_file(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(
            cli,
            ["config", "init", "--url", "http://192.168.1.20:6061/api/", "--transport", "fine"],
        )

        assert result.exit_code == 0
        cfg = Config.load(config_file)
        assert cfg.default_profile == "default"
        assert cfg.get_profile().url == "http://192.168.1.20:6061/api"
        assert cfg.get_profile().transport == "fine"

    def test_init_rejects_bad_url(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(cli, ["config", "init", "--url", "nas:6061"])

        assert result.exit_code != 0
        assert not config_file.exists()

    def test_init_existing_profile_needs_force(
        self, runner: CliRunner, config_file: Path
    ) -> None:
        runner.invoke(cli, ["config", "init", "--url", "http://a:6061/api"])

        again = runner.invoke(cli, ["config", "init", "--url", "http://b:6061/api"])
        forced = runner.invoke(cli, ["config", "init", "--url", "http://b:6061/api", "--force"])

        assert again.exit_code != 0
        assert forced.exit_code == 0
        assert Config.load(config_file).get_profile().url == "http://b:6061/api"


class TestConfigShow:
    """Tests for config show command."""

    def test_show_table(self, runner: CliRunner) -> None:
        with patch("sharectl.cli.config_cmd.Config.load", return_value=_mock_config()):
            result = runner.invoke(cli, ["config", "show"])

        assert result.exit_code == 0
        assert "phone" in result.output
        assert "coarse" in result.output

    def test_show_json(self, runner: CliRunner) -> None:
        with patch("sharectl.cli.config_cmd.Config.load", return_value=_mock_config()):
            result = runner.invoke(cli, ["config", "show", "-o", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["profile_details"]["phone"]["url"] == "http://192.168.1.31:6061/api"

    def test_show_no_profiles(self, runner: CliRunner) -> None:
        with patch("sharectl.cli.config_cmd.Config.load", return_value=Config()):
            result = runner.invoke(cli, ["config", "show"])

        assert result.exit_code != 0


class TestConfigContexts:
    """Tests for use-context and current-context."""

    def test_use_context_success(self, runner: CliRunner) -> None:
        cfg = _mock_config()

        with patch("sharectl.cli.config_cmd.Config.load", return_value=cfg):
            with patch.object(cfg, "save") as mock_save:
                result = runner.invoke(cli, ["config", "use-context", "phone"])

        assert result.exit_code == 0
        assert cfg.default_profile == "phone"
        mock_save.assert_called_once()

    def test_use_context_not_found(self, runner: CliRunner) -> None:
        with patch("sharectl.cli.config_cmd.Config.load", return_value=_mock_config()):
            result = runner.invoke(cli, ["config", "use-context", "nonexist"])

        assert result.exit_code != 0
        assert "Available profiles" in result.output

    def test_current_context(self, runner: CliRunner) -> None:
        with patch("sharectl.cli.config_cmd.Config.load", return_value=_mock_config()):
            result = runner.invoke(cli, ["config", "current-context"])

        assert result.exit_code == 0
        assert result.output.strip() == "default"


class TestConfigProfiles:
    """Tests for add-profile and remove-profile."""

    def test_add_profile(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(
            cli,
            [
                "config",
                "add-profile",
                "tablet",
                "--url",
                "https://tablet.local/api",
                "--upload-deadline",
                "120",
                "--transport",
                "coarse",
                "--no-verify-ssl",
            ],
        )

        assert result.exit_code == 0
        profile = Config.load(config_file).get_profile("tablet")
        assert profile.upload_deadline == 120
        assert profile.transport == "coarse"
        assert profile.verify_ssl is False

    def test_add_profile_duplicate(self, runner: CliRunner) -> None:
        with patch("sharectl.cli.config_cmd.Config.load", return_value=_mock_config()):
            result = runner.invoke(
                cli, ["config", "add-profile", "phone", "--url", "http://x:6061/api"]
            )

        assert result.exit_code != 0

    def test_remove_profile(self, runner: CliRunner) -> None:
        cfg = _mock_config()

        with patch("sharectl.cli.config_cmd.Config.load", return_value=cfg):
            with patch.object(cfg, "save"):
                result = runner.invoke(cli, ["config", "remove-profile", "phone", "--yes"])

        assert result.exit_code == 0
        assert not cfg.has_profile("phone")

    def test_remove_default_profile_refused(self, runner: CliRunner) -> None:
        with patch("sharectl.cli.config_cmd.Config.load", return_value=_mock_config()):
            result = runner.invoke(cli, ["config", "remove-profile", "default", "--yes"])

        assert result.exit_code != 0

    def test_remove_profile_abort(self, runner: CliRunner) -> None:
        cfg = _mock_config()

        with patch("sharectl.cli.config_cmd.Config.load", return_value=cfg):
            result = runner.invoke(cli, ["config", "remove-profile", "phone"], input="n\n")

        assert result.exit_code != 0
        assert cfg.has_profile("phone")
