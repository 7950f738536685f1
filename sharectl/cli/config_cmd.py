"""Config commands for sharectl."""

from __future__ import annotations

import click

from sharectl.core.config import (
    CONFIG_FILE,
    DEFAULT_TIMEOUT,
    DEFAULT_UPLOAD_DEADLINE,
    DEFAULT_URL,
    TRANSPORT_MODES,
    Config,
)
from sharectl.core.exceptions import ShareCtlError
from sharectl.core.output import OutputFormat, print_error, print_key_value, print_output, print_success
from sharectl.core.validation import validate_server_url


def _load_config() -> Config:
    try:
        return Config.load()
    except ShareCtlError as e:
        print_error(f"Failed to load config: {e}")
        raise SystemExit(1)


@click.group()
def config() -> None:
    """Manage sharectl configuration."""
    pass


@config.command("init")
@click.option("--url", prompt="File store URL", default=DEFAULT_URL, help="File store API URL")
@click.option("--profile", default="default", help="Profile name")
@click.option(
    "--transport",
    type=click.Choice(TRANSPORT_MODES),
    default="auto",
    help="Upload progress mode",
)
@click.option("--force", is_flag=True, help="Overwrite existing config")
def config_init(url: str, profile: str, transport: str, force: bool) -> None:
    """Create configuration file with a new profile.

    Example:
        sharectl config init --url http://192.168.1.20:6061/api
    """
    try:
        url = validate_server_url(url)
    except ShareCtlError as e:
        print_error(str(e))
        raise SystemExit(1)

    if CONFIG_FILE.exists() and not force:
        cfg = _load_config()
        if cfg.has_profile(profile):
            print_error(f"Profile '{profile}' already exists. Use --force to overwrite.")
            raise SystemExit(1)
    else:
        cfg = Config()

    cfg.add_profile(name=profile, url=url, transport=transport)

    # First profile becomes the default
    if len(cfg.profiles) == 1:
        cfg.default_profile = profile

    cfg.save()

    print_success(f"Configuration saved to {CONFIG_FILE}")
    print_key_value({
        "profile": profile,
        "url": url,
        "transport": transport,
    })


@config.command("show")
@click.option("--output", "-o", type=click.Choice(["json", "table"]), default="table")
def config_show(output: str) -> None:
    """Show current configuration."""
    cfg = _load_config()

    if not cfg.profiles:
        print_error("No configuration found. Run 'sharectl config init' first.")
        raise SystemExit(1)

    data = {
        "config_file": str(CONFIG_FILE),
        "default_profile": cfg.default_profile,
        "output_format": cfg.output_format,
        "profiles": list(cfg.profiles.keys()),
    }

    if output == "json":
        data["profile_details"] = {name: p.to_dict() for name, p in cfg.profiles.items()}
        print_output(data, format=OutputFormat.JSON)
        return

    print_key_value(data, title="Configuration")

    click.echo()
    for name, profile in cfg.profiles.items():
        marker = " (default)" if name == cfg.default_profile else ""
        click.echo(f"Profile: {name}{marker}")
        print_key_value(
            {
                "url": profile.url,
                "verify_ssl": profile.verify_ssl,
                "timeout": f"{profile.timeout}s",
                "upload_deadline": f"{profile.upload_deadline}s",
                "transport": profile.transport,
            },
        )
        click.echo()


@config.command("use-context")
@click.argument("profile")
def config_use_context(profile: str) -> None:
    """Switch the active profile.

    Example:
        sharectl config use-context laptop
    """
    cfg = _load_config()

    if not cfg.has_profile(profile):
        print_error(f"Profile '{profile}' not found.")
        click.echo(f"Available profiles: {', '.join(cfg.profiles.keys())}")
        raise SystemExit(1)

    cfg.set_default_profile(profile)
    cfg.save()

    print_success(f"Switched to profile '{profile}'")


@config.command("current-context")
def config_current_context() -> None:
    """Show the current active profile."""
    cfg = _load_config()

    if not cfg.profiles:
        print_error("No configuration found.")
        raise SystemExit(1)

    click.echo(cfg.default_profile)


@config.command("add-profile")
@click.argument("name")
@click.option("--url", required=True, help="File store API URL")
@click.option("--timeout", type=int, default=DEFAULT_TIMEOUT, help="Request timeout in seconds")
@click.option(
    "--upload-deadline",
    type=int,
    default=DEFAULT_UPLOAD_DEADLINE,
    help="Per-file upload deadline in seconds",
)
@click.option(
    "--transport",
    type=click.Choice(TRANSPORT_MODES),
    default="auto",
    help="Upload progress mode",
)
@click.option("--no-verify-ssl", is_flag=True, help="Disable SSL verification")
def config_add_profile(
    name: str,
    url: str,
    timeout: int,
    upload_deadline: int,
    transport: str,
    no_verify_ssl: bool,
) -> None:
    """Add a new profile.

    Example:
        sharectl config add-profile phone --url http://192.168.1.31:6061/api
    """
    try:
        url = validate_server_url(url)
    except ShareCtlError as e:
        print_error(str(e))
        raise SystemExit(1)

    cfg = _load_config()

    if cfg.has_profile(name):
        print_error(f"Profile '{name}' already exists.")
        raise SystemExit(1)

    cfg.add_profile(
        name=name,
        url=url,
        timeout=timeout,
        upload_deadline=upload_deadline,
        transport=transport,
        verify_ssl=not no_verify_ssl,
    )
    cfg.save()

    print_success(f"Profile '{name}' added")


@config.command("remove-profile")
@click.argument("name")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def config_remove_profile(name: str, yes: bool) -> None:
    """Remove a profile.

    Example:
        sharectl config remove-profile phone
    """
    cfg = _load_config()

    if not cfg.has_profile(name):
        print_error(f"Profile '{name}' not found.")
        raise SystemExit(1)

    if name == cfg.default_profile:
        print_error("Cannot remove the default profile. Switch to another profile first.")
        raise SystemExit(1)

    if not yes:
        click.confirm(f"Remove profile '{name}'?", abort=True)

    cfg.remove_profile(name)
    cfg.save()

    print_success(f"Profile '{name}' removed")
