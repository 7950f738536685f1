"""Main CLI entry point for sharectl."""

from __future__ import annotations

import click

from sharectl import __version__

# Import command groups
from sharectl.cli.common import Context, global_options, handle_errors
from sharectl.cli.config_cmd import config
from sharectl.cli.files import file
from sharectl.cli.upload import upload
from sharectl.core.output import OutputFormat, print_output, print_success


# =============================================================================
# Main CLI Group
# =============================================================================


@click.group()
@click.version_option(version=__version__, prog_name="sharectl")
def cli() -> None:
    """sharectl - A CLI for a local file-sharing store.

    List, download, delete and upload files. Uploads run with a bounded
    number of parallel transfers and show live per-file progress.

    Get started:

      sharectl config init       # Create config file

      sharectl file list         # List stored files

      sharectl upload ./photos   # Upload a directory

    Use --help on any command for more information.
    """
    pass


# =============================================================================
# Register Command Groups
# =============================================================================

cli.add_command(config)
cli.add_command(file)
cli.add_command(upload)


# =============================================================================
# Top-Level Commands
# =============================================================================


@cli.group()
def health() -> None:
    """Server health and connectivity checks."""
    pass


@health.command("ping")
@global_options
@handle_errors
def health_ping(ctx: Context) -> None:
    """Check server connectivity.

    Example:
        sharectl health ping
        sharectl health ping -o json
    """
    client = ctx.get_client()
    result = client.ping()

    if ctx.output_format == OutputFormat.JSON:
        print_output(result, format=OutputFormat.JSON)
        return

    print_success(f"Server reachable: {result['url']}")
    print_output(
        {
            "status": result["status"],
            "files": result["files"],
            "latency": f"{result['latency_ms']}ms",
        },
        format=OutputFormat.TABLE,
    )


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
