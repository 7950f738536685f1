"""Upload command for sharectl."""

from __future__ import annotations

import time
from typing import Optional

import click
from rich.live import Live

from sharectl.cli.common import Context, global_options, handle_errors
from sharectl.core.config import TRANSPORT_MODES
from sharectl.core.output import (
    OutputFormat,
    console,
    print_error,
    print_output,
    print_success,
    print_warning,
    render_upload_table,
)
from sharectl.core.validation import validate_timeout, validate_upload_paths
from sharectl.services.uploads import UploadService, summary_message
from sharectl.uploaders.platform import CONSTRAINED_PROFILE, STANDARD_PROFILE
from sharectl.uploaders.state import TaskStateStore

DISPLAY_GRACE_SECONDS = 3.0

_PLATFORM_PROFILES = {
    "auto": None,
    "standard": STANDARD_PROFILE,
    "constrained": CONSTRAINED_PROFILE,
}

_MESSAGE_PRINTERS = {
    "success": print_success,
    "warning": print_warning,
    "error": print_error,
}


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path())
@click.option(
    "--mode",
    type=click.Choice(TRANSPORT_MODES),
    default=None,
    help="Progress reporting mode (defaults to the profile setting)",
)
@click.option(
    "--platform",
    type=click.Choice(list(_PLATFORM_PROFILES)),
    default="auto",
    help="Concurrency profile; auto detects mobile-class hosts",
)
@click.option("--user-agent", default=None, help="User agent used for platform detection")
@click.option(
    "--deadline",
    type=int,
    default=None,
    help="Per-file deadline in seconds (defaults to the profile setting)",
)
@click.option(
    "--grace",
    type=float,
    default=DISPLAY_GRACE_SECONDS,
    show_default=True,
    help="Seconds the final progress table stays on screen",
)
@global_options
@handle_errors
def upload(
    ctx: Context,
    paths: tuple[str, ...],
    mode: Optional[str],
    platform: str,
    user_agent: Optional[str],
    deadline: Optional[int],
    grace: float,
) -> None:
    """Upload files or directories.

    Files go up a few at a time with live per-file progress. Batches of
    more than 500 files are handed to the server as one archive request.

    Example:
        sharectl upload report.pdf notes.txt
        sharectl upload ./photos --platform constrained
        sharectl upload ./logs --mode coarse -o json
    """
    files = validate_upload_paths(paths)
    profile = ctx.get_profile()

    store = TaskStateStore()
    service = UploadService(
        ctx.get_client(),
        mode=mode or profile.transport,
        profile=_PLATFORM_PROFILES[platform],
        user_agent=user_agent,
        deadline_seconds=validate_timeout(
            deadline if deadline is not None else profile.upload_deadline
        ),
        store=store,
    )

    try:
        if ctx.quiet or ctx.output_format == OutputFormat.JSON:
            summary = service.upload_files(files)
        else:
            with Live(render_upload_table(store.snapshot()), console=console) as live:
                unsubscribe = store.subscribe(
                    lambda _task: live.update(render_upload_table(store.snapshot()))
                )
                try:
                    summary = service.upload_files(files)
                    text, kind = summary_message(summary)
                    _MESSAGE_PRINTERS[kind](text)
                    time.sleep(max(grace, 0.0))
                finally:
                    unsubscribe()
    finally:
        store.clear()

    if ctx.output_format == OutputFormat.JSON:
        print_output(summary.to_dict(), format=OutputFormat.JSON)
    elif ctx.quiet:
        click.echo(f"{summary.success_count}/{summary.total}")

    if not summary.success:
        raise SystemExit(1)
