"""File commands for sharectl."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from sharectl.cli.common import Context, confirm_destructive, global_options, handle_errors
from sharectl.core.output import OutputFormat, print_error, print_output, print_success, print_warning
from sharectl.models.selection import SelectionSet
from sharectl.services.files import FileService


def _build_selection(service: FileService, names: tuple[str, ...], select_all: bool) -> SelectionSet:
    """Mark the requested names, or every stored file with ``--all``."""
    selection = SelectionSet()
    if select_all:
        selection.select_all(f.name for f in service.list() if not f.is_dir)
    for name in names:
        if name not in selection:
            selection.toggle(name)
    return selection


@click.group()
def file() -> None:
    """Manage stored files."""
    pass


@file.command("list")
@click.option("--filter", "name_filter", default=None, help="Only names containing this text")
@global_options
@handle_errors
def file_list(ctx: Context, name_filter: Optional[str]) -> None:
    """List stored files.

    Example:
        sharectl file list
        sharectl file list --filter .jpg
        sharectl file list -q  # names only
    """
    service = FileService(ctx.get_client())
    files = service.list(name_filter=name_filter)

    if ctx.output_format == OutputFormat.JSON and not ctx.quiet:
        print_output([f.to_dict() for f in files], format=OutputFormat.JSON)
        return

    print_output(
        [f.to_row() for f in files],
        format=ctx.output_format,
        columns=["name", "size", "modified"],
        column_labels={"name": "Name", "size": "Size", "modified": "Modified"},
        quiet=ctx.quiet,
    )


@file.command("download")
@click.argument("names", nargs=-1)
@click.option("--all", "select_all", is_flag=True, help="Download every stored file")
@click.option(
    "--out",
    "output",
    type=click.Path(path_type=Path),
    default=None,
    help="Target directory (one file) or archive path (several files)",
)
@global_options
@handle_errors
def file_download(
    ctx: Context,
    names: tuple[str, ...],
    select_all: bool,
    output: Optional[Path],
) -> None:
    """Download files.

    One file is saved under its own name; several are fetched as a single
    zip archive built by the server.

    Example:
        sharectl file download report.pdf
        sharectl file download a.jpg b.jpg --out photos.zip
        sharectl file download --all
    """
    service = FileService(ctx.get_client())
    selection = _build_selection(service, names, select_all)

    if not selection:
        print_warning("No files selected")
        raise SystemExit(1)

    if len(selection) == 1 and not select_all:
        target = service.download(selection.names()[0], output or Path.cwd())
        selection.clear()
        print_success(f"Downloaded {target}")
        return

    count = len(selection)
    archive = service.download_selected(selection, output)
    print_success(f"Downloaded {count} files to {archive}")


@file.command("delete")
@click.argument("names", nargs=-1)
@click.option("--all", "select_all", is_flag=True, help="Delete every stored file")
@confirm_destructive("Delete the selected files?")
@global_options
@handle_errors
def file_delete(
    ctx: Context,
    names: tuple[str, ...],
    select_all: bool,
    dry_run: bool,
) -> None:
    """Delete files.

    Example:
        sharectl file delete old.log
        sharectl file delete a.txt b.txt -y
        sharectl file delete --all --dry-run
    """
    service = FileService(ctx.get_client())
    selection = _build_selection(service, names, select_all)

    if not selection:
        print_warning("No files selected")
        raise SystemExit(1)

    if dry_run:
        for name in selection:
            click.echo(f"[DRY-RUN] Would delete {name}")
        return

    result = service.delete_selected(selection)

    if ctx.output_format == OutputFormat.JSON:
        print_output(
            {
                "total": result.total,
                "deleted": result.succeeded,
                "failed": result.failed,
                "errors": result.errors,
            },
            format=OutputFormat.JSON,
        )
    elif result.succeeded:
        print_success(f"Deleted {len(result.succeeded)} of {result.total} files")

    if not result.success:
        for error in result.errors:
            print_error(error)
        raise SystemExit(1)
