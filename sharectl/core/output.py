"""Output formatting for sharectl.

Provides consistent output in JSON, table, and quiet modes using Rich.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from sharectl.models.progress import UploadTask

# =============================================================================
# Console Instances
# =============================================================================

console = Console()
err_console = Console(stderr=True)


# =============================================================================
# Output Format
# =============================================================================


class OutputFormat(Enum):
    """Output format options."""

    JSON = "json"
    TABLE = "table"

    @classmethod
    def from_string(cls, value: str) -> OutputFormat:
        """Create from string value."""
        return cls(value.lower())


# =============================================================================
# Table Output
# =============================================================================


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return str(value)


def print_table(
    rows: Sequence[dict[str, Any]],
    columns: Sequence[str],
    *,
    column_labels: dict[str, str] | None = None,
) -> None:
    """Print rows as a Rich table, one column per key in ``columns``."""
    if not rows:
        console.print("[dim]No results[/dim]")
        return

    labels = column_labels or {}
    table = Table(show_header=True, header_style="bold")
    for col in columns:
        table.add_column(labels.get(col, col.replace("_", " ").title()))
    for row in rows:
        table.add_row(*(_cell(row.get(col)) for col in columns))

    console.print(table)


def print_key_value(
    data: dict[str, Any],
    *,
    title: str | None = None,
    key_labels: dict[str, str] | None = None,
) -> None:
    """Print key-value pairs in a formatted way.

    Args:
        data: Dictionary of key-value pairs.
        title: Optional title.
        key_labels: Optional mapping of keys to display labels.
    """
    if title:
        console.print(f"[bold]{title}[/bold]")

    labels = key_labels or {}
    max_key_len = max(len(labels.get(k, k)) for k in data.keys()) if data else 0

    for key, value in data.items():
        label = labels.get(key, key.replace("_", " ").title())
        if value is None:
            value = "[dim]-[/dim]"
        elif isinstance(value, bool):
            value = "[green]Yes[/green]" if value else "[red]No[/red]"
        elif isinstance(value, (list, dict)):
            value = json.dumps(value, indent=2)

        console.print(f"  {label:<{max_key_len}}  {value}")


# =============================================================================
# JSON Output
# =============================================================================


def print_json(data: Any, *, indent: int = 2) -> None:
    """Print data as JSON."""
    print(json.dumps(data, indent=indent, default=str))


# =============================================================================
# Unified Output
# =============================================================================


def print_output(
    data: Any,
    *,
    format: OutputFormat = OutputFormat.TABLE,
    columns: Sequence[str] | None = None,
    column_labels: dict[str, str] | None = None,
    quiet: bool = False,
) -> None:
    """Print a record or list of records in the requested format.

    Args:
        data: A dict or a list of dicts.
        format: Output format.
        columns: Columns for table format. Without them a dict prints as
            key-value pairs.
        column_labels: Labels for columns.
        quiet: Print only each record's ``name``.
    """
    records = data if isinstance(data, list) else [data]

    if quiet:
        for record in records:
            print(record.get("name", "") if isinstance(record, dict) else record)
    elif format == OutputFormat.JSON:
        print_json(data)
    elif columns:
        print_table(records, columns, column_labels=column_labels)
    elif isinstance(data, dict):
        print_key_value(data, key_labels=column_labels)
    else:
        print_json(data)


# =============================================================================
# Status Messages
# =============================================================================


def print_error(message: str) -> None:
    """Print error message to stderr."""
    err_console.print(f"[red]Error:[/red] {message}")


def print_warning(message: str) -> None:
    """Print warning message to stderr."""
    err_console.print(f"[yellow]Warning:[/yellow] {message}")


def print_success(message: str) -> None:
    """Print success message."""
    console.print(f"[green]✓[/green] {message}")


# =============================================================================
# Upload Progress
# =============================================================================


_STATUS_STYLES = {
    "pending": ("dim", "waiting"),
    "uploading": ("blue", None),
    "completed": ("green", "✓ Done"),
    "error": ("red", "✗ Failed"),
}


def render_upload_table(tasks: Sequence[UploadTask], *, title: str = "Upload Progress") -> Table:
    """Build a table of upload task records for live display.

    Args:
        tasks: Snapshot of task records, in submission order.
        title: Table title.

    Returns:
        Rich table renderable.
    """
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("File", overflow="ellipsis", max_width=48)
    table.add_column("Status")

    for task in tasks:
        style, label = _STATUS_STYLES.get(task.status.value, ("", None))
        if label is None:
            label = f"{task.progress}%"
        table.add_row(str(task.id), task.name, f"[{style}]{label}[/{style}]")

    return table
