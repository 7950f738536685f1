"""Models for file store listings and response envelopes."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from .base import BaseModel

SIZE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


def format_size(size: int) -> str:
    """Format a byte count as a short human-readable string.

    Example:
        >>> format_size(1536)
        '1.5 KB'
    """
    if size <= 0:
        return "0 Bytes"
    value = float(size)
    exponent = 0
    while value >= 1024 and exponent < len(SIZE_UNITS) - 1:
        value /= 1024
        exponent += 1
    value = round(value, 2)
    return f"{value:g} {SIZE_UNITS[exponent]}"


class RemoteFile(BaseModel):
    """One entry of the file store listing."""

    name: str = Field(..., description="File name, unique within the store")
    size: int = Field(0, description="File size in bytes")
    modified_time: Optional[datetime] = Field(
        None, alias="modifiedTime", description="Last modification timestamp"
    )
    is_dir: bool = Field(False, alias="isDir", description="Whether entry is a directory")

    @property
    def size_display(self) -> str:
        """Return the size formatted for display."""
        return format_size(self.size)

    @classmethod
    def table_columns(cls) -> list[str]:
        """Return columns for table output."""
        return ["name", "size", "modified"]

    def to_row(self, columns: list[str] | None = None) -> dict[str, str]:
        """Convert to row for table output."""
        cols = columns or self.table_columns()
        row = {
            "name": self.name,
            "size": self.size_display,
            "modified": (
                self.modified_time.strftime("%Y-%m-%d %H:%M:%S") if self.modified_time else ""
            ),
        }
        return {col: row.get(col, "") for col in cols}


class ApiResponse(BaseModel):
    """JSON envelope returned by every file store endpoint."""

    success: bool
    message: Optional[str] = None
    data: Any = None
