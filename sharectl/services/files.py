"""File service for listing, downloading and deleting stored files."""

from __future__ import annotations

import builtins
import logging
import time
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from sharectl.core.exceptions import DownloadError, ShareCtlError, ValidationError
from sharectl.core.logging import LogContext
from sharectl.core.validation import validate_file_name
from sharectl.models.file import RemoteFile
from sharectl.models.progress import OperationResult
from sharectl.models.selection import SelectionSet

from .base import BaseService

logger = logging.getLogger(__name__)

DOWNLOAD_CHUNK_SIZE = 1024 * 1024


class FileService(BaseService):
    """Service for file store operations other than upload."""

    def list(self, name_filter: str | None = None) -> builtins.list[RemoteFile]:
        """List stored files.

        Args:
            name_filter: Case-insensitive substring the name must contain

        Returns:
            List of RemoteFile objects in server order
        """
        data = self._get("/files") or []
        files = [RemoteFile.model_validate(item) for item in data]

        if name_filter:
            needle = name_filter.lower()
            files = [f for f in files if needle in f.name.lower()]

        return files

    def download(self, name: str, output_dir: Path) -> Path:
        """Download one file, keeping its name.

        Args:
            name: Remote file name
            output_dir: Directory to write into (created if missing)

        Returns:
            Path of the written file
        """
        name = validate_file_name(name)
        target = output_dir / name
        self._stream_to(
            target,
            "GET",
            self._build_path("download", name),
            resource=name,
        )
        logger.info("Downloaded %s to %s", name, target)
        return target

    def download_many(self, names: Sequence[str], output_path: Path | None = None) -> Path:
        """Download several files as one zip archive built by the server.

        Args:
            names: Remote file names
            output_path: Archive path; defaults to ``download_<timestamp>.zip``
                in the current directory

        Returns:
            Path of the written archive
        """
        if not names:
            raise ValidationError("No files specified", field="names")
        for name in names:
            validate_file_name(name)

        if output_path is None:
            output_path = Path(f"download_{datetime.now():%Y%m%d_%H%M%S}.zip")

        self._stream_to(
            output_path,
            "POST",
            "/download-multiple",
            json={"files": list(names)},
            resource=f"{len(names)} files",
        )
        logger.info("Downloaded %d files as %s", len(names), output_path)
        return output_path

    def delete(self, name: str) -> bool:
        """Delete one file.

        Raises:
            ResourceNotFoundError: If the file does not exist
            OperationError: If the server refuses the delete
        """
        name = validate_file_name(name)
        return self._delete(self._build_path("delete", name))

    def delete_selected(self, selection: SelectionSet) -> OperationResult:
        """Delete every selected file, then clear the selection.

        A failed delete is recorded and the remaining names are still tried.
        """
        names = selection.names()
        result = OperationResult(total=len(names))
        start_time = time.time()

        with LogContext("bulk delete", logger, files=len(names)):
            try:
                for name in names:
                    try:
                        self.delete(name)
                        result.succeeded.append(name)
                    except ShareCtlError as e:
                        result.failed.append(name)
                        result.errors.append(f"{name}: {e}")
            finally:
                selection.clear()

        result.duration = time.time() - start_time
        return result

    def download_selected(self, selection: SelectionSet, output_path: Path | None = None) -> Path:
        """Download every selected file as one archive, then clear the selection."""
        try:
            return self.download_many(selection.names(), output_path)
        finally:
            selection.clear()

    def _stream_to(
        self,
        target: Path,
        method: str,
        path: str,
        *,
        resource: str,
        json: object | None = None,
    ) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        try:
            with self.client.stream(method, path, json=json) as resp:
                with open(target, "wb") as f:
                    for chunk in resp.iter_bytes(chunk_size=DOWNLOAD_CHUNK_SIZE):
                        f.write(chunk)
        except OSError as e:
            raise DownloadError(f"Cannot write {target}: {e}", resource=resource) from e
