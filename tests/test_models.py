"""Tests for sharectl.models."""

from __future__ import annotations

import pytest

from sharectl.models.file import RemoteFile, format_size
from sharectl.models.progress import OperationResult, SessionSummary, TaskStatus, UploadTask
from sharectl.models.selection import SelectionSet

# =============================================================================
# File Models
# =============================================================================


class TestFormatSize:
    """Tests for format_size."""

    @pytest.mark.parametrize(
        "size,expected",
        [
            (0, "0 Bytes"),
            (512, "512 Bytes"),
            (1024, "1 KB"),
            (1536, "1.5 KB"),
            (5 * 1024 * 1024, "5 MB"),
            (3 * 1024**3, "3 GB"),
        ],
    )
    def test_units(self, size: int, expected: str):
        assert format_size(size) == expected


class TestRemoteFile:
    """Tests for RemoteFile."""

    def test_parses_wire_aliases(self):
        f = RemoteFile.model_validate(
            {"name": "a.txt", "size": 10, "modifiedTime": "2024-01-02T03:04:05Z", "isDir": False}
        )
        assert f.is_dir is False
        assert f.to_row() == {"name": "a.txt", "size": "10 Bytes", "modified": "2024-01-02 03:04:05"}

    def test_ignores_unknown_fields(self):
        f = RemoteFile.model_validate({"name": "a.txt", "owner": "root"})
        assert f.size == 0
        assert f.to_row()["modified"] == ""


# =============================================================================
# Progress Models
# =============================================================================


class TestTaskStatus:
    """Tests for TaskStatus transitions."""

    def test_terminal_states(self):
        assert TaskStatus.COMPLETED.is_terminal
        assert TaskStatus.ERROR.is_terminal
        assert not TaskStatus.PENDING.is_terminal
        assert not TaskStatus.UPLOADING.is_terminal

    @pytest.mark.parametrize(
        "source,target",
        [
            (TaskStatus.PENDING, TaskStatus.UPLOADING),
            (TaskStatus.UPLOADING, TaskStatus.UPLOADING),
            (TaskStatus.UPLOADING, TaskStatus.COMPLETED),
            (TaskStatus.UPLOADING, TaskStatus.ERROR),
        ],
    )
    def test_allowed(self, source: TaskStatus, target: TaskStatus):
        assert source.can_transition_to(target)

    @pytest.mark.parametrize(
        "source,target",
        [
            (TaskStatus.PENDING, TaskStatus.COMPLETED),
            (TaskStatus.COMPLETED, TaskStatus.UPLOADING),
            (TaskStatus.ERROR, TaskStatus.COMPLETED),
            (TaskStatus.UPLOADING, TaskStatus.PENDING),
        ],
    )
    def test_forbidden(self, source: TaskStatus, target: TaskStatus):
        assert not source.can_transition_to(target)

    def test_task_defaults(self):
        task = UploadTask(id=1, name="a.txt")
        assert task.status == TaskStatus.PENDING
        assert task.progress == 0
        assert not task.is_terminal


class TestSummaries:
    """Tests for SessionSummary and OperationResult."""

    def test_session_success(self):
        assert SessionSummary(success_count=2, total=2).success
        assert not SessionSummary(success_count=1, failed_count=1, total=2).success

    def test_archived_session_success_follows_acceptance(self):
        assert SessionSummary(archived=True, archive_accepted=True, total=600).success
        assert not SessionSummary(archived=True, archive_accepted=False, total=600).success

    def test_operation_result_rate(self):
        result = OperationResult(total=4, succeeded=["a", "b", "c"], failed=["d"])
        assert result.success_rate == 75.0
        assert not result.success
        assert OperationResult().success_rate == 100.0


# =============================================================================
# Selection Set
# =============================================================================


class TestSelectionSet:
    """Tests for SelectionSet."""

    def test_toggle_flips_membership(self):
        selection = SelectionSet()

        assert selection.toggle("a.txt") is True
        assert "a.txt" in selection
        assert selection.toggle("a.txt") is False
        assert "a.txt" not in selection

    def test_toggle_twice_restores_selected_name(self):
        selection = SelectionSet(["a.txt", "b.txt"])

        assert selection.toggle("a.txt") is False
        assert selection.toggle("a.txt") is True
        assert selection.names() == ["a.txt", "b.txt"]

    def test_select_all_is_idempotent(self):
        candidates = ["b.txt", "a.txt", "c.txt"]
        selection = SelectionSet()

        selection.select_all(candidates)
        first = (selection.size(), selection.names())
        selection.select_all(candidates)

        assert (selection.size(), selection.names()) == first
        assert first == (3, ["a.txt", "b.txt", "c.txt"])

    def test_select_all_and_names_sorted(self):
        selection = SelectionSet(["c"])
        selection.select_all(["b", "a", "c"])

        assert selection.size() == 3
        assert selection.names() == ["a", "b", "c"]
        assert list(selection) == ["a", "b", "c"]

    def test_clear(self):
        selection = SelectionSet(["a", "b"])
        selection.clear()
        assert len(selection) == 0
        assert not selection
