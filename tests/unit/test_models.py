"""Unit tests for scan data models."""

import dataclasses
from pathlib import Path

import pytest

from bytescore.types.models import ScanOutcome, ScanProgress, ScanRequest, ScanResult


@pytest.mark.unit
class TestScanProgress:
    """Test ScanProgress snapshots."""

    def test_is_immutable(self) -> None:
        """Snapshots cannot be modified after creation."""
        progress = ScanProgress(bytes_so_far=1, files_processed=1, total_files=2)

        with pytest.raises(dataclasses.FrozenInstanceError):
            progress.bytes_so_far = 5  # pyright: ignore[reportAttributeAccessIssue]

    def test_fraction(self) -> None:
        """fraction is the share of files processed."""
        assert ScanProgress(bytes_so_far=0, files_processed=1, total_files=4).fraction == 0.25

    def test_fraction_without_files(self) -> None:
        """fraction is zero when there are no files."""
        assert ScanProgress(bytes_so_far=0, files_processed=0, total_files=0).fraction == 0.0


@pytest.mark.unit
class TestScanResult:
    """Test ScanResult helpers."""

    def test_no_files_found(self) -> None:
        """no_files_found follows the outcome."""
        result = ScanResult(0, 0, False, ScanOutcome.NO_FILES_FOUND)

        assert result.no_files_found is True
        assert result.has_partial_errors is False

    def test_partial_errors(self) -> None:
        """Skipped directories or unreadable files mark a partial result."""
        assert ScanResult(1, 1, False, ScanOutcome.COMPLETED, skipped_directories=1).has_partial_errors
        assert ScanResult(1, 1, False, ScanOutcome.COMPLETED, unreadable_files=2).has_partial_errors
        assert not ScanResult(1, 1, False, ScanOutcome.COMPLETED).has_partial_errors

    def test_request_holds_path(self) -> None:
        """ScanRequest carries the root path."""
        assert ScanRequest(Path("/tmp")).root_path == Path("/tmp")
