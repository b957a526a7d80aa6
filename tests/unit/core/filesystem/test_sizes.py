"""Unit tests for file size reading."""

from __future__ import annotations

import os
from pathlib import Path
from types import SimpleNamespace
from typing import cast

import pytest

from bytescore.core.filesystem import SizeMode, read_file_size, size_from_stat


def _fake_stat(**fields: int) -> os.stat_result:
    return cast(os.stat_result, cast(object, SimpleNamespace(**fields)))


@pytest.mark.unit
class TestSizeFromStat:
    """Test size calculation from stat results."""

    def test_apparent_uses_st_size(self) -> None:
        """Apparent mode reports the content length."""
        assert size_from_stat(_fake_stat(st_size=1234, st_blocks=8), SizeMode.APPARENT) == 1234

    def test_disk_usage_uses_blocks(self) -> None:
        """Disk usage mode reports allocated 512-byte blocks."""
        assert size_from_stat(_fake_stat(st_size=1234, st_blocks=8), SizeMode.DISK_USAGE) == 4096

    def test_disk_usage_without_blocks_falls_back(self) -> None:
        """Platforms without st_blocks fall back to the apparent size."""
        assert size_from_stat(_fake_stat(st_size=77), SizeMode.DISK_USAGE) == 77


@pytest.mark.unit
class TestReadFileSize:
    """Test reading sizes from the filesystem."""

    def test_reads_content_length(self, tmp_path: Path) -> None:
        """The apparent size of a file equals its byte length."""
        path = tmp_path / "data.bin"
        _ = path.write_bytes(b"x" * 300)

        assert read_file_size(path) == 300

    def test_zero_length_file(self, tmp_path: Path) -> None:
        """Empty files have size zero."""
        path = tmp_path / "empty"
        path.touch()

        assert read_file_size(path) == 0

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Errors propagate so the caller can decide how to count them."""
        with pytest.raises(FileNotFoundError):
            _ = read_file_size(tmp_path / "vanished")

    def test_disk_usage_mode_is_non_negative(self, tmp_path: Path) -> None:
        """Disk usage is reported in whole bytes."""
        path = tmp_path / "data.bin"
        _ = path.write_bytes(b"x" * 10)

        size = read_file_size(path, SizeMode.DISK_USAGE)

        assert size >= 0
