"""File size reading for the aggregator."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

# st_blocks is reported in 512-byte units on POSIX systems
_BLOCK_SIZE = 512


class SizeMode(str, Enum):
    """Enumeration for size calculation modes."""

    APPARENT = "apparent"  # Apparent size (file content size)
    DISK_USAGE = "disk_usage"  # Actual disk usage (considering filesystem blocks)


def size_from_stat(stat: os.stat_result, mode: SizeMode = SizeMode.APPARENT) -> int:
    """Calculate file size from stat result.

    Args:
        stat: os.stat_result object
        mode: Size calculation mode

    Returns:
        File size in bytes
    """
    if mode is SizeMode.APPARENT:
        return stat.st_size

    blocks: int | None = getattr(stat, "st_blocks", None)
    if blocks is None:
        # Platforms without st_blocks (Windows) only expose apparent size
        return stat.st_size
    return blocks * _BLOCK_SIZE


def read_file_size(path: Path, mode: SizeMode = SizeMode.APPARENT) -> int:
    """Read the size of a single file with one ``stat`` call.

    No file handle is opened. Errors are not absorbed here; the caller
    decides whether a failure counts as zero.

    Args:
        path: File path
        mode: Size calculation mode

    Returns:
        File size in bytes

    Raises:
        OSError: If the file vanished or cannot be stat'ed
    """
    return size_from_stat(path.stat(), mode)
