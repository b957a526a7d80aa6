"""Data models for bytescore.

This module defines immutable dataclasses passed between the scanning core
and its presentation collaborators. Snapshots are values, never shared
references to the aggregator's running counters.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TypeAlias


class ScanOutcome(str, Enum):
    """Terminal outcome of a single scan."""

    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_FILES_FOUND = "no_files_found"


class ScanState(Enum):
    """Lifecycle states of the aggregator.

    State transitions:
        IDLE → ENUMERATING: scan requested
        ENUMERATING → SUMMING: file list materialised
        ENUMERATING → CANCELLED: token set while walking
        ENUMERATING → COMPLETED: tree contained no files
        ENUMERATING → FAILED: root missing or unreadable
        SUMMING → CANCELLED: token set between files
        SUMMING → COMPLETED: every file processed
    """

    IDLE = "idle"
    ENUMERATING = "enumerating"
    SUMMING = "summing"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class ScanRequest:
    """Immutable request to measure the tree under ``root_path``."""

    root_path: Path


@dataclass(slots=True, frozen=True)
class ScanProgress:
    """Immutable snapshot of a running scan.

    Emitted repeatedly while summing. ``bytes_so_far`` never decreases within
    one scan and ``files_processed`` never exceeds ``total_files``.
    """

    bytes_so_far: int
    files_processed: int
    total_files: int

    @property
    def fraction(self) -> float:
        """Share of files processed, in the range [0, 1]."""
        if self.total_files == 0:
            return 0.0
        return self.files_processed / self.total_files


@dataclass(slots=True, frozen=True)
class ScanResult:
    """Terminal value of exactly one scan.

    ``total_bytes`` is the sum of successfully read file sizes only; files
    whose size could not be read contribute zero and are counted in
    ``unreadable_files``. Directories skipped during enumeration are counted
    in ``skipped_directories``.
    """

    total_bytes: int
    files_processed: int
    was_cancelled: bool
    outcome: ScanOutcome
    total_files: int = 0
    skipped_directories: int = 0
    unreadable_files: int = 0

    @property
    def no_files_found(self) -> bool:
        """Return True if the tree contained no files at all."""
        return self.outcome is ScanOutcome.NO_FILES_FOUND

    @property
    def has_partial_errors(self) -> bool:
        """Return True if any directory or file was skipped."""
        return self.skipped_directories > 0 or self.unreadable_files > 0


ScanEvent: TypeAlias = ScanProgress | ScanResult
