"""Protocol definitions for component interfaces.

This module defines structural subtyping protocols that establish
contracts between the scanning core and its collaborators without
requiring inheritance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from bytescore.types.models import ScanProgress, ScanResult

if TYPE_CHECKING:
    from bytescore.core.errors import ScanError


@runtime_checkable
class PresentationSink(Protocol):
    """Protocol for consumers of scan events.

    A sink receives immutable snapshots and exactly one terminal signal per
    scan. Sinks own their rendering policy: they may redraw on every
    snapshot or throttle to a fixed interval.
    """

    def on_progress(self, progress: ScanProgress) -> None:
        """Receive a progress snapshot.

        Args:
            progress: Snapshot of the running totals
        """
        ...

    def on_completed(self, result: ScanResult) -> None:
        """Receive the result of a scan that processed every file.

        Args:
            result: Terminal result with the exact total
        """
        ...

    def on_cancelled(self, result: ScanResult) -> None:
        """Receive the partial result of a cancelled scan.

        Args:
            result: Terminal result with the total observed before cancellation
        """
        ...

    def on_no_files_found(self, result: ScanResult) -> None:
        """Receive the result of a scan whose tree held no files.

        Args:
            result: Terminal result with zero totals
        """
        ...

    def on_failed(self, error: ScanError) -> None:
        """Receive a fatal scan error.

        Args:
            error: Root-level error that aborted the scan
        """
        ...
