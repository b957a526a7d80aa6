"""Incremental size aggregation over an enumerated directory tree.

The aggregator drives the file enumerator, sums file sizes into a running
total and publishes immutable snapshots of that total. It is responsible
for:

- Materialising the file list off the event loop (``asyncio.to_thread``)
- Absorbing per-file read failures as zero-byte contributions
- Checking the cancellation token before every file
- Yielding control to the event loop between files
- Tracking its lifecycle state (IDLE → ENUMERATING → SUMMING → terminal)

Presentation concerns (throttled redraws, digit rolling) are left to the
consumer of the event stream.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from typing import Final, TypeAlias

from bytescore.core.cancellation import CancellationToken
from bytescore.core.config import ScanConfig
from bytescore.core.errors import ScanAlreadyActiveError, ScanError, StateTransitionError
from bytescore.core.filesystem import FileEnumerator, SizeMode, read_file_size
from bytescore.types.models import (
    ScanEvent,
    ScanOutcome,
    ScanProgress,
    ScanRequest,
    ScanResult,
    ScanState,
)

__all__ = ["Aggregator"]

SizeReader: TypeAlias = Callable[[Path, SizeMode], int]

_ALLOWED_TRANSITIONS: Final[dict[ScanState, frozenset[ScanState]]] = {
    ScanState.IDLE: frozenset({ScanState.ENUMERATING}),
    ScanState.ENUMERATING: frozenset(
        {ScanState.SUMMING, ScanState.CANCELLED, ScanState.COMPLETED, ScanState.FAILED}
    ),
    ScanState.SUMMING: frozenset({ScanState.CANCELLED, ScanState.COMPLETED}),
    ScanState.CANCELLED: frozenset(),
    ScanState.COMPLETED: frozenset(),
    ScanState.FAILED: frozenset(),
}

_ACTIVE_STATES: Final[frozenset[ScanState]] = frozenset({ScanState.ENUMERATING, ScanState.SUMMING})


class Aggregator:
    """Sum file sizes under a root while emitting progress snapshots."""

    def __init__(
        self,
        config: ScanConfig | None = None,
        *,
        enumerator: FileEnumerator | None = None,
        size_reader: SizeReader = read_file_size,
    ) -> None:
        self.config: ScanConfig = config or ScanConfig()
        self.enumerator: FileEnumerator = enumerator or FileEnumerator(
            strategy=self.config.strategy,
            exclusions=self.config.exclusions,
            follow_symlinks=self.config.follow_symlinks,
        )
        self.size_reader: SizeReader = size_reader
        self._state: ScanState = ScanState.IDLE
        self._logger: logging.Logger = logging.getLogger(__name__)

    @property
    def state(self) -> ScanState:
        """Return the current lifecycle state."""
        return self._state

    @property
    def is_active(self) -> bool:
        """Return True while enumerating or summing."""
        return self._state in _ACTIVE_STATES

    async def scan(self, request: ScanRequest, token: CancellationToken) -> ScanResult:
        """Run a scan to completion and return its terminal result.

        Args:
            request: Scan request naming the root
            token: Cancellation token observed between files

        Returns:
            Terminal scan result

        Raises:
            RootNotFoundError: If the root does not exist or is not a directory
            AccessDeniedError: If the root cannot be listed
        """
        result: ScanResult | None = None
        async for event in self.iter_scan(request, token):
            if isinstance(event, ScanResult):
                result = event
        if result is None:
            msg = "Scan finished without producing a result"
            raise RuntimeError(msg)
        return result

    async def iter_scan(
        self,
        request: ScanRequest,
        token: CancellationToken,
    ) -> AsyncGenerator[ScanEvent]:
        """Stream progress snapshots terminating in exactly one ScanResult.

        Root-level errors are raised before any snapshot is produced. All
        other failures are absorbed and counted in the result.

        Callers that may stop before the result must close the stream, for
        example with ``contextlib.aclosing``, so the aggregator leaves the
        active state.

        Args:
            request: Scan request naming the root
            token: Cancellation token observed between files

        Yields:
            ScanProgress snapshots, then a single ScanResult

        Raises:
            RootNotFoundError: If the root does not exist or is not a directory
            AccessDeniedError: If the root cannot be listed
            ScanAlreadyActiveError: If this aggregator is already scanning
        """
        if self.is_active:
            msg = "A scan is already running on this aggregator"
            raise ScanAlreadyActiveError(msg, path=request.root_path)

        self._state = ScanState.IDLE
        self._transition(ScanState.ENUMERATING)
        self._logger.info("Scan started at %s", request.root_path, extra={"root": str(request.root_path)})

        skipped_directories = 0

        def record_skip(path: Path, error: OSError) -> None:  # pyright: ignore[reportUnusedParameter]
            nonlocal skipped_directories
            skipped_directories += 1

        try:
            try:
                files = await asyncio.to_thread(self._collect_files, request.root_path, token, record_skip)
            except ScanError as exc:
                self._transition(ScanState.FAILED)
                self._logger.error(
                    "Scan of %s aborted: %s",
                    request.root_path,
                    exc,
                    extra={"root": str(request.root_path), "error": str(exc)},
                )
                raise

            total_files = len(files)
            self._logger.info(
                "Enumeration complete: %d files, %d directories skipped",
                total_files,
                skipped_directories,
                extra={"total_files": total_files, "skipped_directories": skipped_directories},
            )

            if token.is_cancelled:
                self._transition(ScanState.CANCELLED)
                yield ScanResult(
                    total_bytes=0,
                    files_processed=0,
                    was_cancelled=True,
                    outcome=ScanOutcome.CANCELLED,
                    skipped_directories=skipped_directories,
                )
                return

            if total_files == 0:
                self._transition(ScanState.COMPLETED)
                self._logger.info("No files found under %s", request.root_path, extra={"root": str(request.root_path)})
                yield ScanResult(
                    total_bytes=0,
                    files_processed=0,
                    was_cancelled=False,
                    outcome=ScanOutcome.NO_FILES_FOUND,
                    skipped_directories=skipped_directories,
                )
                return

            self._transition(ScanState.SUMMING)
            emit_every = self.config.progress_emit_every_n_items
            bytes_so_far = 0
            processed = 0
            unreadable = 0

            for path in files:
                if token.is_cancelled:
                    break

                try:
                    size = self.size_reader(path, self.config.size_mode)
                except OSError as exc:
                    # Deleted or locked since enumeration; counts as zero
                    self._logger.debug(
                        "Unreadable file %s counted as zero: %s",
                        path,
                        exc,
                        extra={"path": str(path), "error": str(exc)},
                    )
                    size = 0
                    unreadable += 1

                bytes_so_far += size
                processed += 1

                if processed % emit_every == 0 or processed == total_files:
                    yield ScanProgress(
                        bytes_so_far=bytes_so_far,
                        files_processed=processed,
                        total_files=total_files,
                    )

                await asyncio.sleep(0)

            cancelled = token.is_cancelled
            self._transition(ScanState.CANCELLED if cancelled else ScanState.COMPLETED)
            self._logger.info(
                "Scan %s: %d bytes in %d of %d files",
                "cancelled" if cancelled else "complete",
                bytes_so_far,
                processed,
                total_files,
                extra={
                    "total_bytes": bytes_so_far,
                    "files_processed": processed,
                    "total_files": total_files,
                    "skipped_directories": skipped_directories,
                    "unreadable_files": unreadable,
                },
            )
            yield ScanResult(
                total_bytes=bytes_so_far,
                files_processed=processed,
                was_cancelled=cancelled,
                outcome=ScanOutcome.CANCELLED if cancelled else ScanOutcome.COMPLETED,
                total_files=total_files,
                skipped_directories=skipped_directories,
                unreadable_files=unreadable,
            )
        finally:
            # Consumer stopped iterating before the terminal result
            if self._state in _ACTIVE_STATES:
                self._transition(ScanState.CANCELLED)

    def _collect_files(
        self,
        root: Path,
        token: CancellationToken,
        on_skip: Callable[[Path, OSError], None],
    ) -> list[Path]:
        return list(self.enumerator.iter_files(root, cancellation=token, on_skip=on_skip))

    def _transition(self, to_state: ScanState) -> None:
        if to_state not in _ALLOWED_TRANSITIONS[self._state]:
            msg = f"Invalid scan state transition: {self._state.value} → {to_state.value}"
            raise StateTransitionError(msg, from_state=self._state, to_state=to_state)
        self._logger.debug(
            "Scan state transition %s -> %s",
            self._state.value,
            to_state.value,
            extra={"previous_state": self._state.value, "new_state": to_state.value},
        )
        self._state = to_state
