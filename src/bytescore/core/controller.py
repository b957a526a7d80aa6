"""External scan interface: start a scan, cancel it, dispatch its events.

The controller owns one cancellation token per scan and guarantees at most
one active scan at a time. It is the seam between the scanning core and
presentation sinks: snapshots and terminal results are forwarded as values,
and fatal root errors are reported to the sink before being re-raised to
the caller.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import AsyncGenerator, AsyncIterator
from pathlib import Path
from uuid import uuid4

from bytescore.core.aggregator import Aggregator
from bytescore.core.cancellation import CancellationToken
from bytescore.core.config import ScanConfig
from bytescore.core.errors import ScanAlreadyActiveError, ScanError
from bytescore.types.models import ScanEvent, ScanOutcome, ScanProgress, ScanRequest, ScanResult
from bytescore.types.protocols import PresentationSink
from bytescore.utils.logging import clear_scan_id, set_scan_id

__all__ = ["ScanController"]


class ScanController:
    """Coordinate a single active scan and its cancellation."""

    def __init__(
        self,
        config: ScanConfig | None = None,
        *,
        aggregator: Aggregator | None = None,
    ) -> None:
        self.config: ScanConfig = config or ScanConfig()
        self.aggregator: Aggregator = aggregator or Aggregator(self.config)
        self._token: CancellationToken | None = None
        self._logger: logging.Logger = logging.getLogger(__name__)

    @property
    def is_active(self) -> bool:
        """Return True while a scan is running."""
        return self._token is not None

    @property
    def token(self) -> CancellationToken | None:
        """Return the token of the active scan, if any."""
        return self._token

    def request_cancel(self) -> None:
        """Ask the active scan to stop at its next suspension point.

        Idempotent, and a no-op when no scan is active.
        """
        if self._token is None:
            self._logger.debug("Cancel requested with no active scan; ignoring")
            return
        self._token.cancel()

    @contextlib.asynccontextmanager
    async def start_scan(self, root_path: Path | str) -> AsyncIterator[AsyncGenerator[ScanEvent]]:
        """Open a scan of ``root_path`` and hand out its event stream.

        The stream is closed when the ``async with`` block exits, however the
        caller left it, so breaking out of the loop early still releases the
        controller for the next scan.

        Args:
            root_path: Directory to measure

        Yields:
            Async iterator of ScanProgress snapshots ending in one ScanResult

        Raises:
            ScanAlreadyActiveError: If another scan is running
            RootNotFoundError: If the root does not exist or is not a directory
            AccessDeniedError: If the root cannot be listed

        Example:
            >>> async with controller.start_scan(root) as events:
            ...     async for event in events:
            ...         ...
        """
        if self._token is not None:
            msg = "A scan is already active; cancel it or wait for it to finish"
            raise ScanAlreadyActiveError(msg, path=Path(root_path))

        token = CancellationToken()
        self._token = token
        set_scan_id(uuid4().hex[:12])
        events = self.aggregator.iter_scan(ScanRequest(root_path=Path(root_path)), token)
        try:
            yield events
        finally:
            await events.aclose()
            self._token = None
            clear_scan_id()

    async def run_scan(self, root_path: Path | str, sink: PresentationSink) -> ScanResult:
        """Run a scan, forwarding every event to ``sink``.

        Args:
            root_path: Directory to measure
            sink: Presentation sink receiving snapshots and the terminal signal

        Returns:
            Terminal scan result

        Raises:
            ScanError: Root-level failures, after ``sink.on_failed`` is called
        """
        result: ScanResult | None = None
        try:
            async with self.start_scan(root_path) as events:
                async for event in events:
                    if isinstance(event, ScanProgress):
                        sink.on_progress(event)
                    else:
                        result = event
        except ScanAlreadyActiveError:
            raise
        except ScanError as exc:
            sink.on_failed(exc)
            raise

        if result is None:
            msg = "Scan finished without producing a result"
            raise RuntimeError(msg)

        if result.outcome is ScanOutcome.NO_FILES_FOUND:
            sink.on_no_files_found(result)
        elif result.outcome is ScanOutcome.CANCELLED:
            sink.on_cancelled(result)
        else:
            sink.on_completed(result)
        return result
