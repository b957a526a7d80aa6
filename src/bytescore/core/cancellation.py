"""Cooperative cancellation for scans.

A token has exactly one writer (the external trigger, e.g. a signal handler)
and any number of readers. Readers only check it at suspension points; once
set it stays set for the lifetime of the scan that owns it.
"""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)


class CancellationToken:
    """Write-once, thread-safe cancellation flag.

    Backed by ``threading.Event`` so the enumeration worker thread and the
    event loop observe the same flag without extra locking.
    """

    def __init__(self) -> None:
        self._event: threading.Event = threading.Event()

    @property
    def is_cancelled(self) -> bool:
        """Return True once cancellation has been requested."""
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation. Calling this more than once has no further effect."""
        if self._event.is_set():
            return
        logger.info("Cancellation requested")
        self._event.set()

    def __bool__(self) -> bool:
        return self._event.is_set()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.is_cancelled})"
