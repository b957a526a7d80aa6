"""Exception hierarchy for the scanning core.

Only root-level conditions are raised out of a scan. Per-directory and
per-file failures are absorbed by the enumerator and aggregator and never
surface as exceptions.
"""

from __future__ import annotations

from pathlib import Path

from bytescore.types.models import ScanState


class ScanError(Exception):
    """Base exception for all scan-aborting errors."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        """Initialize ScanError.

        Args:
            message: Error message
            path: Path the error relates to, if any
        """
        super().__init__(message)
        self.path: Path | None = path


class RootNotFoundError(ScanError):
    """Raised when the scan root does not exist or is not a directory."""


class AccessDeniedError(ScanError):
    """Raised when the scan root itself cannot be listed."""


class ScanAlreadyActiveError(ScanError):
    """Raised when a scan is started while another one is running."""


class StateTransitionError(Exception):
    """Exception raised when an aggregator state transition is not allowed."""

    def __init__(
        self,
        message: str,
        from_state: ScanState | None = None,
        to_state: ScanState | None = None,
    ) -> None:
        """Initialize state transition error.

        Args:
            message: Error message
            from_state: Source state of failed transition
            to_state: Target state of failed transition
        """
        super().__init__(message)
        self.from_state: ScanState | None = from_state
        self.to_state: ScanState | None = to_state
