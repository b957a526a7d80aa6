"""Type definitions and protocols for bytescore.

This package provides:
- Data models (immutable dataclasses)
- Protocol definitions (structural subtyping interfaces)
"""

from bytescore.types.models import (
    ScanEvent,
    ScanOutcome,
    ScanProgress,
    ScanRequest,
    ScanResult,
    ScanState,
)
from bytescore.types.protocols import PresentationSink

__all__ = [
    # Data models
    "ScanEvent",
    "ScanOutcome",
    "ScanProgress",
    "ScanRequest",
    "ScanResult",
    "ScanState",
    # Protocols
    "PresentationSink",
]
