"""Scanning core: enumeration, aggregation, cancellation and settle phase."""

from __future__ import annotations

from .aggregator import Aggregator
from .cancellation import CancellationToken
from .controller import ScanController
from .errors import (
    AccessDeniedError,
    RootNotFoundError,
    ScanAlreadyActiveError,
    ScanError,
    StateTransitionError,
)

__all__ = [
    "AccessDeniedError",
    "Aggregator",
    "CancellationToken",
    "RootNotFoundError",
    "ScanAlreadyActiveError",
    "ScanController",
    "ScanError",
    "StateTransitionError",
]
