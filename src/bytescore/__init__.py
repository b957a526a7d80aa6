"""ByteScore - measure the total size of a directory tree.

This package walks a directory tree, sums the sizes of every file it can
read and streams the running total to a presentation sink, with cooperative
cancellation between files.
"""

from bytescore.core import CancellationToken, ScanController
from bytescore.types import ScanProgress, ScanRequest, ScanResult

__all__ = [
    "CancellationToken",
    "ScanController",
    "ScanProgress",
    "ScanRequest",
    "ScanResult",
]
