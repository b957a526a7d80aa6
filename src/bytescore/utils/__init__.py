"""Shared utility modules for common operations.

This package provides pure, stateless utility functions for:
- Data size formatting (bytes to human-readable, size tiers)
- Time duration formatting (seconds to human-readable)
"""

from bytescore.utils.formatting import (
    flavor_text,
    format_duration,
    format_grouped,
    format_size,
)

__all__ = [
    "flavor_text",
    "format_duration",
    "format_grouped",
    "format_size",
]
