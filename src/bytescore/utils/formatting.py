"""Pure formatting utilities for human-readable output.

This module provides stateless formatting functions for converting raw
byte counts and durations into strings for the console. All functions are
pure with no side effects.
"""

from typing import Final

# Binary unit constants (1024-based)
_KB_INT = 1024
_MB_INT = _KB_INT * 1024  # 1,048,576
_GB_INT = _MB_INT * 1024  # 1,073,741,824
_TB_INT = _GB_INT * 1024  # 1,099,511,627,776

# Time unit constants
_MINUTE = 60
_HOUR = _MINUTE * 60  # 3,600

# Decimal size tiers (upper bounds, exclusive) and their labels
FLAVOR_TIERS: Final[tuple[tuple[int, str], ...]] = (
    (1_000, "Tiny"),
    (1_000_000, "Small"),
    (10_000_000, "Medium"),
    (100_000_000, "Large"),
    (1_000_000_000, "Larger"),
    (10_000_000_000, "Huge"),
    (100_000_000_000, "Massive"),
)
FLAVOR_TOP_TIER: Final[str] = "Colossal"


def format_size(bytes: int, *, precision: int = 1) -> str:
    """Convert bytes to human-readable size format.

    Uses binary units (1024-based) for consistency with system tools.
    For terabyte values, displays both TB and GB components for clarity.

    Args:
        bytes: Number of bytes to format (must be non-negative)
        precision: Number of decimal places for TB display (default: 1)

    Returns:
        Human-readable string representation of the size.

    Examples:
        >>> format_size(512)
        '512 Bytes'
        >>> format_size(2048)
        '2 KB'
        >>> format_size(2748779069440)
        '2.5 TB (2560 GB)'
    """
    if bytes < 0:
        msg = "bytes must be non-negative"
        raise ValueError(msg)

    if bytes >= _TB_INT:
        tb = bytes // _TB_INT
        remaining = bytes % _TB_INT
        gb = remaining // _GB_INT

        tb_decimal = tb + (gb / 1024.0)
        total_gb = tb * 1024 + gb

        return f"{tb_decimal:.{precision}f} TB ({total_gb} GB)"

    if bytes >= _GB_INT:
        return f"{bytes // _GB_INT} GB"

    if bytes >= _MB_INT:
        return f"{bytes // _MB_INT} MB"

    if bytes >= _KB_INT:
        return f"{bytes // _KB_INT} KB"

    return f"{bytes} Bytes"


def format_grouped(value: int) -> str:
    """Format an integer with thousands separators.

    Examples:
        >>> format_grouped(1234567)
        '1,234,567'
    """
    return f"{value:,}"


def flavor_text(bytes: int) -> str:
    """Return the size tier label for a byte count.

    Tiers use decimal boundaries: Tiny below 1 kB, Small below 1 MB, and so
    on up to Colossal at 100 GB and above.

    Args:
        bytes: Number of bytes (must be non-negative)

    Returns:
        Tier label

    Examples:
        >>> flavor_text(999)
        'Tiny'
        >>> flavor_text(5_000_000)
        'Medium'
    """
    if bytes < 0:
        msg = "bytes must be non-negative"
        raise ValueError(msg)

    for upper_bound, label in FLAVOR_TIERS:
        if bytes < upper_bound:
            return label
    return FLAVOR_TOP_TIER


def format_duration(seconds: float) -> str:
    """Convert seconds to human-readable duration format.

    Args:
        seconds: Duration in seconds (must be non-negative)

    Returns:
        Human-readable duration string with adaptive granularity.

    Examples:
        >>> format_duration(0.25)
        '0.25s'
        >>> format_duration(90)
        '1m 30s'
        >>> format_duration(3665)
        '1h 1m'
    """
    if seconds < 0:
        msg = "seconds must be non-negative"
        raise ValueError(msg)

    if seconds < _MINUTE:
        # Scans are often sub-second; keep two decimals there
        return f"{seconds:.2f}s" if seconds < 10 else f"{int(seconds)}s"

    total_seconds = int(seconds)

    if total_seconds >= _HOUR:
        hours = total_seconds // _HOUR
        minutes = (total_seconds % _HOUR) // _MINUTE
        if minutes > 0:
            return f"{hours}h {minutes}m"
        return f"{hours}h"

    minutes = total_seconds // _MINUTE
    remaining = total_seconds % _MINUTE
    if remaining > 0:
        return f"{minutes}m {remaining}s"
    return f"{minutes}m"
