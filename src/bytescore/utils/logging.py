"""Logging infrastructure with optional syslog integration and scan ID tracking.

This module configures stdlib logging for bytescore. Every record is
stamped with the identifier of the scan it belongs to, taken from a
ContextVar so that records emitted from the enumeration worker thread
(``asyncio.to_thread`` copies the context) carry the same identifier as
records from the event loop.
"""

import contextvars
import logging
import logging.handlers
import sys
from typing import Final

from typing_extensions import override

scan_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "scan_id",
    default=None,
)

DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - [%(scan_id)s] - %(message)s"

SYSLOG_LOG_FORMAT: Final[str] = "bytescore[%(process)d]: %(levelname)s - [%(scan_id)s] - %(name)s - %(message)s"

DEFAULT_SYSLOG_ADDRESS: Final[str] = "/dev/log"


class ScanIDFilter(logging.Filter):
    """Logging filter that adds the current scan ID to log records."""

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        """Add scan ID to log record from ContextVar.

        Args:
            record: Log record to enhance with scan ID

        Returns:
            True to allow the record to be logged
        """
        scan_id = scan_id_var.get()
        record.scan_id = scan_id if scan_id is not None else "-"
        return True


def configure_logging(
    *,
    log_level: str = "WARNING",
    enable_syslog: bool = False,
    syslog_address: str = DEFAULT_SYSLOG_ADDRESS,
    enable_console: bool = True,
) -> None:
    """Configure application logging.

    Console output goes to stderr so it never interleaves with the
    progress line rendered on stdout.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_syslog: Enable syslog handler
        syslog_address: Syslog socket address
        enable_console: Enable console output handler
    """
    root_logger = logging.getLogger()

    level = getattr(logging, log_level.upper(), logging.WARNING)
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    scan_filter = ScanIDFilter()

    if enable_syslog:
        try:
            syslog_handler = logging.handlers.SysLogHandler(
                address=syslog_address,
                facility=logging.handlers.SysLogHandler.LOG_USER,
            )
            syslog_handler.setFormatter(logging.Formatter(SYSLOG_LOG_FORMAT))
            syslog_handler.addFilter(scan_filter)
            root_logger.addHandler(syslog_handler)

        except OSError as exc:
            # Syslog not available (e.g., macOS without /dev/log, containers)
            print(
                f"Warning: Could not connect to syslog at {syslog_address}: {exc}",
                file=sys.stderr,
            )

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
        console_handler.addFilter(scan_filter)
        root_logger.addHandler(console_handler)


def set_scan_id(scan_id: str) -> None:
    """Set the scan ID for the current context.

    Args:
        scan_id: Unique identifier of the running scan
    """
    _ = scan_id_var.set(scan_id)


def get_scan_id() -> str | None:
    """Get the current scan ID from context.

    Returns:
        Current scan ID or None if not set
    """
    return scan_id_var.get()


def clear_scan_id() -> None:
    """Clear the scan ID from the current context."""
    _ = scan_id_var.set(None)
