"""Application module: command-line interface, runner and console sink."""

from __future__ import annotations

from bytescore.app.cli import cli
from bytescore.app.console import ConsoleSink
from bytescore.app.runner import ApplicationRunner

__all__ = [
    "cli",
    "ApplicationRunner",
    "ConsoleSink",
]
