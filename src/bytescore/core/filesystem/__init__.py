"""Filesystem operations module for file enumeration and size reading."""

from __future__ import annotations

from .enumerator import FileEnumerator, ScanStrategy, SkipCallback
from .sizes import SizeMode, read_file_size, size_from_stat

__all__ = [
    "FileEnumerator",
    "ScanStrategy",
    "SizeMode",
    "SkipCallback",
    "read_file_size",
    "size_from_stat",
]
