"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Callable, Generator, Iterator, Mapping
from pathlib import Path
from typing import TypeAlias
from unittest.mock import patch

import pytest

TreeBuilder: TypeAlias = Callable[[Mapping[str, int]], Path]
ListingDenier: TypeAlias = Callable[..., None]


@pytest.fixture
def make_tree(tmp_path: Path) -> TreeBuilder:
    """Create files of the given sizes below a fresh root directory.

    Keys are POSIX-style relative paths; a key ending in ``/`` creates an
    empty directory instead of a file.
    """

    def build(layout: Mapping[str, int]) -> Path:
        root = tmp_path / "root"
        root.mkdir(exist_ok=True)
        for relative, size in layout.items():
            target = root / relative
            if relative.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            _ = target.write_bytes(b"x" * size)
        return root

    return build


@pytest.fixture
def deny_listing() -> Generator[ListingDenier]:
    """Make ``Path.iterdir`` raise PermissionError for chosen directory names.

    chmod cannot revoke access when tests run as root.
    """
    denied: set[str] = set()
    original_iterdir = Path.iterdir

    def fake_iterdir(self: Path) -> Iterator[Path]:
        if self.name in denied:
            msg = f"[Errno 13] Permission denied: '{self}'"
            raise PermissionError(msg)
        return original_iterdir(self)

    def deny(*names: str) -> None:
        denied.update(names)

    with patch.object(Path, "iterdir", fake_iterdir):
        yield deny
