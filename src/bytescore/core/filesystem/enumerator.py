"""File enumeration for directory trees."""

from __future__ import annotations

import fnmatch
import logging
import stat
from collections import deque
from collections.abc import Callable, Iterable, Iterator
from enum import Enum
from pathlib import Path
from typing import TypeAlias

from bytescore.core.cancellation import CancellationToken
from bytescore.core.errors import AccessDeniedError, RootNotFoundError

logger = logging.getLogger(__name__)

SkipCallback: TypeAlias = Callable[[Path, OSError], None]


class ScanStrategy(str, Enum):
    """Enumeration for directory scanning strategies."""

    DEPTH_FIRST = "depth_first"
    BREADTH_FIRST = "breadth_first"


class FileEnumerator:
    """Enumerator yielding every regular file reachable under a root.

    Provides recursive directory traversal with support for:
    - Per-subtree failure isolation (inaccessible directories are skipped)
    - Different scanning strategies (depth-first vs breadth-first)
    - Optional glob exclusions on entry names
    - Opt-in symlink following with loop detection
    - Cooperative cancellation between directories

    Each call to ``iter_files`` performs a fresh traversal; nothing is cached
    between calls.
    """

    def __init__(
        self,
        strategy: ScanStrategy = ScanStrategy.DEPTH_FIRST,
        exclusions: Iterable[str] | None = None,
        follow_symlinks: bool = False,
    ) -> None:
        """Initialize the file enumerator.

        Args:
            strategy: Scanning strategy to use
            exclusions: Glob patterns matched against entry names
            follow_symlinks: Whether to follow symbolic links
        """
        self.strategy: ScanStrategy = strategy
        self.exclusions: frozenset[str] = frozenset(exclusions or ())
        self.follow_symlinks: bool = follow_symlinks

    def iter_files(
        self,
        root: Path,
        *,
        cancellation: CancellationToken | None = None,
        on_skip: SkipCallback | None = None,
    ) -> Iterator[Path]:
        """Return a lazy iterator over all files under ``root``.

        The root is validated and listed eagerly, so root-level failures are
        raised from this call rather than from the first ``next()``.

        Args:
            root: Directory to enumerate
            cancellation: Token checked before each directory is listed
            on_skip: Called with the directory and error for every skipped subtree

        Returns:
            Iterator of file paths in unspecified order

        Raises:
            RootNotFoundError: If root does not exist or is not a directory
            AccessDeniedError: If root cannot be listed
        """
        entries = self._list_root(root)
        visited: set[Path] = set()
        if self.follow_symlinks:
            visited.add(self._resolve(root))

        if self.strategy == ScanStrategy.BREADTH_FIRST:
            return self._walk_breadth_first(entries, visited, cancellation, on_skip)
        return self._walk_depth_first(entries, visited, cancellation, on_skip)

    def _list_root(self, root: Path) -> list[Path]:
        try:
            root_stat = root.stat()
        except (FileNotFoundError, NotADirectoryError) as exc:
            msg = f"Scan root does not exist: {root}"
            raise RootNotFoundError(msg, path=root) from exc
        except OSError as exc:
            msg = f"Access denied to scan root: {root} ({exc})"
            raise AccessDeniedError(msg, path=root) from exc

        if not stat.S_ISDIR(root_stat.st_mode):
            msg = f"Scan root is not a directory: {root}"
            raise RootNotFoundError(msg, path=root)

        try:
            return list(root.iterdir())
        except (FileNotFoundError, NotADirectoryError) as exc:
            msg = f"Scan root disappeared before it could be listed: {root}"
            raise RootNotFoundError(msg, path=root) from exc
        except OSError as exc:
            msg = f"Access denied to scan root: {root} ({exc})"
            raise AccessDeniedError(msg, path=root) from exc

    def _walk_depth_first(
        self,
        entries: list[Path],
        visited: set[Path],
        cancellation: CancellationToken | None,
        on_skip: SkipCallback | None,
    ) -> Iterator[Path]:
        """Perform depth-first traversal starting from already-listed entries."""
        stack: list[Iterator[Path]] = [iter(entries)]

        while stack:
            item = next(stack[-1], None)
            if item is None:
                _ = stack.pop()
                continue

            if self._should_exclude(item):
                continue

            if self._is_file(item):
                yield item
            elif self._should_descend(item, visited):
                if cancellation is not None and cancellation.is_cancelled:
                    return
                children = self._list_directory(item, on_skip)
                if children is not None:
                    stack.append(iter(children))

    def _walk_breadth_first(
        self,
        entries: list[Path],
        visited: set[Path],
        cancellation: CancellationToken | None,
        on_skip: SkipCallback | None,
    ) -> Iterator[Path]:
        """Perform breadth-first traversal starting from already-listed entries."""
        queue: deque[list[Path]] = deque([entries])

        while queue:
            for item in queue.popleft():
                if self._should_exclude(item):
                    continue

                if self._is_file(item):
                    yield item
                elif self._should_descend(item, visited):
                    if cancellation is not None and cancellation.is_cancelled:
                        return
                    children = self._list_directory(item, on_skip)
                    if children is not None:
                        queue.append(children)

    def _list_directory(self, path: Path, on_skip: SkipCallback | None) -> list[Path] | None:
        """List a subdirectory, returning None if it has to be skipped."""
        try:
            return list(path.iterdir())
        except OSError as exc:
            logger.warning(
                "Skipping inaccessible directory %s: %s",
                path,
                exc,
                extra={"path": str(path), "error": str(exc)},
            )
            if on_skip is not None:
                on_skip(path, exc)
            return None

    def _should_exclude(self, path: Path) -> bool:
        return any(fnmatch.fnmatch(path.name, pattern) for pattern in self.exclusions)

    def _is_file(self, path: Path) -> bool:
        """Check if a path is a regular file (or a followed symlink to one)."""
        try:
            if path.is_symlink() and not self.follow_symlinks:
                return False
            return path.is_file()
        except OSError:
            return False

    def _should_descend(self, path: Path, visited: set[Path]) -> bool:
        """Check if a directory should be entered, preventing symlink loops."""
        try:
            if path.is_symlink():
                if not self.follow_symlinks:
                    return False
                if not path.is_dir():
                    return False
            elif not path.is_dir():
                return False
        except OSError:
            return False

        if not self.follow_symlinks:
            return True

        resolved = self._resolve(path)
        if resolved in visited:
            logger.debug("Symlink loop detected, skipping", extra={"path": str(path)})
            return False
        visited.add(resolved)
        return True

    @staticmethod
    def _resolve(path: Path) -> Path:
        try:
            return path.resolve()
        except (OSError, RuntimeError):
            return path
