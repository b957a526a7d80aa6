"""Console presentation sink for scan events."""

from __future__ import annotations

import time
from collections.abc import Callable

import click

from bytescore.core.errors import ScanError
from bytescore.core.settle import DEFAULT_WIDTH, DigitRoller
from bytescore.types.models import ScanProgress, ScanResult
from bytescore.utils.formatting import flavor_text, format_duration, format_grouped, format_size

NO_FILES_MESSAGE = "No files found in selected folder."
CANCELLED_MESSAGE = "Cancelled"


class ConsoleSink:
    """Render scan events as a single rolling line on the terminal.

    The sink owns its throttle policy: snapshots arriving faster than
    ``render_interval`` update the digit display but are not drawn, except
    the snapshot for the last file which is always drawn.
    """

    def __init__(
        self,
        *,
        max_digits: int = DEFAULT_WIDTH,
        render_interval: float = 0.05,
        defer_completion: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the console sink.

        Args:
            max_digits: Minimum width of the rolling counter
            render_interval: Minimum seconds between redraws
            defer_completion: Leave the completion summary to ``print_completion``
                so a settle animation can run first
            clock: Monotonic clock, injectable for tests
        """
        self.roller: DigitRoller = DigitRoller(max_digits)
        self.render_interval: float = render_interval
        self.defer_completion: bool = defer_completion
        self._clock: Callable[[], float] = clock
        self._started_at: float = clock()
        self._last_render: float | None = None
        self._line_open: bool = False
        self.renders: int = 0

    def on_progress(self, progress: ScanProgress) -> None:
        _ = self.roller.step_toward(progress.bytes_so_far)

        now = self._clock()
        is_last = progress.files_processed == progress.total_files
        if not is_last and self._last_render is not None and now - self._last_render < self.render_interval:
            return

        self._last_render = now
        self._draw(
            progress.bytes_so_far,
            f"[{progress.files_processed}/{progress.total_files} files]",
        )

    def render_settle(self, value: int) -> None:
        """Redraw the counter during the settle animation."""
        self._draw(value, "")

    def on_completed(self, result: ScanResult) -> None:
        if not self.defer_completion:
            self.print_completion(result)

    def print_completion(self, result: ScanResult) -> None:
        """Print the final summary line for a completed scan."""
        self._close_line()
        click.echo("Complete!")
        click.echo(f"Total: {format_grouped(result.total_bytes)} bytes ({format_size(result.total_bytes)})")
        click.echo(f"{result.files_processed} files in {format_duration(self._elapsed())}")
        if result.has_partial_errors:
            click.echo(
                f"Partial result: {result.skipped_directories} directories skipped, "
                f"{result.unreadable_files} files unreadable"
            )

    def on_cancelled(self, result: ScanResult) -> None:
        self._close_line()
        click.echo(CANCELLED_MESSAGE)
        click.echo(
            f"Counted {format_grouped(result.total_bytes)} bytes "
            f"in {result.files_processed} of {result.total_files} files before stopping"
        )

    def on_no_files_found(self, result: ScanResult) -> None:  # pyright: ignore[reportUnusedParameter]
        self._close_line()
        click.echo(NO_FILES_MESSAGE)

    def on_failed(self, error: ScanError) -> None:
        self._close_line()
        click.echo(f"Error: {error}", err=True)

    def _draw(self, bytes_so_far: int, suffix: str) -> None:
        line = f"{self.roller.text}  {format_size(bytes_so_far)}  {flavor_text(bytes_so_far)}"
        if suffix:
            line = f"{line}  {suffix}"
        click.echo(f"\r{line}", nl=False)
        self._line_open = True
        self.renders += 1

    def _close_line(self) -> None:
        if self._line_open:
            click.echo()
            self._line_open = False

    def _elapsed(self) -> float:
        return max(0.0, self._clock() - self._started_at)
