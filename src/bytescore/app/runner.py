"""Application runner for ByteScore."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
from collections.abc import Mapping
from pathlib import Path

from bytescore.app.console import ConsoleSink
from bytescore.core.cancellation import CancellationToken
from bytescore.core.config import MainConfig, load_main_config
from bytescore.core.controller import ScanController
from bytescore.core.errors import AccessDeniedError, RootNotFoundError
from bytescore.core.settle import settle
from bytescore.types.models import ScanOutcome
from bytescore.utils.logging import configure_logging

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_ROOT_NOT_FOUND = 2
EXIT_ACCESS_DENIED = 3
EXIT_CANCELLED = 130


class ApplicationRunner:
    """Main application runner that wires configuration, logging and the scan."""

    def __init__(
        self,
        root_path: Path,
        config_path: Path | None = None,
        log_level: str | None = None,
        scan_overrides: Mapping[str, object] | None = None,
        settle_enabled: bool | None = None,
    ) -> None:
        """Initialize the application runner.

        Args:
            root_path: Directory to measure
            config_path: Path to the configuration file (None for defaults)
            log_level: Logging level override (DEBUG, INFO, WARNING, ERROR)
            scan_overrides: Field overrides applied to the ``scan`` section
            settle_enabled: Override for the settle animation
        """
        self.root_path: Path = root_path
        self.config_path: Path | None = config_path
        self.log_level: str | None = log_level
        self.scan_overrides: dict[str, object] = dict(scan_overrides or {})
        self.settle_enabled: bool | None = settle_enabled

    def load_config(self) -> MainConfig:
        """Load configuration and apply command-line overrides.

        Raises:
            ConfigurationError: If the configuration file is invalid
        """
        config = load_main_config(self.config_path) if self.config_path is not None else MainConfig()

        if self.scan_overrides:
            scan = config.scan.model_validate({**config.scan.model_dump(), **self.scan_overrides})
            config = config.model_copy(update={"scan": scan})
        if self.settle_enabled is not None:
            display = config.display.model_copy(update={"settle_enabled": self.settle_enabled})
            config = config.model_copy(update={"display": display})
        if self.log_level is not None:
            application = config.application.model_copy(update={"log_level": self.log_level})
            config = config.model_copy(update={"application": application})
        return config

    def run(self) -> int:
        """Run the scan and return a process exit code.

        Raises:
            ConfigurationError: If the configuration file is invalid
        """
        config = self.load_config()
        configure_logging(
            log_level=config.application.log_level,
            enable_syslog=config.application.syslog_enabled,
        )
        logging.getLogger(__name__).info(
            "ByteScore starting",
            extra={"root": str(self.root_path), "config_path": str(self.config_path)},
        )
        return asyncio.run(self._run_async(config))

    async def _run_async(self, config: MainConfig) -> int:
        controller = ScanController(config.scan)
        sink = ConsoleSink(
            max_digits=config.display.max_digits,
            render_interval=config.display.render_interval,
            defer_completion=config.display.settle_enabled,
        )
        settle_token = CancellationToken()

        def request_cancel() -> None:
            controller.request_cancel()
            settle_token.cancel()

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            # Unavailable on Windows event loops and outside the main thread
            with contextlib.suppress(NotImplementedError, RuntimeError, ValueError):
                loop.add_signal_handler(sig, request_cancel)

        try:
            try:
                result = await controller.run_scan(self.root_path, sink)
            except RootNotFoundError:
                return EXIT_ROOT_NOT_FOUND
            except AccessDeniedError:
                return EXIT_ACCESS_DENIED

            if result.outcome is ScanOutcome.COMPLETED and config.display.settle_enabled:
                _ = await settle(
                    sink.roller,
                    result.total_bytes,
                    settle_token,
                    step_delay=config.display.settle_step_delay,
                    on_value=sink.render_settle,
                )
                sink.print_completion(result)

            return EXIT_CANCELLED if result.was_cancelled else EXIT_SUCCESS

        finally:
            for sig in (signal.SIGINT, signal.SIGTERM):
                with contextlib.suppress(NotImplementedError, RuntimeError, ValueError):
                    _ = loop.remove_signal_handler(sig)
