"""Command-line interface for ByteScore."""

from __future__ import annotations

import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

import click

from bytescore.core.config import ConfigurationError
from bytescore.core.filesystem import ScanStrategy, SizeMode

# Configuration file discovery paths in order of precedence
# 1. Current directory
CURRENT_DIR_CONFIG_FILES = [
    'bytescore.yaml',
    'bytescore.yml',
]

# 2. User home directory
HOME_CONFIG_FILES = [
    '.bytescore.yaml',
    '.bytescore.yml',
]

# 3. System configuration directories
SYSTEM_CONFIG_PATHS = [
    Path('/etc/bytescore/config.yaml'),
    Path('/usr/local/etc/bytescore/config.yaml'),
]


def discover_config_file() -> Path | None:
    """Discover configuration file in standard locations.

    Searches for configuration files in the following order of precedence:
    1. Current directory (bytescore.yaml, bytescore.yml)
    2. User home directory (~/.bytescore.yaml, ~/.bytescore.yml)
    3. System directories (/etc/bytescore/, /usr/local/etc/bytescore/)

    Returns:
        Path to the first configuration file found, or None to use defaults.
    """
    for config_file in CURRENT_DIR_CONFIG_FILES:
        config_path = Path(config_file)
        if config_path.is_file():
            return config_path

    try:
        home_dir = Path.home()
        for config_file in HOME_CONFIG_FILES:
            config_path = home_dir / config_file
            if config_path.is_file():
                return config_path
    except (OSError, RuntimeError):
        # Path.home() can fail in some environments
        pass

    for config_path in SYSTEM_CONFIG_PATHS:
        if config_path.is_file():
            return config_path

    return None


CONFIG_SUFFIXES = ('.yaml', '.yml')
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def require_yaml_suffix(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: Path | None,
) -> Path | None:
    """Reject --config paths that are not YAML files."""
    if value is not None and value.suffix.lower() not in CONFIG_SUFFIXES:
        raise click.BadParameter(f'{value} is not a YAML file (expected {" or ".join(CONFIG_SUFFIXES)})')
    return value


try:
    __version__ = version("bytescore")
except PackageNotFoundError:
    __version__ = "unknown"


@click.group()
@click.version_option(version=__version__, prog_name='ByteScore')
def cli() -> None:
    """ByteScore - Measure the total size of a folder, one byte at a time.

    Walks every file under a folder, rolling a running total up on screen
    as it goes. Press Ctrl+C to stop early and keep the partial total.

    Examples:

        # Measure a folder
        bytescore scan ~/Downloads

        # Report disk usage instead of apparent size
        bytescore scan /var/log --disk-usage

        # Use a custom config file with debug logging
        bytescore scan . --config bytescore.yaml --log-level DEBUG
    """


@cli.command()
@click.argument(
    'root',
    type=click.Path(path_type=Path),
)
@click.option(
    '--config', '-c',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    callback=require_yaml_suffix,
    help='Configuration file path (.yaml or .yml). If not specified, searches for config files in standard locations.'
)
@click.option(
    '--log-level', '-l',
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help='Logging verbosity level'
)
@click.option(
    '--progress-every', '-n',
    type=click.IntRange(min=1),
    default=None,
    help='Emit a progress update after every N files'
)
@click.option(
    '--strategy', '-s',
    type=click.Choice([s.value for s in ScanStrategy]),
    default=None,
    help='Directory traversal order'
)
@click.option(
    '--follow-symlinks',
    is_flag=True,
    help='Follow symbolic links (loops are detected and skipped)'
)
@click.option(
    '--disk-usage',
    is_flag=True,
    help='Count allocated disk blocks instead of apparent file size'
)
@click.option(
    '--no-settle',
    is_flag=True,
    help='Skip the final digit-rolling animation'
)
def scan(
    root: Path,
    config: Path | None,
    log_level: str | None,
    progress_every: int | None,
    strategy: str | None,
    follow_symlinks: bool,
    disk_usage: bool,
    no_settle: bool,
) -> None:
    """Measure the total size of ROOT and everything below it.

    Exit status is 0 on completion (or an empty folder), 1 for configuration
    errors, 2 if ROOT does not exist, 3 if ROOT cannot be read, and 130 if
    the scan was cancelled.
    """
    from bytescore.app.runner import EXIT_CONFIG_ERROR, ApplicationRunner

    config_path = config if config is not None else discover_config_file()

    scan_overrides: dict[str, object] = {}
    if progress_every is not None:
        scan_overrides['progress_emit_every_n_items'] = progress_every
    if strategy is not None:
        scan_overrides['strategy'] = strategy
    if follow_symlinks:
        scan_overrides['follow_symlinks'] = True
    if disk_usage:
        scan_overrides['size_mode'] = SizeMode.DISK_USAGE.value

    runner = ApplicationRunner(
        root_path=root,
        config_path=config_path,
        log_level=log_level,
        scan_overrides=scan_overrides,
        settle_enabled=False if no_settle else None,
    )

    try:
        exit_code = runner.run()
    except ConfigurationError as e:
        click.echo(f"Configuration error:\n{e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    if exit_code:
        sys.exit(exit_code)


if __name__ == '__main__':
    cli()
