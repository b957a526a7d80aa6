"""Configuration system for bytescore.

This module implements the configuration schema using Pydantic for
validation, with support for environment variable resolution and fail-fast
validation with actionable error messages. Every section is optional, so an
empty or missing configuration file yields the defaults.
"""

import os
import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Annotated, Final, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from bytescore.core.filesystem import ScanStrategy, SizeMode

# Regular expression pattern for environment variable references
# Matches ${VARIABLE_NAME} syntax where VARIABLE_NAME can contain letters, digits, and underscores
ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$\{([A-Z0-9_]+)\}")


class ScanConfig(BaseModel):
    """Configuration for enumeration and aggregation.

    Replaces scattered tuning constants with one object handed to the
    aggregator and enumerator at construction.
    """

    progress_emit_every_n_items: Annotated[
        int,
        Field(
            gt=0,
            description="Emit a progress snapshot after every N files (the last file always emits)",
        ),
    ] = 1
    cancellation_check_granularity: Annotated[
        Literal["per-file"],
        Field(
            description="Boundary at which the cancellation token is checked",
        ),
    ] = "per-file"
    strategy: Annotated[
        ScanStrategy,
        Field(
            description="Directory traversal order",
        ),
    ] = ScanStrategy.DEPTH_FIRST
    follow_symlinks: Annotated[
        bool,
        Field(
            description="Follow symbolic links during enumeration",
        ),
    ] = False
    size_mode: Annotated[
        SizeMode,
        Field(
            description="Apparent file size or allocated disk usage",
        ),
    ] = SizeMode.APPARENT
    exclusions: Annotated[
        Sequence[str],
        Field(
            description="Glob patterns matched against entry names to skip",
        ),
    ] = []

    @field_validator("exclusions", mode="after")
    @classmethod
    def validate_exclusion_patterns(cls, v: Sequence[str]) -> Sequence[str]:
        """Validate that exclusion patterns are non-empty.

        Args:
            v: Sequence of glob patterns

        Returns:
            Validated patterns

        Raises:
            ValueError: If any pattern is blank
        """
        for pattern in v:
            if not pattern.strip():
                msg = "Exclusion patterns must not be empty"
                raise ValueError(msg)
        return v


class DisplayConfig(BaseModel):
    """Configuration for the console presentation layer."""

    max_digits: Annotated[
        int,
        Field(
            gt=0,
            description="Minimum width of the rolling digit counter",
        ),
    ] = 20
    render_interval: Annotated[
        float,
        Field(
            ge=0,
            description="Minimum seconds between console redraws",
        ),
    ] = 0.05
    settle_enabled: Annotated[
        bool,
        Field(
            description="Roll the counter to the exact total after the scan",
        ),
    ] = True
    settle_step_delay: Annotated[
        float,
        Field(
            ge=0,
            description="Seconds between settle animation steps",
        ),
    ] = 0.015


class ApplicationConfig(BaseModel):
    """Configuration for application-level settings."""

    log_level: Annotated[
        str,
        Field(
            description="Logging level",
            pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        ),
    ] = "WARNING"
    syslog_enabled: Annotated[
        bool,
        Field(
            description="Enable syslog integration",
        ),
    ] = False


class MainConfig(BaseModel):
    """Main application configuration schema.

    Top-level configuration container aggregating all configuration sections:
    - scan: Enumeration and aggregation settings
    - display: Console rendering settings
    - application: Application-level settings
    """

    scan: Annotated[
        ScanConfig,
        Field(
            description="Scan configuration",
        ),
    ] = ScanConfig()
    display: Annotated[
        DisplayConfig,
        Field(
            description="Display configuration",
        ),
    ] = DisplayConfig()
    application: Annotated[
        ApplicationConfig,
        Field(
            description="Application-level configuration",
        ),
    ] = ApplicationConfig()


class EnvironmentVariableError(Exception):
    """Exception raised when a ``${NAME}`` reference cannot be resolved."""


def resolve_env_var(value: str) -> str:
    """Substitute every ``${NAME}`` reference in ``value`` from the environment.

    Args:
        value: Raw string from the configuration file

    Returns:
        The string with all references replaced

    Raises:
        EnvironmentVariableError: If a referenced variable is unset

    Examples:
        >>> os.environ["SCAN_ROOT"] = "/srv"
        >>> resolve_env_var("${SCAN_ROOT}/media")
        '/srv/media'
    """

    def lookup(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in os.environ:
            msg = f"Environment variable '{name}' is referenced in the configuration but not set."
            raise EnvironmentVariableError(msg)
        return os.environ[name]

    return ENV_VAR_PATTERN.sub(lookup, value)


def _resolve_value(value: object) -> object:
    if isinstance(value, str):
        return resolve_env_var(value)
    if isinstance(value, dict):
        # YAML data is untyped until pydantic validates it
        return resolve_env_vars_in_dict(value)  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
    if isinstance(value, list):
        return [_resolve_value(item) for item in value]  # pyright: ignore[reportUnknownVariableType]  # YAML boundary
    return value


def resolve_env_vars_in_dict(data: Mapping[str, object]) -> dict[str, object]:
    """Return a copy of ``data`` with references resolved in every nested string.

    Non-string scalars are kept as they are.

    Raises:
        EnvironmentVariableError: If a referenced variable is unset
    """
    return {key: _resolve_value(value) for key, value in data.items()}


class ConfigurationError(Exception):
    """Exception raised when the configuration file cannot be loaded or is invalid.

    Messages are multi-line and name the file and the offending field so
    they can be shown to the user as they are.
    """


def _format_validation_error(error: ValidationError, config_path: Path) -> str:
    lines = ["Configuration validation failed:", ""]
    for detail in error.errors():
        lines.append(f"  Field: {' → '.join(str(part) for part in detail['loc'])}")
        lines.append(f"  Error: {detail['msg']}")
        lines.append(f"  Type: {detail['type']}")
        lines.append("")
    lines.append(f"Configuration file: {config_path}")
    return "\n".join(lines)


def load_main_config(config_path: Path) -> MainConfig:
    """Load and validate a YAML configuration file.

    Environment references are resolved before validation. An empty file
    yields the defaults.

    Args:
        config_path: Path to configuration YAML file

    Returns:
        Validated MainConfig instance

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    if not config_path.exists():
        msg = f"Configuration file not found: {config_path}\nCreate it or omit --config to use the defaults."
        raise ConfigurationError(msg)

    try:
        with config_path.open("r") as f:
            raw_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]  # YAML boundary
    except yaml.YAMLError as e:
        msg = f"Failed to parse YAML in {config_path}:\n{e}"
        raise ConfigurationError(msg) from e
    except OSError as e:
        msg = f"Failed to read configuration file {config_path}: {e}"
        raise ConfigurationError(msg) from e

    if raw_data is None:
        return MainConfig()

    if not isinstance(raw_data, dict):
        msg = (
            f"Invalid configuration file format: {config_path}\n"
            f"Expected YAML dictionary at the top level, got {type(raw_data).__name__}."
        )
        raise ConfigurationError(msg)

    try:
        resolved_data = resolve_env_vars_in_dict(raw_data)  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
    except EnvironmentVariableError as e:
        msg = f"Cannot resolve configuration file {config_path}:\n{e}"
        raise ConfigurationError(msg) from e

    try:
        return MainConfig.model_validate(resolved_data)
    except ValidationError as e:
        raise ConfigurationError(_format_validation_error(e, config_path)) from e
