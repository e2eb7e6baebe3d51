"""Configuration system for subdir-sizes.

This module implements the configuration schema using Pydantic for
validation, with support for environment variable resolution and fail-fast
validation with actionable error messages. Every setting has a default, so
a configuration file is optional; command-line options override it.
"""

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Final

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from subdir_sizes.core.data.filesystem.scanner import ScanStrategy, validate_pattern
from subdir_sizes.core.exceptions import InvalidPatternError
from subdir_sizes.core.inclusion import InclusionFlags

# ${NAME} with NAME made of upper-case letters, digits and underscores
ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$\{([A-Z0-9_]+)\}")

DEFAULT_PATTERN: Final[str] = "*"


class AnalysisConfig(BaseModel):
    """Configuration for the size analysis.

    Defines which files are counted: the base-name glob pattern and the
    attribute inclusion flags, plus the traversal order.
    """

    model_config: ConfigDict = ConfigDict(  # pyright: ignore[reportIncompatibleVariableOverride]
        extra="forbid",
        str_strip_whitespace=True,
    )

    pattern: Annotated[
        str,
        Field(description="Glob pattern matched against file base names"),
    ] = DEFAULT_PATTERN
    include_hidden: Annotated[
        bool,
        Field(description="Count hidden files"),
    ] = False
    include_readonly: Annotated[
        bool,
        Field(description="Count read-only files"),
    ] = False
    include_archive: Annotated[
        bool,
        Field(description="Count files with the archive attribute"),
    ] = False
    strategy: Annotated[
        ScanStrategy,
        Field(description="Traversal order inside each subdirectory"),
    ] = ScanStrategy.DEPTH_FIRST

    @field_validator("pattern", mode="after")
    @classmethod
    def validate_file_pattern(cls, v: str) -> str:
        """Validate that the pattern only matches base names.

        Args:
            v: Glob pattern

        Returns:
            Validated pattern

        Raises:
            ValueError: If the pattern is malformed
        """
        try:
            return validate_pattern(v)
        except InvalidPatternError as e:
            raise ValueError(str(e)) from e

    def to_flags(self) -> InclusionFlags:
        """Build the inclusion flags record for this configuration.

        Returns:
            Immutable InclusionFlags
        """
        return InclusionFlags(
            include_hidden=self.include_hidden,
            include_readonly=self.include_readonly,
            include_archive=self.include_archive,
        )


class ApplicationConfig(BaseModel):
    """Configuration for application-level settings."""

    model_config: ConfigDict = ConfigDict(  # pyright: ignore[reportIncompatibleVariableOverride]
        extra="forbid",
    )

    log_level: Annotated[
        str,
        Field(
            description="Logging level",
            pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        ),
    ] = "WARNING"
    log_file: Annotated[
        Path | None,
        Field(description="Optional file receiving log records"),
    ] = None

    @field_validator("log_file", mode="after")
    @classmethod
    def validate_log_file_parent_exists(cls, v: Path | None) -> Path | None:
        """Validate that the log file's parent directory exists.

        Args:
            v: Log file path

        Returns:
            Validated path

        Raises:
            ValueError: If parent directory does not exist
        """
        if v is not None and not v.parent.exists():
            msg = f"Log file parent directory does not exist: {v.parent}"
            raise ValueError(msg)
        return v


class MainConfig(BaseModel):
    """Main application configuration schema.

    Top-level configuration container aggregating all configuration sections:
    - analysis: Pattern, inclusion flags and traversal order
    - application: Logging settings
    """

    model_config: ConfigDict = ConfigDict(  # pyright: ignore[reportIncompatibleVariableOverride]
        extra="forbid",
    )

    analysis: Annotated[
        AnalysisConfig,
        Field(description="Size analysis configuration"),
    ] = AnalysisConfig()
    application: Annotated[
        ApplicationConfig,
        Field(description="Application-level configuration"),
    ] = ApplicationConfig()


class EnvironmentVariableError(Exception):
    """Exception raised when a ``${VAR}`` reference names an unset variable."""


def resolve_env_var(value: str) -> str:
    """Substitute ``${VAR}`` references in a configuration string.

    Lets one configuration file serve several hosts, e.g. a ``log_file`` of
    ``${LOG_DIR}/subdir-sizes.log`` or a pattern taken from ``${SIZES_PATTERN}``.

    Args:
        value: Configuration string

    Returns:
        ``value`` with each reference replaced by the variable's value

    Raises:
        EnvironmentVariableError: If a referenced variable is not set

    Examples:
        >>> os.environ["LOG_DIR"] = "/var/log"
        >>> resolve_env_var("${LOG_DIR}/subdir-sizes.log")
        '/var/log/subdir-sizes.log'
        >>> resolve_env_var("*.log")
        '*.log'
    """

    def substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        try:
            return os.environ[name]
        except KeyError:
            msg = f"Environment variable '{name}' is referenced but not set."
            raise EnvironmentVariableError(msg) from None

    return ENV_VAR_PATTERN.sub(substitute, value)


def resolve_env_vars_in_dict(data: Mapping[str, object]) -> dict[str, object]:
    """Resolve ``${VAR}`` references in every string of a configuration mapping.

    Sections are nested mappings of scalars: nested mappings are walked,
    strings are resolved and anything else (booleans, numbers, null) is kept.

    Args:
        data: Parsed YAML document or one of its sections

    Returns:
        New mapping with every reference substituted

    Raises:
        EnvironmentVariableError: If a referenced variable is not set
    """
    resolved: dict[str, object] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            resolved[key] = resolve_env_vars_in_dict(value)  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
        elif isinstance(value, str):
            resolved[key] = resolve_env_var(value)
        else:
            resolved[key] = value
    return resolved


class ConfigurationError(Exception):
    """Exception raised when configuration loading or validation fails.

    This exception provides detailed, actionable error messages for configuration
    issues including file not found, YAML parsing errors, and validation failures.
    """


def load_main_config(config_path: Path) -> MainConfig:
    """Load and validate application configuration from a YAML file.

    Args:
        config_path: Path to configuration YAML file

    Returns:
        Validated MainConfig instance

    Raises:
        ConfigurationError: If the file cannot be loaded, references an unset
            environment variable, or is invalid

    Examples:
        >>> config = load_main_config(Path("subdir-sizes.yaml"))  # doctest: +SKIP
        >>> config.analysis.pattern
        '*.log'
    """
    if not config_path.exists():
        msg = (
            f"Configuration file not found: {config_path}\n"
            f"Please create a configuration file at this location or omit --config."
        )
        raise ConfigurationError(msg)

    try:
        with config_path.open("r", encoding="utf-8") as f:
            raw_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]  # YAML boundary
    except yaml.YAMLError as e:
        msg = (
            f"Failed to parse YAML configuration file: {config_path}\n"
            f"YAML parsing error: {e}\n"
            f"Please check the file for syntax errors."
        )
        raise ConfigurationError(msg) from e
    except OSError as e:
        msg = f"Failed to read configuration file: {config_path}\nError: {e}\nPlease check file permissions."
        raise ConfigurationError(msg) from e

    # An empty file means "all defaults"
    if raw_data is None:
        raw_data = {}

    if not isinstance(raw_data, dict):
        msg = (
            f"Invalid configuration file format: {config_path}\n"
            f"Expected YAML dictionary at root level, got: {type(raw_data).__name__}\n"
            f"Configuration file must contain key-value pairs."
        )
        raise ConfigurationError(msg)

    try:
        resolved_data = resolve_env_vars_in_dict(raw_data)  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
    except EnvironmentVariableError as e:
        msg = (
            f"Environment variable resolution failed in: {config_path}\n"
            f"{e}\n"
            f"Set the required environment variable before starting the application."
        )
        raise ConfigurationError(msg) from e

    try:
        config = MainConfig.model_validate(resolved_data)
    except ValidationError as e:
        error_lines = ["Configuration validation failed:", ""]
        for error in e.errors():
            field_path = " → ".join(str(loc) for loc in error["loc"])
            error_lines.append(f"  Field: {field_path}")
            error_lines.append(f"  Error: {error['msg']}")
            error_lines.append(f"  Type: {error['type']}")
            error_lines.append("")

        error_lines.append(f"Configuration file: {config_path}")
        error_lines.append("Please fix the above errors and try again.")

        msg = "\n".join(error_lines)
        raise ConfigurationError(msg) from e

    return config
