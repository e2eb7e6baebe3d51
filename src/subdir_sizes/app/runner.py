"""Application runner for subdir-sizes."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from subdir_sizes.core.config import MainConfig, load_main_config
from subdir_sizes.core.data.filesystem.scanner import LocalFileSystem
from subdir_sizes.core.driver import analyze_directory, format_result
from subdir_sizes.core.exceptions import DirectoryAnalyzerError
from subdir_sizes.core.inclusion import InclusionFlags
from subdir_sizes.utils.logging import configure_logging, log_with_context

logger = logging.getLogger(__name__)


class ApplicationRunner:
    """Main application runner that coordinates all components.

    Merges the configuration file with command-line overrides, configures
    logging, runs the analysis and writes one line per subdirectory.
    """

    def __init__(
        self,
        root: Path,
        *,
        config_path: Path | None = None,
        pattern: str | None = None,
        include_hidden: bool = False,
        include_readonly: bool = False,
        include_archive: bool = False,
        log_level: str | None = None,
        echo: Callable[[str], None] = print,
    ) -> None:
        """Initialize the application runner.

        Args:
            root: Directory whose immediate subdirectories are measured
            config_path: Optional YAML configuration file
            pattern: File pattern overriding the configuration
            include_hidden: Count hidden files (switches the setting on)
            include_readonly: Count read-only files (switches the setting on)
            include_archive: Count archive files (switches the setting on)
            log_level: Log level overriding the configuration
            echo: Callable receiving each output line
        """
        self.root: Path = root
        self.config_path: Path | None = config_path
        self.pattern: str | None = pattern
        self.include_hidden: bool = include_hidden
        self.include_readonly: bool = include_readonly
        self.include_archive: bool = include_archive
        self.log_level: str | None = log_level
        self.echo: Callable[[str], None] = echo

    def load_config(self) -> MainConfig:
        """Load the configuration file, or the defaults when none was given.

        Returns:
            Validated MainConfig

        Raises:
            ConfigurationError: If the configuration file is invalid
        """
        if self.config_path is None:
            return MainConfig()
        return load_main_config(self.config_path)

    def build_flags(self, config: MainConfig) -> InclusionFlags:
        """Combine configured inclusion flags with command-line switches.

        Args:
            config: Loaded configuration

        Returns:
            Inclusion flags for this run
        """
        configured = config.analysis.to_flags()
        return InclusionFlags(
            include_hidden=self.include_hidden or configured.include_hidden,
            include_readonly=self.include_readonly or configured.include_readonly,
            include_archive=self.include_archive or configured.include_archive,
        )

    def run(self) -> int:
        """Run the analysis and emit one line per immediate subdirectory.

        Lines are emitted as soon as each subdirectory has been measured, so
        results computed before a failure stay visible.

        Returns:
            Number of subdirectories reported

        Raises:
            ConfigurationError: If the configuration file is invalid
            RootNotFoundError: If the root directory does not exist
            SubdirectoryAccessError: If a subdirectory cannot be read
            InvalidPatternError: If the file pattern is malformed
        """
        config = self.load_config()

        configure_logging(
            log_level=self.log_level or config.application.log_level,
            log_file=config.application.log_file,
        )

        pattern = self.pattern if self.pattern is not None else config.analysis.pattern
        flags = self.build_flags(config)
        filesystem = LocalFileSystem(strategy=config.analysis.strategy)

        logger.info(
            "Starting analysis",
            extra={
                "root": str(self.root),
                "pattern": pattern,
                "strategy": config.analysis.strategy.value,
                **flags.model_dump(),
            },
        )

        reported = 0
        try:
            for result in analyze_directory(self.root, pattern, flags, filesystem):
                self.echo(format_result(result))
                reported += 1
        except DirectoryAnalyzerError as exc:
            log_with_context(
                logger,
                logging.DEBUG,
                "Analysis aborted",
                extra={"error": str(exc), "reported": reported, **exc.context},
            )
            raise

        return reported
