"""Logging infrastructure with per-subdirectory scan context.

This module configures application logging for subdir-sizes. Log output goes
to stderr (and optionally a file) so that stdout carries only result lines.
The subdirectory currently being measured is tracked in a ContextVar and
added to every log record by ScanContextFilter.
"""

import contextvars
import logging
import sys
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Final

from typing_extensions import override

# Subdirectory currently being aggregated, set by the driver
scan_subdirectory_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "scan_subdirectory",
    default=None,
)

# Log format constants
DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - [%(subdirectory)s] - %(message)s"

NO_SUBDIRECTORY: Final[str] = "-"


class ScanContextFilter(logging.Filter):
    """Logging filter that adds the current subdirectory to log records.

    Reads the subdirectory from the ContextVar set by scan_context() and
    stores it as ``record.subdirectory`` so formatters can reference
    ``%(subdirectory)s``.
    """

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        """Add the current subdirectory to the log record.

        Args:
            record: Log record to enhance

        Returns:
            True to allow the record to be logged
        """
        subdirectory = scan_subdirectory_var.get()
        record.subdirectory = subdirectory if subdirectory is not None else NO_SUBDIRECTORY
        return True


def configure_logging(
    *,
    log_level: str = "WARNING",
    log_file: Path | None = None,
) -> None:
    """Configure application logging.

    Sets up the root logger with:
    - Console output on stderr
    - Optional file output
    - Scan context on every record

    Calling it again replaces the handlers installed by a previous call.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file to append log records to

    Example:
        >>> configure_logging(log_level="DEBUG")
        >>> logging.getLogger(__name__).debug("Listing subdirectories")
    """
    root_logger = logging.getLogger()

    level = getattr(logging, log_level.upper(), logging.WARNING)
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    context_filter = ScanContextFilter()
    formatter = logging.Formatter(DEFAULT_LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(context_filter)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.addFilter(context_filter)
        root_logger.addHandler(file_handler)


@contextmanager
def scan_context(subdirectory: Path) -> Iterator[None]:
    """Tag log records emitted inside the block with ``subdirectory``.

    Args:
        subdirectory: Subdirectory being aggregated

    Example:
        >>> with scan_context(Path("/srv/data/archive")):
        ...     logger.debug("Aggregating")  # logged with [/srv/data/archive]
    """
    token = scan_subdirectory_var.set(str(subdirectory))
    try:
        yield
    finally:
        scan_subdirectory_var.reset(token)


def get_scan_subdirectory() -> str | None:
    """Get the subdirectory currently being aggregated, if any."""
    return scan_subdirectory_var.get()


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    *,
    extra: Mapping[str, object] | None = None,
) -> None:
    """Log a message with additional context fields.

    Args:
        logger: Logger instance to use
        level: Logging level (e.g., logging.INFO)
        message: Log message
        extra: Additional context fields to include in log
    """
    context = dict(extra) if extra else {}

    subdirectory = get_scan_subdirectory()
    if subdirectory:
        context["scan_subdirectory"] = subdirectory

    logger.log(level, message, extra=context)
