"""Error taxonomy for directory analysis."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class DirectoryAnalyzerError(Exception):
    """Base exception for all directory analysis errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:  # pyright: ignore[reportAny] # Flexible error context
        """Initialize DirectoryAnalyzerError.

        Args:
            message: Error message
            context: Additional context information for debugging
        """
        super().__init__(message)
        self.context: dict[str, Any] = context or {}  # pyright: ignore[reportAny] # Flexible error context


class RootNotFoundError(DirectoryAnalyzerError):
    """Exception raised when the root path is not an existing directory."""

    def __init__(self, root: Path) -> None:
        """Initialize RootNotFoundError.

        Args:
            root: Root path supplied by the caller
        """
        super().__init__(
            f"The directory '{root}' does not exist.",
            context={"root": str(root)},
        )
        self.root: Path = root


class SubdirectoryAccessError(DirectoryAnalyzerError):
    """Exception raised when a subdirectory or a descendant cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        """Initialize SubdirectoryAccessError.

        Args:
            path: Path that could not be listed or read
            reason: Short description of the failure
        """
        super().__init__(
            f"Cannot read '{path}': {reason}",
            context={"path": str(path)},
        )
        self.path: Path = path

    @classmethod
    def from_os_error(cls, path: Path, error: OSError) -> SubdirectoryAccessError:
        """Wrap an ``OSError`` raised while reading ``path``.

        Args:
            path: Path being read when the error occurred
            error: Original error

        Returns:
            New SubdirectoryAccessError describing ``error``; callers raise
            it ``from error``
        """
        return cls(path, error.strerror or str(error))


class InvalidPatternError(DirectoryAnalyzerError):
    """Exception raised for a malformed file name pattern."""

    def __init__(self, pattern: str, reason: str) -> None:
        """Initialize InvalidPatternError.

        Args:
            pattern: Offending pattern
            reason: Why the pattern was rejected
        """
        super().__init__(
            f"Invalid file pattern {pattern!r}: {reason}",
            context={"pattern": pattern},
        )
        self.pattern: str = pattern
