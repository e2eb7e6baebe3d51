"""Protocol definitions for component interfaces.

This module defines structural subtyping protocols that establish
contracts for the filesystem collaborator without requiring inheritance.
"""

from collections.abc import Iterator
from pathlib import Path
from typing import Protocol, runtime_checkable

from subdir_sizes.types.models import FileRecord


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for the filesystem consumed by the aggregation core.

    Implementations decide how files are listed and how attributes are read;
    the core only sees paths and FileRecord instances.
    """

    def directory_exists(self, path: Path) -> bool:
        """Check whether ``path`` names an existing directory.

        Args:
            path: Path to check

        Returns:
            True if ``path`` is an existing directory
        """
        ...

    def list_immediate_subdirectories(self, path: Path) -> Iterator[Path]:
        """List directories exactly one level below ``path``.

        Args:
            path: Directory to list

        Returns:
            Subdirectory paths in listing order

        Raises:
            RootNotFoundError: If ``path`` does not exist
        """
        ...

    def list_files_matching(
        self,
        path: Path,
        pattern: str,
        recursive: bool = True,
    ) -> Iterator[FileRecord]:
        """Lazily list files whose base name matches ``pattern``.

        Args:
            path: Directory to list
            pattern: Glob pattern applied to base names
            recursive: Whether to descend into subdirectories

        Returns:
            File records for matching files

        Raises:
            SubdirectoryAccessError: If a node cannot be listed or read
            InvalidPatternError: If ``pattern`` is malformed
        """
        ...
