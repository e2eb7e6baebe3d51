"""Local filesystem scanner for directory size analysis."""

from __future__ import annotations

import fnmatch
import os
from collections import deque
from collections.abc import Iterator
from enum import Enum
from pathlib import Path

from subdir_sizes.core.exceptions import (
    InvalidPatternError,
    RootNotFoundError,
    SubdirectoryAccessError,
)
from subdir_sizes.types.models import FileRecord

from .attributes import read_attributes


class ScanStrategy(str, Enum):
    """Enumeration for directory scanning strategies."""

    DEPTH_FIRST = "depth_first"
    BREADTH_FIRST = "breadth_first"


def validate_pattern(pattern: str) -> str:
    """Check that a file pattern can only ever match base names.

    Args:
        pattern: Glob pattern to validate

    Returns:
        The pattern, unchanged

    Raises:
        InvalidPatternError: If the pattern is empty, names a parent
            directory, or contains a path separator or NUL character
    """
    if not pattern:
        raise InvalidPatternError(pattern, "pattern must not be empty")
    if "\0" in pattern:
        raise InvalidPatternError(pattern, "pattern must not contain NUL characters")

    separators = {"/", os.sep}
    if os.altsep:
        separators.add(os.altsep)
    if any(separator in pattern for separator in separators):
        raise InvalidPatternError(pattern, "pattern must not contain a path separator")

    if pattern == "..":
        raise InvalidPatternError(pattern, "pattern must not name a parent directory")

    return pattern


class LocalFileSystem:
    """Filesystem collaborator backed by ``os.scandir``.

    Provides lazy file listing with:
    - Glob matching on base names only (``fnmatch`` semantics)
    - Depth-first or breadth-first traversal
    - Symlinks never followed as directories
    - Read errors surfaced as SubdirectoryAccessError, never skipped
    """

    def __init__(self, strategy: ScanStrategy = ScanStrategy.DEPTH_FIRST) -> None:
        """Initialize the local filesystem scanner.

        Args:
            strategy: Traversal order used for recursive listings
        """
        self.strategy: ScanStrategy = strategy

    def directory_exists(self, path: Path) -> bool:
        """Check whether ``path`` is an existing directory."""
        return path.is_dir()

    def list_immediate_subdirectories(self, path: Path) -> Iterator[Path]:
        """Yield directories exactly one level below ``path``.

        Args:
            path: Directory to list

        Yields:
            Subdirectory paths in the order ``os.scandir`` returns them

        Raises:
            RootNotFoundError: If ``path`` is not an existing directory
            SubdirectoryAccessError: If ``path`` cannot be listed
        """
        if not self.directory_exists(path):
            raise RootNotFoundError(path)

        for entry in self._entries(path):
            if self._is_directory(entry):
                yield Path(entry.path)

    def list_files_matching(
        self,
        path: Path,
        pattern: str,
        recursive: bool = True,
    ) -> Iterator[FileRecord]:
        """Yield a record for each file whose base name matches ``pattern``.

        Directory names are never matched against the pattern; every
        directory is descended into when ``recursive`` is set.

        Args:
            path: Directory to list
            pattern: Glob pattern applied to base names
            recursive: Whether to descend into subdirectories

        Yields:
            FileRecord for every matching regular file

        Raises:
            InvalidPatternError: If ``pattern`` is malformed
            SubdirectoryAccessError: If any directory or file cannot be read
        """
        _ = validate_pattern(pattern)

        if self.strategy == ScanStrategy.BREADTH_FIRST:
            yield from self._scan_breadth_first(path, pattern, recursive)
        else:
            yield from self._scan_depth_first(path, pattern, recursive)

    def _scan_depth_first(self, path: Path, pattern: str, recursive: bool) -> Iterator[FileRecord]:
        """Perform depth-first traversal, files of a directory before its children.

        Args:
            path: Directory path to scan
            pattern: Glob pattern applied to base names
            recursive: Whether to descend into subdirectories

        Yields:
            FileRecord for every matching file
        """
        subdirectories: list[Path] = []
        for entry in self._entries(path):
            if self._is_directory(entry):
                if recursive:
                    subdirectories.append(Path(entry.path))
                continue

            record = self._to_record(entry, pattern)
            if record is not None:
                yield record

        for subdirectory in subdirectories:
            yield from self._scan_depth_first(subdirectory, pattern, recursive)

    def _scan_breadth_first(self, path: Path, pattern: str, recursive: bool) -> Iterator[FileRecord]:
        """Perform breadth-first traversal.

        Args:
            path: Root directory to scan
            pattern: Glob pattern applied to base names
            recursive: Whether to descend into subdirectories

        Yields:
            FileRecord for every matching file
        """
        queue: deque[Path] = deque([path])

        while queue:
            current_path = queue.popleft()
            for entry in self._entries(current_path):
                if self._is_directory(entry):
                    if recursive:
                        queue.append(Path(entry.path))
                    continue

                record = self._to_record(entry, pattern)
                if record is not None:
                    yield record

    def _entries(self, path: Path) -> Iterator[os.DirEntry[str]]:
        """Yield the entries of one directory, closing the handle afterwards.

        Args:
            path: Directory to list

        Yields:
            Directory entries

        Raises:
            SubdirectoryAccessError: If the directory cannot be opened or read
        """
        try:
            with os.scandir(path) as entries:
                yield from entries
        except OSError as exc:
            raise SubdirectoryAccessError.from_os_error(path, exc) from exc

    def _is_directory(self, entry: os.DirEntry[str]) -> bool:
        """Check if an entry is a real directory (symlinks are not followed).

        Args:
            entry: Directory entry to check

        Returns:
            True if the entry is a directory and not a symlink to one
        """
        try:
            return entry.is_dir(follow_symlinks=False)
        except OSError as exc:
            raise SubdirectoryAccessError.from_os_error(Path(entry.path), exc) from exc

    def _to_record(self, entry: os.DirEntry[str], pattern: str) -> FileRecord | None:
        """Build a FileRecord for a matching regular file.

        Symlinks to regular files are reported with their target's size and
        attributes; dangling symlinks and special files yield None.

        Args:
            entry: Non-directory entry
            pattern: Glob pattern applied to the entry's base name

        Returns:
            FileRecord, or None if the entry does not match or is not a file
        """
        if not fnmatch.fnmatch(entry.name, pattern):
            return None

        try:
            if not entry.is_file():
                return None
            stat_result = entry.stat()
        except OSError as exc:
            raise SubdirectoryAccessError.from_os_error(Path(entry.path), exc) from exc

        return FileRecord(
            path=Path(entry.path),
            size=stat_result.st_size,
            attributes=read_attributes(entry.name, stat_result),
        )
