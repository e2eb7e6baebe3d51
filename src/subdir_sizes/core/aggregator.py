"""Size aggregation for a single subdirectory subtree."""

from __future__ import annotations

from pathlib import Path

from subdir_sizes.core.data.filesystem.scanner import LocalFileSystem
from subdir_sizes.core.inclusion import InclusionFlags, should_include
from subdir_sizes.types.protocols import FileSystem


def aggregate_size(
    subdirectory: Path,
    pattern: str = "*",
    flags: InclusionFlags | None = None,
    filesystem: FileSystem | None = None,
) -> int:
    """Sum the sizes of matching, included files under ``subdirectory``.

    Every file in the whole subtree whose base name matches ``pattern`` is
    checked against the inclusion flags; sizes of the files that pass are
    added to a total starting at zero. Files that do not match the pattern
    are never filtered and never counted.

    Errors are not caught here: the first unreadable node aborts the sum.

    Args:
        subdirectory: Root of the subtree to measure
        pattern: Glob pattern applied to file base names
        flags: Attribute inclusion flags (defaults exclude every attribute)
        filesystem: Filesystem collaborator (defaults to LocalFileSystem)

    Returns:
        Total size in bytes, 0 when nothing matches

    Raises:
        SubdirectoryAccessError: If the subtree or one of its files cannot be
            read, including when ``subdirectory`` no longer exists
        InvalidPatternError: If ``pattern`` is malformed

    Examples:
        >>> aggregate_size(Path("/srv/data/projects"), "*.log")  # doctest: +SKIP
        40960
    """
    if flags is None:
        flags = InclusionFlags()
    if filesystem is None:
        filesystem = LocalFileSystem()

    total_size = 0
    for record in filesystem.list_files_matching(subdirectory, pattern, recursive=True):
        if should_include(record.attributes, flags):
            total_size += record.size
    return total_size
