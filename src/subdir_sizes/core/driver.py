"""Per-subdirectory size analysis of a root directory.

The driver lists the immediate subdirectories of the root and runs the
aggregator once for each of them, in listing order. Aggregation errors are
not caught: the first failing subdirectory aborts the whole analysis.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Final

from subdir_sizes.core.aggregator import aggregate_size
from subdir_sizes.core.data.filesystem.scanner import LocalFileSystem
from subdir_sizes.core.exceptions import RootNotFoundError
from subdir_sizes.core.inclusion import InclusionFlags
from subdir_sizes.types.models import DirectorySize
from subdir_sizes.types.protocols import FileSystem
from subdir_sizes.utils.logging import scan_context

logger = logging.getLogger(__name__)

RESULT_FORMAT: Final[str] = "Directory: {path}, Size: {size} bytes"


def analyze_directory(
    root: Path,
    pattern: str = "*",
    flags: InclusionFlags | None = None,
    filesystem: FileSystem | None = None,
) -> Iterator[DirectorySize]:
    """Measure every immediate subdirectory of ``root``.

    The root is checked before anything is listed, so a missing root fails
    at call time rather than on the first iteration. Results are then
    computed lazily, one subdirectory per iteration.

    Args:
        root: Directory whose immediate subdirectories are measured
        pattern: Glob pattern applied to file base names
        flags: Attribute inclusion flags shared by every subdirectory
        filesystem: Filesystem collaborator (defaults to LocalFileSystem)

    Returns:
        Iterator of DirectorySize results in listing order

    Raises:
        RootNotFoundError: If ``root`` is not an existing directory

    Examples:
        >>> for result in analyze_directory(Path("/srv/data")):  # doctest: +SKIP
        ...     print(format_result(result))
        Directory: /srv/data/archive, Size: 1048576 bytes
    """
    if flags is None:
        flags = InclusionFlags()
    if filesystem is None:
        filesystem = LocalFileSystem()

    root = root.expanduser()
    if not filesystem.directory_exists(root):
        raise RootNotFoundError(root)

    return _iter_results(root.resolve(), pattern, flags, filesystem)


def _iter_results(
    root: Path,
    pattern: str,
    flags: InclusionFlags,
    filesystem: FileSystem,
) -> Iterator[DirectorySize]:
    """Yield one DirectorySize per immediate subdirectory of ``root``."""
    logger.info(
        "Analyzing directory",
        extra={"root": str(root), "pattern": pattern},
    )

    analyzed = 0
    for subdirectory in filesystem.list_immediate_subdirectories(root):
        with scan_context(subdirectory):
            logger.debug("Aggregating subdirectory size")
            size = aggregate_size(subdirectory, pattern, flags, filesystem)
            logger.debug("Subdirectory size aggregated", extra={"size": size})
        analyzed += 1
        yield DirectorySize(path=subdirectory, size=size)

    logger.info(
        "Directory analysis complete",
        extra={"root": str(root), "subdirectories": analyzed},
    )


def format_result(result: DirectorySize) -> str:
    """Render a result as a single output line.

    Args:
        result: Result to render

    Returns:
        Line of the form ``Directory: <path>, Size: <size> bytes``
    """
    return RESULT_FORMAT.format(path=result.path, size=result.size)
