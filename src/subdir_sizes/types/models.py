"""Data models for subdir-sizes.

This module defines the dataclasses passed between the filesystem
collaborator, the aggregation core and the driver.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from subdir_sizes.core.data.filesystem.attributes import FileAttribute


@dataclass(slots=True, frozen=True)
class FileRecord:
    """A file seen during traversal.

    Produced per visited file and discarded once it has been filtered and
    counted.
    """

    path: Path
    size: int  # bytes
    attributes: frozenset[FileAttribute]


@dataclass(slots=True, frozen=True)
class DirectorySize:
    """Accumulated size of one immediate subdirectory of the root."""

    path: Path
    size: int  # bytes
