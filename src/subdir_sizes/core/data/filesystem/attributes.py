"""File attribute detection for filesystem operations."""

from __future__ import annotations

import os
import stat
from enum import Enum
from typing import Final


class FileAttribute(str, Enum):
    """Enumeration for the file attributes that affect inclusion."""

    HIDDEN = "hidden"
    READ_ONLY = "read_only"
    ARCHIVE = "archive"


# Write permission bits for owner, group and others
_WRITE_BITS: Final[int] = stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH

# Windows attribute bits reported in st_file_attributes
_WINDOWS_ATTRIBUTES: Final[tuple[tuple[int, FileAttribute], ...]] = (
    (stat.FILE_ATTRIBUTE_HIDDEN, FileAttribute.HIDDEN),
    (stat.FILE_ATTRIBUTE_READONLY, FileAttribute.READ_ONLY),
    (stat.FILE_ATTRIBUTE_ARCHIVE, FileAttribute.ARCHIVE),
)


def read_attributes(name: str, stat_result: os.stat_result) -> frozenset[FileAttribute]:
    """Derive the attribute set of a file from its name and stat result.

    On Windows the native attribute bits are used as-is. Elsewhere:

    - hidden: dot-prefixed name, or ``UF_HIDDEN`` in ``st_flags`` (BSD/macOS)
    - read-only: no write permission bit set in ``st_mode``
    - archive: ``SF_ARCHIVED`` in ``st_flags`` (BSD/macOS only)

    Args:
        name: Base name of the file
        stat_result: Result of ``os.stat`` for the file

    Returns:
        Frozen set of attributes carried by the file
    """
    windows_bits: int | None = getattr(stat_result, "st_file_attributes", None)
    if windows_bits is not None:
        return frozenset(
            attribute
            for bit, attribute in _WINDOWS_ATTRIBUTES
            if windows_bits & bit
        )

    attributes: set[FileAttribute] = set()
    flags: int = getattr(stat_result, "st_flags", 0)

    if name.startswith(".") or flags & stat.UF_HIDDEN:
        attributes.add(FileAttribute.HIDDEN)
    # Read-only when no write bit is set for owner, group or others,
    # regardless of which user runs the scan
    if not stat_result.st_mode & _WRITE_BITS:
        attributes.add(FileAttribute.READ_ONLY)
    if flags & stat.SF_ARCHIVED:
        attributes.add(FileAttribute.ARCHIVE)

    return frozenset(attributes)
