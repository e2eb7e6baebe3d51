"""Shared data models and protocols."""

from subdir_sizes.types.models import DirectorySize, FileRecord
from subdir_sizes.types.protocols import FileSystem

__all__ = [
    "DirectorySize",
    "FileRecord",
    "FileSystem",
]
