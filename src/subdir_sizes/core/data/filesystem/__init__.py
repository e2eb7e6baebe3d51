"""Filesystem operations module for directory listing and attribute detection."""

from __future__ import annotations

from .attributes import FileAttribute, read_attributes
from .scanner import LocalFileSystem, ScanStrategy, validate_pattern

__all__ = [
    "FileAttribute",
    "LocalFileSystem",
    "ScanStrategy",
    "read_attributes",
    "validate_pattern",
]
