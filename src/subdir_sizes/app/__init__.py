"""Application module for subdir-sizes."""

from __future__ import annotations

from subdir_sizes.app.cli import cli
from subdir_sizes.app.runner import ApplicationRunner

__all__ = [
    "cli",
    "ApplicationRunner",
]
