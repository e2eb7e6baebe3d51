"""subdir-sizes - Report the size of every immediate subdirectory of a directory.

Each subdirectory's subtree is scanned for files whose base name matches a
glob pattern; files carrying the hidden, read-only or archive attribute are
left out unless the caller includes them.
"""

from subdir_sizes.core.aggregator import aggregate_size
from subdir_sizes.core.driver import analyze_directory, format_result
from subdir_sizes.core.inclusion import InclusionFlags, should_include

__all__ = [
    "InclusionFlags",
    "aggregate_size",
    "analyze_directory",
    "format_result",
    "should_include",
]
