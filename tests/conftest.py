"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator, Mapping
from pathlib import Path

import pytest

from subdir_sizes.utils.logging import ScanContextFilter, scan_subdirectory_var
from tests.fixtures.filesystem_fakes import FakeFileSystem

# Relative path -> content; a None value creates an empty directory
TreeLayout = Mapping[str, str | None]


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None, None, None]:
    """Remove handlers installed by configure_logging() and restore the root level."""
    root_logger = logging.getLogger()
    saved_level = root_logger.level
    token = scan_subdirectory_var.set(None)
    try:
        yield
    finally:
        for handler in list(root_logger.handlers):
            if any(isinstance(f, ScanContextFilter) for f in handler.filters):
                root_logger.removeHandler(handler)
                handler.close()
        root_logger.setLevel(saved_level)
        scan_subdirectory_var.reset(token)


@pytest.fixture
def fake_fs(tmp_path: Path) -> FakeFileSystem:
    """Provide an empty in-memory filesystem rooted at a path that resolves to itself."""
    return FakeFileSystem(root=tmp_path.resolve() / "fake-root")


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[TreeLayout], Path]:
    """Provide a builder for real directory trees below ``tmp_path``.

    Returns:
        Function taking a mapping of relative paths to file contents and
        returning the resolved root of the created tree
    """

    def build(layout: TreeLayout) -> Path:
        root = tmp_path.resolve() / "root"
        root.mkdir(exist_ok=True)
        for relative, content in layout.items():
            path = root / relative
            if content is None:
                path.mkdir(parents=True, exist_ok=True)
            else:
                path.parent.mkdir(parents=True, exist_ok=True)
                _ = path.write_text(content)
        return root

    return build
