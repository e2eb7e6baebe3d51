"""Tests for file attribute detection."""

from __future__ import annotations

import os
import stat
from types import SimpleNamespace

import pytest

from subdir_sizes.core.data.filesystem.attributes import FileAttribute, read_attributes


def _stat(mode: int, **extra: int) -> os.stat_result:
    """Build a minimal stat-like object carrying only the fields used."""
    return SimpleNamespace(st_mode=mode, **extra)  # pyright: ignore[reportReturnType] # duck-typed stat result


@pytest.mark.unit
class TestReadAttributesPosix:
    """Test suite for attribute detection on POSIX-style stat results."""

    def test_plain_writable_file(self) -> None:
        """Test that a normal file has no attributes."""
        assert read_attributes("report.txt", _stat(stat.S_IFREG | 0o644)) == frozenset()

    def test_dot_file_is_hidden(self) -> None:
        """Test the leading-dot convention."""
        assert read_attributes(".bashrc", _stat(stat.S_IFREG | 0o644)) == {FileAttribute.HIDDEN}

    def test_hidden_flag_is_hidden(self) -> None:
        """Test the BSD/macOS UF_HIDDEN flag."""
        attributes = read_attributes("visible.txt", _stat(stat.S_IFREG | 0o644, st_flags=stat.UF_HIDDEN))

        assert attributes == {FileAttribute.HIDDEN}

    @pytest.mark.parametrize("mode", [0o444, 0o555, 0o400, 0o000])
    def test_no_write_bits_is_read_only(self, mode: int) -> None:
        """Test that a file nobody may write is read-only."""
        assert read_attributes("data.bin", _stat(stat.S_IFREG | mode)) == {FileAttribute.READ_ONLY}

    @pytest.mark.parametrize("mode", [0o644, 0o464, 0o446, 0o200])
    def test_any_write_bit_is_writable(self, mode: int) -> None:
        """Test that a single write bit is enough."""
        assert FileAttribute.READ_ONLY not in read_attributes("data.bin", _stat(stat.S_IFREG | mode))

    def test_owner_of_file_does_not_matter(self) -> None:
        """Test that ownership by another user leaves the write bits deciding."""
        foreign_writable = _stat(stat.S_IFREG | 0o200, st_uid=os.getuid() + 1)
        foreign_locked = _stat(stat.S_IFREG | 0o444, st_uid=os.getuid() + 1)

        assert FileAttribute.READ_ONLY not in read_attributes("data.bin", foreign_writable)
        assert read_attributes("data.bin", foreign_locked) == {FileAttribute.READ_ONLY}

    def test_archived_flag_is_archive(self) -> None:
        """Test the BSD/macOS SF_ARCHIVED flag."""
        attributes = read_attributes("backup.tar", _stat(stat.S_IFREG | 0o644, st_flags=stat.SF_ARCHIVED))

        assert attributes == {FileAttribute.ARCHIVE}

    def test_attributes_combine(self) -> None:
        """Test a hidden, read-only, archived file."""
        attributes = read_attributes(".backup", _stat(stat.S_IFREG | 0o444, st_flags=stat.SF_ARCHIVED))

        assert attributes == frozenset(FileAttribute)


@pytest.mark.unit
class TestReadAttributesWindows:
    """Test suite for attribute detection from Windows attribute bits."""

    @pytest.mark.parametrize(
        ("bits", "expected"),
        [
            (stat.FILE_ATTRIBUTE_NORMAL, frozenset()),
            (stat.FILE_ATTRIBUTE_HIDDEN, {FileAttribute.HIDDEN}),
            (stat.FILE_ATTRIBUTE_READONLY, {FileAttribute.READ_ONLY}),
            (stat.FILE_ATTRIBUTE_ARCHIVE, {FileAttribute.ARCHIVE}),
            (
                stat.FILE_ATTRIBUTE_HIDDEN | stat.FILE_ATTRIBUTE_ARCHIVE,
                {FileAttribute.HIDDEN, FileAttribute.ARCHIVE},
            ),
        ],
    )
    def test_native_bits_used(self, bits: int, expected: set[FileAttribute]) -> None:
        """Test that each native bit maps to its attribute."""
        attributes = read_attributes("file.txt", _stat(stat.S_IFREG | 0o666, st_file_attributes=bits))

        assert attributes == expected

    def test_name_and_mode_ignored(self) -> None:
        """Test that POSIX conventions do not apply when native bits exist."""
        attributes = read_attributes(
            ".config",
            _stat(stat.S_IFREG | 0o444, st_file_attributes=stat.FILE_ATTRIBUTE_NORMAL),
        )

        assert attributes == frozenset()
