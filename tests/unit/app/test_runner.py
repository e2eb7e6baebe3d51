"""Tests for the application runner."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from subdir_sizes.app.runner import ApplicationRunner
from subdir_sizes.core.config import ConfigurationError, MainConfig
from subdir_sizes.core.exceptions import InvalidPatternError, RootNotFoundError, SubdirectoryAccessError
from subdir_sizes.core.inclusion import InclusionFlags

TreeBuilder = Callable[[dict[str, str | None]], Path]


def _write_config(path: Path, text: str) -> Path:
    _ = path.write_text(text)
    return path


@pytest.mark.unit
class TestApplicationRunner:
    """Test suite for ApplicationRunner."""

    def test_run_emits_one_line_per_subdirectory(self, make_tree: TreeBuilder) -> None:
        """Test the lines emitted for a small tree."""
        root = make_tree({
            "alpha/a.txt": "x" * 100,
            "alpha/.b.txt": "x" * 50,
            "beta": None,
        })
        lines: list[str] = []

        reported = ApplicationRunner(root, echo=lines.append).run()

        assert reported == 2
        assert sorted(lines) == [
            f"Directory: {root / 'alpha'}, Size: 100 bytes",
            f"Directory: {root / 'beta'}, Size: 0 bytes",
        ]

    def test_cli_switches_enable_flags(self, make_tree: TreeBuilder) -> None:
        """Test that include switches reach the analysis."""
        root = make_tree({"alpha/a.txt": "x" * 100, "alpha/.b.txt": "x" * 50})
        lines: list[str] = []

        _ = ApplicationRunner(root, include_hidden=True, echo=lines.append).run()

        assert lines == [f"Directory: {root / 'alpha'}, Size: 150 bytes"]

    def test_pattern_override(self, make_tree: TreeBuilder) -> None:
        """Test that a command-line pattern beats the configured one."""
        root = make_tree({"alpha/a.txt": "x" * 10, "alpha/b.log": "x" * 20})
        config_path = _write_config(root.parent / "config.yaml", "analysis:\n  pattern: '*.txt'\n")
        lines: list[str] = []

        _ = ApplicationRunner(root, config_path=config_path, pattern="*.log", echo=lines.append).run()

        assert lines == [f"Directory: {root / 'alpha'}, Size: 20 bytes"]

    def test_configured_pattern_used_without_override(self, make_tree: TreeBuilder) -> None:
        """Test that the configured pattern applies when none is given."""
        root = make_tree({"alpha/a.txt": "x" * 10, "alpha/b.log": "x" * 20})
        config_path = _write_config(root.parent / "config.yaml", "analysis:\n  pattern: '*.txt'\n")
        lines: list[str] = []

        _ = ApplicationRunner(root, config_path=config_path, echo=lines.append).run()

        assert lines == [f"Directory: {root / 'alpha'}, Size: 10 bytes"]

    def test_build_flags_combines_config_and_switches(self) -> None:
        """Test that switches can only turn flags on."""
        config = MainConfig.model_validate({"analysis": {"include_archive": True}})
        runner = ApplicationRunner(Path("/srv/data"), include_hidden=True)

        assert runner.build_flags(config) == InclusionFlags(include_hidden=True, include_archive=True)

    def test_load_config_defaults_without_file(self) -> None:
        """Test that no configuration file means defaults."""
        assert ApplicationRunner(Path("/srv/data")).load_config() == MainConfig()

    def test_log_level_override(self, make_tree: TreeBuilder) -> None:
        """Test that the command-line level beats the configured one."""
        root = make_tree({"alpha": None})
        config_path = _write_config(root.parent / "config.yaml", "application:\n  log_level: ERROR\n")

        _ = ApplicationRunner(root, config_path=config_path, log_level="DEBUG", echo=lambda _line: None).run()

        assert logging.getLogger().level == logging.DEBUG

    def test_log_file_written(self, make_tree: TreeBuilder) -> None:
        """Test that a configured log file receives the run's records."""
        root = make_tree({"alpha/a.txt": "x"})
        log_file = root.parent / "sizes.log"
        config_path = _write_config(
            root.parent / "config.yaml",
            f"application:\n  log_level: DEBUG\n  log_file: {log_file}\n",
        )

        _ = ApplicationRunner(root, config_path=config_path, echo=lambda _line: None).run()
        for handler in logging.getLogger().handlers:
            handler.flush()

        text = log_file.read_text()
        assert "Starting analysis" in text
        assert f"[{root / 'alpha'}] - Aggregating subdirectory size" in text

    def test_missing_root(self, tmp_path: Path) -> None:
        """Test that a missing root fails without output."""
        lines: list[str] = []

        with pytest.raises(RootNotFoundError):
            _ = ApplicationRunner(tmp_path / "missing", echo=lines.append).run()

        assert lines == []

    def test_invalid_pattern(self, make_tree: TreeBuilder) -> None:
        """Test that a malformed pattern fails once a subdirectory is scanned."""
        root = make_tree({"alpha": None})

        with pytest.raises(InvalidPatternError):
            _ = ApplicationRunner(root, pattern="a/b", echo=lambda _line: None).run()

    def test_lines_before_failure_are_emitted(
        self,
        make_tree: TreeBuilder,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that a failing subdirectory keeps earlier lines."""
        root = make_tree({"alpha/a.txt": "x", "beta/b.txt": "y"})
        lines: list[str] = []

        from subdir_sizes.core import driver

        calls: list[Path] = []
        real_aggregate = driver.aggregate_size

        def aggregate_size(subdirectory: Path, *args: object) -> int:
            calls.append(subdirectory)
            if len(calls) == 2:
                raise SubdirectoryAccessError(subdirectory, "Permission denied")
            return real_aggregate(subdirectory, *args)  # pyright: ignore[reportArgumentType]

        monkeypatch.setattr(driver, "aggregate_size", aggregate_size)

        with pytest.raises(SubdirectoryAccessError):
            _ = ApplicationRunner(root, echo=lines.append).run()

        assert lines == [f"Directory: {calls[0]}, Size: 1 bytes"]

    def test_invalid_config(self, tmp_path: Path) -> None:
        """Test that configuration errors propagate."""
        config_path = _write_config(tmp_path / "config.yaml", "analysis:\n  unknown: 1\n")

        with pytest.raises(ConfigurationError):
            _ = ApplicationRunner(tmp_path, config_path=config_path).run()
