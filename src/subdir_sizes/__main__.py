"""Entry point for ``python -m subdir_sizes`` and the ``subdir-sizes`` script."""

from __future__ import annotations

from subdir_sizes.app.cli import cli

__all__ = ["main"]


def main() -> None:
    """Run the command-line interface.

    Exit Codes:
        0: Success, or help/version displayed
        1: Analysis or configuration error
        2: Command-line usage error, such as a missing or empty --dir
           or an unknown option

    Error messages go to stderr, so stdout carries only result lines.
    """
    cli(prog_name="subdir-sizes")


if __name__ == "__main__":
    main()
