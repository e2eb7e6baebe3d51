"""Command-line interface for subdir-sizes."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

import click
from click.core import ParameterSource

from subdir_sizes.core.config import ConfigurationError
from subdir_sizes.core.exceptions import DirectoryAnalyzerError

try:
    __version__ = version("subdir-sizes")
except PackageNotFoundError:
    __version__ = "unknown"

VALID_CONFIG_EXTENSIONS = {'.yaml', '.yml'}

VALID_LOG_LEVELS = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}


def validate_config_path(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: Path | None,
) -> Path | None:
    """Validate configuration file path.

    Args:
        ctx: Click context (required by Click callback signature)
        param: Click parameter (required by Click callback signature)
        value: Path value to validate

    Returns:
        Validated Path object

    Raises:
        click.BadParameter: If validation fails
    """
    if value is None:
        return value

    if value.exists() and value.is_dir():
        raise click.BadParameter('Configuration path must be a file, not a directory')

    if value.suffix.lower() not in VALID_CONFIG_EXTENSIONS:
        extensions_str = ", ".join(sorted(VALID_CONFIG_EXTENSIONS))
        raise click.BadParameter(
            f'Invalid configuration file extension. Supported extensions: {extensions_str}'
        )

    return value


def validate_log_level(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: str | None,
) -> str | None:
    """Validate and normalize log level.

    Args:
        ctx: Click context (required by Click callback signature)
        param: Click parameter (required by Click callback signature)
        value: Log level value to validate

    Returns:
        Normalized log level (uppercase)

    Raises:
        click.BadParameter: If validation fails
    """
    if value is None:
        return value

    normalized_value = value.upper().strip()

    if normalized_value not in VALID_LOG_LEVELS:
        raise click.BadParameter(
            f'Invalid log level "{value}". Valid options: {", ".join(sorted(VALID_LOG_LEVELS))}'
        )

    return normalized_value


def _invoked_without_arguments(ctx: click.Context) -> bool:
    """Check whether every parameter still holds its default value."""
    return all(
        ctx.get_parameter_source(name) in (None, ParameterSource.DEFAULT)
        for name in ctx.params
    )


@click.command()
@click.option(
    '--dir', 'directory',
    type=str,
    default=None,
    help='Specifies the directory to analyze.'
)
@click.option(
    '--pattern', '-p',
    type=str,
    default=None,
    help="Specifies the file pattern to match (default is '*')."
)
@click.option(
    '--include-hidden',
    is_flag=True,
    help='Includes hidden files in the analysis.'
)
@click.option(
    '--include-readonly',
    is_flag=True,
    help='Includes read-only files in the analysis.'
)
@click.option(
    '--include-archive',
    is_flag=True,
    help='Includes archive files in the analysis.'
)
@click.option(
    '--config', '-c',
    type=click.Path(path_type=Path),
    default=None,
    callback=validate_config_path,
    help='Optional configuration file (.yaml, .yml). Command-line options take precedence.'
)
@click.option(
    '--log-level', '-l',
    type=str,
    default=None,
    callback=validate_log_level,
    help='Logging verbosity level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Logs go to stderr.'
)
@click.version_option(version=__version__, prog_name='subdir-sizes')
@click.pass_context
def cli(
    ctx: click.Context,
    directory: str | None,
    pattern: str | None,
    include_hidden: bool,
    include_readonly: bool,
    include_archive: bool,
    config: Path | None,
    log_level: str | None,
) -> None:
    """Report the size of every immediate subdirectory of a directory.

    Each subdirectory's whole subtree is scanned and the sizes of the files
    whose name matches the pattern are summed. Hidden, read-only and
    archive files are left out unless explicitly included.

    Examples:

        # Sizes of all subdirectories of /srv/data
        subdir-sizes --dir=/srv/data

        # Only log files, hidden ones included
        subdir-sizes --dir=/srv/data --pattern='*.log' --include-hidden
    """
    if _invoked_without_arguments(ctx):
        click.echo(ctx.get_help())
        ctx.exit(0)

    if not directory:
        raise click.UsageError('Directory path is required.', ctx=ctx)

    from subdir_sizes.app.runner import ApplicationRunner

    runner = ApplicationRunner(
        Path(directory),
        config_path=config,
        pattern=pattern,
        include_hidden=include_hidden,
        include_readonly=include_readonly,
        include_archive=include_archive,
        log_level=log_level,
        echo=click.echo,
    )

    try:
        _ = runner.run()
    except ConfigurationError as e:
        raise click.ClickException(f"Configuration error:\n{e}") from e
    except (DirectoryAnalyzerError, OSError) as e:
        raise click.ClickException(str(e)) from e


if __name__ == '__main__':
    cli()
