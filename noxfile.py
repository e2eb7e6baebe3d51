"""Nox sessions for multi-environment testing and quality assurance."""

import nox

PYTHON_VERSIONS = ["3.12", "3.13"]


def _sync(session: nox.Session) -> None:
    """Install the project with its test extra into the uv environment."""
    session.run("uv", "sync", "--extra", "test", external=True)


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run test suite with coverage reporting.

    Args:
        session: The nox session object.
    """
    _sync(session)
    session.run(
        "pytest",
        "--cov=subdir_sizes",
        "--cov-report=term-missing:skip-covered",
        "--cov-report=html",
        "--cov-fail-under=85",
        *session.posargs,
    )


@nox.session(python=PYTHON_VERSIONS[-1])
def unit(session: nox.Session) -> None:
    """Run only the fast unit tests, without coverage.

    Args:
        session: The nox session object.
    """
    _sync(session)
    session.run("pytest", "-m", "unit", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def doctests(session: nox.Session) -> None:
    """Run the examples embedded in module docstrings.

    Args:
        session: The nox session object.
    """
    _sync(session)
    session.run("pytest", "--doctest-modules", "src/subdir_sizes/core/inclusion.py")


@nox.session(python=PYTHON_VERSIONS[-1])
def lint(session: nox.Session) -> None:
    """Run ruff linting and formatting checks.

    Args:
        session: The nox session object.
    """
    _sync(session)
    session.run("uvx", "ruff", "check", ".", external=True)
    session.run("uvx", "ruff", "format", "--check", ".", external=True)


@nox.session(python=PYTHON_VERSIONS[-1])
def typecheck(session: nox.Session) -> None:
    """Run basedpyright type checking.

    Args:
        session: The nox session object.
    """
    _sync(session)
    session.run("uvx", "basedpyright@latest", external=True)


@nox.session(python=PYTHON_VERSIONS[-1])
def check_isolation(session: nox.Session) -> None:
    """Check that core modules stay independent of the application layer.

    Enforces the architectural rule that core/, types/, and utils/
    never import the CLI, and that the filter and aggregator stay silent.

    Args:
        session: The nox session object.
    """
    session.run("python3", "scripts/check_core_isolation.py", external=True)
