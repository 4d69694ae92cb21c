"""Nox sessions for Inventory Catalog."""

import nox  # pyright: ignore[reportMissingImports] # noqa: I001

nox.options.default_venv_backend = "uv"
nox.options.sessions = ["lint", "format_check", "mypy", "tests"]

PYTHON_VERSIONS = ["3.12", "3.13"]
CODE_PATHS = ["inventory_catalog/", "tests/"]


@nox.session(python=PYTHON_VERSIONS)
def lint(session: nox.Session) -> None:
    """Run ruff check."""
    session.install("-e", ".[dev]")
    session.run("ruff", "check", *CODE_PATHS, *session.posargs)


@nox.session(python=PYTHON_VERSIONS)
def format_check(session: nox.Session) -> None:
    """Fail if ruff format would change anything."""
    session.install("-e", ".[dev]")
    session.run("ruff", "format", "--check", "--diff", *CODE_PATHS)


@nox.session(python=PYTHON_VERSIONS[0])
def format(session: nox.Session) -> None:
    """Reformat the code base in place."""
    session.install("-e", ".[dev]")
    session.run("ruff", "format", *CODE_PATHS)


@nox.session(python=PYTHON_VERSIONS)
def mypy(session: nox.Session) -> None:
    """Type check the package and tests."""
    session.install("-e", ".[dev]")
    session.run("mypy", *CODE_PATHS)


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run pytest; extra arguments are passed through, e.g. ``-- -n 4``."""
    session.install("-e", ".[test]")
    session.run("pytest", *session.posargs)
