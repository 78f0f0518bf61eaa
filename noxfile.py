"""Nox sessions for the sorveteria quality checks."""

import nox  # pyright: ignore[reportMissingImports] # noqa: I001

nox.options.default_venv_backend = "uv"
nox.options.sessions = ["lint", "format_check", "mypy", "djlint_check", "tests"]

PYTHON_VERSIONS = ["3.12", "3.13"]

LINT_TOOL = ["uv", "tool", "run", "ruff", "check"]
FORMAT_TOOL = ["uv", "tool", "run", "ruff", "format"]
TYPECHECK_TOOL = ["uv", "tool", "run", "mypy"]
DJLINT_TOOL = ["uv", "run", "djlint"]

SOURCE_PATHS = ["sorveteria/", "tests/", "noxfile.py"]
TEMPLATE_PATHS = ["sorveteria/templates/"]


def get_lint_command(fix: bool = False) -> list[str]:
    cmd = LINT_TOOL + SOURCE_PATHS
    if fix:
        cmd.append("--fix")
    return cmd


def get_format_command(check: bool = False) -> list[str]:
    cmd = FORMAT_TOOL + SOURCE_PATHS
    if check:
        cmd.extend(["--check", "--diff"])
    return cmd


def get_djlint_command(check: bool = False) -> list[str]:
    cmd = DJLINT_TOOL + TEMPLATE_PATHS
    cmd.append("--check" if check else "--reformat")
    return cmd


@nox.session(python=PYTHON_VERSIONS)
def lint(session: nox.Session) -> None:
    """Run linting with ruff check."""
    session.install("-e", ".[dev]")
    session.run(*get_lint_command(), external=True)


@nox.session(python=PYTHON_VERSIONS)
def lint_fix(session: nox.Session) -> None:
    session.install("-e", ".[dev]")
    session.run(*get_lint_command(fix=True), external=True)


@nox.session(python=PYTHON_VERSIONS)
def mypy(session: nox.Session) -> None:
    """Run type checking with mypy."""
    session.install("-e", ".[dev]")
    session.run(*TYPECHECK_TOOL, "sorveteria/", external=True)


@nox.session(python=PYTHON_VERSIONS)
def format_check(session: nox.Session) -> None:
    """Check code formatting with ruff format."""
    session.install("-e", ".[dev]")
    session.run(*get_format_command(check=True), external=True)


@nox.session(python=PYTHON_VERSIONS)
def format(session: nox.Session) -> None:
    """Format code with ruff format."""
    session.install("-e", ".[dev]")
    session.run(*get_format_command(), external=True)


@nox.session(python=PYTHON_VERSIONS)
def djlint_check(session: nox.Session) -> None:
    """Check HTML template formatting with djlint."""
    session.install("-e", ".[dev]")
    session.run(*get_djlint_command(check=True), external=True)


@nox.session(python=PYTHON_VERSIONS)
def djlint_format(session: nox.Session) -> None:
    session.install("-e", ".[dev]")
    session.run(*get_djlint_command(), external=True)


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the test suite with pytest."""
    session.install("-e", ".[dev]")
    session.run("pytest", "--verbose", *session.posargs)
