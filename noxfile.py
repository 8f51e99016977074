"""Nox sessions for pagesmith."""

import nox


PYPROJECT = nox.project.load_toml("pyproject.toml")
PYTHON_VERSIONS = nox.project.python_versions(PYPROJECT, max_version="3.14")
nox.options.default_venv_backend = "uv"
nox.options.sessions = ["tests"]


def _install(session: nox.Session, *groups: str) -> None:
    deps = [dep for group in groups for dep in nox.project.dependency_groups(PYPROJECT, group)]
    session.install(".", *deps)


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the unit tests (no browser required) on every supported Python."""
    _install(session, "dev")
    session.run("pytest", *session.posargs)


@nox.session(python="3.14")
def coverage(session: nox.Session) -> None:
    """Run the unit tests once with coverage reporting."""
    _install(session, "dev")
    session.run(
        "pytest",
        "--cov=pagesmith",
        "--cov-report=term-missing",
        *session.posargs,
    )


@nox.session(python="3.14")
def smoke(session: nox.Session) -> None:
    """Print README.md to PDF with a real headless Chromium."""
    _install(session)
    session.run("playwright", "install", "chromium")
    output = session.create_tmp() + "/README.pdf"
    session.run("pagesmith", "README.md", "-o", output, "--settle", "0.5")
