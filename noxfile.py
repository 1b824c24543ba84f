"""noxfile.py - Quality gate sessions for the prompt testing client.

Updates:
  v0.2.0 - 2026-10-16 - Cover the views and cli packages in lint and coverage gates.
  v0.1.0 - 2026-10-05 - Ruff/Pyright/Pytest sessions using tools from `.venv`.

Sessions reuse the host interpreter and call the tools installed in the project
`.venv` (`pip install -e .[dev]`):

- format: ruff format
- lint: ruff check
- typecheck: pyright
- test: pytest with coverage over core, views and models
- all: every gate above, fixing lint first
"""

from __future__ import annotations

import sys
from pathlib import Path

import nox

SOURCES: tuple[str, ...] = ("main.py", "cli", "config", "core", "models", "views", "tests")
COVERED_PACKAGES: tuple[str, ...] = ("core", "views", "models")
COVERAGE_FLOOR = 80

_BIN_DIR = Path(".venv") / ("Scripts" if sys.platform == "win32" else "bin")


def _tool(session: nox.Session, name: str) -> str:
    """Resolve *name* inside `.venv`, stopping the session when it is absent."""
    executable = _BIN_DIR / (f"{name}.exe" if sys.platform == "win32" else name)
    if not executable.exists():
        session.error(
            f"Missing {executable}; create the environment with "
            "`python -m venv .venv` and run `pip install -e .[dev]` inside it."
        )
    return str(executable)


def _pytest(session: nox.Session) -> None:
    coverage = [f"--cov={package}" for package in COVERED_PACKAGES]
    session.run(
        _tool(session, "pytest"),
        "-n",
        "auto",
        *coverage,
        "--cov-report=term-missing",
        f"--cov-fail-under={COVERAGE_FLOOR}",
        "tests",
        external=True,
    )


@nox.session(venv_backend="none")
def format(session: nox.Session) -> None:
    """Usage: `nox -s format`"""
    session.run(_tool(session, "ruff"), "format", *SOURCES, external=True)


@nox.session(venv_backend="none")
def lint(session: nox.Session) -> None:
    """Usage: `nox -s lint`"""
    session.run(_tool(session, "ruff"), "check", *SOURCES, external=True)


@nox.session(venv_backend="none")
def typecheck(session: nox.Session) -> None:
    """Usage: `nox -s typecheck`"""
    session.run(_tool(session, "pyright"), external=True)


@nox.session(venv_backend="none")
def test(session: nox.Session) -> None:
    """Usage: `nox -s test`"""
    _pytest(session)


@nox.session(venv_backend="none")
def all(session: nox.Session) -> None:
    """Run every gate in order. Usage: `nox -s all`"""
    ruff = _tool(session, "ruff")
    for arguments in (
        ("check", "--fix"),
        ("format",),
        ("check",),
        ("format", "--check"),
    ):
        session.run(ruff, *arguments, *SOURCES, external=True)
    session.run(_tool(session, "pyright"), external=True)
    _pytest(session)
