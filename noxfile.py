# topmark:header:start
#
#   project      : Dutis
#   file         : noxfile.py
#   file_relpath : noxfile.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Dutis project automation via Nox.

Sessions:
  - `qa`: Per-Python session that runs pytest and pyright.
  - `lint`: Ruff lint and format check.
  - `macos`: Tests against the real LaunchServices frameworks (darwin only).

Common invocations:
  - `nox -s lint`
  - `nox -s qa` (runs for all configured Python versions)
"""

from __future__ import annotations

import pathlib
import sys
import tomllib
from typing import Any, cast

import nox

CURRENT_PYTHON_VERSION: str = f"{sys.version_info[0]}.{sys.version_info[1]}"


def get_supported_pythons() -> list[str]:
    """Resolve supported Python versions from the `pyproject.toml` classifiers.

    Returns:
        list[str]: Supported versions like ["3.11", "3.12", ...], sorted; the
            running interpreter's version when none are declared.
    """
    path = pathlib.Path(__file__).parent / "pyproject.toml"
    doc: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    project = cast("dict[str, Any]", doc.get("project", {}))
    prefix = "Programming Language :: Python :: "

    versions: set[tuple[int, int]] = set()
    for c in cast("list[str]", project.get("classifiers", [])):
        if not c.startswith(prefix):
            continue
        parts = c.removeprefix(prefix).strip().split(".")
        # Accept only X.Y numeric versions.
        if len(parts) == 2 and all(p.isdigit() for p in parts):
            versions.add((int(parts[0]), int(parts[1])))

    if not versions:
        return [CURRENT_PYTHON_VERSION]
    return [f"{major}.{minor}" for major, minor in sorted(versions)]


PYTHONS: list[str] = get_supported_pythons()

nox.options.sessions = ["lint", "qa"]


@nox.session(python=PYTHONS)
def qa(session: nox.Session) -> None:
    """Run tests + pyright (per Python version)."""
    session.install("-e", ".[test,dev]")
    session.run("pytest", "-q", "tests", "-m", "not macos", *session.posargs)

    py_ver = session.python
    if not isinstance(py_ver, str) or not py_ver:
        raise RuntimeError(f"Unexpected session.python value: {py_ver!r}")
    session.run("pyright", "--pythonversion", py_ver)


@nox.session
def lint(session: nox.Session) -> None:
    """Run Ruff lint and format checks."""
    session.install("ruff")
    session.run("ruff", "check", ".")
    session.run("ruff", "format", "--check", ".")


@nox.session(python=CURRENT_PYTHON_VERSION)
def macos(session: nox.Session) -> None:
    """Run the tests that call the real LaunchServices frameworks."""
    if sys.platform != "darwin":
        session.skip("LaunchServices is only available on macOS")
    session.install("-e", ".[test]")
    session.run("pytest", "-q", "tests", "-m", "macos", *session.posargs)
