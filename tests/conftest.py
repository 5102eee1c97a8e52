# topmark:header:start
#
#   project      : Dutis
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Pytest configuration for the Dutis test suite.

Sets TRACE logging for the whole run, keeps the developer's environment from
forcing a log level or leaking user config files into tests, and exposes
typed wrappers around pytest marks.

Notes:
    Build configs with `dutis.config.MutableConfig` and `freeze()` them; do not
    mutate a frozen `Config`. Use `make_config` for the common case.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from dutis.config import MutableConfig, logging

if TYPE_CHECKING:
    from pathlib import Path

    from dutis.config import Config

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type."""

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)
mark_macos: DecoratorType[Any] = as_typed_mark(pytest.mark.macos)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def isolate_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Keep the developer's shell from leaking into tests.

    - ``DUTIS_LOG_LEVEL`` is removed so the CLI does not force DEBUG output.
    - ``HOME`` and ``XDG_CONFIG_HOME`` point into ``tmp_path`` so no real user
      config file is discovered.
    """
    monkeypatch.delenv("DUTIS_LOG_LEVEL", raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set TRACE logging so every retry attempt is logged during tests."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


def make_mutable_config(**overrides: Any) -> MutableConfig:
    """Return a defaults-based builder with ``overrides`` applied verbatim."""
    m: MutableConfig = MutableConfig.from_defaults()
    for k, v in overrides.items():
        setattr(m, k, v)
    return m


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and ``overrides``."""
    return make_mutable_config(**overrides).freeze()
