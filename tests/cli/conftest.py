# topmark:header:start
#
#   project      : Dutis
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""CLI test helpers for running Dutis against a fake platform.

`run_cli` injects a `FakePlatform` and a recording sleep function through
Click's context object, so commands exercise the real engine without touching
LaunchServices or waiting between attempts. Configuration discovery is
disabled unless a test passes ``no_config=False``; explicit ``--config`` files
still apply.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from click.testing import CliRunner, Result

from dutis.cli.exit_codes import ExitCode
from dutis.cli.main import cli
from tests.fakes import FakeLaunchServices, FakePlatform, RecordingSleep, quicktime_fake

if TYPE_CHECKING:
    from collections.abc import Sequence

    from dutis.platform.base import PlatformCapability

# Small attempt budgets keep the fake call counts readable.
FAST_CONVERGENCE = "[convergence]\nquery_attempts = 3\nassign_attempts = 2\ndelay_ms = 0\n"


def run_cli(
    argv: Sequence[str],
    *,
    native: FakeLaunchServices | None = None,
    platform: PlatformCapability | None = None,
    no_config: bool = True,
) -> Result:
    """Invoke the CLI with a fake platform.

    Args:
        argv (Sequence[str]): Arguments after the program name; group options
            such as ``-v`` must come first.
        native (FakeLaunchServices | None): Native service wrapped in a
            `FakePlatform` (default: `quicktime_fake()`).
        platform (PlatformCapability | None): Platform to inject instead.
        no_config (bool): Prepend ``--no-config``.

    Returns:
        Result: The `click.testing.Result` of the invocation.
    """
    if platform is None:
        platform = FakePlatform(native if native is not None else quicktime_fake())
    args = ["--no-config", *argv] if no_config else list(argv)
    runner = CliRunner()
    return runner.invoke(cli, args, obj={"platform": platform, "sleep": RecordingSleep()})


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_exit(result: Result, code: ExitCode) -> None:
    """Assert that the command exited with ``code``."""
    assert result.exit_code == code, (result.exit_code, result.output)
