# topmark:header:start
#
#   project      : Dutis
#   file         : test_misc_commands.py
#   file_relpath : tests/cli/test_misc_commands.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""CLI `version`, `groups`, `apps` and `dump-config` commands, and group-level options."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import tomlkit

from dutis.cli.exit_codes import ExitCode
from dutis.constants import DUTIS_VERSION
from dutis.platform.macos import MacOSPlatform
from tests.cli.conftest import FAST_CONVERGENCE, assert_exit, assert_SUCCESS, run_cli
from tests.conftest import mark_cli
from tests.fakes import FakeLaunchServices, FakePlatform
from tests.platform.conftest import make_app

if TYPE_CHECKING:
    from pathlib import Path


def _between_markers(output: str) -> str:
    lines = output.splitlines()
    start = lines.index("# === BEGIN ===")
    end = lines.index("# === END ===")
    return "\n".join(lines[start + 1 : end])


@mark_cli
def test_no_command_prints_hint_and_help() -> None:
    result = run_cli([])

    assert_SUCCESS(result)
    assert "Hint:" in result.output
    assert "Commands:" in result.output


@mark_cli
def test_version() -> None:
    result = run_cli(["--no-color", "version"])

    assert_SUCCESS(result)
    assert result.output.strip() == DUTIS_VERSION


@mark_cli
def test_verbose_and_quiet_conflict() -> None:
    result = run_cli(["-v", "-q", "version"])
    assert_exit(result, ExitCode.USAGE_ERROR)


@mark_cli
def test_groups_lists_defaults() -> None:
    result = run_cli(["--no-color", "groups"])

    assert_SUCCESS(result)
    video = next(line for line in result.output.splitlines() if line.startswith("video"))
    assert ".mp4 .mov" in video


@mark_cli
def test_apps_lists_installed_applications() -> None:
    platform = FakePlatform(FakeLaunchServices(), installed=["org.videolan.vlc", "io.mpv"])

    result = run_cli(["apps"], platform=platform)

    assert_SUCCESS(result)
    assert result.output.splitlines() == ["io.mpv", "org.videolan.vlc"]


@mark_cli
def test_apps_warns_when_nothing_installed() -> None:
    result = run_cli(["apps"])

    assert_SUCCESS(result)
    assert "No applications found on platform 'fake'." in result.output


@mark_cli
def test_apps_extensions_requires_macos() -> None:
    result = run_cli(["apps", "--extensions"])

    assert_SUCCESS(result)
    assert "not available on platform 'fake'" in result.output


@mark_cli
def test_apps_extensions_on_macos(tmp_path: Path) -> None:
    make_app(tmp_path, "VLC", bundle_id="org.videolan.vlc", extensions=["mp4", "mkv"])
    make_app(tmp_path, "Calculator", bundle_id="com.apple.calculator")
    platform = MacOSPlatform(native=FakeLaunchServices(), search_dirs=[str(tmp_path)])

    result = run_cli(["--no-color", "apps", "--extensions"], platform=platform)

    assert_SUCCESS(result)
    assert result.output.splitlines() == ["VLC: mkv mp4"]


@mark_cli
def test_dump_config_defaults() -> None:
    result = run_cli(["dump-config"])

    assert_SUCCESS(result)
    parsed = tomlkit.parse(_between_markers(result.output)).unwrap()
    assert parsed["convergence"]["query_attempts"] == 200
    assert parsed["handlers"]["role"] == "all"
    assert "video" in parsed["groups"]


@mark_cli
def test_dump_config_reflects_config_file(tmp_path: Path) -> None:
    cfg = tmp_path / "fast.toml"
    cfg.write_text(FAST_CONVERGENCE + '[handlers]\nrole = "viewer"\n', encoding="utf-8")

    result = run_cli(["-v", "--config", str(cfg), "dump-config"])

    assert_SUCCESS(result)
    assert f"# Config files: {cfg}" in result.output
    parsed = tomlkit.parse(_between_markers(result.output)).unwrap()
    assert parsed["convergence"] == {"query_attempts": 3, "assign_attempts": 2, "delay_ms": 0}
    assert parsed["handlers"]["role"] == "viewer"


@mark_cli
def test_working_directory_config_is_discovered(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "dutis.toml").write_text(FAST_CONVERGENCE, encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    discovered = run_cli(["dump-config"], no_config=False)
    skipped = run_cli(["dump-config"])

    assert "query_attempts = 3" in _between_markers(discovered.output)
    assert "query_attempts = 200" in _between_markers(skipped.output)


@mark_cli
def test_invalid_config_value_is_config_error(tmp_path: Path) -> None:
    cfg = tmp_path / "bad.toml"
    cfg.write_text("[convergence]\nquery_attempts = 0\n", encoding="utf-8")

    result = run_cli(["--config", str(cfg), "version"])

    assert_exit(result, ExitCode.CONFIG_ERROR)
    assert "Invalid configuration: query_attempts must be at least 1" in result.output


@mark_cli
def test_config_warnings_are_shown(tmp_path: Path) -> None:
    cfg = tmp_path / "odd.toml"
    cfg.write_text("[convergence]\nretries = 3\n", encoding="utf-8")

    loud = run_cli(["--config", str(cfg), "version"])
    quiet = run_cli(["-q", "--config", str(cfg), "version"])

    assert_SUCCESS(loud)
    assert "config: [convergence].retries: unknown key; ignored" in loud.output
    assert "retries" not in quiet.output
