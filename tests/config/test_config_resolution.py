# topmark:header:start
#
#   project      : Dutis
#   file         : test_config_resolution.py
#   file_relpath : tests/config/test_config_resolution.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""End-to-end tests for configuration discovery and layer precedence."""

from __future__ import annotations

import textwrap
from typing import TYPE_CHECKING

from dutis.config import MutableConfig
from dutis.config.io import load_toml_dict

if TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, content: str) -> Path:
    """Helper: write dedented content to a file, creating parents."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
    return path


def _xdg_config(tmp_path: Path) -> Path:
    return tmp_path / "home" / ".config" / "dutis" / "dutis.toml"


def test_discovers_xdg_before_legacy(tmp_path: Path) -> None:
    legacy = _write(tmp_path / "home" / ".dutis.toml", "[handlers]\nrole = 'editor'\n")
    assert MutableConfig.discover_user_config_file() == legacy

    xdg = _write(_xdg_config(tmp_path), "[handlers]\nrole = 'viewer'\n")
    assert MutableConfig.discover_user_config_file() == xdg


def test_no_user_config(tmp_path: Path) -> None:
    assert MutableConfig.discover_user_config_file() is None


def test_layer_precedence(tmp_path: Path) -> None:
    """User config < working-directory config < explicit --config files."""
    _write(
        _xdg_config(tmp_path),
        """
        [convergence]
        query_attempts = 11
        assign_attempts = 12
        delay_ms = 13
        """,
    )
    proj = tmp_path / "proj"
    _write(
        proj / "dutis.toml",
        """
        [convergence]
        assign_attempts = 22
        delay_ms = 23
        """,
    )
    extra = _write(
        tmp_path / "extra.toml",
        """
        [convergence]
        delay_ms = 33
        """,
    )

    draft = MutableConfig.load_merged(extra_config_files=[extra], cwd=proj)
    config = draft.freeze()

    assert (config.query_attempts, config.assign_attempts, config.delay_ms) == (11, 22, 33)
    assert [p.rsplit("/", 1)[-1] for p in config.config_files] == [
        "dutis.toml",
        "dutis.toml",
        "extra.toml",
    ]


def test_no_config_skips_discovered_layers(tmp_path: Path) -> None:
    _write(_xdg_config(tmp_path), "[convergence]\nquery_attempts = 11\n")
    proj = tmp_path / "proj"
    _write(proj / "dutis.toml", "[convergence]\nassign_attempts = 22\n")
    extra = _write(tmp_path / "extra.toml", "[convergence]\ndelay_ms = 33\n")

    config = MutableConfig.load_merged(
        extra_config_files=[extra], no_config=True, cwd=proj
    ).freeze()

    assert (config.query_attempts, config.assign_attempts, config.delay_ms) == (200, 200, 33)


def test_user_groups_extend_defaults(tmp_path: Path) -> None:
    _write(
        _xdg_config(tmp_path),
        """
        [groups]
        video = ["mkv"]
        ebooks = ["epub", "mobi"]
        """,
    )

    config = MutableConfig.load_merged(cwd=tmp_path).freeze()

    assert config.groups["video"] == ("mkv",)
    assert config.groups["ebooks"] == ("epub", "mobi")
    assert "audio" in config.groups


def test_unreadable_layers_are_skipped(tmp_path: Path) -> None:
    broken = _write(tmp_path / "broken.toml", "[convergence\nquery_attempts = ")
    missing = tmp_path / "missing.toml"

    assert load_toml_dict(broken) == {}
    assert load_toml_dict(missing) == {}
    assert MutableConfig.from_toml_file(broken) is None

    config = MutableConfig.load_merged(
        extra_config_files=[broken, missing], no_config=True
    ).freeze()
    assert config.query_attempts == 200
    assert config.config_files == ()
