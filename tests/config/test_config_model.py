# topmark:header:start
#
#   project      : Dutis
#   file         : test_config_model.py
#   file_relpath : tests/config/test_config_model.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Tests for `MutableConfig` parsing, validation and freezing."""

from __future__ import annotations

import pytest
import tomlkit

from dutis.config import Config, MutableConfig
from dutis.config.io import DEFAULT_GROUPS
from dutis.constants import DEFAULT_APPLICATION_DIRS
from dutis.core.diagnostics import DiagnosticLevel
from dutis.platform.base import LSRole
from tests.conftest import make_config, make_mutable_config, parametrize


def test_defaults_freeze_cleanly() -> None:
    config: Config = MutableConfig.from_defaults().freeze()

    assert config.query_attempts == 200
    assert config.assign_attempts == 200
    assert config.delay_ms == 10
    assert config.role is LSRole.ALL
    assert config.role_name == "all"
    assert config.probe_fallback is False
    assert config.application_dirs == DEFAULT_APPLICATION_DIRS
    assert config.groups["video"][:2] == ("mp4", "mov")
    assert set(config.groups) == set(DEFAULT_GROUPS)
    assert config.diagnostics == ()
    assert config.config_files == ()


def test_empty_builder_falls_back_to_defaults() -> None:
    config = MutableConfig().freeze()
    assert config.query_attempts == 200
    assert config.role is LSRole.ALL
    assert config.groups == {}


def test_from_toml_dict_reads_every_section() -> None:
    draft = MutableConfig.from_toml_dict(
        {
            "convergence": {"query_attempts": 5, "assign_attempts": 3, "delay_ms": 0},
            "handlers": {"role": "viewer", "probe_fallback": True},
            "applications": {"search_dirs": ["/Opt/Apps"]},
            "groups": {"Movies": [".MP4", "mov", "mp4", ""]},
        }
    )
    config = draft.freeze()

    assert (config.query_attempts, config.assign_attempts, config.delay_ms) == (5, 3, 0)
    assert config.role is LSRole.VIEWER
    assert config.probe_fallback is True
    assert config.application_dirs == ("/Opt/Apps",)
    assert config.groups == {"Movies": ("mp4", "mov")}
    assert [(d.level, d.context) for d in config.diagnostics] == [
        (DiagnosticLevel.WARNING, "[groups].Movies")
    ]


def test_unknown_and_mistyped_values_become_warnings() -> None:
    draft = MutableConfig.from_toml_dict(
        {
            "convergence": {"query_attempts": "many", "delay_ms": True, "retries": 3},
            "handlers": {"probe_fallback": "yes"},
            "applications": {"search_dirs": ["/Applications", 7]},
            "groups": {"bad": "mp4"},
            "colors": {"enabled": True},
        }
    )

    contexts = [d.context for d in draft.diagnostics]
    assert "[colors]" in contexts
    assert "[convergence].retries" in contexts
    assert "[convergence].query_attempts" in contexts
    assert "[convergence].delay_ms" in contexts
    assert "[handlers].probe_fallback" in contexts
    assert "[applications].search_dirs" in contexts
    assert "[groups].bad" in contexts
    assert all(d.level is DiagnosticLevel.WARNING for d in draft.diagnostics)

    assert draft.query_attempts is None
    assert draft.delay_ms is None
    assert draft.probe_fallback is None
    assert draft.application_dirs == ["/Applications"]
    assert "bad" not in draft.groups


def test_section_of_wrong_type_is_ignored() -> None:
    draft = MutableConfig.from_toml_dict({"convergence": 3})
    assert [d.context for d in draft.diagnostics] == ["[convergence]"]
    assert draft.query_attempts is None


@parametrize(
    "overrides, message",
    [
        ({"query_attempts": 0}, "query_attempts must be at least 1"),
        ({"assign_attempts": -1}, "assign_attempts must be at least 1"),
        ({"delay_ms": -5}, "delay_ms must not be negative"),
        ({"role": "owner"}, "Unknown role 'owner'"),
    ],
)
def test_freeze_rejects_invalid_values(overrides: dict[str, object], message: str) -> None:
    with pytest.raises(ValueError, match=message):
        make_config(**overrides)


def test_merge_with_last_set_value_wins() -> None:
    base = make_mutable_config(query_attempts=10, role="editor")
    base.groups = {"video": ["mp4"], "audio": ["mp3"]}
    top = MutableConfig(query_attempts=2, groups={"video": ["mkv"]})
    top.diagnostics.add_warning("from top", "[x]")

    merged = base.merge_with(top)

    assert merged.query_attempts == 2
    assert merged.role == "editor"
    assert merged.groups == {"video": ["mkv"], "audio": ["mp3"]}
    assert [d.message for d in merged.diagnostics] == ["from top"]
    # operands are not modified
    assert base.query_attempts == 10
    assert base.groups["video"] == ["mp4"]


def test_apply_cli_args_ignores_none() -> None:
    draft = make_mutable_config(delay_ms=7)
    draft.apply_cli_args({"role": "shell", "delay_ms": None, "verbosity_level": 2, "other": 1})

    config = draft.freeze()
    assert config.role is LSRole.SHELL
    assert config.delay_ms == 7
    assert config.verbosity_level == 2


def test_thaw_round_trip() -> None:
    config = make_config(query_attempts=4, role="viewer")
    assert config.thaw().freeze() == config


def test_to_toml_renders_effective_values() -> None:
    config = make_config(query_attempts=4, probe_fallback=True)
    parsed = tomlkit.parse(config.to_toml()).unwrap()

    assert parsed["convergence"] == {"query_attempts": 4, "assign_attempts": 200, "delay_ms": 10}
    assert parsed["handlers"] == {"role": "all", "probe_fallback": True}
    assert parsed["applications"]["search_dirs"] == list(DEFAULT_APPLICATION_DIRS)
    assert parsed["groups"]["audio"] == list(DEFAULT_GROUPS["audio"])
    assert MutableConfig.from_toml_dict(parsed).freeze().query_attempts == 4
