# topmark:header:start
#
#   project      : Dutis
#   file         : test_platform.py
#   file_relpath : tests/platform/test_platform.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Tests for platform selection, roles, the no-op platform and the native bridge."""

from __future__ import annotations

import sys

import pytest

from dutis.platform import NullPlatform, platform_from_config, select_platform
from dutis.platform.base import FILENAME_EXTENSION_TAG_CLASS, NOT_IMPLEMENTED_STATUS, LSRole
from dutis.platform.launch_services import CoreServicesBridge
from dutis.platform.macos import MacOSPlatform
from tests.conftest import make_config, mark_macos, parametrize


@parametrize("system", ["linux", "win32", "freebsd14"])
def test_non_macos_gets_null_platform(system: str) -> None:
    platform = select_platform(system)
    assert isinstance(platform, NullPlatform)
    assert platform.name == "unsupported"


def test_macos_platform_is_selected_for_darwin() -> None:
    platform = select_platform("darwin", search_dirs=[], role=LSRole.EDITOR, probe=True)
    assert isinstance(platform, MacOSPlatform)
    assert isinstance(platform.native, CoreServicesBridge)
    assert platform.probe is True


def test_platform_from_config_probe_override() -> None:
    config = make_config(probe_fallback=False)
    default = platform_from_config(config, "darwin")
    forced = platform_from_config(config, "darwin", probe=True)
    assert isinstance(default, MacOSPlatform)
    assert isinstance(forced, MacOSPlatform)
    assert default.probe is False
    assert forced.probe is True


def test_null_platform_returns_empty_results() -> None:
    platform = NullPlatform()
    native = platform.native

    assert native.preferred_identifier_for_tag(FILENAME_EXTENSION_TAG_CLASS, "mp4") is None
    assert native.copy_all_role_handlers("public.mpeg-4", LSRole.ALL) is None
    assert native.set_default_role_handler("public.mpeg-4", LSRole.ALL, "x") == (
        NOT_IMPLEMENTED_STATUS
    )
    assert platform.find_handlers_for_content_type("public.mpeg-4") == []
    assert platform.find_handlers_for_extension("mp4") == []
    assert platform.scan_installed_applications() == {}


@parametrize(
    "name, expected",
    [("all", LSRole.ALL), ("Viewer", LSRole.VIEWER), (" editor ", LSRole.EDITOR)],
)
def test_role_parse(name: str, expected: LSRole) -> None:
    assert LSRole.parse(name) is expected


def test_role_parse_rejects_unknown() -> None:
    with pytest.raises(ValueError, match="expected one of: none, viewer, editor, shell, all"):
        LSRole.parse("owner")


@mark_macos
@pytest.mark.skipif(sys.platform != "darwin", reason="requires macOS LaunchServices")
def test_bridge_resolves_mp4() -> None:
    bridge = CoreServicesBridge()
    assert bridge.preferred_identifier_for_tag(FILENAME_EXTENSION_TAG_CLASS, "mp4") == (
        "public.mpeg-4"
    )
    handlers = bridge.copy_all_role_handlers("public.plain-text", LSRole.ALL)
    assert handlers is not None
