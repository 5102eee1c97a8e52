# topmark:header:start
#
#   project      : Dutis
#   file         : test_resolver.py
#   file_relpath : tests/engine/test_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Tests for `TypeIdentifierResolver`."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from dutis.core.errors import EmptyInputError
from dutis.engine.resolver import TypeIdentifierResolver
from dutis.platform.base import FILENAME_EXTENSION_TAG_CLASS
from tests.conftest import parametrize
from tests.fakes import FakeLaunchServices

SUFFIX_TEXT = st.from_regex(r"[A-Za-z0-9]{1,12}", fullmatch=True)


def test_known_suffix_resolves() -> None:
    native = FakeLaunchServices(utis={"mp4": "public.mpeg-4"})
    resolver = TypeIdentifierResolver(native)

    assert resolver.resolve("mp4") == "public.mpeg-4"
    assert native.tag_classes == [FILENAME_EXTENSION_TAG_CLASS]


@parametrize("raw", [".mp4", "MP4", " .Mp4 "])
def test_suffix_is_normalized_before_lookup(raw: str) -> None:
    native = FakeLaunchServices(utis={"mp4": "public.mpeg-4"})
    assert TypeIdentifierResolver(native).resolve(raw) == "public.mpeg-4"
    assert native.resolve_calls == {"mp4": 1}


@settings(max_examples=50, deadline=None)
@given(suffix=SUFFIX_TEXT)
def test_every_non_empty_suffix_gets_an_identifier(suffix: str) -> None:
    """Unknown suffixes still resolve to a synthetic identifier."""
    native = FakeLaunchServices()
    uti = TypeIdentifierResolver(native).resolve(suffix)
    assert uti
    assert uti.startswith("dyn.")


def test_repeated_resolution_is_stable() -> None:
    native = FakeLaunchServices(utis={"mov": "com.apple.quicktime-movie"})
    resolver = TypeIdentifierResolver(native)
    assert {resolver.resolve("mov") for _ in range(5)} == {"com.apple.quicktime-movie"}


@parametrize("raw", ["", ".", "  "])
def test_empty_suffix_makes_no_native_call(raw: str) -> None:
    native = FakeLaunchServices()
    with pytest.raises(EmptyInputError):
        TypeIdentifierResolver(native).resolve(raw)
    assert native.total_native_calls == 0


def test_null_answer_is_none() -> None:
    native = FakeLaunchServices(unknown_to_none=True)
    assert TypeIdentifierResolver(native).resolve("zzz") is None
    assert native.resolve_calls == {"zzz": 1}
