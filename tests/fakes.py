# topmark:header:start
#
#   project      : Dutis
#   file         : fakes.py
#   file_relpath : tests/fakes.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Test doubles for the native LaunchServices boundary.

`FakeLaunchServices` implements `LaunchServicesLike` from plain dictionaries
and counts every call, so tests can assert exact attempt counts of the
convergence protocol. `RecordingSleep` replaces `time.sleep`.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from dutis.core.types import HandlerIdentifier
from dutis.platform.base import LaunchServicesLike, LSRole, PlatformCapability

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


@dataclass
class FakeLaunchServices(LaunchServicesLike):
    """Scriptable, call-counting native service.

    Attributes:
        utis (dict[str, str | None]): Suffix to identifier. Unknown suffixes get
            ``dyn.<suffix>`` unless `unknown_to_none` is set.
        samples (dict[str, list[list[str] | None]]): Per identifier, the sample
            returned by each successive query; the last entry repeats.
        statuses (dict[str, list[int]]): Per identifier, the status returned by
            each successive assignment; the last entry repeats. Default 0.
    """

    utis: dict[str, str | None] = field(default_factory=lambda: {})
    samples: dict[str, list[list[str] | None]] = field(default_factory=lambda: {})
    statuses: dict[str, list[int]] = field(default_factory=lambda: {})
    unknown_to_none: bool = False

    resolve_calls: Counter[str] = field(default_factory=lambda: Counter[str]())
    query_calls: Counter[str] = field(default_factory=lambda: Counter[str]())
    assign_calls: Counter[str] = field(default_factory=lambda: Counter[str]())
    roles_seen: list[LSRole] = field(default_factory=lambda: [])
    assigned: list[tuple[str, str]] = field(default_factory=lambda: [])
    tag_classes: list[str] = field(default_factory=lambda: [])

    def preferred_identifier_for_tag(self, tag_class: str, tag: str) -> str | None:
        self.resolve_calls[tag] += 1
        self.tag_classes.append(tag_class)
        if tag in self.utis:
            return self.utis[tag]
        return None if self.unknown_to_none else f"dyn.{tag}"

    def copy_all_role_handlers(self, content_type: str, role: LSRole) -> list[str] | None:
        idx = self.query_calls[content_type]
        self.query_calls[content_type] += 1
        self.roles_seen.append(role)
        script = self.samples.get(content_type)
        if not script:
            return None
        sample = script[min(idx, len(script) - 1)]
        return list(sample) if sample is not None else None

    def set_default_role_handler(self, content_type: str, role: LSRole, handler: str) -> int:
        idx = self.assign_calls[content_type]
        self.assign_calls[content_type] += 1
        self.roles_seen.append(role)
        script = self.statuses.get(content_type) or [0]
        status = script[min(idx, len(script) - 1)]
        self.assigned.append((content_type, handler))
        return status

    @property
    def total_native_calls(self) -> int:
        return (
            sum(self.resolve_calls.values())
            + sum(self.query_calls.values())
            + sum(self.assign_calls.values())
        )


@dataclass
class RecordingSleep:
    """Callable stand-in for `time.sleep` that records requested delays."""

    calls: list[float] = field(default_factory=lambda: [])

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class FakePlatform(PlatformCapability):
    """Platform capability over a `FakeLaunchServices` with canned fallbacks."""

    name = "fake"

    def __init__(
        self,
        native: FakeLaunchServices,
        *,
        declared: Mapping[str, Sequence[str]] | None = None,
        installed: Sequence[str] = (),
    ) -> None:
        self._native = native
        self.declared = dict(declared or {})
        self.installed = list(installed)
        self.extension_lookups: list[str] = []

    @property
    def native(self) -> FakeLaunchServices:
        return self._native

    def find_handlers_for_content_type(self, content_type: str) -> list[HandlerIdentifier]:
        sample = self._native.copy_all_role_handlers(content_type, LSRole.ALL) or []
        return sorted({HandlerIdentifier(h) for h in sample})

    def find_handlers_for_extension(self, suffix: str) -> list[HandlerIdentifier]:
        self.extension_lookups.append(suffix)
        return sorted(HandlerIdentifier(h) for h in self.declared.get(suffix, ()))

    def scan_installed_applications(self) -> Mapping[str, list[HandlerIdentifier]]:
        return {"application/octet-stream": sorted(HandlerIdentifier(h) for h in self.installed)}


def quicktime_fake() -> FakeLaunchServices:
    """Native service where ``mp4`` and ``mov`` share QuickTime Player."""
    return FakeLaunchServices(
        utis={"mp4": "public.mpeg-4", "mov": "com.apple.quicktime-movie"},
        samples={
            "public.mpeg-4": [["com.apple.quicktime-player", "org.videolan.vlc"]],
            "com.apple.quicktime-movie": [["com.apple.quicktime-player", "com.apple.iMovieApp"]],
        },
    )
