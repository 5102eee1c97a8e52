# topmark:header:start
#
#   project      : Dutis
#   file         : __init__.py
#   file_relpath : src/dutis/platform/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Platform capability selection.

`select_platform` is the single place where Dutis branches on the operating
system: macOS gets [`MacOSPlatform`][dutis.platform.macos.MacOSPlatform], every
other platform gets the no-op [`NullPlatform`][dutis.platform.null.NullPlatform].
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from dutis.config.logging import get_logger
from dutis.constants import DEFAULT_APPLICATION_DIRS
from dutis.platform.base import LaunchServicesLike, LSRole, PlatformCapability
from dutis.platform.null import NullPlatform

if TYPE_CHECKING:
    from collections.abc import Iterable

    from dutis.config.logging import DutisLogger
    from dutis.config.model import Config

logger: DutisLogger = get_logger(__name__)

__all__ = [
    "LSRole",
    "LaunchServicesLike",
    "NullPlatform",
    "PlatformCapability",
    "platform_from_config",
    "select_platform",
]


def select_platform(
    system: str | None = None,
    *,
    search_dirs: Iterable[str] = DEFAULT_APPLICATION_DIRS,
    role: LSRole = LSRole.ALL,
    probe: bool = False,
) -> PlatformCapability:
    """Return the platform capability for ``system`` (defaults to ``sys.platform``).

    Args:
        system (str | None): A ``sys.platform`` value.
        search_dirs (Iterable[str]): Application directories (macOS only).
        role (LSRole): Registry role for single reads (macOS only).
        probe (bool): Enable the probing fallback tier (macOS only).

    Returns:
        PlatformCapability: The selected variant.
    """
    system = system or sys.platform
    if system == "darwin":
        from dutis.platform.macos import MacOSPlatform

        logger.debug("Selected macOS platform")
        return MacOSPlatform(search_dirs=search_dirs, role=role, probe=probe)

    logger.debug("Platform '%s' has no handler registry; using no-op platform", system)
    return NullPlatform()


def platform_from_config(
    config: Config, system: str | None = None, *, probe: bool | None = None
) -> PlatformCapability:
    """Return the platform capability configured by a frozen `Config`.

    ``probe``, when given, overrides the configured ``probe_fallback``.
    """
    return select_platform(
        system,
        search_dirs=config.application_dirs,
        role=config.role,
        probe=config.probe_fallback if probe is None else probe,
    )
