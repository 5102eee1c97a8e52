# topmark:header:start
#
#   project      : Dutis
#   file         : null.py
#   file_relpath : src/dutis/platform/null.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""No-op platform for operating systems without a LaunchServices registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dutis.config.logging import get_logger
from dutis.platform.base import (
    NOT_IMPLEMENTED_STATUS,
    LaunchServicesLike,
    LSRole,
    PlatformCapability,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from dutis.config.logging import DutisLogger
    from dutis.core.types import HandlerIdentifier

logger: DutisLogger = get_logger(__name__)


class NullLaunchServices(LaunchServicesLike):
    """Native service stand-in: resolves nothing, lists nothing, assigns nothing."""

    def preferred_identifier_for_tag(self, tag_class: str, tag: str) -> str | None:
        logger.trace("null platform: no identifier for %s=%s", tag_class, tag)
        return None

    def copy_all_role_handlers(self, content_type: str, role: LSRole) -> list[str] | None:
        return None

    def set_default_role_handler(self, content_type: str, role: LSRole, handler: str) -> int:
        return NOT_IMPLEMENTED_STATUS


class NullPlatform(PlatformCapability):
    """Platform variant whose every method returns an empty result."""

    name = "unsupported"

    def __init__(self) -> None:
        self._native = NullLaunchServices()

    @property
    def native(self) -> LaunchServicesLike:
        return self._native

    def find_handlers_for_content_type(self, content_type: str) -> list[HandlerIdentifier]:
        return []

    def find_handlers_for_extension(self, suffix: str) -> list[HandlerIdentifier]:
        return []

    def scan_installed_applications(self) -> Mapping[str, list[HandlerIdentifier]]:
        return {}
