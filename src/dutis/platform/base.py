# topmark:header:start
#
#   project      : Dutis
#   file         : base.py
#   file_relpath : src/dutis/platform/base.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Abstract platform capability and the native service protocol.

Two seams isolate everything operating-system specific:

- `LaunchServicesLike`: the three raw native operations (suffix -> identifier,
  identifier -> handler list, assign default). Implemented by the CoreServices
  bridge on macOS, by a no-op on other platforms, and by fakes in tests.
- `PlatformCapability`: the portable interface the rest of Dutis talks to. It
  owns a `LaunchServicesLike` and adds the slower, best-effort discovery tiers
  (declared extensions, probing installed applications).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntFlag
from typing import TYPE_CHECKING, Final, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from dutis.core.types import HandlerIdentifier

# Tag class understood by the type service for file-name extensions.
FILENAME_EXTENSION_TAG_CLASS: Final[str] = "public.filename-extension"

# Status returned by no-op implementations (MacErrors.h: unimpErr).
NOT_IMPLEMENTED_STATUS: Final[int] = -4


class LSRole(IntFlag):
    """LaunchServices role masks (``LSRolesMask``).

    Attributes:
        NONE: Handler claims no particular role.
        VIEWER: Handler can read and present the content.
        EDITOR: Handler can read and edit the content.
        SHELL: Handler executes the content.
        ALL: Any role.
    """

    NONE = 0x00000001
    VIEWER = 0x00000002
    EDITOR = 0x00000004
    SHELL = 0x00000008
    ALL = 0xFFFFFFFF

    @classmethod
    def parse(cls, name: str) -> LSRole:
        """Return the role for a configuration name such as ``"all"`` or ``"viewer"``.

        Raises:
            ValueError: If the name is not a known role.
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            choices = ", ".join(key.lower() for key in cls.__members__)
            raise ValueError(f"Unknown role '{name}' (expected one of: {choices})") from None


@runtime_checkable
class LaunchServicesLike(Protocol):
    """Raw operations of the OS type-identifier and handler registry services.

    Implementations must return plain Python values; native handles never cross
    this boundary.
    """

    def preferred_identifier_for_tag(self, tag_class: str, tag: str) -> str | None:
        """Return the preferred type identifier for a tag (None if the service returned none)."""
        ...

    def copy_all_role_handlers(self, content_type: str, role: LSRole) -> list[str] | None:
        """Return one sample of the handlers registered for a content type (None if NULL)."""
        ...

    def set_default_role_handler(self, content_type: str, role: LSRole, handler: str) -> int:
        """Assign the default handler for a content type; return the OS status code."""
        ...


class PlatformCapability(ABC):
    """Portable interface over the platform's handler facilities.

    Exactly one concrete variant is selected at startup (see
    [`select_platform`][dutis.platform.select_platform]); unsupported platforms
    get a variant that returns empty results instead of failing, so callers
    never branch on the platform themselves.
    """

    #: Short platform label used in logs and CLI output.
    name: str = "abstract"

    @property
    @abstractmethod
    def native(self) -> LaunchServicesLike:
        """The native type/registry service used by the engine."""

    @abstractmethod
    def find_handlers_for_content_type(self, content_type: str) -> list[HandlerIdentifier]:
        """Return a single, unconverged sample of the handlers for a content type, sorted."""

    @abstractmethod
    def find_handlers_for_extension(self, suffix: str) -> list[HandlerIdentifier]:
        """Return handlers found by the permissive fallback tiers for a suffix, sorted.

        This is the slow path; it is only consulted when the registry returned
        nothing for the suffix's content type.
        """

    @abstractmethod
    def scan_installed_applications(self) -> Mapping[str, list[HandlerIdentifier]]:
        """Return installed applications grouped by category key."""
