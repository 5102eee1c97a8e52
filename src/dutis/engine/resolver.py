# topmark:header:start
#
#   project      : Dutis
#   file         : resolver.py
#   file_relpath : src/dutis/engine/resolver.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Suffix to content-type identifier resolution."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dutis.config.logging import get_logger
from dutis.core.types import ContentTypeIdentifier, normalize_suffix
from dutis.platform.base import FILENAME_EXTENSION_TAG_CLASS

if TYPE_CHECKING:
    from dutis.config.logging import DutisLogger
    from dutis.platform.base import LaunchServicesLike

logger: DutisLogger = get_logger(__name__)


class TypeIdentifierResolver:
    """Map file-name suffixes to canonical content-type identifiers.

    The platform's type service answers for *any* non-empty suffix: unknown
    suffixes get a synthetic ``dyn.`` identifier. A successful resolution
    therefore does not mean the suffix is recognized; that only shows later,
    when the identifier has no registered handlers.

    Args:
        native (LaunchServicesLike): The platform's type-identifier service.
    """

    def __init__(self, native: LaunchServicesLike) -> None:
        self._native = native

    def resolve(self, suffix: str) -> ContentTypeIdentifier | None:
        """Return the preferred identifier for ``suffix``.

        Args:
            suffix (str): Suffix with or without a leading dot; normalized first.

        Returns:
            ContentTypeIdentifier | None: The identifier, or None when the type
                service returned nothing.

        Raises:
            EmptyInputError: If the suffix is empty; the service is not called.
        """
        normalized = normalize_suffix(suffix)
        uti = self._native.preferred_identifier_for_tag(FILENAME_EXTENSION_TAG_CLASS, normalized)
        if not uti:
            logger.warning("Type service returned no identifier for .%s", normalized)
            return None
        logger.debug("Resolved .%s -> %s", normalized, uti)
        return ContentTypeIdentifier(uti)
