# topmark:header:start
#
#   project      : Dutis
#   file         : __init__.py
#   file_relpath : src/dutis/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Core value types, containers and errors of the Dutis engine.

This package is dependency-free with respect to the platform and CLI layers:

- [`dutis.core.bimap`][dutis.core.bimap]: strict bidirectional map.
- [`dutis.core.types`][dutis.core.types]: suffix, identifier and handler-set types.
- [`dutis.core.errors`][dutis.core.errors]: engine exceptions.
- [`dutis.core.diagnostics`][dutis.core.diagnostics]: (context, message) reports.
"""

from __future__ import annotations

from dutis.core.bimap import BiMap
from dutis.core.errors import (
    AssignmentError,
    DutisError,
    EmptyInputError,
    NoValidIdentifiersError,
    ResolutionExhaustedError,
)
from dutis.core.types import (
    ContentTypeIdentifier,
    HandlerIdentifier,
    HandlerSet,
    Suffix,
    display_suffix,
    normalize_suffix,
)

__all__ = [
    "AssignmentError",
    "BiMap",
    "ContentTypeIdentifier",
    "DutisError",
    "EmptyInputError",
    "HandlerIdentifier",
    "HandlerSet",
    "NoValidIdentifiersError",
    "ResolutionExhaustedError",
    "Suffix",
    "display_suffix",
    "normalize_suffix",
]
