# topmark:header:start
#
#   project      : Dutis
#   file         : keys.py
#   file_relpath : src/dutis/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Canonical TOML section and key names for Dutis configuration.

Keys defined here are the external configuration API of ``dutis.toml``;
renaming or removing one is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by Dutis configuration.

    The ordering mirrors the rendered default configuration
    (``dutis dump-config --no-config``).
    """

    # [convergence]
    SECTION_CONVERGENCE: Final[str] = "convergence"

    KEY_QUERY_ATTEMPTS: Final[str] = "query_attempts"
    KEY_ASSIGN_ATTEMPTS: Final[str] = "assign_attempts"
    KEY_DELAY_MS: Final[str] = "delay_ms"

    # [handlers]
    SECTION_HANDLERS: Final[str] = "handlers"

    KEY_ROLE: Final[str] = "role"
    KEY_PROBE_FALLBACK: Final[str] = "probe_fallback"

    # [applications]
    SECTION_APPLICATIONS: Final[str] = "applications"

    KEY_SEARCH_DIRS: Final[str] = "search_dirs"

    # [groups]: free-form table of group name -> list of suffixes
    SECTION_GROUPS: Final[str] = "groups"

    # Known keys per section; used to flag unknown entries
    ALLOWED: Final[dict[str, frozenset[str] | None]] = {
        SECTION_CONVERGENCE: frozenset({KEY_QUERY_ATTEMPTS, KEY_ASSIGN_ATTEMPTS, KEY_DELAY_MS}),
        SECTION_HANDLERS: frozenset({KEY_ROLE, KEY_PROBE_FALLBACK}),
        SECTION_APPLICATIONS: frozenset({KEY_SEARCH_DIRS}),
        SECTION_GROUPS: None,
    }
