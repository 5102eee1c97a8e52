# topmark:header:start
#
#   project      : Dutis
#   file         : __init__.py
#   file_relpath : src/dutis/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Configuration handling for Dutis.

Layered TOML configuration (defaults, user file, working-directory
``dutis.toml``, explicit ``--config`` files, CLI overrides) is merged into a
`MutableConfig` and frozen into an immutable `Config`. Logging setup lives in
`dutis.config.logging`.
"""

from __future__ import annotations

from dutis.config.model import ArgsLike, Config, MutableConfig

__all__ = [
    "ArgsLike",
    "Config",
    "MutableConfig",
]
