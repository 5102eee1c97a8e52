# topmark:header:start
#
#   project      : Dutis
#   file         : constants.py
#   file_relpath : src/dutis/constants.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Dutis Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version
from typing import Final

DUTIS_VERSION: str = get_version("dutis")

# Name of the project-local and user config files:
CONFIG_FILE_NAME: Final[str] = "dutis.toml"
USER_CONFIG_DIR_NAME: Final[str] = "dutis"
LEGACY_USER_CONFIG_NAME: Final[str] = ".dutis.toml"

# Environment variable consulted for the internal log level:
LOG_LEVEL_ENV_VAR: Final[str] = "DUTIS_LOG_LEVEL"

# Convergence defaults (empirical tuning, exposed through [convergence]):
DEFAULT_QUERY_ATTEMPTS: Final[int] = 200
DEFAULT_ASSIGN_ATTEMPTS: Final[int] = 200
DEFAULT_DELAY_MS: Final[int] = 10

DEFAULT_ROLE: Final[str] = "all"

DEFAULT_APPLICATION_DIRS: Final[tuple[str, ...]] = (
    "/Applications",
    "/System/Applications",
    "~/Applications",
)

# Category key under which installed applications are reported:
GENERIC_CATEGORY: Final[str] = "application/octet-stream"

# Prefix of the synthetic identifiers the type service returns for unknown suffixes:
DYNAMIC_UTI_PREFIX: Final[str] = "dyn."

VALUE_NOT_SET: Final[str] = "<not set>"
