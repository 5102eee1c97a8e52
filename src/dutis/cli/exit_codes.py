# topmark:header:start
#
#   project      : Dutis
#   file         : exit_codes.py
#   file_relpath : src/dutis/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Exit codes for the Dutis CLI.

Dutis aligns with the BSD `sysexits` convention where practical. The one
divergence is ``PARTIAL_FAILURE = 2``, used when a group assignment succeeded
for some content types and failed for others. Click also exits with 2 on its
own usage errors, so tests must assert ``result.exception`` to tell them apart.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the Dutis CLI.

    Attributes:
        SUCCESS: Successful execution.
        FAILURE: Generic failure, e.g. every assignment of a group failed.
        PARTIAL_FAILURE: Some, but not all, assignments of a group failed.
        USAGE_ERROR: Invalid invocation. Mirrors BSD ``EX_USAGE (64)``.
        DATA_ERROR: Empty input or no suffix resolved. Mirrors BSD ``EX_DATAERR (65)``.
        UNAVAILABLE: No handler, or no handler common to the group. Mirrors BSD
            ``EX_UNAVAILABLE (69)``.
        CONFIG_ERROR: Invalid configuration. Mirrors BSD ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1
    PARTIAL_FAILURE = 2  # divergence from sysexits; see module docstring

    USAGE_ERROR = 64  # EX_USAGE
    DATA_ERROR = 65  # EX_DATAERR
    UNAVAILABLE = 69  # EX_UNAVAILABLE
    CONFIG_ERROR = 78  # EX_CONFIG
