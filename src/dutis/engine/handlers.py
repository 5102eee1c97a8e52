# topmark:header:start
#
#   project      : Dutis
#   file         : handlers.py
#   file_relpath : src/dutis/engine/handlers.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Handler queries and default assignment against an eventually-consistent registry.

The LaunchServices registry is updated asynchronously and non-atomically by
the OS: a single read may transiently omit legitimate handlers, and a single
write may not "stick". Both operations therefore follow a bounded
convergence protocol instead of a single call:

- **Query**: sample the registry a fixed number of times, sleeping a fixed
  delay between samples, and return the union of every handler observed.
- **Assign**: repeat the assignment a fixed number of times with the same
  delay; the status of the *last* call is authoritative.

Attempt counts and delay come from [`ConvergencePolicy`][dutis.engine.handlers.ConvergencePolicy]
(configured under ``[convergence]``). There is no backoff and no early exit,
so worst-case latency is ``attempts * delay``.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from dutis.config.logging import get_logger
from dutis.constants import DEFAULT_ASSIGN_ATTEMPTS, DEFAULT_DELAY_MS, DEFAULT_QUERY_ATTEMPTS
from dutis.core.errors import AssignmentError, EmptyInputError
from dutis.core.types import HandlerSet
from dutis.platform.base import LSRole

if TYPE_CHECKING:
    from dutis.config.logging import DutisLogger
    from dutis.config.model import Config
    from dutis.platform.base import LaunchServicesLike

logger: DutisLogger = get_logger(__name__)

Sleeper = Callable[[float], None]


@dataclass(frozen=True)
class ConvergencePolicy:
    """Attempt budget and inter-attempt delay of the convergence protocol.

    Attributes:
        query_attempts (int): Registry reads per `query_handlers` call (>= 1).
        assign_attempts (int): Registry writes per `assign_default` call (>= 1).
        delay (float): Seconds slept between consecutive attempts (>= 0).
    """

    query_attempts: int = DEFAULT_QUERY_ATTEMPTS
    assign_attempts: int = DEFAULT_ASSIGN_ATTEMPTS
    delay: float = DEFAULT_DELAY_MS / 1000.0

    def __post_init__(self) -> None:
        if self.query_attempts < 1:
            raise ValueError("query_attempts must be at least 1")
        if self.assign_attempts < 1:
            raise ValueError("assign_attempts must be at least 1")
        if self.delay < 0:
            raise ValueError("delay must not be negative")

    @classmethod
    def from_config(cls, config: Config) -> ConvergencePolicy:
        """Build the policy from a frozen `Config`."""
        return cls(
            query_attempts=config.query_attempts,
            assign_attempts=config.assign_attempts,
            delay=config.delay_ms / 1000.0,
        )


class HandlerRegistry:
    """Query and assign handlers with the bounded convergence protocol.

    Args:
        native (LaunchServicesLike): The platform's registry service.
        policy (ConvergencePolicy | None): Attempt budget and delay.
        role (LSRole): LaunchServices role used for reads and writes.
        sleep (Sleeper | None): Replacement for `time.sleep` (tests).
    """

    def __init__(
        self,
        native: LaunchServicesLike,
        policy: ConvergencePolicy | None = None,
        *,
        role: LSRole = LSRole.ALL,
        sleep: Sleeper | None = None,
    ) -> None:
        self._native = native
        self.policy = policy or ConvergencePolicy()
        self.role = role
        self._sleep: Sleeper = sleep or time.sleep

    def query_handlers(self, content_type: str) -> HandlerSet:
        """Return every handler observed for ``content_type`` across the attempt budget.

        An empty result after the full budget means the content type has no
        known handlers; it is not an error.

        Raises:
            EmptyInputError: If ``content_type`` is empty; the registry is not called.
        """
        if not content_type:
            raise EmptyInputError("Content type identifier")

        attempts = self.policy.query_attempts
        seen: set[str] = set()
        for attempt in range(1, attempts + 1):
            sample = self._native.copy_all_role_handlers(content_type, self.role)
            if sample:
                seen.update(h for h in sample if h)
            logger.attempt(
                "query",
                content_type,
                attempt,
                attempts,
                f"{len(sample or ())} sampled, {len(seen)} accumulated",
            )
            if attempt < attempts:
                self._sleep(self.policy.delay)

        result = HandlerSet.of(seen)
        logger.debug(
            "Handlers for %s after %d attempts: %s", content_type, attempts, result.sorted()
        )
        return result

    def assign_default(self, content_type: str, handler: str) -> None:
        """Make ``handler`` the default for ``content_type``.

        The assignment is repeated over the whole attempt budget; the status of
        the final call decides the outcome.

        Raises:
            EmptyInputError: If ``content_type`` or ``handler`` is empty; the
                registry is not called.
            AssignmentError: If the final attempt returned a non-zero status.
        """
        if not content_type:
            raise EmptyInputError("Content type identifier")
        if not handler:
            raise EmptyInputError("Handler identifier")

        attempts = self.policy.assign_attempts
        status = 0
        for attempt in range(1, attempts + 1):
            status = self._native.set_default_role_handler(content_type, self.role, handler)
            logger.attempt(
                "assign", f"{content_type} -> {handler}", attempt, attempts, f"status {status}"
            )
            if attempt < attempts:
                self._sleep(self.policy.delay)

        if status != 0:
            logger.error("Assigning %s to %s failed with status %d", handler, content_type, status)
            raise AssignmentError(content_type, handler, status)
        logger.info("Assigned %s as default handler for %s", handler, content_type)
