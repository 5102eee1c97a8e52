# topmark:header:start
#
#   project      : Dutis
#   file         : group.py
#   file_relpath : src/dutis/engine/group.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Resolution and assignment of handlers for a group of suffixes.

A *group* is any collection of suffixes the user wants handled by the same
application (e.g. ``mp4 mov mkv``). Resolving a group:

1. resolves each suffix to a content-type identifier, recording per-suffix
   failures as diagnostics and skipping them;
2. stores ``identifier -> suffix`` pairs in a `BiMap`, so suffixes sharing an
   identifier collapse to one entry (the later suffix wins);
3. queries the handlers of each distinct identifier, in sorted order, keeping a
   running intersection and stopping as soon as it is empty;
4. reports the common handlers, or why there are none (`GroupStatus`).

Assigning a handler to a group applies it to every identifier in the mapping;
failures are recorded per identifier and nothing is rolled back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from dutis.config.logging import get_logger
from dutis.core.bimap import BiMap
from dutis.core.diagnostics import Diagnostic, DiagnosticLog
from dutis.core.errors import (
    AssignmentError,
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

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from dutis.config.logging import DutisLogger
    from dutis.engine.handlers import HandlerRegistry
    from dutis.engine.resolver import TypeIdentifierResolver

logger: DutisLogger = get_logger(__name__)


class GroupStatus(Enum):
    """Outcome of a group resolution.

    Attributes:
        RESOLVED: At least one handler is common to every identifier.
        NO_HANDLERS: The single identifier has no registered handlers.
        NO_COMMON_HANDLER: Identifiers have handlers, but none shared by all.
    """

    RESOLVED = "resolved"
    NO_HANDLERS = "no-handlers"
    NO_COMMON_HANDLER = "no-common-handler"


@dataclass(frozen=True)
class GroupResolution:
    """Result of `GroupResolver.resolve_group`.

    Attributes:
        mapping (BiMap[ContentTypeIdentifier, Suffix]): Identifier to suffix pairs.
        common_handlers (tuple[HandlerIdentifier, ...] | None): Sorted common
            handlers, or None when there are none.
        status (GroupStatus): Why `common_handlers` is (not) None.
        handler_sets (Mapping[ContentTypeIdentifier, HandlerSet]): Handlers of
            each identifier actually queried (fewer than `mapping` after a
            short-circuit).
        diagnostics (tuple[Diagnostic, ...]): Per-suffix failures and evictions.
    """

    mapping: BiMap[ContentTypeIdentifier, Suffix]
    common_handlers: tuple[HandlerIdentifier, ...] | None
    status: GroupStatus
    handler_sets: Mapping[ContentTypeIdentifier, HandlerSet] = field(default_factory=lambda: {})
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def identifiers(self) -> list[ContentTypeIdentifier]:
        """Return the distinct identifiers of the group, sorted."""
        return sorted(self.mapping.keys())


@dataclass(frozen=True)
class AssignmentReport:
    """Result of `GroupResolver.assign_group`.

    Attributes:
        handler (HandlerIdentifier): The handler that was assigned.
        assigned (tuple[tuple[ContentTypeIdentifier, Suffix], ...]): Pairs whose
            default now is ``handler``.
        failures (tuple[Diagnostic, ...]): One ERROR diagnostic per failed identifier.
    """

    handler: HandlerIdentifier
    assigned: tuple[tuple[ContentTypeIdentifier, Suffix], ...]
    failures: tuple[Diagnostic, ...]

    @property
    def ok(self) -> bool:
        """True when every identifier took the new default."""
        return not self.failures


class GroupResolver:
    """Resolve and assign handlers for groups of suffixes.

    Args:
        resolver (TypeIdentifierResolver): Suffix to identifier resolution.
        registry (HandlerRegistry): Convergent handler queries and assignment.
    """

    def __init__(self, resolver: TypeIdentifierResolver, registry: HandlerRegistry) -> None:
        self.resolver = resolver
        self.registry = registry

    def build_mapping(
        self, suffixes: Iterable[str], diagnostics: DiagnosticLog
    ) -> BiMap[ContentTypeIdentifier, Suffix]:
        """Resolve ``suffixes`` into an identifier to suffix mapping.

        Failures and evictions are recorded in ``diagnostics``; the mapping may
        be empty.
        """
        mapping: BiMap[ContentTypeIdentifier, Suffix] = BiMap()
        for raw in suffixes:
            try:
                suffix = normalize_suffix(raw)
            except EmptyInputError as e:
                logger.warning("Skipping suffix %r: %s", raw, e)
                diagnostics.add_error(str(e), repr(raw))
                continue

            uti = self.resolver.resolve(suffix)
            if uti is None:
                err = ResolutionExhaustedError(suffix)
                diagnostics.add_error(str(err), display_suffix(suffix))
                continue

            previous = mapping.get_by_key(uti)
            if previous is not None and previous != suffix:
                diagnostics.add_info(
                    f"{display_suffix(previous)} shares {uti} with {display_suffix(suffix)}; "
                    f"{display_suffix(suffix)} is used",
                    display_suffix(previous),
                )
            owner = mapping.get_by_value(suffix)
            if owner is not None and owner != uti:
                diagnostics.add_info(
                    f"{display_suffix(suffix)} moved from {owner} to {uti}",
                    display_suffix(suffix),
                )
            mapping.insert(uti, suffix)
        return mapping

    def resolve_group(self, suffixes: Iterable[str]) -> GroupResolution:
        """Resolve a group of suffixes and intersect their handlers.

        Raises:
            NoValidIdentifiersError: If no suffix resolved to an identifier.
        """
        diagnostics = DiagnosticLog()
        mapping = self.build_mapping(suffixes, diagnostics)
        if mapping.is_empty():
            raise NoValidIdentifiersError(tuple(diagnostics))

        identifiers = sorted(mapping.keys())
        handler_sets: dict[ContentTypeIdentifier, HandlerSet] = {}
        common: HandlerSet | None = None
        for uti in identifiers:
            handlers = self.registry.query_handlers(uti)
            handler_sets[uti] = handlers
            common = handlers if common is None else common & handlers
            if not common:
                logger.debug("Handler intersection empty after %s; stopping", uti)
                break

        assert common is not None
        if common:
            status = GroupStatus.RESOLVED
            common_handlers: tuple[HandlerIdentifier, ...] | None = common.sorted()
        else:
            # A lone empty set means no handlers; any larger group merely shares none
            status = (
                GroupStatus.NO_HANDLERS if len(identifiers) == 1 else GroupStatus.NO_COMMON_HANDLER
            )
            common_handlers = None

        logger.info(
            "Group of %d identifiers: %s (%d common handlers)",
            len(identifiers),
            status.value,
            len(common_handlers or ()),
        )
        return GroupResolution(
            mapping=mapping,
            common_handlers=common_handlers,
            status=status,
            handler_sets=handler_sets,
            diagnostics=tuple(diagnostics),
        )

    def assign_group(
        self, mapping: BiMap[ContentTypeIdentifier, Suffix], handler: str
    ) -> AssignmentReport:
        """Assign ``handler`` as the default for every identifier in ``mapping``.

        Identifiers are processed in sorted order. A failed identifier does not
        stop the others.

        Raises:
            EmptyInputError: If ``handler`` is empty; nothing is assigned.
        """
        if not handler:
            raise EmptyInputError("Handler identifier")

        assigned: list[tuple[ContentTypeIdentifier, Suffix]] = []
        failures = DiagnosticLog()
        for uti in sorted(mapping.keys()):
            suffix = mapping.get_by_key(uti)
            assert suffix is not None
            try:
                self.registry.assign_default(uti, handler)
            except AssignmentError as e:
                failures.add_error(str(e), uti)
                continue
            assigned.append((uti, suffix))

        return AssignmentReport(
            handler=HandlerIdentifier(handler),
            assigned=tuple(assigned),
            failures=tuple(failures),
        )
