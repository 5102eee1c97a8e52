# topmark:header:start
#
#   project      : Dutis
#   file         : cmd_common.py
#   file_relpath : src/dutis/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Plumbing shared by the Dutis subcommands.

These helpers read the shared state placed on ``ctx.obj`` by the ``dutis``
group (console, config, catalog, and optionally an injected platform and
sleep function) and turn engine exceptions into CLI errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dutis.cli.errors import DutisDataError, DutisUsageError
from dutis.config.logging import get_logger
from dutis.core.diagnostics import DiagnosticLevel
from dutis.core.errors import NoValidIdentifiersError
from dutis.engine import build_engine
from dutis.platform import platform_from_config

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from dutis.catalog import ContentTypeCatalog
    from dutis.cli.console import ConsoleLike
    from dutis.config.logging import DutisLogger
    from dutis.config.model import Config
    from dutis.core.diagnostics import Diagnostic
    from dutis.engine import GroupResolution, GroupResolver
    from dutis.platform.base import PlatformCapability

logger: DutisLogger = get_logger(__name__)


def get_console(ctx: click.Context) -> ConsoleLike:
    console: ConsoleLike = ctx.obj["console"]
    return console


def get_config(ctx: click.Context) -> Config:
    config: Config = ctx.obj["config"]
    return config


def get_catalog(ctx: click.Context) -> ContentTypeCatalog:
    catalog: ContentTypeCatalog = ctx.obj["catalog"]
    return catalog


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity (config value, else the ``-v``/``-q`` count)."""
    config: Config | None = ctx.obj.get("config")
    if config is not None and config.verbosity_level is not None:
        return int(config.verbosity_level)
    return int(ctx.obj.get("verbosity_level", 0))


def get_platform(ctx: click.Context, *, probe: bool | None = None) -> PlatformCapability:
    """Return the platform capability for this invocation.

    An injected ``ctx.obj["platform"]`` is returned as-is. Otherwise the
    platform is selected from the config, with ``probe`` overriding
    ``probe_fallback``, and cached on the context.
    """
    injected: PlatformCapability | None = ctx.obj.get("platform")
    if injected is not None:
        return injected
    platform = platform_from_config(get_config(ctx), probe=probe)
    ctx.obj["platform"] = platform
    return platform


def get_engine(ctx: click.Context, *, probe: bool | None = None) -> GroupResolver:
    """Return a `GroupResolver` wired to the invocation's platform and config."""
    platform = get_platform(ctx, probe=probe)
    return build_engine(platform.native, get_config(ctx), sleep=ctx.obj.get("sleep"))


def collect_suffixes(
    ctx: click.Context, suffixes: Sequence[str], group_name: str | None
) -> list[str]:
    """Combine positional suffixes with the members of ``--group``.

    Raises:
        DutisUsageError: If the group is unknown or nothing was selected.
    """
    selected: list[str] = list(suffixes)
    if group_name:
        catalog = get_catalog(ctx)
        members = catalog.group(group_name)
        if members is None:
            available = ", ".join(catalog.group_names()) or "(none)"
            raise DutisUsageError(f"Unknown group '{group_name}' (available: {available})")
        selected.extend(members)
    if not selected:
        raise DutisUsageError("Specify at least one SUFFIX or a --group.")
    return selected


def resolve_or_fail(
    ctx: click.Context, engine: GroupResolver, suffixes: Iterable[str]
) -> GroupResolution:
    """Resolve a group, echo its diagnostics, and map a total failure to `DutisDataError`."""
    try:
        resolution = engine.resolve_group(suffixes)
    except NoValidIdentifiersError as e:
        emit_diagnostics(ctx, e.diagnostics)
        raise DutisDataError(str(e)) from e
    emit_diagnostics(ctx, resolution.diagnostics)
    return resolution


def emit_diagnostics(ctx: click.Context, diagnostics: Iterable[Diagnostic]) -> None:
    """Print diagnostics to stderr; INFO diagnostics only when verbose."""
    console = get_console(ctx)
    verbose = get_effective_verbosity(ctx) > 0
    for diag in diagnostics:
        context, message = diag.as_pair()
        line = f"{context}: {message}" if context else message
        if diag.level == DiagnosticLevel.ERROR:
            console.error(line)
        elif diag.level == DiagnosticLevel.WARNING:
            console.warn(line)
        elif verbose:
            console.print(console.styled(line, dim=True))
