# topmark:header:start
#
#   project      : Dutis
#   file         : handlers.py
#   file_relpath : src/dutis/cli/commands/handlers.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Dutis `handlers` command.

Lists the applications that can open *every* given suffix: the intersection of
the registered handlers of the suffixes' content types. When a single content
type has no registered handler and ``--probe`` is given, the permissive
fallback (declared extensions, then probing) is consulted instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dutis.cli.cmd_common import (
    collect_suffixes,
    get_catalog,
    get_config,
    get_console,
    get_effective_verbosity,
    get_engine,
    get_platform,
    resolve_or_fail,
)
from dutis.cli.errors import DutisUnavailableError
from dutis.cli.options import CONTEXT_SETTINGS, suffix_selection_options
from dutis.config.logging import get_logger
from dutis.core.types import display_suffix
from dutis.engine import GroupStatus

if TYPE_CHECKING:
    from dutis.cli.console import ConsoleLike
    from dutis.engine import GroupResolution

logger = get_logger(__name__)


def describe_failure(resolution: GroupResolution) -> str:
    """Return the user-facing explanation for a resolution without common handlers."""
    suffixes = " ".join(display_suffix(s) for s in sorted(resolution.mapping.values()))
    if resolution.status == GroupStatus.NO_HANDLERS:
        return f"No applications are registered to open {suffixes}."
    return f"No single application is registered to open all of {suffixes}."


def print_mapping(console: ConsoleLike, ctx: click.Context, resolution: GroupResolution) -> None:
    catalog = get_catalog(ctx)
    for uti in resolution.identifiers:
        suffix = resolution.mapping.get_by_key(uti)
        console.print(
            console.styled(
                f"{display_suffix(suffix or '')} -> {uti} ({catalog.friendly_name(uti)})", dim=True
            )
        )
        handlers = resolution.handler_sets.get(uti)
        if handlers is not None and get_effective_verbosity(ctx) > 1:
            for handler in handlers:
                console.print(console.styled(f"    {handler}", dim=True))


@click.command(
    name="handlers",
    help="List the applications that can open every given SUFFIX.",
    context_settings=CONTEXT_SETTINGS,
)
@suffix_selection_options
@click.option(
    "--probe",
    is_flag=True,
    default=False,
    help=(
        "If a single content type has no registered handler, fall back to "
        "applications declaring the extension, then to probing installed apps (slow). "
        "Also enabled by probe_fallback under [handlers]."
    ),
)
@click.pass_context
def handlers_command(
    ctx: click.Context,
    suffixes: tuple[str, ...],
    group_name: str | None,
    probe: bool,
) -> None:
    console = get_console(ctx)
    selected = collect_suffixes(ctx, suffixes, group_name)
    engine = get_engine(ctx, probe=probe or None)

    resolution = resolve_or_fail(ctx, engine, selected)
    if get_effective_verbosity(ctx) > 0:
        print_mapping(console, ctx, resolution)

    if resolution.common_handlers:
        for handler in resolution.common_handlers:
            console.print(handler)
        return

    # --probe, or probe_fallback = true under [handlers]
    use_fallback = probe or get_config(ctx).probe_fallback
    if use_fallback and resolution.status == GroupStatus.NO_HANDLERS:
        (suffix,) = resolution.mapping.values()
        platform = get_platform(ctx, probe=True)
        logger.info("No registered handlers for .%s; using fallback tiers", suffix)
        fallback = platform.find_handlers_for_extension(suffix)
        if fallback:
            console.warn(
                f"No registered handlers; applications that may open {display_suffix(suffix)}:"
            )
            for handler in fallback:
                console.print(handler)
            return

    raise DutisUnavailableError(describe_failure(resolution))
