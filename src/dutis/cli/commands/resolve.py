# topmark:header:start
#
#   project      : Dutis
#   file         : resolve.py
#   file_relpath : src/dutis/cli/commands/resolve.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Dutis `resolve` command.

Prints the content-type identifier of each suffix. Unknown suffixes still
resolve, to a synthetic ``dyn.`` identifier, which is flagged in the output.
"""

from __future__ import annotations

import click

from dutis.cli.cmd_common import get_catalog, get_console, get_engine
from dutis.cli.errors import DutisDataError
from dutis.cli.options import CONTEXT_SETTINGS
from dutis.config.logging import get_logger
from dutis.core.errors import EmptyInputError
from dutis.core.types import display_suffix, is_dynamic, normalize_suffix

logger = get_logger(__name__)


@click.command(
    name="resolve",
    help="Show the content type identifier of each SUFFIX.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("suffixes", nargs=-1, required=True, metavar="SUFFIX...")
@click.pass_context
def resolve_command(ctx: click.Context, suffixes: tuple[str, ...]) -> None:
    """Resolve each suffix and print ``.suffix  identifier  (friendly name)``."""
    console = get_console(ctx)
    catalog = get_catalog(ctx)
    resolver = get_engine(ctx).resolver

    failed = 0
    for raw in suffixes:
        try:
            suffix = normalize_suffix(raw)
        except EmptyInputError as e:
            console.error(f"{raw!r}: {e}")
            failed += 1
            continue
        uti = resolver.resolve(suffix)
        if uti is None:
            console.error(f"{display_suffix(suffix)}: no content type identifier")
            failed += 1
            continue
        line = f"{display_suffix(suffix)}\t{uti}\t({catalog.friendly_name(uti)})"
        if is_dynamic(uti):
            line += console.styled("  [not recognized by the system]", fg="yellow")
        console.print(line)

    if failed:
        raise DutisDataError(f"{failed} of {len(suffixes)} suffixes could not be resolved.")
