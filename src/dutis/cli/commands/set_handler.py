# topmark:header:start
#
#   project      : Dutis
#   file         : set_handler.py
#   file_relpath : src/dutis/cli/commands/set_handler.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Dutis `set` command: make HANDLER the default for every given suffix.

The handler must be among the common handlers of the group unless ``--force``
is given. The assignment is applied to every content type of the group; a
failed content type does not stop the others, and nothing is rolled back.
"""

from __future__ import annotations

import click

from dutis.cli.cmd_common import (
    collect_suffixes,
    emit_diagnostics,
    get_console,
    get_engine,
    resolve_or_fail,
)
from dutis.cli.commands.handlers import describe_failure
from dutis.cli.errors import DutisCliError, DutisDataError, DutisUnavailableError, DutisUsageError
from dutis.cli.exit_codes import ExitCode
from dutis.cli.options import CONTEXT_SETTINGS, suffix_selection_options
from dutis.core.diagnostics import compute_diagnostic_stats
from dutis.core.errors import EmptyInputError
from dutis.core.types import display_suffix


@click.command(
    name="set",
    help="Set HANDLER (a bundle identifier) as the default application for every SUFFIX.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("handler", metavar="HANDLER")
@suffix_selection_options
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Assign even if HANDLER is not registered for every content type.",
)
@click.pass_context
def set_command(
    ctx: click.Context,
    handler: str,
    suffixes: tuple[str, ...],
    group_name: str | None,
    force: bool,
) -> None:
    console = get_console(ctx)
    handler = handler.strip()
    if not handler:
        raise DutisDataError(str(EmptyInputError("Handler identifier")))

    selected = collect_suffixes(ctx, suffixes, group_name)
    engine = get_engine(ctx)
    resolution = resolve_or_fail(ctx, engine, selected)

    if not force:
        if not resolution.common_handlers:
            raise DutisUnavailableError(
                describe_failure(resolution) + " Use --force to assign anyway."
            )
        if handler not in resolution.common_handlers:
            choices = ", ".join(resolution.common_handlers)
            raise DutisUsageError(
                f"'{handler}' is not registered for every content type (candidates: {choices}). "
                "Use --force to assign anyway."
            )

    report = engine.assign_group(resolution.mapping, handler)
    for uti, suffix in report.assigned:
        console.print(f"{display_suffix(suffix)} ({uti}) -> {handler}")
    emit_diagnostics(ctx, report.failures)

    if report.ok:
        return
    if report.assigned:
        stats = compute_diagnostic_stats(report.failures)
        console.warn(
            f"{stats.n_error} of {len(resolution.mapping)} content types kept their previous default."
        )
        ctx.exit(ExitCode.PARTIAL_FAILURE)
    raise DutisCliError(f"Could not set {handler} as default for any content type.")
