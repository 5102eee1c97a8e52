# topmark:header:start
#
#   project      : Dutis
#   file         : version.py
#   file_relpath : src/dutis/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Dutis `version` command."""

from __future__ import annotations

import click

from dutis.cli.cmd_common import get_console, get_effective_verbosity
from dutis.constants import DUTIS_VERSION


@click.command(
    name="version",
    help="Show the installed version of Dutis.",
)
@click.pass_context
def version_command(ctx: click.Context) -> None:
    """Print the Dutis version as installed in the active environment."""
    console = get_console(ctx)
    if get_effective_verbosity(ctx) > 0:
        console.print(console.styled("Dutis version:", bold=True, underline=True))
        console.print(f"    {console.styled(DUTIS_VERSION, bold=True)}")
    else:
        console.print(console.styled(DUTIS_VERSION, bold=True))
