# topmark:header:start
#
#   project      : Dutis
#   file         : groups.py
#   file_relpath : src/dutis/cli/commands/groups.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Dutis `groups` command: list the configured suffix groups."""

from __future__ import annotations

import click

from dutis.cli.cmd_common import get_catalog, get_console
from dutis.core.types import display_suffix


@click.command(
    name="groups",
    help="List the named suffix groups usable with --group.",
)
@click.pass_context
def groups_command(ctx: click.Context) -> None:
    console = get_console(ctx)
    catalog = get_catalog(ctx)
    names = catalog.group_names()
    if not names:
        console.print("No groups configured.")
        return
    width = max(len(n) for n in names)
    for name in names:
        members = " ".join(display_suffix(s) for s in catalog.group(name) or ())
        console.print(f"{console.styled(name.ljust(width), bold=True)}  {members}")
