# topmark:header:start
#
#   project      : Dutis
#   file         : dump_config.py
#   file_relpath : src/dutis/cli/commands/dump_config.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Dutis `dump-config` command.

Prints the effective, merged configuration as TOML, wrapped between
``# === BEGIN ===`` and ``# === END ===`` markers for easy parsing in tests
or tooling.
"""

from __future__ import annotations

import click

from dutis.cli.cmd_common import get_config, get_console, get_effective_verbosity


@click.command(
    name="dump-config",
    help="Dump the effective Dutis configuration as TOML.",
)
@click.pass_context
def dump_config_command(ctx: click.Context) -> None:
    console = get_console(ctx)
    config = get_config(ctx)

    if get_effective_verbosity(ctx) > 0:
        sources = ", ".join(config.config_files) or "(defaults only)"
        console.print(f"# Config files: {sources}")
    console.print("# === BEGIN ===")
    console.print(config.to_toml().rstrip("\n"))
    console.print("# === END ===")
