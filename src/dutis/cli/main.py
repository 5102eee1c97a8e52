# topmark:header:start
#
#   project      : Dutis
#   file         : main.py
#   file_relpath : src/dutis/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Dutis command line entry point.

Group-level options are resolved once and placed into ``ctx.obj``:

- ``console``: the `ClickConsole` for program output;
- ``config``: the frozen, merged `Config`;
- ``catalog``: the `ContentTypeCatalog` built from it;
- ``verbosity_level``: the ``-v``/``-q`` count.

Callers (tests in particular) may pre-populate ``obj`` with ``platform`` and
``sleep``; those are used instead of the auto-selected platform and
`time.sleep`.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from dutis.catalog import build_catalog
from dutis.cli.commands.apps import apps_command
from dutis.cli.commands.dump_config import dump_config_command
from dutis.cli.commands.groups import groups_command
from dutis.cli.commands.handlers import handlers_command
from dutis.cli.commands.resolve import resolve_command
from dutis.cli.commands.set_handler import set_command
from dutis.cli.commands.version import version_command
from dutis.cli.console import ClickConsole
from dutis.cli.errors import DutisConfigError
from dutis.cli.options import (
    CONTEXT_SETTINGS,
    common_color_options,
    common_config_options,
    common_verbose_options,
    resolve_verbosity,
)
from dutis.config.logging import get_logger, resolve_env_log_level, setup_logging
from dutis.config.model import MutableConfig

if TYPE_CHECKING:
    from collections.abc import Sequence

    from dutis.cli.console import ConsoleLike
    from dutis.config.logging import DutisLogger
    from dutis.config.model import Config

logger: DutisLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    no_color: bool,
    config_paths: Sequence[str],
    no_config: bool,
) -> None:
    """Initialize shared state (console, config, catalog) on the Click context.

    Raises:
        DutisConfigError: If the merged configuration holds invalid values.
    """
    ctx.ensure_object(dict)

    level_cli = resolve_verbosity(verbose, quiet)
    ctx.obj["verbosity_level"] = level_cli

    # Internal logging is driven by DUTIS_LOG_LEVEL, not by -v/-q
    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    console = ClickConsole(enable_color=not no_color)
    ctx.color = not no_color
    ctx.obj["console"] = console

    draft = MutableConfig.load_merged(
        extra_config_files=[Path(p) for p in config_paths],
        no_config=no_config,
    ).apply_cli_args({"verbosity_level": level_cli})
    try:
        config: Config = draft.freeze()
    except ValueError as e:
        raise DutisConfigError(f"Invalid configuration: {e}") from e
    ctx.obj["config"] = config
    ctx.obj["catalog"] = build_catalog(config)

    if level_cli >= 0:
        for diag in config.diagnostics:
            console.warn(f"config: {diag.context}: {diag.message}")


@click.group(
    cls=click.Group,
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    help="Inspect and set the default applications for file types on macOS.",
)
@common_verbose_options
@common_color_options
@common_config_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    no_color: bool,
    config_paths: tuple[str, ...],
    no_config: bool,
) -> None:
    """Entry point for the Dutis CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        no_color=no_color,
        config_paths=config_paths,
        no_config=no_config,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'dutis handlers SUFFIX...' to list candidate applications.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(resolve_command)

cli.add_command(handlers_command)

cli.add_command(set_command)

cli.add_command(groups_command)

cli.add_command(apps_command)

cli.add_command(dump_config_command)

if __name__ == "__main__":
    cli()
