# topmark:header:start
#
#   project      : Dutis
#   file         : apps.py
#   file_relpath : src/dutis/cli/commands/apps.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Dutis `apps` command: list installed applications."""

from __future__ import annotations

import click

from dutis.cli.cmd_common import get_console, get_platform
from dutis.config.logging import get_logger
from dutis.platform.apps import declared_extensions
from dutis.platform.macos import MacOSPlatform

logger = get_logger(__name__)


@click.command(
    name="apps",
    help="List installed applications that can be assigned as handlers.",
)
@click.option(
    "--extensions",
    "show_extensions",
    is_flag=True,
    default=False,
    help="Also show the file extensions each application declares.",
)
@click.pass_context
def apps_command(ctx: click.Context, show_extensions: bool) -> None:
    console = get_console(ctx)
    platform = get_platform(ctx)

    if show_extensions:
        if not isinstance(platform, MacOSPlatform):
            console.warn(f"Declared extensions are not available on platform '{platform.name}'.")
            return
        for name, exts in sorted(declared_extensions(platform.bundles).items()):
            console.print(f"{console.styled(name, bold=True)}: {' '.join(exts)}")
        return

    found = False
    for category, handlers in sorted(platform.scan_installed_applications().items()):
        for handler in handlers:
            found = True
            console.print(handler)
        logger.debug("%d applications under %s", len(handlers), category)
    if not found:
        console.warn(f"No applications found on platform '{platform.name}'.")
