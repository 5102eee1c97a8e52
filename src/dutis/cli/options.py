# topmark:header:start
#
#   project      : Dutis
#   file         : options.py
#   file_relpath : src/dutis/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Reusable CLI options and their resolution logic.

Commands and the group stay thin: verbosity, config discovery and suffix
selection options are declared once here.
"""

from __future__ import annotations

from typing import Callable, ParamSpec, TypeVar

import click

from dutis.cli.errors import DutisUsageError

P = ParamSpec("P")
R = TypeVar("R")

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
}


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity from ``-v`` and ``-q`` counts.

    Returns:
        int: ``verbose_count`` when verbose, ``-quiet_count`` when quiet, else 0.

    Raises:
        DutisUsageError: If both ``--verbose`` and ``--quiet`` are given.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise DutisUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if verbose_count > 0:
        return verbose_count
    return -quiet_count


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add counting ``-v/--verbose`` and ``-q/--quiet`` options."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify twice for per-identifier detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress informational output.",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--config`` (repeatable) and ``--no-config`` options."""
    f = click.option(
        "--config",
        "-c",
        "config_paths",
        multiple=True,
        type=click.Path(exists=True, dir_okay=False, readable=True),
        help="Additional TOML config file(s), merged after discovered files.",
    )(f)
    f = click.option(
        "--no-config",
        is_flag=True,
        default=False,
        help="Ignore the user and working-directory config files.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the ``--no-color`` flag."""
    return click.option(
        "--no-color",
        is_flag=True,
        default=False,
        help="Disable colored output.",
    )(f)


def suffix_selection_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the positional ``SUFFIX...`` argument and the ``--group`` option."""
    f = click.argument("suffixes", nargs=-1, metavar="[SUFFIX]...")(f)
    f = click.option(
        "--group",
        "-g",
        "group_name",
        default=None,
        help="Use a named suffix group (see 'dutis groups').",
    )(f)
    return f
