# topmark:header:start
#
#   project      : Dutis
#   file         : __main__.py
#   file_relpath : src/dutis/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Module entry point for running Dutis via ``python -m dutis``.

Delegates to :func:`dutis.cli.main.cli`, the same entry point as the ``dutis``
console script.
"""

from __future__ import annotations

from dutis.cli.main import cli

if __name__ == "__main__":
    cli()
