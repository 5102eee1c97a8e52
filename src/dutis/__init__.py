# topmark:header:start
#
#   project      : Dutis
#   file         : __init__.py
#   file_relpath : src/dutis/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Dutis package.

Dutis resolves file-name suffixes to macOS content types, lists the
applications registered to open them and assigns a default handler. It copes
with the eventually-consistent LaunchServices registry through bounded
retry-and-converge loops, and exposes both a CLI and a small typed engine.
"""

from __future__ import annotations
