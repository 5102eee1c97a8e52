# topmark:header:start
#
#   project      : Dutis
#   file         : __init__.py
#   file_relpath : src/dutis/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Click command line interface for Dutis."""
