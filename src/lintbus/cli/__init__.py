# topmark:header:start
#
#   project      : LintBus
#   file         : __init__.py
#   file_relpath : src/lintbus/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Command-line interface for LintBus.

The CLI is a thin host around the library: it replays scripted producer
activity through a `MessageRegistry` and renders the published differences.
"""
