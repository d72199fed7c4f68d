# topmark:header:start
#
#   project      : LintBus
#   file         : __init__.py
#   file_relpath : src/lintbus/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LintBus CLI subcommands."""
