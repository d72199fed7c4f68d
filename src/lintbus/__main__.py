# topmark:header:start
#
#   project      : LintBus
#   file         : __main__.py
#   file_relpath : src/lintbus/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Entry point for `python -m lintbus`."""

from __future__ import annotations

from lintbus.cli.main import cli

if __name__ == "__main__":
    cli()
