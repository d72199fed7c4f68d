# topmark:header:start
#
#   project      : LintBus
#   file         : __init__.py
#   file_relpath : src/lintbus/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration and logging for LintBus.

- `Config` / `MutableConfig`: registry settings with freeze/thaw mechanics.
- `lintbus.config.logging`: TRACE-aware, colorized logging setup.
"""

from __future__ import annotations

from lintbus.config.model import Config, MutableConfig

__all__ = [
    "Config",
    "MutableConfig",
]
