# topmark:header:start
#
#   project      : LintBus
#   file         : keys.py
#   file_relpath : src/lintbus/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML key names for LintBus configuration.

Keys live at the top level of ``lintbus.toml`` or under ``[tool.lintbus]`` in
``pyproject.toml``. Renaming or removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML keys used by LintBus configuration."""

    # [tool] nesting inside pyproject.toml
    SECTION_TOOL: Final[str] = "tool"
    SECTION_LINTBUS: Final[str] = "lintbus"

    # Registry scheduling
    KEY_DEBOUNCE_MS: Final[str] = "debounce_ms"
    KEY_LEADING_EDGE: Final[str] = "leading_edge"

    ALL_KEYS: Final[frozenset[str]] = frozenset({KEY_DEBOUNCE_MS, KEY_LEADING_EDGE})
