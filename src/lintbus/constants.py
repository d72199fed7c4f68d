# topmark:header:start
#
#   project      : LintBus
#   file         : constants.py
#   file_relpath : src/lintbus/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LintBus Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    LINTBUS_VERSION: str = get_version("lintbus")
except PackageNotFoundError:  # running from a source checkout
    LINTBUS_VERSION = "0.0.0"

TOOL_NAME: str = "lintbus"

# Quiescence window of the registry debouncer, in milliseconds:
DEFAULT_DEBOUNCE_MS: int = 100

# Config discovery file names:
LINTBUS_TOML_NAME: str = "lintbus.toml"
PYPROJECT_TOML_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_SECTION: str = "tool.lintbus"

# Environment variable consulted by `setup_logging()`:
LOG_LEVEL_ENV_VAR: str = "LINTBUS_LOG_LEVEL"

# Schema version stamped on filled messages:
MESSAGE_VERSION: int = 2
