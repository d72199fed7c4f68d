# topmark:header:start
#
#   project      : LintBus
#   file         : io.py
#   file_relpath : src/lintbus/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources.

This module provides I/O helpers for reading LintBus configuration from
on-disk TOML files (``lintbus.toml`` / ``pyproject.toml``) and typed getters
over the parsed tables.

Parsing is done with `tomlkit` and returned as plain `dict` structures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeAlias, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from lintbus.config.keys import Toml
from lintbus.config.logging import get_logger
from lintbus.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from lintbus.config.logging import LintbusLogger

TomlTable: TypeAlias = dict[str, Any]

logger: LintbusLogger = get_logger(__name__)


def parse_toml_text(text: str, *, source: str = "<string>") -> TomlTable:
    """Parse TOML text into a plain dict.

    Args:
        text: TOML document text.
        source: Label used in error messages.

    Returns:
        The parsed TOML content.

    Raises:
        ConfigError: If the text is not valid TOML.
    """
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as e:
        raise ConfigError(f"Error decoding TOML from {source}: {e}") from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path: Path to a TOML document (e.g., ``lintbus.toml`` or ``pyproject.toml``).

    Returns:
        The parsed TOML content.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Error loading TOML from {path}: {e}") from e
    logger.debug("Loaded TOML from %s", path)
    return parse_toml_text(text, source=str(path))


def get_tool_table(data: TomlTable) -> TomlTable:
    """Return the ``[tool.lintbus]`` table of a parsed ``pyproject.toml`` (or ``{}``)."""
    tool: Any = data.get(Toml.SECTION_TOOL, {})
    if not isinstance(tool, dict):
        return {}
    table: Any = cast("TomlTable", tool).get(Toml.SECTION_LINTBUS, {})
    return cast("TomlTable", table) if isinstance(table, dict) else {}


def get_int_value_or_none(table: TomlTable, key: str) -> int | None:
    """Return an integer value, ``None`` if absent.

    Raises:
        ConfigError: If the value is present but not an integer.
    """
    if key not in table:
        return None
    value: Any = table[key]
    # bool is an int subclass; TOML booleans are not valid here
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"'{key}' must be an integer, got {value!r}")
    return value


def get_bool_value_or_none(table: TomlTable, key: str) -> bool | None:
    """Return a boolean value, ``None`` if absent.

    Raises:
        ConfigError: If the value is present but not a boolean.
    """
    if key not in table:
        return None
    value: Any = table[key]
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be a boolean, got {value!r}")
    return value


def warn_unknown_keys(table: TomlTable, *, source: str) -> list[str]:
    """Log a warning for each unknown key and return them (sorted)."""
    unknown = sorted(k for k in table if k not in Toml.ALL_KEYS)
    for key in unknown:
        logger.warning("Ignoring unknown configuration key '%s' in %s", key, source)
    return unknown
