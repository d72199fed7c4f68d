# topmark:header:start
#
#   project      : LintBus
#   file         : model.py
#   file_relpath : src/lintbus/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable runtime snapshot consumed by the message registry.
    - `MutableConfig`: a mutable builder used during discovery/merge; it
      can be frozen into `Config` and thawed back for edits.

Precedence (lowest to highest), see `MutableConfig.load_merged`:
    1. runtime defaults
    2. ``[tool.lintbus]`` in ``pyproject.toml`` (discovered directory)
    3. ``lintbus.toml`` (discovered directory)
    4. explicit config files, in the given order
    5. explicit overrides (e.g. from the CLI)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from lintbus.config.io import (
    get_bool_value_or_none,
    get_int_value_or_none,
    get_tool_table,
    load_toml_dict,
    warn_unknown_keys,
)
from lintbus.config.keys import Toml
from lintbus.config.logging import get_logger
from lintbus.constants import DEFAULT_DEBOUNCE_MS, LINTBUS_TOML_NAME, PYPROJECT_TOML_NAME
from lintbus.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from lintbus.config.io import TomlTable
    from lintbus.config.logging import LintbusLogger

logger: LintbusLogger = get_logger(__name__)


@dataclass(frozen=True)
class Config:
    """Immutable runtime configuration for a message registry.

    Attributes:
        debounce_ms: Quiescence window of the recompute debouncer, in milliseconds.
        leading_edge: Run the first recompute of a burst immediately.
        config_files: Config sources that contributed to this snapshot.
    """

    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    leading_edge: bool = True
    config_files: tuple[str, ...] = ()

    @property
    def debounce_seconds(self) -> float:
        """Return the debounce window in seconds."""
        return self.debounce_ms / 1000.0

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config."""
        return MutableConfig(
            debounce_ms=self.debounce_ms,
            leading_edge=self.leading_edge,
            config_files=list(self.config_files),
        )

    def to_toml_dict(self) -> TomlTable:
        """Return the TOML-shaped representation of the tunable settings."""
        return {
            Toml.KEY_DEBOUNCE_MS: self.debounce_ms,
            Toml.KEY_LEADING_EDGE: self.leading_edge,
        }


@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    Fields left as ``None`` inherit from lower-precedence layers; `freeze`
    resolves them against the runtime defaults.
    """

    debounce_ms: int | None = None
    leading_edge: bool | None = None
    config_files: list[str] = field(default_factory=lambda: [])

    def freeze(self) -> Config:
        """Validate and freeze this builder into an immutable `Config`.

        Raises:
            ConfigError: If ``debounce_ms`` is negative.
        """
        debounce_ms = DEFAULT_DEBOUNCE_MS if self.debounce_ms is None else self.debounce_ms
        if debounce_ms < 0:
            raise ConfigError(f"'{Toml.KEY_DEBOUNCE_MS}' must be >= 0, got {debounce_ms}")
        return Config(
            debounce_ms=debounce_ms,
            leading_edge=True if self.leading_edge is None else self.leading_edge,
            config_files=tuple(self.config_files),
        )

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder holding the runtime defaults."""
        return cls(debounce_ms=DEFAULT_DEBOUNCE_MS, leading_edge=True)

    @classmethod
    def from_toml_dict(cls, data: TomlTable, *, source: str | None = None) -> MutableConfig:
        """Create a draft config from a parsed TOML table.

        Args:
            data: The LintBus table (top level of ``lintbus.toml`` or
                ``[tool.lintbus]``).
            source: Identifier of the source, recorded in ``config_files``.

        Returns:
            The resulting draft; absent keys stay ``None``.

        Raises:
            ConfigError: If a known key has the wrong type.
        """
        label = source or "<config>"
        warn_unknown_keys(data, source=label)
        draft = cls(
            debounce_ms=get_int_value_or_none(data, Toml.KEY_DEBOUNCE_MS),
            leading_edge=get_bool_value_or_none(data, Toml.KEY_LEADING_EDGE),
            config_files=[source] if source else [],
        )
        logger.trace("Config draft from %s: %s", label, draft)
        return draft

    @classmethod
    def from_file(cls, path: Path) -> MutableConfig:
        """Load a draft from ``lintbus.toml``-style or ``pyproject.toml`` files."""
        data = load_toml_dict(path)
        if path.name == PYPROJECT_TOML_NAME:
            data = get_tool_table(data)
        return cls.from_toml_dict(data, source=str(path))

    @classmethod
    def discover(cls, directory: Path) -> list[MutableConfig]:
        """Return drafts for the config files found in ``directory``, lowest precedence first."""
        drafts: list[MutableConfig] = []
        for name in (PYPROJECT_TOML_NAME, LINTBUS_TOML_NAME):
            candidate = directory / name
            if candidate.is_file():
                logger.debug("Discovered config file %s", candidate)
                drafts.append(cls.from_file(candidate))
        return drafts

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where set values from ``other`` override this draft."""
        return MutableConfig(
            debounce_ms=self.debounce_ms if other.debounce_ms is None else other.debounce_ms,
            leading_edge=self.leading_edge if other.leading_edge is None else other.leading_edge,
            config_files=[*self.config_files, *other.config_files],
        )

    @classmethod
    def load_merged(
        cls,
        *,
        directory: Path | None = None,
        extra_files: Iterable[Path] = (),
        overrides: MutableConfig | None = None,
    ) -> MutableConfig:
        """Merge defaults, discovered files, explicit files and overrides.

        Args:
            directory: Directory searched for ``pyproject.toml`` and ``lintbus.toml``.
                ``None`` skips discovery.
            extra_files: Explicit config files (e.g. ``--config``).
            overrides: Highest-precedence values.

        Returns:
            The merged draft.
        """
        merged = cls.from_defaults()
        layers: list[MutableConfig] = []
        if directory is not None:
            layers.extend(cls.discover(directory))
        layers.extend(cls.from_file(Path(p)) for p in extra_files)
        if overrides is not None:
            layers.append(overrides)
        for layer in layers:
            merged = merged.merge_with(layer)
        return merged
