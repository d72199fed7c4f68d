# topmark:header:start
#
#   project      : LintBus
#   file         : model.py
#   file_relpath : src/lintbus/message/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core message types for LintBus.

This module defines the records producers push into the
[`MessageRegistry`][lintbus.registry.MessageRegistry]:

Sections:
    * Severity: severity levels with associated terminal colors.
    * Point / Range / Location: zero-based positions inside a document.
    * Reference: optional pointer to a related location.
    * Message: mutable diagnostic record; identity key and owner name are
      filled lazily on first publish (see `lintbus.message.helpers`).

`Message` instances are compared by **object identity**, never by value:
the registry matches "the same" message across snapshots through its identity
key, and keeps the previously published instance so that consumers can attach
transient state to it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, cast

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Callable


class Severity(Enum):
    """Severity of a message.

    Levels map to terminal colors and are ordered by importance: ERROR > WARNING > INFO.
    """

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this severity level.

        Intended for human-readable output only; machine formats should not use colors.

        Returns:
            Callable[[str], str]: The `yachalk` color function associated with this severity.
        """
        return cast(
            "Callable[[str], str]",
            {
                Severity.INFO: chalk.blue,
                Severity.WARNING: chalk.yellow,
                Severity.ERROR: chalk.red_bright,
            }[self],
        )

    @classmethod
    def parse(cls, value: str | Severity) -> Severity:
        """Return the severity for ``value`` (case-insensitive).

        Raises:
            ValueError: If ``value`` does not name a severity.
        """
        if isinstance(value, Severity):
            return value
        return cls(value.strip().lower())


@dataclass(frozen=True)
class Point:
    """Zero-based (row, column) position."""

    row: int = 0
    column: int = 0


@dataclass(frozen=True)
class Range:
    """Half-open span between two points."""

    start: Point = field(default_factory=Point)
    end: Point = field(default_factory=Point)

    @classmethod
    def from_rows(
        cls,
        row: int,
        column: int = 0,
        end_row: int | None = None,
        end_column: int | None = None,
    ) -> Range:
        """Build a range from scalar coordinates; the end defaults to the start."""
        start = Point(row, column)
        end = Point(
            row if end_row is None else end_row,
            column if end_column is None else end_column,
        )
        return cls(start, end)

    def as_list(self) -> list[list[int]]:
        """Return ``[[start.row, start.column], [end.row, end.column]]``."""
        return [[self.start.row, self.start.column], [self.end.row, self.end.column]]


@dataclass(frozen=True)
class Location:
    """A file plus a range inside it."""

    file: str
    position: Range = field(default_factory=Range)


@dataclass(frozen=True)
class Reference:
    """Pointer to a related location (e.g. the first definition of a symbol)."""

    file: str
    position: Point | None = None


@dataclass(eq=False)
class Message:
    """A diagnostic message reported by a producer.

    Attributes:
        severity: Message severity.
        excerpt: Short, human-readable text.
        location: Where the message applies; ``None`` for messages that are not
            tied to a place in a document (e.g. a missing tool configuration).
        reference: Optional pointer to a related location.
        url: Optional link to documentation about the message.
        icon: Optional icon name for presentation layers.
        description: Optional long-form text. Only string descriptions take part
            in the identity key.
        linter_name: Name of the producing linter; filled on first publish.
        key: Identity key; filled on first publish.
        version: Message schema version; filled on first publish.
    """

    severity: Severity
    excerpt: str
    location: Location | None = None
    reference: Reference | None = None
    url: str | None = None
    icon: str | None = None
    description: object = None
    linter_name: str | None = None
    key: str | None = field(default=None, repr=False)
    version: int | None = field(default=None, repr=False)

    @property
    def file(self) -> str | None:
        """Return the file path of this message's location, if it has one."""
        return self.location.file if self.location is not None else None

    @property
    def position(self) -> Range | None:
        """Return the range of this message's location, if it has one."""
        return self.location.position if self.location is not None else None
