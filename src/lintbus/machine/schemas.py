# topmark:header:start
#
#   project      : LintBus
#   file         : schemas.py
#   file_relpath : src/lintbus/machine/schemas.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Keys, kinds and typed payload schemas for machine-readable output.

This module belongs to the payload layer (schemas → shapes → serializers):

- `MachineKey` / `MachineKind`: canonical envelope keys and NDJSON kinds.
- `MachineMessageEntry`: one message, JSON-friendly.
- `MachineDifference`: one published difference, optionally tagged with the
  replay step that produced it.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final, TypedDict, cast

from lintbus.constants import LINTBUS_VERSION, TOOL_NAME

if TYPE_CHECKING:
    from lintbus.message.model import Message
    from lintbus.registry.diff import Difference


class MachineKey:
    """Canonical keys used in machine-readable JSON/NDJSON output envelopes."""

    KIND: Final[str] = "kind"
    META: Final[str] = "meta"

    UPDATES: Final[str] = "updates"
    MESSAGES: Final[str] = "messages"
    SUMMARY: Final[str] = "summary"

    ADDED: Final[str] = "added"
    REMOVED: Final[str] = "removed"
    CURRENT: Final[str] = "current"
    COUNTS: Final[str] = "counts"
    CHANGE: Final[str] = "change"
    STEP: Final[str] = "step"


class MachineKind:
    """Canonical `kind` values for NDJSON records."""

    MESSAGE: Final[str] = "message"
    SUMMARY: Final[str] = "summary"


class MetaPayload(TypedDict):
    """Metadata describing the LintBus runtime for machine output."""

    tool: str
    version: str


def build_meta_payload() -> MetaPayload:
    """Build a small metadata payload with tool name and version."""
    return {"tool": TOOL_NAME, "version": LINTBUS_VERSION}


def normalize_payload(obj: object) -> object:
    """Normalize a machine-output payload into JSON-serializable structures.

    Conversions:
      - Path -> str
      - Enum -> Enum.value
      - object with callable .to_dict() -> normalize(.to_dict())
      - Mapping -> dict[str, normalized value]
      - list/tuple/set/frozenset -> list[normalized item]

    Args:
        obj (object): The machine-output payload.

    Returns:
        object: The JSON-serializable representation of the payload.
    """
    if isinstance(obj, Path):
        return str(obj)

    if isinstance(obj, Enum):
        return obj.value

    to_dict: Any | None = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return normalize_payload(to_dict())

    if isinstance(obj, Mapping):
        mapping: Mapping[object, Any] = cast("Mapping[object, Any]", obj)
        return {str(k): normalize_payload(v) for k, v in mapping.items()}

    if isinstance(obj, (list, tuple, set, frozenset)):
        seq: Iterable[object] = cast("Iterable[object]", obj)
        return [normalize_payload(v) for v in seq]

    return obj


@dataclass(slots=True)
class MachineMessageEntry:
    """Machine-readable message entry.

    Attributes:
        key: Identity key (``None`` if the message was never published).
        linter: Producer display name.
        severity: Severity string (``"error"``, ``"warning"``, ``"info"``).
        excerpt: Short message text.
        file: File path of the message location (``None`` without a location).
        range: ``[[start_row, start_col], [end_row, end_col]]`` or ``None``.
        url: Optional documentation link.
        description: Optional long-form text (strings only).
    """

    key: str | None
    linter: str | None
    severity: str
    excerpt: str
    file: str | None
    range: list[list[int]] | None
    url: str | None = None
    description: str | None = None

    @classmethod
    def from_message(cls, m: Message) -> MachineMessageEntry:
        """Create a machine-readable entry from a message."""
        location = m.location
        return cls(
            key=m.key,
            linter=m.linter_name,
            severity=m.severity.value,
            excerpt=m.excerpt,
            file=location.file if location is not None else None,
            range=location.position.as_list() if location is not None else None,
            url=m.url,
            description=m.description if isinstance(m.description, str) else None,
        )

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly dict; optional fields are omitted when unset."""
        out: dict[str, object] = {
            "key": self.key,
            "linter": self.linter,
            "severity": self.severity,
            "excerpt": self.excerpt,
            "file": self.file,
            "range": self.range,
        }
        if self.url is not None:
            out["url"] = self.url
        if self.description is not None:
            out["description"] = self.description
        return out


@dataclass(slots=True)
class MachineDifference:
    """Machine-readable difference.

    Attributes:
        added: Entries for added messages.
        removed: Entries for removed messages.
        current: Entries for all current messages.
        step: Replay step index that produced the difference, if any.
    """

    added: list[MachineMessageEntry] = field(default_factory=lambda: [])
    removed: list[MachineMessageEntry] = field(default_factory=lambda: [])
    current: list[MachineMessageEntry] = field(default_factory=lambda: [])
    step: int | None = None

    @classmethod
    def from_difference(cls, diff: Difference, *, step: int | None = None) -> MachineDifference:
        """Convert a registry `Difference`."""
        return cls(
            added=[MachineMessageEntry.from_message(m) for m in diff.added],
            removed=[MachineMessageEntry.from_message(m) for m in diff.removed],
            current=[MachineMessageEntry.from_message(m) for m in diff.current],
            step=step,
        )

    def counts(self) -> dict[str, int]:
        """Return a JSON-friendly mapping of list sizes."""
        return {
            MachineKey.ADDED: len(self.added),
            MachineKey.REMOVED: len(self.removed),
            MachineKey.CURRENT: len(self.current),
        }

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly dict with the three lists and their counts."""
        out: dict[str, object] = {}
        if self.step is not None:
            out[MachineKey.STEP] = self.step
        out[MachineKey.ADDED] = [e.to_dict() for e in self.added]
        out[MachineKey.REMOVED] = [e.to_dict() for e in self.removed]
        out[MachineKey.CURRENT] = [e.to_dict() for e in self.current]
        out[MachineKey.COUNTS] = self.counts()
        return out
