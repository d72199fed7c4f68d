# topmark:header:start
#
#   project      : LintBus
#   file         : diff.py
#   file_relpath : src/lintbus/registry/diff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Identity-preserving snapshot diff.

`diff_entry()` folds one tracked [`Entry`][lintbus.registry.entry.Entry] into an
accumulating [`Difference`][lintbus.registry.diff.Difference]. The registry calls
it for every entry during a recompute and broadcasts the result only when
something was added or removed.

Cases, in order:

1. **deleted**: every published message is removed; the caller drops the entry.
2. **unchanged**: published messages carry over to ``current`` as-is.
3. **first snapshot**: every new message is added.
4. **empty snapshot**: every published message is removed; the entry is kept.
5. **general**: messages are matched by identity key. New keys are added,
   vanished keys are removed, and surviving keys keep the *previously
   published* instance so transient state attached downstream survives.

Within one snapshot, messages sharing an identity key are collapsed to the
first occurrence so published keys stay unique per entry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from lintbus.config.logging import get_logger
from lintbus.errors import InvariantViolationError
from lintbus.message.helpers import ensure_key, fill_message, producer_name

if TYPE_CHECKING:
    from collections.abc import Iterable

    from lintbus.config.logging import LintbusLogger
    from lintbus.message.model import Message
    from lintbus.registry.entry import Entry

logger: LintbusLogger = get_logger(__name__)


class EntryOutcome(Enum):
    """How a single entry contributed to a recompute."""

    DELETED = "deleted"
    UNCHANGED = "unchanged"
    FIRST = "first"
    CLEARED = "cleared"
    SAME_KEYS = "same_keys"
    UPDATED = "updated"


@dataclass
class Difference:
    """The published unit describing the change since the last broadcast.

    Attributes:
        added: Messages that were not published before.
        removed: Previously published messages that are gone.
        current: Every message published after this update.
    """

    added: list[Message] = field(default_factory=lambda: [])
    removed: list[Message] = field(default_factory=lambda: [])
    current: list[Message] = field(default_factory=lambda: [])

    @property
    def has_changes(self) -> bool:
        """Return True if anything was added or removed."""
        return bool(self.added or self.removed)

    def counts(self) -> dict[str, int]:
        """Return a JSON-friendly mapping of list sizes."""
        return {
            "added": len(self.added),
            "removed": len(self.removed),
            "current": len(self.current),
        }


def dedupe_by_key(messages: Iterable[Message]) -> list[Message]:
    """Return ``messages`` without later repeats of an identity key.

    Keys must already be assigned.
    """
    seen: set[str | None] = set()
    unique: list[Message] = []
    for message in messages:
        if message.key in seen:
            continue
        seen.add(message.key)
        unique.append(message)
    return unique


def check_unique_keys(entry: Entry) -> None:
    """Raise if the entry's published set holds duplicate identity keys.

    Raises:
        InvariantViolationError: If two published messages share a key.
    """
    keys = [m.key for m in entry.published]
    if len(keys) != len(set(keys)):
        raise InvariantViolationError(
            f"duplicate identity keys published for producer={entry.producer!r} "
            f"scope={entry.scope!r}"
        )


def _fill_snapshot(entry: Entry) -> list[Message]:
    name = producer_name(entry.producer)
    for message in entry.messages:
        fill_message(message, name)
    unique = dedupe_by_key(entry.messages)
    if len(unique) != len(entry.messages):
        logger.debug(
            "Dropped %d message(s) with duplicate identity keys from %s",
            len(entry.messages) - len(unique),
            name,
        )
    return unique


def diff_entry(entry: Entry, result: Difference) -> EntryOutcome:
    """Fold ``entry`` into ``result`` and update its published snapshot.

    The entry stays marked as changed until its new snapshot is committed. If
    filling the snapshot raises, neither ``result`` nor ``entry.published`` has
    been touched, and the next recompute retries the same snapshot.

    Args:
        entry: The tracked entry (mutated in place, except when deleted).
        result: Accumulator for the current recompute.

    Returns:
        Which case applied. For `EntryOutcome.DELETED` the caller must drop
        the entry from its tracked set.
    """
    if entry.deleted:
        result.removed.extend(entry.published)
        return EntryOutcome.DELETED

    if not entry.changed:
        result.current.extend(entry.published)
        return EntryOutcome.UNCHANGED

    outcome = _fold_snapshot(entry, result)
    entry.changed = False
    return outcome


def _fold_snapshot(entry: Entry, result: Difference) -> EntryOutcome:
    # Fill before appending to result.
    if not entry.published:
        fresh = _fill_snapshot(entry)
        result.added.extend(fresh)
        result.current.extend(fresh)
        entry.published = fresh
        return EntryOutcome.FIRST

    if not entry.messages:
        result.removed.extend(entry.published)
        entry.published = []
        return EntryOutcome.CLEARED

    old_messages = entry.published
    old_keys = {ensure_key(m) for m in old_messages}
    new_messages = _fill_snapshot(entry)
    new_keys = {m.key for m in new_messages}

    if new_keys == old_keys and len(new_messages) == len(old_messages):
        result.current.extend(old_messages)
        return EntryOutcome.SAME_KEYS

    published: list[Message] = []
    for message in new_messages:
        if message.key not in old_keys:
            result.added.append(message)
            result.current.append(message)
            published.append(message)

    for message in old_messages:
        if message.key in new_keys:
            result.current.append(message)
            published.append(message)
        else:
            result.removed.append(message)

    entry.published = published
    return EntryOutcome.UPDATED
