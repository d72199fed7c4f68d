# topmark:header:start
#
#   project      : LintBus
#   file         : entry.py
#   file_relpath : src/lintbus/registry/entry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-(producer, scope) tracking records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Hashable

    from lintbus.message.model import Message
    from lintbus.message.types import ScopeHandle


class EntryKey(NamedTuple):
    """Composite key of the registry's entry map."""

    producer: Hashable
    scope: ScopeHandle


@dataclass(eq=False)
class Entry:
    """Tracked snapshot state for one (producer, scope) pair.

    Attributes:
        producer: Opaque producer handle.
        scope: Opaque scope handle; ``None`` means producer-wide.
        messages: Latest snapshot pushed by the producer (not yet diffed).
        published: Last snapshot that was diffed and published.
        changed: True if ``messages`` was replaced since the last recompute.
        deleted: True if the entry must be retracted on the next recompute.
    """

    producer: Hashable
    scope: ScopeHandle
    messages: list[Message] = field(default_factory=lambda: [])
    published: list[Message] = field(default_factory=lambda: [])
    changed: bool = False
    deleted: bool = False

    @property
    def key(self) -> EntryKey:
        """Return this entry's map key."""
        return EntryKey(self.producer, self.scope)
