# topmark:header:start
#
#   project      : LintBus
#   file         : __init__.py
#   file_relpath : src/lintbus/registry/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Message registry and the snapshot diff engine behind it."""

from __future__ import annotations

from lintbus.registry.debounce import Debouncer, TimerLike, thread_timer
from lintbus.registry.diff import Difference, EntryOutcome, diff_entry
from lintbus.registry.entry import Entry, EntryKey
from lintbus.registry.registry import MessageRegistry

__all__ = [
    "Debouncer",
    "Difference",
    "Entry",
    "EntryKey",
    "EntryOutcome",
    "MessageRegistry",
    "TimerLike",
    "diff_entry",
    "thread_timer",
]
