# topmark:header:start
#
#   project      : LintBus
#   file         : registry.py
#   file_relpath : src/lintbus/registry/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Message registry: per-source snapshots, diffing and debounced publishing.

Producers push full snapshots per (producer, scope) pair with
`MessageRegistry.set`; documents and producers going away are retracted with
`MessageRegistry.delete_by_scope` / `MessageRegistry.delete_by_producer`.
None of these diff anything themselves: they only mark entries and trigger the
debouncer, which recomputes one coalesced `Difference` for all tracked entries
and broadcasts it when something was added or removed.

Typical usage:
    ```python
    from lintbus.registry import MessageRegistry

    registry = MessageRegistry()
    sub = registry.on_did_update_messages(lambda diff: print(diff.counts()))
    registry.set("flake8", "app.py", messages)
    ...
    registry.delete_by_scope("app.py")
    registry.dispose()
    ```

Threading:
    All calls are serialized on an internal re-entrant lock. A recompute holds
    the lock from the first entry until subscribers have been notified, so no
    mutation interleaves with it. Subscribers may call back into the registry
    from the same thread; such calls only schedule further work.
"""

from __future__ import annotations

from threading import RLock
from typing import TYPE_CHECKING

from lintbus.config.logging import get_logger
from lintbus.config.model import Config
from lintbus.events.emitter import Emitter
from lintbus.registry.debounce import Debouncer, thread_timer
from lintbus.registry.diff import Difference, EntryOutcome, check_unique_keys, diff_entry
from lintbus.registry.entry import Entry, EntryKey

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable, Iterable

    from lintbus.config.logging import LintbusLogger
    from lintbus.events.emitter import Subscription
    from lintbus.message.model import Message
    from lintbus.message.types import ScopeHandle
    from lintbus.registry.debounce import TimerLike

logger: LintbusLogger = get_logger(__name__)


class MessageRegistry:
    """Track message snapshots per (producer, scope) and publish coalesced differences.

    Args:
        config: Scheduling settings; defaults to `Config()`.
        timer_factory: Timer constructor for the debouncer (injectable for tests).
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        timer_factory: Callable[[float, Callable[[], None]], TimerLike] = thread_timer,
    ) -> None:
        self.config: Config = config or Config()
        self._lock = RLock()
        self._entries: dict[EntryKey, Entry] = {}
        self._messages: tuple[Message, ...] = ()
        self._emitter: Emitter[Difference] = Emitter()
        self._debouncer = Debouncer(
            self._update,
            self.config.debounce_seconds,
            leading=self.config.leading_edge,
            timer_factory=timer_factory,
        )
        self._disposed = False

    # ------------------------------------------------------------------ state

    @property
    def messages(self) -> tuple[Message, ...]:
        """Return every message as of the last broadcast."""
        return self._messages

    @property
    def disposed(self) -> bool:
        """Return True after `dispose()`."""
        return self._disposed

    def __len__(self) -> int:
        """Return the number of tracked (producer, scope) entries."""
        with self._lock:
            return len(self._entries)

    def has_entry(self, producer: Hashable, scope: ScopeHandle = None) -> bool:
        """Return True if an entry is tracked for ``(producer, scope)``."""
        with self._lock:
            return EntryKey(producer, scope) in self._entries

    # -------------------------------------------------------------- mutation

    def set(
        self,
        producer: Hashable,
        scope: ScopeHandle,
        messages: Iterable[Message],
    ) -> None:
        """Replace the snapshot of ``producer`` for ``scope`` and schedule a recompute.

        Args:
            producer: Opaque, hashable producer handle.
            scope: Opaque, hashable scope handle; ``None`` for producer-wide messages.
            messages: The producer's full current message set for this scope.
        """
        snapshot = list(messages)
        key = EntryKey(producer, scope)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                entry = Entry(producer=producer, scope=scope)
                self._entries[key] = entry
                logger.trace("New entry for producer=%r scope=%r", producer, scope)
            entry.messages = snapshot
            entry.changed = True
        logger.trace("Set %d message(s) for producer=%r scope=%r", len(snapshot), producer, scope)
        self._debouncer.trigger()

    def delete_by_scope(self, scope: ScopeHandle) -> None:
        """Retract every entry for ``scope`` on the next recompute."""
        with self._lock:
            marked = self._mark_deleted(lambda entry: entry.scope == scope)
        logger.trace("Marked %d entr(ies) deleted for scope=%r", marked, scope)
        self._debouncer.trigger()

    def delete_by_producer(self, producer: Hashable) -> None:
        """Retract every entry of ``producer`` on the next recompute."""
        with self._lock:
            marked = self._mark_deleted(lambda entry: entry.producer == producer)
        logger.trace("Marked %d entr(ies) deleted for producer=%r", marked, producer)
        self._debouncer.trigger()

    def _mark_deleted(self, predicate: Callable[[Entry], bool]) -> int:
        # Caller holds self._lock
        marked = 0
        for entry in self._entries.values():
            if predicate(entry):
                entry.deleted = True
                marked += 1
        return marked

    # ------------------------------------------------------------- recompute

    def _update(self) -> None:
        """Diff every tracked entry and broadcast the result if anything changed."""
        with self._lock:
            if self._disposed:
                return
            result = Difference()
            for key, entry in list(self._entries.items()):
                try:
                    outcome = diff_entry(entry, result)
                except Exception:
                    # The entry stays dirty; its last published set is kept.
                    logger.exception(
                        "Recompute failed for producer=%r scope=%r; keeping previous messages",
                        entry.producer,
                        entry.scope,
                    )
                    result.current.extend(entry.published)
                    continue
                logger.trace("Entry %r: %s", key, outcome.value)
                if outcome is EntryOutcome.DELETED:
                    del self._entries[key]
                elif __debug__:
                    check_unique_keys(entry)

            if not result.has_changes:
                logger.trace("Recompute produced no changes; not publishing")
                return

            self._messages = tuple(result.current)
            logger.debug(
                "Publishing update: %d added, %d removed, %d current",
                len(result.added),
                len(result.removed),
                len(result.current),
            )
            self._emitter.emit(result)

    def flush(self) -> bool:
        """Run an armed trailing recompute now.

        Returns:
            True if a recompute was pending and has run.
        """
        return self._debouncer.flush()

    # ---------------------------------------------------------- subscription

    def on_did_update_messages(self, callback: Callable[[Difference], None]) -> Subscription[Difference]:
        """Subscribe ``callback`` to published differences.

        Returns:
            A handle; call ``dispose()`` on it (or `unsubscribe`) to stop receiving updates.
        """
        return self._emitter.subscribe(callback)

    subscribe = on_did_update_messages

    def unsubscribe(self, subscription: Subscription[Difference]) -> None:
        """Remove a subscription returned by `on_did_update_messages`."""
        self._emitter.unsubscribe(subscription)

    def dispose(self) -> None:
        """Cancel any scheduled recompute and release all subscriptions.

        A recompute that is already running completes first.
        """
        self._debouncer.dispose()
        with self._lock:
            self._disposed = True
            self._emitter.dispose_all()
        logger.debug("Message registry disposed")
