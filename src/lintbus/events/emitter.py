# topmark:header:start
#
#   project      : LintBus
#   file         : emitter.py
#   file_relpath : src/lintbus/events/emitter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Single-event broadcast channel.

`Emitter` is owned by the [`MessageRegistry`][lintbus.registry.MessageRegistry]
and delivers each `Difference` to every subscriber. Subscribing returns an
explicit `Subscription` handle; there is no process-wide channel.

Delivery:
    - Callbacks run synchronously in the emitting thread.
    - Every callback receives the same object.
    - An exception raised by one callback is logged and does not prevent the
      remaining callbacks from running.
"""

from __future__ import annotations

from threading import RLock
from typing import TYPE_CHECKING, Generic, TypeVar

from lintbus.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from lintbus.config.logging import LintbusLogger

logger: LintbusLogger = get_logger(__name__)

T = TypeVar("T")


class Subscription(Generic[T]):
    """Handle returned by `Emitter.subscribe()`.

    Disposing the handle removes the callback. Disposing twice is a no-op.
    """

    def __init__(self, emitter: Emitter[T], callback: Callable[[T], None]) -> None:
        self._emitter: Emitter[T] | None = emitter
        self.callback = callback

    @property
    def disposed(self) -> bool:
        """Return True once the subscription has been removed."""
        return self._emitter is None

    def dispose(self) -> None:
        """Remove the callback from its emitter."""
        emitter, self._emitter = self._emitter, None
        if emitter is not None:
            emitter._remove(self)

    def __repr__(self) -> str:
        state = "disposed" if self.disposed else "active"
        return f"Subscription({self.callback!r}, {state})"


class Emitter(Generic[T]):
    """Broadcast channel with isolated subscriber callbacks.

    Example::

        emitter: Emitter[int] = Emitter()
        sub = emitter.subscribe(print)
        emitter.emit(42)  # prints 42
        sub.dispose()
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._subscriptions: list[Subscription[T]] = []
        self._disposed = False

    @property
    def disposed(self) -> bool:
        """Return True after `dispose_all()`."""
        return self._disposed

    @property
    def subscription_count(self) -> int:
        """Number of active subscriptions."""
        return len(self._subscriptions)

    def subscribe(self, callback: Callable[[T], None]) -> Subscription[T]:
        """Register ``callback`` and return its handle.

        Subscribing to a disposed emitter returns an already-disposed handle.
        """
        sub = Subscription(self, callback)
        with self._lock:
            if self._disposed:
                sub._emitter = None
                return sub
            self._subscriptions.append(sub)
        return sub

    def unsubscribe(self, subscription: Subscription[T]) -> None:
        """Remove a subscription (equivalent to ``subscription.dispose()``)."""
        subscription.dispose()

    def _remove(self, subscription: Subscription[T]) -> None:
        with self._lock:
            try:
                self._subscriptions.remove(subscription)
            except ValueError:
                logger.trace("Subscription %r already removed", subscription)

    def emit(self, value: T) -> int:
        """Deliver ``value`` to every subscriber.

        Args:
            value: The object passed to each callback.

        Returns:
            The number of callbacks that completed without raising.
        """
        with self._lock:
            if self._disposed:
                logger.trace("Emitter disposed; dropping %r", value)
                return 0
            # Callbacks may (un)subscribe while we iterate
            targets = list(self._subscriptions)

        delivered = 0
        for sub in targets:
            if sub.disposed:
                continue
            try:
                sub.callback(value)
            except Exception:
                logger.exception("Subscriber %r raised while handling an update", sub.callback)
            else:
                delivered += 1
        return delivered

    def dispose_all(self) -> None:
        """Remove all subscriptions and release the channel."""
        with self._lock:
            subs, self._subscriptions = self._subscriptions, []
            self._disposed = True
        for sub in subs:
            sub._emitter = None
