# topmark:header:start
#
#   project      : LintBus
#   file         : debounce.py
#   file_relpath : src/lintbus/registry/debounce.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Leading-edge debouncer with a single coalesced trailing run.

Behavior of `Debouncer.trigger()`:

- No cooldown running: run the function now (leading edge, in the caller's
  thread) and start a cooldown of ``wait`` seconds.
- Cooldown running: arm a trailing run. However many triggers arrive, at most
  one trailing run happens, at cooldown expiry (on the timer thread). The
  trailing run starts a new cooldown.
- ``leading=False``: the first trigger only arms the trailing run.

Timers default to daemon `threading.Timer` instances; tests inject a manual
timer factory to step through cooldowns deterministically.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Protocol

from lintbus.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from lintbus.config.logging import LintbusLogger

logger: LintbusLogger = get_logger(__name__)


class TimerLike(Protocol):
    """The subset of `threading.Timer` used by the debouncer."""

    def start(self) -> None:
        """Start counting down."""
        ...

    def cancel(self) -> None:
        """Stop the timer if it has not fired yet."""
        ...


def thread_timer(interval: float, function: Callable[[], None]) -> TimerLike:
    """Return a daemon `threading.Timer` (the default timer factory)."""
    timer = threading.Timer(interval, function)
    timer.daemon = True
    return timer


class Debouncer:
    """Run ``function`` at most once per cooldown, plus one trailing run.

    Args:
        function: Zero-argument callable to run.
        wait: Cooldown length in seconds.
        leading: Run immediately on the first trigger of a burst.
        timer_factory: Callable creating a startable/cancellable timer.
    """

    def __init__(
        self,
        function: Callable[[], None],
        wait: float,
        *,
        leading: bool = True,
        timer_factory: Callable[[float, Callable[[], None]], TimerLike] = thread_timer,
    ) -> None:
        self._function = function
        self.wait = wait
        self.leading = leading
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer: TimerLike | None = None
        self._generation = 0
        self._pending = False
        self._disposed = False

    @property
    def pending(self) -> bool:
        """Return True if a trailing run is armed."""
        return self._pending

    @property
    def cooling_down(self) -> bool:
        """Return True while a cooldown timer is running."""
        return self._timer is not None

    def _start_timer(self) -> None:
        # Caller holds self._lock
        self._generation += 1
        generation = self._generation
        timer = self._timer_factory(self.wait, lambda: self._on_timer(generation))
        self._timer = timer
        timer.start()

    def _stop_timer(self) -> None:
        # Caller holds self._lock
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._generation += 1

    def trigger(self) -> None:
        """Request a run; see the module docstring for the timing rules."""
        with self._lock:
            if self._disposed:
                return
            if self._timer is not None:
                self._pending = True
                return
            run_now = self.leading
            if not run_now:
                self._pending = True
            self._start_timer()
        if run_now:
            logger.trace("Debouncer: leading run")
            self._function()

    __call__ = trigger

    def _on_timer(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._disposed:
                return
            self._timer = None
            if not self._pending:
                return
            self._pending = False
            self._start_timer()
        logger.trace("Debouncer: trailing run")
        self._function()

    def flush(self) -> bool:
        """Run an armed trailing call now instead of at cooldown expiry.

        A fresh cooldown starts, so triggers arriving during or right after the
        flushed run are coalesced into the next trailing run.

        Returns:
            True if a call was armed and has run.
        """
        with self._lock:
            if self._disposed or not self._pending:
                return False
            self._pending = False
            self._stop_timer()
            self._start_timer()
        logger.trace("Debouncer: flushed run")
        self._function()
        return True

    def cancel(self) -> None:
        """Drop any armed trailing run and stop the cooldown."""
        with self._lock:
            self._pending = False
            self._stop_timer()

    def dispose(self) -> None:
        """Cancel pending work; later triggers are ignored."""
        with self._lock:
            self._disposed = True
            self._pending = False
            self._stop_timer()
