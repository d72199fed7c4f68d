# topmark:header:start
#
#   project      : LintBus
#   file         : support.py
#   file_relpath : tests/support.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Test doubles and builders shared across the LintBus test suite.

- `ManualClock` / `ManualTimer`: a timer factory for the registry debouncer
  that only fires when the test calls `ManualClock.advance()`.
- `Recorder`: a subscriber collecting every published difference.
- `make_message()`: builds fresh, unfilled messages.
- `make_unkeyable_message()`: a message whose identity key cannot be computed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from lintbus.message.model import Location, Message, Range, Severity

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from lintbus.registry.diff import Difference


class ManualTimer:
    """Timer that only fires when its `ManualClock` advances."""

    def __init__(self, interval: float, function: Callable[[], None]) -> None:
        self.interval = interval
        self.function = function
        self.started = False
        self.cancelled = False
        self.fired = False

    @property
    def active(self) -> bool:
        return self.started and not self.cancelled and not self.fired

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        if self.active:
            self.fired = True
            self.function()


class ManualClock:
    """Timer factory plus controls for stepping through cooldowns."""

    def __init__(self) -> None:
        self.timers: list[ManualTimer] = []

    def __call__(self, interval: float, function: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(interval, function)
        self.timers.append(timer)
        return timer

    @property
    def active(self) -> list[ManualTimer]:
        return [t for t in self.timers if t.active]

    def advance(self) -> int:
        """Fire every timer that is currently running; return how many fired."""
        due = self.active
        for timer in due:
            timer.fire()
        return len(due)

    def settle(self, limit: int = 10) -> None:
        """Advance until no timer is running."""
        for _ in range(limit):
            if not self.advance():
                return
        raise AssertionError("timers did not settle")


class Recorder:
    """Subscriber that records every published difference."""

    def __init__(self) -> None:
        self.updates: list[Difference] = []

    def __call__(self, diff: Difference) -> None:
        self.updates.append(diff)

    @property
    def last(self) -> Difference:
        assert self.updates, "no update was published"
        return self.updates[-1]

    def __len__(self) -> int:
        return len(self.updates)


def make_message(
    excerpt: str,
    *,
    file: str | None = "a.py",
    row: int = 0,
    column: int = 0,
    severity: Severity = Severity.ERROR,
    url: str | None = None,
    description: object = None,
) -> Message:
    """Return a fresh, unfilled message; ``file=None`` leaves it without a location."""
    return Message(
        severity=severity,
        excerpt=excerpt,
        location=Location(file, Range.from_rows(row, column)) if file is not None else None,
        url=url,
        description=description,
    )


def make_unkeyable_message(excerpt: str) -> Message:
    """Return a message whose severity is not a `Severity`, so keying it raises."""
    message = make_message(excerpt)
    message.severity = cast("Severity", "bogus")
    return message


def excerpts(messages: Iterable[Message]) -> list[str]:
    """Return the sorted excerpts of ``messages``."""
    return sorted(m.excerpt for m in messages)


def same_instances(left: Iterable[Message], right: Iterable[Message]) -> bool:
    """Return True if both iterables hold exactly the same objects (any order)."""
    return sorted(map(id, left)) == sorted(map(id, right))
