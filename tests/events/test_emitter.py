# topmark:header:start
#
#   project      : LintBus
#   file         : test_emitter.py
#   file_relpath : tests/events/test_emitter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the `Emitter` broadcast channel and its `Subscription` handles."""

from __future__ import annotations

import pytest

from lintbus.events.emitter import Emitter, Subscription


def test_emit_delivers_same_object_to_all() -> None:
    """Every subscriber receives the identical value."""
    emitter: Emitter[object] = Emitter()
    seen: list[object] = []
    emitter.subscribe(seen.append)
    emitter.subscribe(seen.append)
    payload = object()

    assert emitter.emit(payload) == 2
    assert seen == [payload, payload]
    assert all(item is payload for item in seen)


def test_emit_without_subscribers() -> None:
    """Emitting to nobody is fine."""
    emitter: Emitter[int] = Emitter()

    assert emitter.emit(1) == 0


def test_dispose_subscription_is_idempotent() -> None:
    """Disposing twice is harmless and stops delivery."""
    emitter: Emitter[int] = Emitter()
    seen: list[int] = []
    sub: Subscription[int] = emitter.subscribe(seen.append)

    sub.dispose()
    sub.dispose()
    emitter.emit(1)

    assert seen == []
    assert sub.disposed
    assert emitter.subscription_count == 0
    assert "disposed" in repr(sub)


def test_unsubscribe_matches_dispose() -> None:
    """`Emitter.unsubscribe()` removes the subscription."""
    emitter: Emitter[int] = Emitter()
    sub = emitter.subscribe(lambda _v: None)

    emitter.unsubscribe(sub)

    assert sub.disposed
    assert emitter.subscription_count == 0


def test_exception_is_isolated(caplog: pytest.LogCaptureFixture) -> None:
    """A raising callback is logged and skipped; the rest still run."""
    emitter: Emitter[int] = Emitter()
    seen: list[int] = []

    def boom(_value: int) -> None:
        raise ValueError("bad subscriber")

    emitter.subscribe(boom)
    emitter.subscribe(seen.append)

    with caplog.at_level("ERROR"):
        delivered = emitter.emit(7)

    assert delivered == 1
    assert seen == [7]
    assert "bad subscriber" in caplog.text


def test_subscriber_disposing_another_during_emit() -> None:
    """A subscription disposed by an earlier callback is skipped in the same emit."""
    emitter: Emitter[int] = Emitter()
    seen: list[str] = []
    second: list[Subscription[int]] = []

    def first(_value: int) -> None:
        seen.append("first")
        second[0].dispose()

    emitter.subscribe(first)
    second.append(emitter.subscribe(lambda _v: seen.append("second")))
    emitter.emit(1)

    assert seen == ["first"]


def test_subscribe_during_emit_takes_effect_next_time() -> None:
    """Callbacks added while emitting are not called for the current value."""
    emitter: Emitter[int] = Emitter()
    seen: list[int] = []

    def adder(_value: int) -> None:
        if not seen:
            emitter.subscribe(seen.append)

    emitter.subscribe(adder)
    emitter.emit(1)
    assert seen == []

    emitter.emit(2)
    assert seen == [2]


def test_dispose_all_releases_everything() -> None:
    """After `dispose_all()` handles are disposed and emits are dropped."""
    emitter: Emitter[int] = Emitter()
    seen: list[int] = []
    sub = emitter.subscribe(seen.append)

    emitter.dispose_all()

    assert emitter.disposed
    assert sub.disposed
    assert emitter.emit(1) == 0
    assert seen == []
    assert emitter.subscribe(seen.append).disposed
