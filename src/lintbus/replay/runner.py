# topmark:header:start
#
#   project      : LintBus
#   file         : runner.py
#   file_relpath : src/lintbus/replay/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Drive a `MessageRegistry` from replay steps and collect its broadcasts.

The runner gives the registry timers that never fire on their own, so the
outcome does not depend on wall-clock time: the first step runs on the leading
edge, and later steps are published by explicit flushes. Without ``coalesce``
every step is flushed; with ``coalesce`` only the last one is, so all steps
after the first collapse into one difference.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from lintbus.config.logging import get_logger
from lintbus.registry.registry import MessageRegistry
from lintbus.replay.script import StepAction

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from lintbus.config.logging import LintbusLogger
    from lintbus.config.model import Config
    from lintbus.message.model import Message
    from lintbus.registry.debounce import TimerLike
    from lintbus.registry.diff import Difference
    from lintbus.replay.script import Step

logger: LintbusLogger = get_logger(__name__)


class HeldTimer:
    """Timer that never fires; cooldowns only end through `MessageRegistry.flush`."""

    def __init__(self, interval: float, function: Callable[[], None]) -> None:
        self.interval = interval
        self.function = function

    def start(self) -> None:
        """Do nothing."""

    def cancel(self) -> None:
        """Do nothing."""


def held_timer(interval: float, function: Callable[[], None]) -> TimerLike:
    """Timer factory producing `HeldTimer` instances."""
    return HeldTimer(interval, function)


@dataclass
class ReplayResult:
    """Outcome of a replay.

    Attributes:
        updates: ``(step index, difference)`` pairs in publish order.
        messages: The registry's message set after the last broadcast.
    """

    updates: list[tuple[int, Difference]] = field(default_factory=lambda: [])
    messages: tuple[Message, ...] = ()


def apply_step(registry: MessageRegistry, step: Step) -> None:
    """Apply one step to ``registry``."""
    if step.action is StepAction.SET:
        registry.set(step.producer, step.scope, [spec.build() for spec in step.messages])
    elif step.action is StepAction.DELETE_SCOPE:
        registry.delete_by_scope(step.scope)
    else:
        registry.delete_by_producer(step.producer)


def run_replay(
    steps: Sequence[Step],
    *,
    config: Config | None = None,
    coalesce: bool = False,
) -> ReplayResult:
    """Replay ``steps`` against a fresh registry.

    Args:
        steps: Parsed replay steps.
        config: Registry settings (``leading_edge`` applies; timers are held).
        coalesce: Flush only after the last step instead of after each one.

    Returns:
        The collected broadcasts and final message set.
    """
    result = ReplayResult()
    current_step = 0

    def on_update(diff: Difference) -> None:
        result.updates.append((current_step, diff))

    registry = MessageRegistry(config, timer_factory=held_timer)
    registry.on_did_update_messages(on_update)
    try:
        for current_step, step in enumerate(steps):
            logger.debug("Replay step %d: %s", current_step, step.action.value)
            apply_step(registry, step)
            if not coalesce:
                registry.flush()
        if coalesce:
            registry.flush()
        result.messages = registry.messages
    finally:
        registry.dispose()
    return result
