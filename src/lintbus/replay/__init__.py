# topmark:header:start
#
#   project      : LintBus
#   file         : __init__.py
#   file_relpath : src/lintbus/replay/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Scripted producer activity for exercising a message registry offline."""

from __future__ import annotations

from lintbus.replay.runner import HeldTimer, ReplayResult, apply_step, held_timer, run_replay
from lintbus.replay.script import MessageSpec, Step, StepAction, load_script, parse_script

__all__ = [
    "HeldTimer",
    "MessageSpec",
    "ReplayResult",
    "Step",
    "StepAction",
    "apply_step",
    "held_timer",
    "load_script",
    "parse_script",
    "run_replay",
]
