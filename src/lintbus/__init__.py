# topmark:header:start
#
#   project      : LintBus
#   file         : __init__.py
#   file_relpath : src/lintbus/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LintBus package.

LintBus aggregates diagnostic messages pushed by independent producers (lint
tools, compilers, ...) per document, and publishes one coalesced stream of
added/removed/current changes to subscribers.
"""

from __future__ import annotations

from lintbus.config.model import Config, MutableConfig
from lintbus.events.emitter import Emitter, Subscription
from lintbus.message import Location, Message, Point, Range, Reference, Severity
from lintbus.registry import Difference, MessageRegistry

__all__ = [
    "Config",
    "Difference",
    "Emitter",
    "Location",
    "Message",
    "MessageRegistry",
    "MutableConfig",
    "Point",
    "Range",
    "Reference",
    "Severity",
    "Subscription",
]
