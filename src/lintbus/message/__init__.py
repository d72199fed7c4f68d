# topmark:header:start
#
#   project      : LintBus
#   file         : __init__.py
#   file_relpath : src/lintbus/message/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Message primitives and helpers.

Design:
    - Producers report `Message` instances in full snapshots per scope.
    - Identity keys come from `message_key()`; they are assigned lazily by
      `fill_message()` the first time a message is published.
    - Messages are mutable and compared by object identity.
"""

from __future__ import annotations

from lintbus.message.helpers import ensure_key, fill_message, message_key, producer_name
from lintbus.message.model import Location, Message, Point, Range, Reference, Severity
from lintbus.message.types import ProducerLike, ScopeHandle

__all__ = [
    "Location",
    "Message",
    "Point",
    "ProducerLike",
    "Range",
    "Reference",
    "ScopeHandle",
    "Severity",
    "ensure_key",
    "fill_message",
    "message_key",
    "producer_name",
]
