# topmark:header:start
#
#   project      : LintBus
#   file         : __init__.py
#   file_relpath : src/lintbus/events/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Publish/subscribe plumbing used by the message registry."""

from __future__ import annotations

from lintbus.events.emitter import Emitter, Subscription

__all__ = [
    "Emitter",
    "Subscription",
]
