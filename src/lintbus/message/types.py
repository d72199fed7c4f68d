# topmark:header:start
#
#   project      : LintBus
#   file         : types.py
#   file_relpath : src/lintbus/message/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared typing helpers for producers and scopes.

Producer and scope handles are opaque to the registry: it only hashes and
compares them. `ProducerLike` describes the optional ``name`` attribute used
to label filled messages.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Protocol, TypeAlias, runtime_checkable

ScopeHandle: TypeAlias = Hashable | None


@runtime_checkable
class ProducerLike(Protocol):
    """Structural interface for named producer handles."""

    @property
    def name(self) -> str:
        """Return the display name of the producer."""
        ...