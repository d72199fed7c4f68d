# topmark:header:start
#
#   project      : LintBus
#   file         : helpers.py
#   file_relpath : src/lintbus/message/helpers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Identity and completion helpers for messages.

- `message_key()` is the deterministic, pure identity function used by the
  registry to match "the same" message across snapshots.
- `fill_message()` completes a message with owner-derived fields the first time
  it is published. It is idempotent.
- `producer_name()` derives a display name from an opaque producer handle.
"""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

from lintbus.config.logging import get_logger
from lintbus.constants import MESSAGE_VERSION
from lintbus.message.types import ProducerLike

if TYPE_CHECKING:
    from lintbus.config.logging import LintbusLogger
    from lintbus.message.model import Message

logger: LintbusLogger = get_logger(__name__)


def _null(value: object) -> str:
    return "null" if value is None else str(value)


def message_key(message: Message) -> str:
    """Return the identity key of ``message``.

    The key is a SHA-256 hex digest over a tagged rendering of the linter name,
    location, reference, excerpt, severity, icon, URL and (string) description.
    Equal content always yields an equal key.

    Args:
        message: The message to fingerprint.

    Returns:
        The identity key as a hexadecimal string.
    """
    location = message.location
    if location is None:
        loc_part = "$LOCATION:null"
    else:
        start, end = location.position.start, location.position.end
        loc_part = f"$LOCATION:{location.file}${start.row}${start.column}${end.row}${end.column}"
    reference = message.reference
    if reference is None:
        ref_part = "$REFERENCE:null"
    elif reference.position is None:
        ref_part = f"$REFERENCE:{reference.file}$"
    else:
        ref_part = (
            f"$REFERENCE:{reference.file}${reference.position.row}${reference.position.column}"
        )
    description = message.description if isinstance(message.description, str) else None

    parts: list[str] = [
        f"$LINTER:{_null(message.linter_name)}",
        loc_part,
        ref_part,
        f"$EXCERPT:{message.excerpt}",
        f"$SEVERITY:{message.severity.value}",
        f"$ICON:{_null(message.icon)}",
        f"$URL:{_null(message.url)}",
        f"$DESCRIPTION:{_null(description)}",
    ]
    return hashlib.sha256("".join(parts).encode("utf-8")).hexdigest()


def ensure_key(message: Message) -> str:
    """Return the identity key of ``message``, assigning it first if missing."""
    if message.key is None:
        message.key = message_key(message)
    return message.key


def fill_message(message: Message, linter_name: str) -> Message:
    """Complete ``message`` with its owner name, schema version and identity key.

    Existing values are left untouched, so calling this twice on the same
    instance is a no-op.

    Args:
        message: The message to complete (mutated in place).
        linter_name: Display name of the producer that reported it.

    Returns:
        The same message instance, for chaining.
    """
    if not message.linter_name:
        message.linter_name = linter_name
    message.version = MESSAGE_VERSION
    ensure_key(message)
    logger.trace("Filled message %s from %s", message.key, message.linter_name)
    return message


def producer_name(producer: object) -> str:
    """Return a display name for an opaque producer handle.

    Uses ``producer.name`` when the handle carries one, otherwise ``str(producer)``.
    """
    if isinstance(producer, ProducerLike) and isinstance(producer.name, str) and producer.name:
        return producer.name
    return str(producer)
