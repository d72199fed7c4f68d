# topmark:header:start
#
#   project      : LintBus
#   file         : serializers.py
#   file_relpath : src/lintbus/machine/serializers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

r"""Pure JSON/NDJSON serialization utilities for machine output.

Conventions:
- `json.dumps()` does not append a trailing newline.
- `serialize_ndjson()` returns a string that *does* end with a final `\\n`
  (unless there are no records).
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from lintbus.machine.schemas import MachineKey, normalize_payload
from lintbus.machine.shapes import build_json_envelope, iter_difference_ndjson_records

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from lintbus.machine.schemas import MachineDifference, MachineMessageEntry, MetaPayload


def serialize_json_object(obj: object) -> str:
    """Serialize an object to pretty-printed JSON (no trailing newline)."""
    return json.dumps(normalize_payload(obj), indent=2)


def serialize_ndjson(records: Iterable[Mapping[str, object]]) -> str:
    """Serialize shaped NDJSON records, one JSON document per line."""
    lines = [json.dumps(record) for record in records]
    return "".join(f"{line}\n" for line in lines)


def serialize_differences_json(
    meta: MetaPayload,
    differences: Iterable[MachineDifference],
    messages: Iterable[MachineMessageEntry],
) -> str:
    """Serialize published differences plus the final message set as one JSON envelope."""
    envelope = build_json_envelope(
        meta=meta,
        **{
            MachineKey.UPDATES: list(differences),
            MachineKey.MESSAGES: list(messages),
        },
    )
    return serialize_json_object(envelope)


def serialize_differences_ndjson(
    meta: MetaPayload,
    differences: Iterable[MachineDifference],
) -> str:
    """Serialize published differences as NDJSON."""
    return serialize_ndjson(iter_difference_ndjson_records(meta=meta, differences=differences))
