# topmark:header:start
#
#   project      : LintBus
#   file         : __init__.py
#   file_relpath : src/lintbus/machine/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Machine-readable (JSON / NDJSON) output for published differences.

Layers:
    schemas → shapes → serializers
"""

from __future__ import annotations

from lintbus.machine.schemas import (
    MachineDifference,
    MachineKey,
    MachineKind,
    MachineMessageEntry,
    MetaPayload,
    build_meta_payload,
    normalize_payload,
)
from lintbus.machine.serializers import (
    serialize_differences_json,
    serialize_differences_ndjson,
    serialize_json_object,
    serialize_ndjson,
)
from lintbus.machine.shapes import (
    build_json_envelope,
    build_ndjson_record,
    iter_difference_ndjson_records,
)

__all__ = [
    "MachineDifference",
    "MachineKey",
    "MachineKind",
    "MachineMessageEntry",
    "MetaPayload",
    "build_json_envelope",
    "build_meta_payload",
    "build_ndjson_record",
    "iter_difference_ndjson_records",
    "normalize_payload",
    "serialize_differences_json",
    "serialize_differences_ndjson",
    "serialize_json_object",
    "serialize_ndjson",
]
