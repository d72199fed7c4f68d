# topmark:header:start
#
#   project      : LintBus
#   file         : shapes.py
#   file_relpath : src/lintbus/machine/shapes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Envelope and record shaping utilities for machine output.

- JSON envelopes: single objects containing ``"meta"`` plus named payloads.
- NDJSON records: ``{"kind": ..., "meta": ..., <kind>: <payload>}``.

Console-free, Click-free and serialization-free; see
[`lintbus.machine.serializers`][lintbus.machine.serializers] for strings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lintbus.machine.schemas import MachineKey, MachineKind, normalize_payload

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from lintbus.machine.schemas import MachineDifference, MetaPayload


def build_json_envelope(
    *,
    meta: MetaPayload,
    **payloads: object,
) -> dict[str, object]:
    """Build a JSON envelope with `meta` plus one or more named payloads.

    Args:
        meta: Metadata payload (tool/version).
        **payloads: One or more named payload objects.

    Returns:
        JSON-serializable envelope dict.
    """
    out: dict[str, object] = {MachineKey.META: dict(meta)}
    for name, payload in payloads.items():
        out[name] = normalize_payload(payload)
    return out


def build_ndjson_record(
    *,
    kind: str,
    meta: MetaPayload,
    payload: object,
) -> dict[str, object]:
    """Build a single NDJSON record with a uniform envelope.

    Shape:
        `{"kind": <kind>, "meta": <meta>, <kind>: <payload>}`
    """
    return {
        MachineKey.KIND: kind,
        MachineKey.META: dict(meta),
        kind: normalize_payload(payload),
    }


def iter_difference_ndjson_records(
    *,
    meta: MetaPayload,
    differences: Iterable[MachineDifference],
) -> Iterator[dict[str, object]]:
    """Yield NDJSON records for a sequence of differences.

    Each difference yields one ``message`` record per added and removed message
    (with ``change`` set accordingly), followed by one ``summary`` record holding
    the counts.

    Args:
        meta: Shared metadata payload.
        differences: Differences in publish order.

    Yields:
        NDJSON record mappings.
    """
    for diff in differences:
        for change, entries in (
            (MachineKey.ADDED, diff.added),
            (MachineKey.REMOVED, diff.removed),
        ):
            for entry in entries:
                payload: dict[str, object] = {MachineKey.CHANGE: change, **entry.to_dict()}
                if diff.step is not None:
                    payload[MachineKey.STEP] = diff.step
                yield build_ndjson_record(kind=MachineKind.MESSAGE, meta=meta, payload=payload)
        summary: dict[str, object] = dict(diff.counts())
        if diff.step is not None:
            summary[MachineKey.STEP] = diff.step
        yield build_ndjson_record(kind=MachineKind.SUMMARY, meta=meta, payload=summary)
