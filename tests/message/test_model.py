# topmark:header:start
#
#   project      : LintBus
#   file         : test_model.py
#   file_relpath : tests/message/test_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the message value types."""

from __future__ import annotations

import pytest

from lintbus.message.model import Message, Point, Range, Severity
from lintbus.message.types import ProducerLike
from tests.conftest import parametrize
from tests.support import make_message


@parametrize(
    "raw, expected",
    [
        ("error", Severity.ERROR),
        ("Warning", Severity.WARNING),
        (" INFO ", Severity.INFO),
        (Severity.ERROR, Severity.ERROR),
    ],
)
def test_severity_parse(raw: str | Severity, expected: Severity) -> None:
    """Severity names are parsed case-insensitively."""
    assert Severity.parse(raw) is expected


def test_severity_parse_rejects_unknown() -> None:
    """Unknown severities raise ValueError."""
    with pytest.raises(ValueError):
        Severity.parse("fatal")


def test_severity_color_is_callable() -> None:
    """Each severity renders text through a color function."""
    for severity in Severity:
        assert "x" in severity.color("x")


def test_range_from_rows_defaults_end_to_start() -> None:
    """A range built from a single point is empty at that point."""
    rng = Range.from_rows(3, 4)

    assert rng.start == Point(3, 4)
    assert rng.end == Point(3, 4)
    assert rng.as_list() == [[3, 4], [3, 4]]


def test_messages_compare_by_identity() -> None:
    """Two messages with equal content are distinct objects."""
    left = make_message("a")
    right = make_message("a")

    assert left != right
    assert left == left
    assert left.file == "a.py"
    assert left.position == Range.from_rows(0, 0)


def test_location_is_optional() -> None:
    """Producer-wide messages may omit their location."""
    message = Message(severity=Severity.INFO, excerpt="no config found")

    assert message.location is None
    assert message.file is None
    assert message.position is None


def test_producer_like_protocol() -> None:
    """Objects with a ``name`` attribute satisfy `ProducerLike`."""

    class Producer:
        @property
        def name(self) -> str:
            return "p"

    assert isinstance(Producer(), ProducerLike)
    assert not isinstance(object(), ProducerLike)
