# topmark:header:start
#
#   project      : LintBus
#   file         : test_runner.py
#   file_relpath : tests/replay/test_runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for replaying scripts against a registry."""

from __future__ import annotations

from lintbus.config.model import Config
from lintbus.replay.runner import run_replay
from lintbus.replay.script import parse_script
from tests.support import excerpts

SESSION = """
[[step]]
action = "set"
producer = "flake8"
scope = "app.py"
[[step.messages]]
excerpt = "E501"

[[step]]
action = "set"
producer = "flake8"
scope = "app.py"
[[step.messages]]
excerpt = "E501"
[[step.messages]]
excerpt = "W291"
row = 2

[[step]]
action = "set"
producer = "flake8"
scope = "app.py"
[[step.messages]]
excerpt = "W291"
row = 2

[[step]]
action = "delete_scope"
scope = "app.py"
"""


def test_each_step_publishes() -> None:
    """Without coalescing every changing step yields one update."""
    result = run_replay(parse_script(SESSION))

    assert [step for step, _ in result.updates] == [0, 1, 2, 3]
    adds = [excerpts(diff.added) for _, diff in result.updates]
    removes = [excerpts(diff.removed) for _, diff in result.updates]
    assert adds == [["E501"], ["W291"], [], []]
    assert removes == [[], [], ["E501"], ["W291"]]
    assert result.messages == ()


def test_survivor_keeps_first_instance() -> None:
    """A message repeated across steps is published as one instance."""
    result = run_replay(parse_script(SESSION))

    w291_added = result.updates[1][1].added[0]
    w291_current = result.updates[2][1].current[0]
    assert w291_current is w291_added
    assert w291_added.linter_name == "flake8"


def test_coalesce_collapses_later_steps() -> None:
    """With coalescing, the first step leads and the rest collapse into one update."""
    result = run_replay(parse_script(SESSION), coalesce=True)

    assert [step for step, _ in result.updates] == [0, 3]
    assert excerpts(result.updates[1][1].removed) == ["E501"]
    assert result.updates[1][1].added == []


def test_trailing_only_replay() -> None:
    """Without a leading edge every step is published by its flush."""
    result = run_replay(parse_script(SESSION), config=Config(leading_edge=False))

    assert [step for step, _ in result.updates] == [0, 1, 2, 3]


def test_unchanged_step_is_silent() -> None:
    """Repeating a snapshot publishes nothing."""
    script = SESSION.split("[[step]]\naction = \"delete_scope\"")[0]
    steps = parse_script(script)
    result = run_replay([steps[0], steps[0]])

    assert len(result.updates) == 1
    assert excerpts(result.messages) == ["E501"]
