# topmark:header:start
#
#   project      : LintBus
#   file         : script.py
#   file_relpath : src/lintbus/replay/script.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Replay scripts: a TOML description of producer activity.

A script is an array of ``[[step]]`` tables, applied in order::

    [[step]]
    action = "set"
    producer = "flake8"
    scope = "app.py"

    [[step.messages]]
    severity = "error"
    excerpt = "E501 line too long"
    row = 3

    [[step]]
    action = "delete_scope"
    scope = "app.py"

Actions:
    - ``set``: ``producer``, optional ``scope`` and ``messages``.
    - ``delete_scope``: ``scope``.
    - ``delete_producer``: ``producer``.

Message tables accept ``severity`` (default ``"error"``), ``excerpt``
(required), ``file`` (defaults to the step's scope), zero-based ``row`` /
``column`` / ``end_row`` / ``end_column``, ``url``, ``icon`` and ``description``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, cast

from lintbus.config.io import parse_toml_text
from lintbus.config.logging import get_logger
from lintbus.errors import ConfigError, ScriptError
from lintbus.message.model import Location, Message, Range, Severity

if TYPE_CHECKING:
    from pathlib import Path

    from lintbus.config.io import TomlTable
    from lintbus.config.logging import LintbusLogger

logger: LintbusLogger = get_logger(__name__)


class StepAction(Enum):
    """Registry operation performed by a replay step."""

    SET = "set"
    DELETE_SCOPE = "delete_scope"
    DELETE_PRODUCER = "delete_producer"


@dataclass(frozen=True)
class MessageSpec:
    """Message template; `build()` creates a fresh `Message` on every call."""

    severity: Severity
    excerpt: str
    file: str | None
    position: Range = field(default_factory=Range)
    url: str | None = None
    icon: str | None = None
    description: str | None = None

    def build(self) -> Message:
        """Return a new, unfilled `Message`."""
        return Message(
            severity=self.severity,
            excerpt=self.excerpt,
            location=Location(self.file, self.position) if self.file is not None else None,
            url=self.url,
            icon=self.icon,
            description=self.description,
        )


@dataclass(frozen=True)
class Step:
    """One replay step."""

    action: StepAction
    producer: str | None = None
    scope: str | None = None
    messages: tuple[MessageSpec, ...] = ()


def _opt_str(table: TomlTable, key: str, index: int) -> str | None:
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ScriptError(f"'{key}' must be a string, got {value!r}", step=index)
    return value


def _int(table: TomlTable, key: str, index: int, default: int) -> int:
    value: Any = table.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ScriptError(f"'{key}' must be a non-negative integer, got {value!r}", step=index)
    return value


def _parse_message(table: TomlTable, scope: str | None, index: int) -> MessageSpec:
    excerpt = _opt_str(table, "excerpt", index)
    if excerpt is None:
        raise ScriptError("message is missing 'excerpt'", step=index)
    # No file and no scope: a producer-wide message without a location.
    file = _opt_str(table, "file", index) or scope
    try:
        severity = Severity.parse(_opt_str(table, "severity", index) or "error")
    except ValueError as e:
        raise ScriptError(f"unknown severity: {e}", step=index) from e

    row = _int(table, "row", index, 0)
    column = _int(table, "column", index, 0)
    position = Range.from_rows(
        row,
        column,
        _int(table, "end_row", index, row),
        _int(table, "end_column", index, column),
    )
    return MessageSpec(
        severity=severity,
        excerpt=excerpt,
        file=file,
        position=position,
        url=_opt_str(table, "url", index),
        icon=_opt_str(table, "icon", index),
        description=_opt_str(table, "description", index),
    )


def _parse_step(table: TomlTable, index: int) -> Step:
    raw_action = _opt_str(table, "action", index)
    try:
        action = StepAction(raw_action)
    except ValueError as e:
        choices = ", ".join(a.value for a in StepAction)
        raise ScriptError(f"unknown action {raw_action!r} (expected one of: {choices})", step=index) from e

    producer = _opt_str(table, "producer", index)
    scope = _opt_str(table, "scope", index)

    if action is StepAction.DELETE_SCOPE:
        if "scope" not in table:
            raise ScriptError("'delete_scope' requires 'scope'", step=index)
        return Step(action=action, scope=scope)
    if producer is None:
        raise ScriptError(f"'{action.value}' requires 'producer'", step=index)
    if action is StepAction.DELETE_PRODUCER:
        return Step(action=action, producer=producer)

    raw_messages: Any = table.get("messages", [])
    if not isinstance(raw_messages, list):
        raise ScriptError("'messages' must be an array of tables", step=index)
    messages: list[MessageSpec] = []
    for raw in cast("list[Any]", raw_messages):
        if not isinstance(raw, dict):
            raise ScriptError("'messages' must be an array of tables", step=index)
        messages.append(_parse_message(cast("TomlTable", raw), scope, index))
    return Step(action=action, producer=producer, scope=scope, messages=tuple(messages))


def parse_script(text: str, *, source: str = "<script>") -> list[Step]:
    """Parse replay script text.

    Raises:
        ScriptError: If the document is not valid TOML or a step is malformed.
    """
    try:
        data = parse_toml_text(text, source=source)
    except ConfigError as e:
        raise ScriptError(str(e)) from e

    raw_steps: Any = data.get("step", [])
    if not isinstance(raw_steps, list):
        raise ScriptError("'step' must be an array of tables")
    steps: list[Step] = []
    for index, raw in enumerate(cast("list[Any]", raw_steps)):
        if not isinstance(raw, dict):
            raise ScriptError("step must be a table", step=index)
        steps.append(_parse_step(cast("TomlTable", raw), index))
    logger.debug("Parsed %d replay step(s) from %s", len(steps), source)
    return steps


def load_script(path: Path) -> list[Step]:
    """Read and parse a replay script file.

    Raises:
        ScriptError: If the file is malformed.
        OSError: If the file cannot be read.
    """
    return parse_script(path.read_text(encoding="utf-8"), source=str(path))
