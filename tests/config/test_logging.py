# topmark:header:start
#
#   project      : LintBus
#   file         : test_logging.py
#   file_relpath : tests/config/test_logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for LintBus logging helpers (TRACE level, styles, env resolution, setup)."""

from __future__ import annotations

import io
import logging
import sys
from typing import TYPE_CHECKING

import pytest

from lintbus.config.logging import (
    DEFAULT_LOG_LEVEL,
    LEVEL_STYLES,
    TRACE_LEVEL,
    ChalkFormatter,
    ConsoleHandler,
    LintbusLogger,
    get_logger,
    parse_log_level,
    resolve_env_log_level,
    setup_logging,
    style_for_level,
)
from tests.conftest import parametrize

if TYPE_CHECKING:
    from collections.abc import Iterator


def _record(level: int = logging.WARNING) -> logging.LogRecord:
    return logging.LogRecord("lintbus.x", level, __file__, 1, "hello %s", ("there",), None)


def _console_handlers() -> list[ConsoleHandler]:
    return [h for h in logging.getLogger().handlers if isinstance(h, ConsoleHandler)]


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Put back the session-wide TRACE configuration after a `setup_logging` test."""
    yield
    setup_logging(level=TRACE_LEVEL)


@parametrize(
    "raw, expected",
    [
        ("trace", TRACE_LEVEL),
        ("DEBUG", logging.DEBUG),
        (" warn ", logging.WARNING),
        ("10", 10),
        (25, 25),
        ("nonsense", None),
    ],
)
def test_parse_log_level(raw: str | int, expected: int | None) -> None:
    """Names are case-insensitive; numbers pass through."""
    assert parse_log_level(raw) == expected


def test_env_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """``LINTBUS_LOG_LEVEL`` is honored when set."""
    assert resolve_env_log_level() is None

    monkeypatch.setenv("LINTBUS_LOG_LEVEL", "debug")
    assert resolve_env_log_level() == logging.DEBUG


def test_unknown_env_log_level_warns(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """An unknown level name is ignored with a warning."""
    monkeypatch.setenv("LINTBUS_LOG_LEVEL", "chatty")

    with caplog.at_level(logging.WARNING):
        assert resolve_env_log_level() is None
    assert "chatty" in caplog.text


def test_get_logger_supports_trace(caplog: pytest.LogCaptureFixture) -> None:
    """Project loggers expose `trace()`."""
    logger = get_logger("lintbus.test")

    assert isinstance(logger, LintbusLogger)
    assert logging.getLevelName(TRACE_LEVEL) == "TRACE"
    with caplog.at_level(TRACE_LEVEL):
        logger.trace("tiny %s", "detail")
    assert "tiny detail" in caplog.text
    assert caplog.records[-1].levelname == "TRACE"


@parametrize(
    "level, threshold",
    [
        (TRACE_LEVEL, TRACE_LEVEL),
        (logging.DEBUG + 2, logging.DEBUG),
        (logging.WARNING, logging.WARNING),
        (logging.CRITICAL + 10, logging.CRITICAL),
    ],
)
def test_style_for_level_uses_highest_threshold_reached(level: int, threshold: int) -> None:
    """Levels between two thresholds take the lower one's style."""
    assert style_for_level(level) is dict(LEVEL_STYLES)[threshold]


def test_style_below_trace_is_distinct() -> None:
    """Levels under TRACE get their own fallback style."""
    style = style_for_level(1)

    assert all(style is not candidate for _, candidate in LEVEL_STYLES)


def test_chalk_formatter_keeps_message() -> None:
    """Colored output still contains the formatted text."""
    assert "hello there" in ChalkFormatter("%(message)s").format(_record())


def test_chalk_formatter_without_color_is_plain() -> None:
    """With color disabled the record is formatted verbatim."""
    formatter = ChalkFormatter("[%(levelname)s] %(message)s", color=False)

    assert formatter.format(_record()) == "[WARNING] hello there"


def test_console_handler_follows_swapped_stderr(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without an explicit stream, records go to the current ``sys.stderr``."""
    handler = ConsoleHandler()
    handler.setFormatter(ChalkFormatter("%(message)s", color=False))
    buffer = io.StringIO()
    monkeypatch.setattr(sys, "stderr", buffer)

    handler.emit(_record())

    assert buffer.getvalue() == "hello there\n"


@pytest.mark.usefixtures("restore_logging")
def test_setup_logging_writes_to_stream() -> None:
    """A level name and an explicit stream configure the root logger."""
    buffer = io.StringIO()
    setup_logging("info", color=False, stream=buffer)

    get_logger("lintbus.registry").info("published %d", 3)
    get_logger("lintbus.registry").debug("hidden")

    assert logging.getLogger().level == logging.INFO
    assert buffer.getvalue() == "[INFO] lintbus.registry: published 3\n"


@pytest.mark.usefixtures("restore_logging")
def test_setup_logging_debug_format_names_the_call_site() -> None:
    """Below INFO the format adds the thread and source location."""
    buffer = io.StringIO()
    setup_logging(logging.DEBUG, color=False, stream=buffer)

    get_logger("lintbus.registry").debug("diffing")

    line = buffer.getvalue()
    assert line.startswith("[DEBUG] [")
    assert "test_logging.py:" in line
    assert line.rstrip().endswith("diffing")


@pytest.mark.usefixtures("restore_logging")
def test_setup_logging_replaces_only_its_own_handler() -> None:
    """Repeated setup keeps one console handler and leaves foreign handlers alone."""
    root = logging.getLogger()
    foreign = logging.NullHandler()
    root.addHandler(foreign)
    try:
        first = setup_logging(logging.ERROR)
        second = setup_logging(logging.ERROR)

        assert _console_handlers() == [second]
        assert first is not second
        assert foreign in root.handlers
    finally:
        root.removeHandler(foreign)


@pytest.mark.usefixtures("restore_logging")
def test_setup_logging_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without a level, the environment decides and CRITICAL is the fallback."""
    setup_logging()
    assert logging.getLogger().level == DEFAULT_LOG_LEVEL

    monkeypatch.setenv("LINTBUS_LOG_LEVEL", "trace")
    setup_logging()
    assert logging.getLogger().level == TRACE_LEVEL


def test_setup_logging_rejects_unknown_name() -> None:
    """An unknown level name is a programming error."""
    with pytest.raises(ValueError, match="loud"):
        setup_logging("loud")
