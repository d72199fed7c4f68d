# topmark:header:start
#
#   project      : LintBus
#   file         : logging.py
#   file_relpath : src/lintbus/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Logging for LintBus: a TRACE level, a project logger class and a console handler.

The registry narrates every per-entry diff decision at TRACE, below DEBUG, so
hosts only see it when they ask for it. Publishes are logged at DEBUG, recompute
failures at ERROR.

Importing this module only registers the TRACE level and the logger class, so
hosts that embed the registry keep control of their own logging.
[`setup_logging`][lintbus.config.logging.setup_logging] is what the CLI calls.
It installs one [`ConsoleHandler`][lintbus.config.logging.ConsoleHandler] on
the root logger, replacing the one from a previous call and leaving handlers
owned by others (e.g. pytest's ``caplog``) in place.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

from lintbus.constants import LOG_LEVEL_ENV_VAR

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from typing import IO

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

DEFAULT_LOG_LEVEL: Final[int] = logging.CRITICAL

LOG_FORMAT: Final[str] = "[%(levelname)s] %(name)s: %(message)s"
DEBUG_LOG_FORMAT: Final[str] = (
    "[%(levelname)s] [%(threadName)s] [%(filename)s:%(lineno)d] [%(funcName)s] %(message)s"
)


class LintbusLogger(logging.Logger):
    """Logger with a `trace()` method for the TRACE level below DEBUG."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log ``msg % args`` at TRACE.

        Args:
            msg (object): The message to be logged.
            *args (object): Arguments merged into ``msg``.
            extra (Mapping[str, object] | None): Extra record attributes.
        """
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, extra=extra, stacklevel=2)


if logging.getLevelName(TRACE_LEVEL) != "TRACE":
    logging.addLevelName(TRACE_LEVEL, "TRACE")

logging.setLoggerClass(LintbusLogger)


# Lowest level first; a record takes the style of the highest threshold it reaches.
LEVEL_STYLES: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (TRACE_LEVEL, chalk.blue),
    (logging.DEBUG, chalk.gray),
    (logging.INFO, chalk.green),
    (logging.WARNING, chalk.yellow),
    (logging.ERROR, chalk.red),
    (logging.CRITICAL, chalk.red_bright),
)

LOG_LEVEL_NAMES: Final[dict[str, int]] = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "NOTSET": logging.NOTSET,
}


def style_for_level(level: int) -> Callable[[str], str]:
    """Return the chalk style for ``level``.

    Levels below TRACE get a dimmed red so stray custom levels stand out.
    """
    style: Callable[[str], str] = chalk.dim.red
    for threshold, candidate in LEVEL_STYLES:
        if level < threshold:
            break
        style = candidate
    return style


class ChalkFormatter(logging.Formatter):
    """Formatter that colors each record by severity.

    Args:
        fmt (str | None): `logging` format string.
        color (bool): When False, records are formatted without ANSI styling
            (e.g. ``--no-color`` or a non-terminal stream).
    """

    def __init__(self, fmt: str | None = None, *, color: bool = True) -> None:
        super().__init__(fmt)
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        """Format ``record`` and color it when enabled."""
        message = super().format(record)
        if not self.color:
            return message
        return style_for_level(record.levelno)(message)


class ConsoleHandler(logging.StreamHandler):  # pyright: ignore[reportMissingTypeArgument]
    """Stream handler installed by `setup_logging`.

    Without an explicit stream it writes to whatever ``sys.stderr`` is when a
    record is emitted, so it keeps working when the CLI runs under a test
    runner that swaps the standard streams. Program output goes to stdout;
    logging stays on stderr so JSON and NDJSON output remain parseable.
    """

    def __init__(self, stream: IO[str] | None = None) -> None:
        super().__init__(stream if stream is not None else sys.stderr)
        self.follow_stderr = stream is None

    def emit(self, record: logging.LogRecord) -> None:
        if self.follow_stderr:
            self.stream = sys.stderr
        super().emit(record)


def parse_log_level(value: str | int) -> int | None:
    """Return the numeric level for a name or number, or None if unknown.

    Args:
        value (str | int): Level name (``"trace"``, ``"DEBUG"``), numeric
            string (``"10"``) or an already numeric level.

    Returns:
        int | None: The logging level, or ``None`` if ``value`` is not recognized.
    """
    if isinstance(value, int):
        return value
    v = value.strip().upper()
    if v.isdigit():
        return int(v)
    return LOG_LEVEL_NAMES.get(v)


def resolve_env_log_level() -> int | None:
    """Return the level named by ``LINTBUS_LOG_LEVEL``, or None if unset or unknown."""
    val = os.environ.get(LOG_LEVEL_ENV_VAR)
    if not val:
        return None
    level = parse_log_level(val)
    if level is None:
        get_logger(__name__).warning("Ignoring unknown %s=%r", LOG_LEVEL_ENV_VAR, val)
    return level


def setup_logging(
    level: int | str | None = None,
    *,
    color: bool = True,
    stream: IO[str] | None = None,
) -> ConsoleHandler:
    """Configure the root logger for LintBus console logging.

    Args:
        level (int | str | None): Level number or name. ``None`` consults
            ``LINTBUS_LOG_LEVEL`` and falls back to CRITICAL.
        color (bool): Whether records are colored.
        stream (IO[str] | None): Destination; defaults to the current ``sys.stderr``.

    Returns:
        ConsoleHandler: The handler now attached to the root logger.

    Raises:
        ValueError: If ``level`` is a name that is not a known level.
    """
    if level is None:
        resolved = resolve_env_log_level()
        if resolved is None:
            resolved = DEFAULT_LOG_LEVEL
    else:
        resolved = parse_log_level(level)
        if resolved is None:
            raise ValueError(f"Unknown log level: {level!r}")

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved)

    for existing in [h for h in root_logger.handlers if isinstance(h, ConsoleHandler)]:
        root_logger.removeHandler(existing)

    handler = ConsoleHandler(stream)
    handler.setFormatter(
        ChalkFormatter(LOG_FORMAT if resolved >= logging.INFO else DEBUG_LOG_FORMAT, color=color)
    )
    root_logger.addHandler(handler)
    return handler


def get_logger(name: str) -> LintbusLogger:
    """Return the `LintbusLogger` named ``name``."""
    return cast("LintbusLogger", logging.getLogger(name))
