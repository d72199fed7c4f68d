# topmark:header:start
#
#   project      : LintBus
#   file         : errors.py
#   file_relpath : src/lintbus/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the LintBus library.

The message registry itself accepts every input: its operations never raise for
"bad" messages or handles. The exceptions below cover the few places where
failing loudly is the right call:

- `InvariantViolationError`: a programming defect inside the diff engine.
- `ConfigError`: invalid or unreadable configuration.
- `ScriptError`: a malformed replay script.

CLI-facing wrappers with exit codes live in
[`lintbus.cli.errors`][lintbus.cli.errors].
"""

from __future__ import annotations


class LintbusError(Exception):
    """Base class for all LintBus library errors."""


class InvariantViolationError(LintbusError, AssertionError):
    """An internal invariant of the message registry does not hold.

    Only raised while assertions are enabled (``__debug__``). Subclasses
    `AssertionError` so test runners report it as a failed assertion.
    """


class ConfigError(LintbusError):
    """Invalid configuration value or unreadable configuration source."""


class ScriptError(LintbusError):
    """Malformed replay script.

    Attributes:
        step: Zero-based index of the offending step, or ``None`` when the
            error concerns the document as a whole.
    """

    def __init__(self, message: str, *, step: int | None = None) -> None:
        self.step = step
        if step is not None:
            message = f"step {step}: {message}"
        super().__init__(message)
