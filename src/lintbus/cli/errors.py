# topmark:header:start
#
#   project      : LintBus
#   file         : errors.py
#   file_relpath : src/lintbus/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the LintBus CLI.

Raise these in commands to exit with a standardized message and exit code.
Library errors from [`lintbus.errors`][lintbus.errors] are translated at the
command boundary.
"""

from __future__ import annotations

from typing import IO, Any

import click

from lintbus.cli.exit_codes import ExitCode


class LintbusCliError(click.ClickException):
    """Base class for all LintBus CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (coloring happens in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(self.format_message(), fg="bright_red"))
                return
        super().show(file)


class LintbusUsageError(LintbusCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class LintbusConfigError(LintbusCliError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


class LintbusFileNotFoundError(LintbusCliError):
    """Error when an input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class LintbusIOError(LintbusCliError):
    """Error for I/O errors reading files."""

    exit_code = ExitCode.IO_ERROR


class LintbusScriptError(LintbusCliError):
    """Error for malformed replay scripts."""

    exit_code = ExitCode.DATA_ERROR
