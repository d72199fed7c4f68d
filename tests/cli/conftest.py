# topmark:header:start
#
#   project      : LintBus
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running LintBus in a controlled working directory.

`run_cli_in()` changes the process working directory to ``tmp_path`` before
invoking the Click CLI, so config discovery (``pyproject.toml`` /
``lintbus.toml``) and relative script paths resolve against the test directory
instead of the repository checkout.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Sequence

from click.testing import CliRunner, Result

from lintbus.cli.exit_codes import ExitCode
from lintbus.cli.main import cli

if TYPE_CHECKING:
    from pathlib import Path

SESSION_SCRIPT = """
[[step]]
action = "set"
producer = "flake8"
scope = "app.py"
[[step.messages]]
severity = "error"
excerpt = "E501 line too long"
row = 3

[[step]]
action = "set"
producer = "flake8"
scope = "app.py"
[[step.messages]]
severity = "error"
excerpt = "E501 line too long"
row = 3
[[step.messages]]
severity = "warning"
excerpt = "W291 trailing whitespace"
row = 9

[[step]]
action = "delete_scope"
scope = "app.py"
"""


def run_cli_in(tmp_path: Path, argv: str | Sequence[str] | None) -> Result:
    """Invoke the CLI with `tmp_path` as the working directory.

    Args:
        tmp_path (Path): Pytest-provided temporary directory used as the CWD.
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["replay", "s.toml"]``.

    Returns:
        Result: The `click.testing.Result` produced by `CliRunner.invoke`.
    """
    runner = CliRunner()
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return runner.invoke(cli, argv)
    finally:
        os.chdir(cwd)


def run_cli(argv: str | Sequence[str] | None) -> Result:
    """Invoke the CLI without changing the working directory.

    Use for commands that do not touch the filesystem (``--help``, ``version``).
    """
    return CliRunner().invoke(cli, argv)


def write_script(tmp_path: Path, text: str = SESSION_SCRIPT, name: str = "session.toml") -> Path:
    """Write a replay script into ``tmp_path`` and return its path."""
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_exit(result: Result, code: ExitCode) -> None:
    """Assert that the command exited with ``code``."""
    assert result.exit_code == code, result.output
