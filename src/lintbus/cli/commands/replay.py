# topmark:header:start
#
#   project      : LintBus
#   file         : replay.py
#   file_relpath : src/lintbus/cli/commands/replay.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LintBus `replay` command.

Feeds a TOML replay script to a message registry and prints every difference
it publishes, either as colored text or as JSON / NDJSON.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from lintbus.cli.errors import (
    LintbusConfigError,
    LintbusFileNotFoundError,
    LintbusIOError,
    LintbusScriptError,
)
from lintbus.cli.options import OutputFormat, output_format_option
from lintbus.config.logging import get_logger
from lintbus.config.model import MutableConfig
from lintbus.errors import ConfigError, ScriptError
from lintbus.machine import (
    MachineDifference,
    MachineMessageEntry,
    build_meta_payload,
    serialize_differences_json,
    serialize_differences_ndjson,
)
from lintbus.replay import load_script, run_replay

if TYPE_CHECKING:
    from lintbus.cli.console import ClickConsole
    from lintbus.config.logging import LintbusLogger
    from lintbus.config.model import Config
    from lintbus.message.model import Message
    from lintbus.registry.diff import Difference

logger: LintbusLogger = get_logger(__name__)


def format_message_line(console: ClickConsole, sign: str, message: Message) -> str:
    """Render one message as ``<sign> [severity] linter file:row:col excerpt``.

    Messages without a location print ``-`` in place of ``file:row:col``.
    """
    location = message.location
    if location is None:
        where = "-"
    else:
        start = location.position.start
        where = f"{location.file}:{start.row + 1}:{start.column + 1}"
    severity = message.severity
    label = f"[{severity.value}]"
    if console.enable_color:
        label = severity.color(label)
    return (
        f"  {sign} {label} {message.linter_name or '?'} "
        f"{where} {message.excerpt}"
    )


def _print_text(
    console: ClickConsole,
    updates: list[tuple[int, Difference]],
    messages: tuple[Message, ...],
    verbosity: int,
) -> None:
    for step, diff in updates:
        if verbosity >= 0:
            console.print(
                console.styled(f"step {step}:", bold=True)
                + f" +{len(diff.added)} -{len(diff.removed)} ({len(diff.current)} current)"
            )
            for message in diff.added:
                console.print(format_message_line(console, console.styled("+", fg="green"), message))
            for message in diff.removed:
                console.print(format_message_line(console, console.styled("-", fg="red"), message))
    if verbosity > 0:
        console.print(console.styled("current:", bold=True))
        for message in messages:
            console.print(format_message_line(console, "*", message))
    console.print(f"{len(updates)} update(s), {len(messages)} message(s) current")


def _resolve_config(
    *,
    config_files: tuple[Path, ...],
    discover: bool,
    debounce_ms: int | None,
    trailing_only: bool,
) -> Config:
    overrides = MutableConfig(
        debounce_ms=debounce_ms,
        leading_edge=False if trailing_only else None,
    )
    try:
        return MutableConfig.load_merged(
            directory=Path.cwd() if discover else None,
            extra_files=config_files,
            overrides=overrides,
        ).freeze()
    except ConfigError as e:
        raise LintbusConfigError(str(e)) from e


@click.command(
    name="replay",
    help="Replay a TOML script of producer updates and print the published differences.",
)
@click.argument("script", type=click.Path(path_type=Path, dir_okay=False))
@output_format_option
@click.option(
    "--coalesce",
    is_flag=True,
    help="Publish once after the last step instead of after every step.",
)
@click.option(
    "--config",
    "config_files",
    multiple=True,
    type=click.Path(path_type=Path, dir_okay=False, exists=True),
    help="Extra config file (lintbus.toml or pyproject.toml). May be repeated.",
)
@click.option(
    "--no-config",
    "no_config",
    is_flag=True,
    help="Do not discover pyproject.toml / lintbus.toml in the working directory.",
)
@click.option(
    "--debounce-ms",
    type=click.IntRange(min=0),
    default=None,
    help="Override the debounce window (milliseconds).",
)
@click.option(
    "--trailing-only",
    is_flag=True,
    help="Disable the leading-edge recompute.",
)
def replay_command(
    *,
    script: Path,
    output_format: OutputFormat | None = None,
    coalesce: bool = False,
    config_files: tuple[Path, ...] = (),
    no_config: bool = False,
    debounce_ms: int | None = None,
    trailing_only: bool = False,
) -> None:
    """Replay ``script`` against a fresh message registry.

    Args:
        script (Path): Path to the TOML replay script.
        output_format (OutputFormat | None): ``default``, ``json`` or ``ndjson``.
        coalesce (bool): Collapse all steps after the first into one difference.
        config_files (tuple[Path, ...]): Explicit config files.
        no_config (bool): Skip config discovery in the working directory.
        debounce_ms (int | None): Debounce window override.
        trailing_only (bool): Disable the leading-edge recompute.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    verbosity: int = ctx.obj.get("verbosity_level", 0)
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    config = _resolve_config(
        config_files=config_files,
        discover=not no_config,
        debounce_ms=debounce_ms,
        trailing_only=trailing_only,
    )

    if not script.exists():
        raise LintbusFileNotFoundError(f"Replay script not found: {script}")
    try:
        steps = load_script(script)
    except ScriptError as e:
        raise LintbusScriptError(f"{script}: {e}") from e
    except OSError as e:
        raise LintbusIOError(f"Cannot read {script}: {e}") from e

    logger.info("Replaying %d step(s) from %s", len(steps), script)
    result = run_replay(steps, config=config, coalesce=coalesce)

    if fmt is OutputFormat.DEFAULT:
        _print_text(console, result.updates, result.messages, verbosity)
        return

    meta = build_meta_payload()
    differences = [MachineDifference.from_difference(d, step=s) for s, d in result.updates]
    if fmt is OutputFormat.JSON:
        entries = [MachineMessageEntry.from_message(m) for m in result.messages]
        console.print(serialize_differences_json(meta, differences, entries))
    else:
        console.print(serialize_differences_ndjson(meta, differences), nl=False)
