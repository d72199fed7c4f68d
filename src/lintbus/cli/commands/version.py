# topmark:header:start
#
#   project      : LintBus
#   file         : version.py
#   file_relpath : src/lintbus/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LintBus `version` command.

Prints the current LintBus version as installed in the active Python environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from lintbus.cli.options import OutputFormat, output_format_option
from lintbus.constants import LINTBUS_VERSION
from lintbus.machine import (
    build_meta_payload,
    build_ndjson_record,
    serialize_json_object,
    serialize_ndjson,
)

if TYPE_CHECKING:
    from lintbus.cli.console import ClickConsole


@click.command(
    name="version",
    help="Show the current version of LintBus.",
)
@output_format_option
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Show the current version of LintBus."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    if fmt is OutputFormat.JSON:
        console.print(serialize_json_object(build_meta_payload()))
    elif fmt is OutputFormat.NDJSON:
        record = build_ndjson_record(kind="version", meta=build_meta_payload(), payload=LINTBUS_VERSION)
        console.print(serialize_ndjson([record]), nl=False)
    else:
        console.print(LINTBUS_VERSION)
