# topmark:header:start
#
#   project      : TapRender
#   file         : version.py
#   file_relpath : src/taprender/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TapRender `version` command.

Prints the current TapRender version as installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from taprender.cli.cmd_common import get_effective_verbosity
from taprender.constants import TAP_VERSION, TAPRENDER_VERSION

if TYPE_CHECKING:
    from taprender.cli.console import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of TapRender.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["default", "json"]),
    default="default",
    help="Output format (default, json).",
)
def version_command(*, output_format: str = "default") -> None:
    """Show the current version of TapRender.

    Args:
        output_format (str): ``default`` for plain text, ``json`` for a JSON object
            with the package version and the emitted TAP version.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    vlevel = get_effective_verbosity(ctx)

    if output_format == "json":
        console.print(json.dumps({"version": TAPRENDER_VERSION, "tap_version": TAP_VERSION}))
    elif vlevel > 0:
        console.print(console.styled("TapRender version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(TAPRENDER_VERSION, bold=True)}")
        console.print(f"    (emits TAP version {TAP_VERSION})")
    else:
        console.print(console.styled(TAPRENDER_VERSION, bold=True))
