# topmark:header:start
#
#   project      : TapRender
#   file         : render.py
#   file_relpath : src/taprender/cli/commands/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TapRender `render` command.

Reads a JSON event stream from a file or STDIN and prints the TAP version 13
document. Input example::

    [["version", 13], ["plan", {"start": 1, "end": 1}],
     ["assert", {"ok": true, "id": 1, "name": "works"}]]

On a render failure the lines produced before the failing event are still
printed to stdout, then the command exits with `ExitCode.INPUT_ERROR` for a
malformed event or `ExitCode.RENDER_ERROR` for a payload that cannot be rendered.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING, Final

import click

from taprender.cli.cmd_common import get_effective_verbosity
from taprender.cli.errors import (
    TaprenderConfigError,
    TaprenderFileNotFoundError,
    TaprenderInputError,
    TaprenderIOError,
    TaprenderRenderError,
    TaprenderUsageError,
)
from taprender.cli.options import common_config_options
from taprender.config.logging import get_logger
from taprender.config.model import load_options
from taprender.core.errors import DispatchError, MalformedEventError
from taprender.events import parse_event_stream
from taprender.rendering.dispatcher import dispatch

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from taprender.cli.console import ConsoleLike
    from taprender.config.logging import TaprenderLogger
    from taprender.config.model import RenderOptions

logger: TaprenderLogger = get_logger(__name__)

# Leading indentation, then a status token at the start of an assertion or bailout line.
_STATUS_RE: Final[re.Pattern[str]] = re.compile(r"^(\s*)(not ok|ok|Bail out!)(?=\s|$)")


def read_event_source(source: str) -> str:
    """Return the text of ``source``: a file path, or ``-`` for STDIN.

    Raises:
        TaprenderFileNotFoundError: If the file does not exist.
        TaprenderIOError: If the file cannot be read.
    """
    if source == "-":
        return click.get_text_stream("stdin").read()

    path = Path(source)
    if not path.exists():
        raise TaprenderFileNotFoundError(f"Event stream not found: {source}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TaprenderIOError(f"Cannot read {source}: {exc}") from exc


def colorize_line(line: str, console: ConsoleLike) -> str:
    """Style the status token of an assertion or bailout line.

    Other lines are returned unchanged.
    """
    match = _STATUS_RE.match(line)
    if match is None:
        return line
    lead, token = match.group(1), match.group(2)
    if token == "ok":
        styled = console.styled(token, fg="green")
    else:
        styled = console.styled(token, fg="red", bold=True)
    return lead + styled + line[match.end() :]


def colorize_lines(lines: Iterable[str], console: ConsoleLike) -> Iterator[str]:
    """Yield `lines` with status tokens styled, leaving YAML diagnostic blocks untouched."""
    closing_fence: str | None = None
    for line in lines:
        if closing_fence is not None:
            if line == closing_fence:
                closing_fence = None
            yield line
        elif line.lstrip(" ") == "---":
            closing_fence = line[:-3] + "..."
            yield line
        else:
            yield colorize_line(line, console)


def _report_config(options: RenderOptions, console: ConsoleLike, vlevel: int) -> None:
    if vlevel < 0:
        return
    if vlevel > 0:
        for path in options.config_files:
            console.warn(f"[info] Using config {path}")
    for diag in options.diagnostics:
        console.warn(f"[{diag.level.value}] {diag.message}")


@click.command(
    name="render",
    help="Render a JSON event stream (file or '-' for STDIN) as TAP version 13.",
)
@click.argument("source", metavar="EVENTS_JSON", required=False, default="-")
@click.option(
    "--no-id",
    "no_id",
    is_flag=True,
    default=False,
    help="Omit test numbers on assertion lines (the counter still advances).",
)
@click.option(
    "--indent",
    "indent",
    type=click.IntRange(min=0),
    default=None,
    help="Base indentation (spaces) of the top-level stream.",
)
@common_config_options
def render_command(
    *,
    source: str,
    no_id: bool,
    indent: int | None,
    config_paths: tuple[str, ...],
    no_config: bool,
) -> None:
    """Render an event stream as TAP version 13.

    Args:
        source (str): Path to the JSON event stream, or ``-`` for STDIN.
        no_id (bool): Omit test numbers.
        indent (int | None): Base indentation override.
        config_paths (tuple[str, ...]): Extra config files, merged in order.
        no_config (bool): Skip config discovery in the working directory.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    vlevel = get_effective_verbosity(ctx)

    config_files: list[Path] = []
    for raw_path in config_paths:
        path = Path(raw_path)
        if not path.is_file():
            raise TaprenderConfigError(f"Config file not found: {raw_path}")
        config_files.append(path)

    overrides: dict[str, object] = {"base_indent": indent}
    if no_id:
        overrides["id"] = False
    try:
        options = load_options(config_files=config_files, no_config=no_config, overrides=overrides)
    except ValueError as exc:
        raise TaprenderUsageError(str(exc)) from exc
    _report_config(options, console, vlevel)

    text = read_event_source(source)
    try:
        events = parse_event_stream(text)
    except MalformedEventError as exc:
        raise TaprenderInputError(str(exc)) from exc

    try:
        lines = dispatch(events, options)
    except DispatchError as exc:
        logger.info("Render failed after %d lines: %s", len(exc.lines), exc)
        for line in colorize_lines(exc.lines, console):
            console.print(line)
        if isinstance(exc.cause, MalformedEventError):
            raise TaprenderInputError(str(exc)) from exc
        raise TaprenderRenderError(str(exc)) from exc

    for line in colorize_lines(lines, console):
        console.print(line)
