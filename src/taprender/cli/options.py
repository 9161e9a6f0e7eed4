# topmark:header:start
#
#   project      : TapRender
#   file         : options.py
#   file_relpath : src/taprender/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities.

This module centralizes reusable options (verbosity, color, configuration) and
their resolution logic, so the group and its commands can stay thin.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import Callable, ParamSpec, TypeVar

import click

from taprender.cli.errors import TaprenderUsageError

P = ParamSpec("P")
R = TypeVar("R")


class ColorMode(Enum):
    """User intent for colorized terminal output.

    Members:
      AUTO: Enable color only when stdout is a TTY (or the environment asks for it).
      ALWAYS: Force-enable color regardless of TTY status.
      NEVER: Disable color entirely.
    """

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity from the ``-v`` / ``-q`` counts.

    Returns:
        int: ``0`` for the default (terse) output, the ``-v`` count when verbose,
        or ``-1`` when quiet (warnings are suppressed).

    Raises:
        TaprenderUsageError: If both verbose and quiet flags are used simultaneously.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise TaprenderUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count > 0:
        return -1
    return verbose_count


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Decision precedence:
      1. **CLI override**: ``ALWAYS`` → True; ``NEVER`` → False.
      2. **Environment**: ``FORCE_COLOR`` (set and not ``"0"``) → True;
         ``NO_COLOR`` (set to any value) → False.
      3. **Auto**: ``stdout.isatty()``.

    Args:
      cli_mode: Parsed `ColorMode` from ``--color``; None means "not provided".
      stdout_isatty: Optional override for TTY detection.

    Returns:
      True if ANSI color should be enabled; False otherwise.
    """
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False

    force_color = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False

    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (AttributeError, ValueError):
            stdout_isatty = False
    return bool(stdout_isatty)


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add counting ``-v/--verbose`` and ``-q/--quiet`` options to a command."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress warnings.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color`` and ``--no-color`` options to a command."""
    f = click.option(
        "--color",
        "color_mode",
        type=click.Choice([m.value for m in ColorMode]),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--config`` and ``--no-config`` options to a command."""
    f = click.option(
        "--config",
        "-c",
        "config_paths",
        type=click.Path(dir_okay=False, path_type=str),
        multiple=True,
        help="Additional config file(s) to load and merge (later files win).",
    )(f)
    f = click.option(
        "--no-config",
        is_flag=True,
        help="Ignore taprender.toml / pyproject.toml in the working directory.",
    )(f)
    return f
