# topmark:header:start
#
#   project      : TapRender
#   file         : cmd_common.py
#   file_relpath : src/taprender/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Helpers shared by TapRender CLI commands."""

from __future__ import annotations

import click


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity stored on the context.

    ``-1`` is quiet, ``0`` terse (the default), ``1`` and up verbose.
    """
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    return int(obj.get("verbosity_level", 0))
