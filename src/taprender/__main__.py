# topmark:header:start
#
#   project      : TapRender
#   file         : __main__.py
#   file_relpath : src/taprender/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running TapRender via ``python -m taprender``.

It delegates directly to :func:`taprender.cli.main.cli`, ensuring a single,
authoritative CLI entry point regardless of how TapRender is launched.

Examples:
    Render an event stream read from STDIN::

        python -m taprender render - < events.json
"""

from __future__ import annotations

from taprender.cli.main import cli

if __name__ == "__main__":
    # We call the Click group directly
    cli()
