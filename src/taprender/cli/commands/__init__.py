# topmark:header:start
#
#   project      : TapRender
#   file         : __init__.py
#   file_relpath : src/taprender/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TapRender CLI subcommands."""

from __future__ import annotations
