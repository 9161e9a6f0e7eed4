# topmark:header:start
#
#   project      : TapRender
#   file         : __init__.py
#   file_relpath : src/taprender/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-based command line interface for TapRender."""

from __future__ import annotations
