# topmark:header:start
#
#   project      : TapRender
#   file         : __init__.py
#   file_relpath : src/taprender/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TapRender package.

TapRender turns a stream of structured test-lifecycle events (version, plan,
bailout, comment, nested child groups, assertions with directives and YAML
diagnostics) into canonical TAP version 13 text. It exposes a small typed API
(`taprender.api`) and a CLI (``taprender render``).
"""

from __future__ import annotations
