# topmark:header:start
#
#   project      : TapRender
#   file         : __init__.py
#   file_relpath : src/taprender/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, UI-agnostic primitives shared across TapRender.

Included modules:

- ``diagnostics``
  Diagnostic types used to collect and report config warnings consistently.

- ``errors``
  The library error taxonomy (malformed events, unrenderable payloads and the
  dispatcher's partial-output error).

This package stays free of CLI dependencies so the renderer can be embedded in
any test harness.
"""

from __future__ import annotations
