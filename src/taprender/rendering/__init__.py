# topmark:header:start
#
#   project      : TapRender
#   file         : __init__.py
#   file_relpath : src/taprender/rendering/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Event-to-TAP rendering.

Public modules:
    - taprender.rendering.messages: pure per-record TAP line renderers.
    - taprender.rendering.dispatcher: the stateful fold over an event stream.
"""

from __future__ import annotations
