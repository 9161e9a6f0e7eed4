# topmark:header:start
#
#   project      : TapRender
#   file         : __init__.py
#   file_relpath : src/taprender/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration for TapRender.

Modules:
    - ``logging``: TRACE level, colored formatter, ``setup_logging``.
    - ``keys``: canonical TOML section/key names.
    - ``io``: tomlkit-based loading and checked value getters.
    - ``model``: `RenderOptions` / `MutableRenderOptions` and `load_options`.

This package init stays import-light: ``logging`` is imported by nearly every
module, so pulling the model in here would create import cycles.
"""

from __future__ import annotations
