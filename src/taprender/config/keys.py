# topmark:header:start
#
#   project      : TapRender
#   file         : keys.py
#   file_relpath : src/taprender/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for TapRender configuration.

Keys defined here are the external configuration API as it appears in
``taprender.toml`` and in ``[tool.taprender]`` inside ``pyproject.toml``.
Renaming or removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by TapRender configuration."""

    # [render]
    SECTION_RENDER: Final[str] = "render"

    # Emit numeric test identifiers on assertion lines.
    KEY_ID: Final[str] = "id"
    # Indentation (spaces) of the top-level event stream.
    KEY_BASE_INDENT: Final[str] = "base_indent"
    # Line width for scalars inside YAML diagnostic blocks.
    KEY_YAML_WIDTH: Final[str] = "yaml_width"

    ALL_RENDER_KEYS: Final[frozenset[str]] = frozenset({KEY_ID, KEY_BASE_INDENT, KEY_YAML_WIDTH})
