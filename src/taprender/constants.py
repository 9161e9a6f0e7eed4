# topmark:header:start
#
#   project      : TapRender
#   file         : constants.py
#   file_relpath : src/taprender/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TapRender Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

TAPRENDER_VERSION: str = get_version("taprender")

# TAP protocol version emitted by the message renderer.
TAP_VERSION: int = 13

# Extra indentation (in spaces) for each level of child-group nesting.
INDENT_STEP: int = 4

# Indentation (in spaces) of a YAML diagnostic block relative to its test line.
YAML_INDENT: int = 2

# Default line width for scalars in YAML diagnostic blocks.
DEFAULT_YAML_WIDTH: int = 80

# Config file discovered in the working directory, and the pyproject.toml table.
TAPRENDER_TOML_NAME: str = "taprender.toml"
PYPROJECT_TOML_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_SECTION: str = "tool.taprender"

# Environment variable consulted for the internal log level.
LOG_LEVEL_ENV_VAR: str = "TAPRENDER_LOG_LEVEL"

