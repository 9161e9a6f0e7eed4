# topmark:header:start
#
#   project      : TapRender
#   file         : io.py
#   file_relpath : src/taprender/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O helpers for TapRender configuration.

Parsing is done with `tomlkit` and returned as plain `dict` structures.

Two families of getters exist:
- *Unchecked* `get_table_value`: returns an empty table and only emits **debug** logs.
- *Checked* getters: validate the expected shape and record **warnings** in a
  `DiagnosticLog` (and also log a warning).

The checked getters are used when parsing config files so that user mistakes are
surfaced without crashing or changing defaulting behavior.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from taprender.config.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from taprender.config.logging import TaprenderLogger
    from taprender.core.diagnostics import DiagnosticLog

TomlTable = dict[str, Any]

logger: TaprenderLogger = get_logger(__name__)


def load_toml_dict(path: Path, *, diagnostics: DiagnosticLog | None = None) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path: Path to a TOML document (``taprender.toml`` or ``pyproject.toml``).
        diagnostics: Optional log receiving an error diagnostic on failure.

    Returns:
        The parsed TOML content, or an empty dict when the file cannot be read
        or parsed (the failure is logged).
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        if diagnostics is not None:
            diagnostics.add_error(f"Cannot read {path}: {e}")
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        if diagnostics is not None:
            diagnostics.add_error(f"Invalid TOML in {path}: {e}")
        return {}

    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table from a TOML table, or an empty dict if missing/not a table."""
    value: Any | None = table.get(key)
    if isinstance(value, dict):
        return cast("TomlTable", value)
    if value is not None:
        logger.debug("Expected table for %r, got %s; ignoring", key, type(value).__name__)
    return {}


def get_nested_table(table: TomlTable, dotted: str) -> TomlTable:
    """Walk a dotted section path (e.g. ``tool.taprender``) and return the table found there."""
    current: TomlTable = table
    for part in dotted.split("."):
        current = get_table_value(current, part)
        if not current:
            return {}
    return current


def get_bool_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
    logger: TaprenderLogger,
) -> bool | None:
    """Return an optional boolean value, warning when present but not `bool`."""
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return value

    loc: Final[str] = f"{where}.{key}"
    logger.warning("Expected bool in %s, got %s: %r", loc, type(value).__name__, value)
    diagnostics.add_warning(f"Expected bool in {loc}, got {type(value).__name__}: {value}")
    return None


def get_int_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
    logger: TaprenderLogger,
    minimum: int | None = None,
) -> int | None:
    """Return an optional int value, warning when present but not `int`.

    Notes:
        - Missing key / None -> None
        - `bool` is rejected (since `bool` is a subclass of `int`).
        - Values below ``minimum`` are rejected with a warning.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None

    loc: Final[str] = f"{where}.{key}"

    # Note: bool is a subclass of int; exclude it.
    if isinstance(value, bool) or not isinstance(value, int):
        logger.warning("Expected int in %s, got %s: %r", loc, type(value).__name__, value)
        diagnostics.add_warning(f"Expected int in {loc}, got {type(value).__name__}: {value!r}")
        return None

    if minimum is not None and value < minimum:
        logger.warning("Expected int >= %d in %s, got %d", minimum, loc, value)
        diagnostics.add_warning(f"Expected int >= {minimum} in {loc}, got {value}")
        return None

    return value


def warn_unknown_keys(
    table: TomlTable,
    known: frozenset[str],
    *,
    where: str,
    diagnostics: DiagnosticLog,
) -> None:
    """Record a warning for every key of ``table`` that is not in ``known``."""
    for key in table:
        if key not in known:
            logger.warning("Ignoring unknown key %s.%s", where, key)
            diagnostics.add_warning(f"Ignoring unknown key {where}.{key}")
