# topmark:header:start
#
#   project      : TapRender
#   file         : model.py
#   file_relpath : src/taprender/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Render options model and merge policy.

This module defines:
    - `RenderOptions`: an immutable snapshot handed to the dispatcher.
    - `MutableRenderOptions`: a mutable builder used while layering defaults,
      TOML files and CLI overrides; it can be frozen into `RenderOptions` and
      thawed back for edits.

Precedence (lowest to highest):
    defaults < discovered config (``taprender.toml`` / ``[tool.taprender]``)
    < explicit ``--config`` files < CLI overrides.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from taprender.config.io import (
    get_bool_value_or_none_checked,
    get_int_value_or_none_checked,
    get_nested_table,
    get_table_value,
    load_toml_dict,
    warn_unknown_keys,
)
from taprender.config.keys import Toml
from taprender.config.logging import get_logger
from taprender.constants import (
    DEFAULT_YAML_WIDTH,
    PYPROJECT_TOML_NAME,
    PYPROJECT_TOOL_SECTION,
    TAPRENDER_TOML_NAME,
)
from taprender.core.diagnostics import Diagnostic, DiagnosticLog

if TYPE_CHECKING:
    from taprender.config.io import TomlTable
    from taprender.config.logging import TaprenderLogger

logger: TaprenderLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Immutable runtime options for rendering an event stream.

    Attributes:
        id (bool): Emit the numeric test identifier on assertion lines. When False
            the counter still advances but the number is not printed.
        base_indent (int): Indentation (spaces) of the top-level stream.
        yaml_width (int): Preferred line width for YAML diagnostic scalars.
        config_files (tuple[Path, ...]): Config sources that contributed values.
        diagnostics (tuple[Diagnostic, ...]): Warnings collected while loading.
    """

    id: bool = True
    base_indent: int = 0
    yaml_width: int = DEFAULT_YAML_WIDTH
    config_files: tuple[Path, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()

    def thaw(self) -> MutableRenderOptions:
        """Return a mutable copy of these options."""
        return MutableRenderOptions(
            id=self.id,
            base_indent=self.base_indent,
            yaml_width=self.yaml_width,
            config_files=list(self.config_files),
            diagnostics=DiagnosticLog.from_iterable(self.diagnostics),
        )


@dataclass
class MutableRenderOptions:
    """Mutable builder for `RenderOptions`.

    Fields set to ``None`` are "unset" and inherit the default on `freeze`.
    """

    id: bool | None = None
    base_indent: int | None = None
    yaml_width: int | None = None
    config_files: list[Path] = field(default_factory=lambda: [])
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    @classmethod
    def from_defaults(cls) -> MutableRenderOptions:
        """Return a builder holding TapRender's runtime defaults."""
        return cls(id=True, base_indent=0, yaml_width=DEFAULT_YAML_WIDTH)

    @classmethod
    def from_toml_dict(
        cls,
        data: TomlTable,
        *,
        source: Path | None = None,
    ) -> MutableRenderOptions:
        """Build a (partial) builder from a parsed TOML table.

        Args:
            data: Top-level TapRender table (already unwrapped from ``[tool.taprender]``
                when coming from ``pyproject.toml``).
            source: File the table was read from, recorded in ``config_files``.

        Returns:
            A builder where only the keys present in ``data`` are set.
        """
        draft = cls()
        if source is not None:
            draft.config_files.append(source)

        warn_unknown_keys(
            data, frozenset({Toml.SECTION_RENDER}), where="<root>", diagnostics=draft.diagnostics
        )
        render_tbl: TomlTable = get_table_value(data, Toml.SECTION_RENDER)
        where = f"[{Toml.SECTION_RENDER}]"
        warn_unknown_keys(
            render_tbl, Toml.ALL_RENDER_KEYS, where=where, diagnostics=draft.diagnostics
        )

        draft.id = get_bool_value_or_none_checked(
            render_tbl, Toml.KEY_ID, where=where, diagnostics=draft.diagnostics, logger=logger
        )
        draft.base_indent = get_int_value_or_none_checked(
            render_tbl,
            Toml.KEY_BASE_INDENT,
            where=where,
            diagnostics=draft.diagnostics,
            logger=logger,
            minimum=0,
        )
        draft.yaml_width = get_int_value_or_none_checked(
            render_tbl,
            Toml.KEY_YAML_WIDTH,
            where=where,
            diagnostics=draft.diagnostics,
            logger=logger,
            minimum=1,
        )
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableRenderOptions:
        """Load a builder from ``taprender.toml`` or the ``[tool.taprender]`` table of a pyproject.

        Read failures are recorded as error diagnostics; an empty builder is returned.
        """
        diagnostics = DiagnosticLog()
        data: TomlTable = load_toml_dict(path, diagnostics=diagnostics)
        if path.name == PYPROJECT_TOML_NAME:
            data = get_nested_table(data, PYPROJECT_TOOL_SECTION)
        logger.debug("Loaded config from %s: %r", path, data)

        draft = cls.from_toml_dict(data, source=path)
        diagnostics.extend(draft.diagnostics)
        draft.diagnostics = diagnostics
        return draft

    @classmethod
    def discover(cls, directory: Path) -> MutableRenderOptions | None:
        """Return the config found in ``directory``, or None if there is none.

        ``taprender.toml`` takes precedence over a ``pyproject.toml`` that has a
        ``[tool.taprender]`` table.
        """
        candidate = directory / TAPRENDER_TOML_NAME
        if candidate.is_file():
            return cls.from_toml_file(candidate)

        pyproject = directory / PYPROJECT_TOML_NAME
        if pyproject.is_file():
            data: TomlTable = load_toml_dict(pyproject)
            if get_nested_table(data, PYPROJECT_TOOL_SECTION):
                return cls.from_toml_file(pyproject)
        return None

    def merge_with(self, other: MutableRenderOptions) -> MutableRenderOptions:
        """Overlay ``other`` on top of this builder (``other`` wins where it is set).

        Returns:
            ``self``, for chaining.
        """
        if other.id is not None:
            self.id = other.id
        if other.base_indent is not None:
            self.base_indent = other.base_indent
        if other.yaml_width is not None:
            self.yaml_width = other.yaml_width
        self.config_files.extend(other.config_files)
        self.diagnostics.extend(other.diagnostics)
        return self

    def apply_overrides(self, overrides: Mapping[str, Any]) -> MutableRenderOptions:
        """Apply CLI/API overrides; ``None`` values are ignored.

        Recognized keys: ``id``, ``base_indent``, ``yaml_width``.

        Raises:
            ValueError: If an override has the wrong type or range.
        """
        id_value = overrides.get(Toml.KEY_ID)
        if id_value is not None:
            if not isinstance(id_value, bool):
                raise ValueError(f"'id' must be a bool, got {id_value!r}")
            self.id = id_value

        indent = overrides.get(Toml.KEY_BASE_INDENT)
        if indent is not None:
            if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0:
                raise ValueError(f"'base_indent' must be a non-negative int, got {indent!r}")
            self.base_indent = indent

        width = overrides.get(Toml.KEY_YAML_WIDTH)
        if width is not None:
            if isinstance(width, bool) or not isinstance(width, int) or width < 1:
                raise ValueError(f"'yaml_width' must be a positive int, got {width!r}")
            self.yaml_width = width
        return self

    def freeze(self) -> RenderOptions:
        """Return an immutable `RenderOptions` snapshot, filling unset fields with defaults."""
        return RenderOptions(
            id=True if self.id is None else self.id,
            base_indent=0 if self.base_indent is None else self.base_indent,
            yaml_width=DEFAULT_YAML_WIDTH if self.yaml_width is None else self.yaml_width,
            config_files=tuple(self.config_files),
            diagnostics=tuple(self.diagnostics),
        )


def load_options(
    *,
    cwd: Path | None = None,
    config_files: list[Path] | None = None,
    no_config: bool = False,
    overrides: Mapping[str, Any] | None = None,
) -> RenderOptions:
    """Resolve the effective options from defaults, config files and overrides.

    Args:
        cwd: Directory searched for a project config (defaults to the process CWD).
        config_files: Extra config files, applied in order after discovery.
        no_config: Skip discovery in ``cwd``.
        overrides: Final overrides (e.g. from CLI flags).

    Returns:
        The frozen options.
    """
    draft = MutableRenderOptions.from_defaults()
    if not no_config:
        discovered = MutableRenderOptions.discover(cwd or Path.cwd())
        if discovered is not None:
            draft.merge_with(discovered)
    for path in config_files or []:
        draft.merge_with(MutableRenderOptions.from_toml_file(path))
    if overrides:
        draft.apply_overrides(overrides)

    options = draft.freeze()
    logger.debug(
        "Effective render options: id=%s base_indent=%d yaml_width=%d (sources: %s)",
        options.id,
        options.base_indent,
        options.yaml_width,
        ", ".join(str(p) for p in options.config_files) or "defaults",
    )
    return options
