# topmark:header:start
#
#   project      : TapRender
#   file         : test_render_options.py
#   file_relpath : tests/config/test_render_options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for render options: TOML loading, discovery, precedence and freeze/thaw."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from taprender.config.model import MutableRenderOptions, RenderOptions, load_options
from taprender.core.diagnostics import DiagnosticLevel

if TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults() -> None:
    """Defaults number assertions, start at column 0 and wrap YAML at 80."""
    options = MutableRenderOptions.from_defaults().freeze()
    assert options == RenderOptions()
    assert (options.id, options.base_indent, options.yaml_width) == (True, 0, 80)


def test_discovers_taprender_toml(tmp_path: Path) -> None:
    """``taprender.toml`` in the working directory is picked up."""
    cfg = _write(tmp_path / "taprender.toml", "[render]\nid = false\nbase_indent = 2\n")
    options = load_options(cwd=tmp_path)
    assert options.id is False
    assert options.base_indent == 2
    assert options.config_files == (cfg,)
    assert options.diagnostics == ()


def test_discovers_pyproject_tool_table(tmp_path: Path) -> None:
    """``[tool.taprender]`` in pyproject.toml is used when present."""
    _write(
        tmp_path / "pyproject.toml",
        "[project]\nname = 'x'\n\n[tool.taprender.render]\nyaml_width = 40\n",
    )
    options = load_options(cwd=tmp_path)
    assert options.yaml_width == 40
    assert options.config_files == (tmp_path / "pyproject.toml",)


def test_pyproject_without_tool_table_is_ignored(tmp_path: Path) -> None:
    """A pyproject.toml without a TapRender table contributes nothing."""
    _write(tmp_path / "pyproject.toml", "[project]\nname = 'x'\n")
    assert load_options(cwd=tmp_path).config_files == ()


def test_taprender_toml_wins_over_pyproject(tmp_path: Path) -> None:
    """Only one project config is discovered; the dedicated file has priority."""
    _write(tmp_path / "pyproject.toml", "[tool.taprender.render]\nbase_indent = 8\n")
    _write(tmp_path / "taprender.toml", "[render]\nbase_indent = 4\n")
    options = load_options(cwd=tmp_path)
    assert options.base_indent == 4
    assert options.config_files == (tmp_path / "taprender.toml",)


def test_no_config_skips_discovery(tmp_path: Path) -> None:
    """``no_config`` ignores the working directory entirely."""
    _write(tmp_path / "taprender.toml", "[render]\nid = false\n")
    assert load_options(cwd=tmp_path, no_config=True).id is True


def test_precedence_defaults_discovered_explicit_overrides(tmp_path: Path) -> None:
    """Later layers win: discovered < explicit files < overrides."""
    _write(tmp_path / "taprender.toml", "[render]\nid = false\nbase_indent = 2\nyaml_width = 60\n")
    extra = _write(tmp_path / "extra.toml", "[render]\nbase_indent = 6\n")
    options = load_options(cwd=tmp_path, config_files=[extra], overrides={"yaml_width": 100})
    assert options.id is False
    assert options.base_indent == 6
    assert options.yaml_width == 100
    assert options.config_files == (tmp_path / "taprender.toml", extra)


@pytest.mark.parametrize(
    ("body", "fragment"),
    [
        ('[render]\nid = "nope"\n', "Expected bool in [render].id"),
        ("[render]\nbase_indent = -1\n", "Expected int >= 0 in [render].base_indent"),
        ("[render]\nyaml_width = 0\n", "Expected int >= 1 in [render].yaml_width"),
        ("[render]\nbase_indent = true\n", "Expected int in [render].base_indent"),
        ("[render]\ncolour = true\n", "Ignoring unknown key [render].colour"),
        ("[output]\nx = 1\n", "Ignoring unknown key <root>.output"),
    ],
)
def test_bad_values_warn_and_fall_back(tmp_path: Path, body: str, fragment: str) -> None:
    """Bad config values are reported as warnings and never crash."""
    cfg = _write(tmp_path / "bad.toml", body)
    options = load_options(cwd=tmp_path, config_files=[cfg])
    assert (options.id, options.base_indent, options.yaml_width) == (True, 0, 80)
    messages = [d.message for d in options.diagnostics]
    assert any(fragment in m for m in messages), messages
    assert all(d.level == DiagnosticLevel.WARNING for d in options.diagnostics)


def test_invalid_toml_is_an_error_diagnostic(tmp_path: Path) -> None:
    """A file that is not TOML is recorded as an error and otherwise ignored."""
    cfg = _write(tmp_path / "broken.toml", "[render\nid = \n")
    draft = MutableRenderOptions.from_toml_file(cfg)
    assert draft.diagnostics.has_error()
    assert draft.freeze().id is True


def test_missing_file_is_an_error_diagnostic(tmp_path: Path) -> None:
    """An unreadable file is recorded as an error diagnostic."""
    draft = MutableRenderOptions.from_toml_file(tmp_path / "absent.toml")
    assert draft.diagnostics.has_error()
    assert "Cannot read" in next(iter(draft.diagnostics)).message


@pytest.mark.parametrize(
    "overrides",
    [{"id": "false"}, {"base_indent": -2}, {"base_indent": True}, {"yaml_width": 0}],
)
def test_apply_overrides_rejects_bad_values(overrides: dict[str, object]) -> None:
    """Programmatic overrides are validated strictly."""
    with pytest.raises(ValueError):
        MutableRenderOptions.from_defaults().apply_overrides(overrides)


def test_apply_overrides_ignores_none() -> None:
    """``None`` means "not given" and leaves the builder unchanged."""
    draft = MutableRenderOptions.from_defaults().apply_overrides({"id": None, "base_indent": None})
    assert draft.freeze() == RenderOptions()


def test_thaw_freeze_roundtrip(tmp_path: Path) -> None:
    """Thawing and refreezing keeps values, sources and diagnostics."""
    cfg = _write(tmp_path / "taprender.toml", "[render]\nid = false\nnope = 1\n")
    options = load_options(cwd=tmp_path)
    draft = options.thaw()
    assert draft.freeze() == options

    draft.base_indent = 3
    changed = draft.freeze()
    assert changed.base_indent == 3
    assert options.base_indent == 0
    assert changed.config_files == (cfg,)
    assert len(changed.diagnostics) == 1


def test_merge_with_only_overlays_set_fields() -> None:
    """Unset (None) fields of the overlay keep the base values."""
    base = MutableRenderOptions.from_defaults()
    base.merge_with(MutableRenderOptions(base_indent=4))
    assert base.freeze() == RenderOptions(base_indent=4)
