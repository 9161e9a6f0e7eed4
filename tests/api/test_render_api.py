# topmark:header:start
#
#   project      : TapRender
#   file         : test_render_api.py
#   file_relpath : tests/api/test_render_api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the public `taprender.api` surface."""

from __future__ import annotations

from typing import Any

import pytest

from taprender import api
from taprender.config.model import RenderOptions
from taprender.constants import TAPRENDER_VERSION
from tests.conftest import parametrize

EVENTS: list[Any] = [
    ["version", 13],
    ["plan", {"start": 1, "end": 1}],
    ["assert", {"ok": True, "name": "passes", "id": 1}],
]


def test_render_with_defaults() -> None:
    """``render`` returns the newline-joined document."""
    assert api.render(EVENTS) == "TAP version 13\n1..1\nok 1 - passes"


def test_render_lines_with_options_snapshot() -> None:
    """A frozen `RenderOptions` is used as-is."""
    assert api.render_lines(EVENTS, config=RenderOptions(id=False, base_indent=2)) == [
        "  TAP version 13",
        "  1..1",
        "  ok - passes",
    ]


@parametrize(
    "config",
    [
        {"id": False},
        {"render": {"id": False}},
        {"render": {"id": True}, "id": False},
    ],
)
def test_render_with_mapping_config(config: dict[str, Any]) -> None:
    """Flat keys and the TOML-shaped ``render`` table are both accepted; flat keys win."""
    assert api.render_lines(EVENTS, config=config)[-1] == "ok - passes"


@parametrize(
    "config",
    [
        {"colour": True},
        {"render": "id=false"},
        {"base_indent": -1},
        {"id": "no"},
    ],
)
def test_invalid_mapping_config(config: dict[str, Any]) -> None:
    """Unknown keys and wrong-typed values raise `ValueError`."""
    with pytest.raises(ValueError):
        api.ensure_options(config)


def test_ensure_options_rejects_non_mapping() -> None:
    """Only mappings, snapshots and None are accepted."""
    with pytest.raises(ValueError):
        api.ensure_options(["id", False])  # type: ignore[arg-type]


def test_ensure_options_passthrough() -> None:
    """An existing snapshot is returned unchanged; None gives defaults."""
    options = RenderOptions(yaml_width=40)
    assert api.ensure_options(options) is options
    assert api.ensure_options(None) == RenderOptions()


def test_dispatch_error_is_exported() -> None:
    """Callers can catch failures via the API module and inspect partial output."""
    with pytest.raises(api.DispatchError) as excinfo:
        api.render([*EVENTS, ["plan", {"end": "many"}]])
    assert excinfo.value.lines == ["TAP version 13", "1..1", "ok 1 - passes"]
    assert isinstance(excinfo.value.cause, api.MalformedEventError)
    assert isinstance(excinfo.value, api.TapRenderError)


def test_version() -> None:
    """The API reports the installed package version."""
    assert api.version() == TAPRENDER_VERSION


def test_public_names() -> None:
    """Every name in ``__all__`` is importable from the module."""
    for name in api.__all__:
        assert hasattr(api, name), name
