# topmark:header:start
#
#   project      : TapRender
#   file         : api.py
#   file_relpath : src/taprender/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public TapRender API (stable surface).

This module exposes a **small, typed API** for test harnesses that want to render
event streams programmatically without going through the CLI.

Configuration contract
----------------------
Public functions accept either a frozen `RenderOptions`, ``None`` (defaults), or a
plain **mapping**. A mapping may use the flat option names, or mirror the TOML
shape:

```python
from taprender import api

text = api.render(events, config={"id": False})
text = api.render(events, config={"render": {"id": False, "base_indent": 4}})
```

The API never reads config files; use `taprender.config.model.load_options` for
discovery.

Errors
------
- `DispatchError` if an event cannot be rendered; ``exc.lines`` holds the partial
  output and ``exc.position`` the offending event.
- `ValueError` for an invalid ``config`` mapping.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from taprender.config.keys import Toml
from taprender.config.model import MutableRenderOptions, RenderOptions
from taprender.constants import TAPRENDER_VERSION
from taprender.core.errors import (
    DispatchError,
    MalformedEventError,
    TapRenderError,
    UnrenderablePayloadError,
)
from taprender.events import decode_events
from taprender.rendering.dispatcher import dispatch, render_document

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__: list[str] = [
    "DispatchError",
    "MalformedEventError",
    "RenderOptions",
    "TapRenderError",
    "UnrenderablePayloadError",
    "decode_events",
    "ensure_options",
    "render",
    "render_lines",
    "version",
]


def ensure_options(value: Mapping[str, Any] | RenderOptions | None) -> RenderOptions:
    """Return frozen `RenderOptions` from a mapping, an existing snapshot, or None.

    Raises:
        ValueError: If the mapping holds unknown keys or values of the wrong type.
    """
    if value is None:
        return RenderOptions()
    if isinstance(value, RenderOptions):
        return value
    if not isinstance(value, Mapping):
        raise ValueError(f"config must be a mapping or RenderOptions, got {type(value).__name__}")

    unknown = set(value) - Toml.ALL_RENDER_KEYS - {Toml.SECTION_RENDER}
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")

    draft = MutableRenderOptions.from_defaults()
    render_tbl = value.get(Toml.SECTION_RENDER)
    if render_tbl is not None:
        if not isinstance(render_tbl, Mapping):
            raise ValueError(f"'{Toml.SECTION_RENDER}' must be a mapping")
        draft.apply_overrides(render_tbl)
    draft.apply_overrides({k: v for k, v in value.items() if k != Toml.SECTION_RENDER})
    return draft.freeze()


def render(
    events: Iterable[Any],
    *,
    config: Mapping[str, Any] | RenderOptions | None = None,
) -> str:
    """Render an event stream into a TAP document (lines joined with ``\\n``)."""
    return render_document(events, ensure_options(config))


def render_lines(
    events: Iterable[Any],
    *,
    config: Mapping[str, Any] | RenderOptions | None = None,
) -> list[str]:
    """Render an event stream into a list of TAP lines."""
    return dispatch(events, ensure_options(config))


def version() -> str:
    """Return the installed TapRender version (PEP 440)."""
    return TAPRENDER_VERSION
