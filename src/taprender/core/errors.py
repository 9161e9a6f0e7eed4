# topmark:header:start
#
#   project      : TapRender
#   file         : errors.py
#   file_relpath : src/taprender/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the TapRender library.

Taxonomy:
    * `MalformedEventError`: an event has the wrong shape for its declared kind
      (missing field, wrong type, unknown container shape).
    * `UnrenderablePayloadError`: a YAML diagnostic payload holds a value that
      cannot be serialized into a YAML block.
    * `DispatchError`: raised by the dispatcher when either of the above happens
      while folding an event stream. It carries the position of the offending
      event and every line rendered before the failure.

All of them derive from `TapRenderError`, itself a `ValueError`: rendering is pure
computation, so every failure is a problem with the input, never a transient
condition worth retrying.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


def format_position(position: Sequence[int]) -> str:
    """Return a human readable event position such as ``event #3 > #1``.

    Indices are zero-based; each level of nesting adds one index.
    """
    if not position:
        return "event stream"
    return "event " + " > ".join(f"#{i}" for i in position)


class TapRenderError(ValueError):
    """Base class for all TapRender library errors."""


class MalformedEventError(TapRenderError):
    """An event does not have the fields its kind requires.

    Attributes:
        position (tuple[int, ...]): Path of indices to the event (empty if unknown).
        kind (str | None): Declared event kind, if it could be read.
        reason (str): What is wrong with the event.
    """

    def __init__(
        self,
        reason: str,
        *,
        kind: str | None = None,
        position: Sequence[int] = (),
    ) -> None:
        self.reason = reason
        self.kind = kind
        self.position = tuple(position)
        super().__init__(self._compose())

    def _compose(self) -> str:
        where = format_position(self.position)
        if self.kind:
            return f"Malformed '{self.kind}' {where}: {self.reason}"
        return f"Malformed {where}: {self.reason}"


class UnrenderablePayloadError(TapRenderError):
    """A diagnostic payload contains a value the YAML emitter cannot represent."""


class DispatchError(TapRenderError):
    """Rendering an event stream failed part-way through.

    Attributes:
        position (tuple[int, ...]): Path of indices to the failing event.
        lines (list[str]): Lines rendered before the failure. They are valid TAP
            and are returned so callers can inspect partial progress.
        cause (Exception): The underlying `MalformedEventError`,
            `UnrenderablePayloadError` or other exception.
    """

    def __init__(
        self,
        *,
        position: Sequence[int],
        lines: list[str],
        cause: Exception,
    ) -> None:
        self.position = tuple(position)
        self.lines = lines
        self.cause = cause
        super().__init__(f"Cannot render {format_position(self.position)}: {cause}")
