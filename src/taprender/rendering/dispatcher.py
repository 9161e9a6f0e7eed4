# topmark:header:start
#
#   project      : TapRender
#   file         : dispatcher.py
#   file_relpath : src/taprender/rendering/dispatcher.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Fold an ordered event stream into TAP lines.

The dispatcher walks the stream once, in order. Its only state is a
`RenderState` per nesting level: the running test counter and the indentation
width. A child group is rendered by a plain recursive call with a *fresh*
counter and the indentation increased by `INDENT_STEP`, so child numbering is
independent of the parent and of siblings.

Failures (a malformed event, an unrenderable diagnostic payload) are reported
as `DispatchError` with the position of the offending event and every line
rendered before it, including the partial output of an enclosing child group.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from taprender.config.logging import get_logger
from taprender.config.model import RenderOptions
from taprender.constants import INDENT_STEP
from taprender.core.errors import DispatchError
from taprender.events import (
    AssertEvent,
    BailoutEvent,
    ChildEvent,
    CommentEvent,
    PlanEvent,
    VersionEvent,
    decode_event,
)
from taprender.rendering.messages import (
    AssertionRecord,
    normalize_comment,
    render_assertion,
    render_bailout,
    render_diagnostic,
    render_plan,
    render_version,
    render_yaml_block,
    select_directive,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from taprender.config.logging import TaprenderLogger
    from taprender.events import Event

logger: TaprenderLogger = get_logger(__name__)


@dataclass(frozen=True)
class RenderState:
    """Formatting state of one nesting level.

    Attributes:
        test_counter (int): Number of assertions seen so far at this level.
        indent_width (int): Spaces prepended to every line at this level.
    """

    test_counter: int = 0
    indent_width: int = 0

    def advance(self) -> RenderState:
        """Return the state after one more assertion."""
        return replace(self, test_counter=self.test_counter + 1)

    def child(self) -> RenderState:
        """Return the state a nested child group starts from."""
        return RenderState(test_counter=0, indent_width=self.indent_width + INDENT_STEP)


def build_assertion_record(
    event: AssertEvent,
    number: int,
    options: RenderOptions,
) -> AssertionRecord:
    """Build the record for an assertion numbered ``number`` at its level."""
    if event.id is not None and event.id != number:
        logger.debug("Assertion %r carries id=%d; numbering it %d", event.name, event.id, number)
    return AssertionRecord(
        ok=event.ok,
        description=event.name,
        test_number=number if options.id else None,
        directive=select_directive(skip=event.skip, todo=event.todo, time=event.time),
    )


def _render_event(
    event: Event,
    state: RenderState,
    options: RenderOptions,
    lines: list[str],
    position: tuple[int, ...],
) -> RenderState:
    """Append the lines for one event and return the state for the next event."""
    indent = state.indent_width

    if isinstance(event, VersionEvent):
        lines.append(render_version(indent))
    elif isinstance(event, PlanEvent):
        lines.append(render_plan(event.end, indent, comment=event.comment))
    elif isinstance(event, BailoutEvent):
        # A bailout does not stop the fold; the source decides whether more events follow.
        lines.append(render_bailout(event.message, indent))
    elif isinstance(event, CommentEvent):
        lines.extend(render_diagnostic(normalize_comment(event.text), indent).split("\n"))
    elif isinstance(event, ChildEvent):
        _dispatch_into(event.events, state.child(), options, lines, position)
    elif isinstance(event, AssertEvent):
        state = state.advance()
        record = build_assertion_record(event, state.test_counter, options)
        lines.append(render_assertion(record, indent))
        if event.diag is not None:
            lines.extend(render_yaml_block(event.diag, indent, width=options.yaml_width))
    return state


def _dispatch_into(
    events: Iterable[Any],
    state: RenderState,
    options: RenderOptions,
    lines: list[str],
    position: tuple[int, ...],
) -> RenderState:
    """Render ``events`` into the shared ``lines`` buffer.

    Errors from a nested level are already `DispatchError` and pass through
    untouched; anything else is wrapped with the current position.
    """
    for index, raw in enumerate(events):
        pos = (*position, index)
        try:
            event = decode_event(raw, pos)
            if event is None:
                continue
            state = _render_event(event, state, options, lines, pos)
        except DispatchError:
            raise
        except Exception as exc:
            logger.debug("Rendering failed at %s: %s", pos, exc)
            raise DispatchError(position=pos, lines=list(lines), cause=exc) from exc
    return state


def dispatch(
    events: Iterable[Any],
    options: RenderOptions | None = None,
    state: RenderState | None = None,
) -> list[str]:
    """Render an event stream into TAP lines.

    Args:
        events: Decoded events or raw items (``[name, payload]`` pairs or
            ``{"type": ...}`` mappings), in arrival order.
        options: Render options; defaults to `RenderOptions()`.
        state: Starting state; defaults to a zero counter at ``options.base_indent``.

    Returns:
        list[str]: The rendered lines, in order.

    Raises:
        DispatchError: If an event cannot be rendered. ``exc.lines`` holds every
            line rendered before the failure.
    """
    options = options or RenderOptions()
    if state is None:
        state = RenderState(indent_width=options.base_indent)

    lines: list[str] = []
    final = _dispatch_into(events, state, options, lines, ())
    logger.debug("Rendered %d lines (%d top-level assertions)", len(lines), final.test_counter)
    return lines


def render_document(events: Iterable[Any], options: RenderOptions | None = None) -> str:
    """Render an event stream into a newline-joined TAP document (no trailing newline)."""
    return "\n".join(dispatch(events, options))
