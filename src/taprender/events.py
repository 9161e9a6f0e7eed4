# topmark:header:start
#
#   project      : TapRender
#   file         : events.py
#   file_relpath : src/taprender/events.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Test-lifecycle events consumed by the dispatcher.

An event source (a TAP parser adapter, a test-framework hook) produces an ordered
stream of events. Two raw shapes are accepted:

* a ``[name, payload]`` pair, as emitted by event-stream fixtures::

      [["version", 13], ["plan", {"start": 1, "end": 2}], ["assert", {"ok": true, "name": "x"}]]

* a mapping with a ``"type"`` key and the fields inline::

      {"type": "plan", "end": 2}

`decode_event` turns one raw item into a typed, frozen event dataclass and raises
`MalformedEventError` (with the item's position) when the shape is wrong. Event
names without a rendering rule (``complete``, ``extra``, ``line``, ...) decode to
``None`` and are skipped by the dispatcher.

Child groups are decoded *shallowly* by `decode_event`: their items stay raw until
the dispatcher reaches them, so a malformed item deep in a child group is reported
after every line before it has been rendered. `decode_events` decodes eagerly,
for callers that want to validate a whole stream up front.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

from taprender.config.logging import get_logger
from taprender.constants import TAP_VERSION
from taprender.core.errors import MalformedEventError

if TYPE_CHECKING:
    from taprender.config.logging import TaprenderLogger

logger: TaprenderLogger = get_logger(__name__)


class EventKind(str, Enum):
    """Names of the event kinds the renderer knows how to render."""

    VERSION = "version"
    PLAN = "plan"
    BAILOUT = "bailout"
    COMMENT = "comment"
    CHILD = "child"
    ASSERT = "assert"


@dataclass(frozen=True)
class VersionEvent:
    """TAP version declaration. The emitted line always declares version 13."""

    version: int = TAP_VERSION

    kind = EventKind.VERSION


@dataclass(frozen=True)
class PlanEvent:
    """Test plan ``1..end``; ``comment`` is an optional reason (e.g. for ``1..0``)."""

    end: int
    comment: str | None = None

    kind = EventKind.PLAN


@dataclass(frozen=True)
class BailoutEvent:
    """Unrecoverable stop signal."""

    message: str = ""

    kind = EventKind.BAILOUT


@dataclass(frozen=True)
class CommentEvent:
    """Raw diagnostic comment text, normalized by the dispatcher before rendering."""

    text: str

    kind = EventKind.COMMENT


@dataclass(frozen=True)
class ChildEvent:
    """Nested child-test group.

    ``events`` may hold decoded events or raw items; the dispatcher decodes raw
    items as it reaches them.
    """

    events: tuple[Any, ...] = ()

    kind = EventKind.CHILD


@dataclass(frozen=True)
class AssertEvent:
    """A single assertion result.

    Attributes:
        ok (bool): Whether the assertion passed.
        name (str): Description of the assertion.
        id (int | None): Number the producer assigned. Informational only: the
            dispatcher numbers assertions with its own counter.
        time (int | float | None): Duration in milliseconds.
        skip (str | bool | None): Skip reason, or True for a bare skip.
        todo (str | bool | None): TODO detail, or True for a bare TODO.
        diag (Mapping[str, Any] | None): YAML diagnostic payload.
    """

    ok: bool
    name: str = ""
    id: int | None = None
    time: int | float | None = None
    skip: str | bool | None = None
    todo: str | bool | None = None
    diag: Mapping[str, Any] | None = None

    kind = EventKind.ASSERT


Event = Union[VersionEvent, PlanEvent, BailoutEvent, CommentEvent, ChildEvent, AssertEvent]

EVENT_TYPES: tuple[type, ...] = (
    VersionEvent,
    PlanEvent,
    BailoutEvent,
    CommentEvent,
    ChildEvent,
    AssertEvent,
)


# --- Field validation helpers ---


def _is_int(value: Any) -> bool:
    # bool is a subclass of int; exclude it.
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return _is_int(value) or isinstance(value, float)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


class _Fields:
    """Typed access to the payload mapping of one raw event."""

    def __init__(self, payload: Mapping[str, Any], kind: str, position: tuple[int, ...]) -> None:
        self.payload = payload
        self.kind = kind
        self.position = position

    def fail(self, reason: str) -> MalformedEventError:
        return MalformedEventError(reason, kind=self.kind, position=self.position)

    def required(self, key: str) -> Any:
        if key not in self.payload:
            raise self.fail(f"missing required field '{key}'")
        return self.payload[key]

    def optional(self, key: str) -> Any:
        return self.payload.get(key)

    def expect(self, key: str, ok: bool, what: str) -> None:
        if not ok:
            value = self.payload.get(key)
            raise self.fail(f"field '{key}' must be {what}, got {type(value).__name__}: {value!r}")


def _split_raw(raw: Any, position: tuple[int, ...]) -> tuple[str, Any]:
    """Return ``(name, payload)`` for either accepted raw shape."""
    if isinstance(raw, Mapping):
        name = raw.get("type")
        if not isinstance(name, str):
            raise MalformedEventError(
                "event mapping needs a string 'type' field", position=position
            )
        return name, {k: v for k, v in raw.items() if k != "type"}

    if _is_sequence(raw):
        if not raw or not isinstance(raw[0], str):
            raise MalformedEventError(
                "event pair must start with the event name", position=position
            )
        if len(raw) > 2:
            raise MalformedEventError(
                f"event pair must have at most 2 items, got {len(raw)}",
                kind=raw[0],
                position=position,
            )
        return raw[0], raw[1] if len(raw) == 2 else None

    raise MalformedEventError(
        f"expected a [name, payload] pair or a mapping, got {type(raw).__name__}",
        position=position,
    )


def _as_fields(
    payload: Any,
    kind: EventKind,
    position: tuple[int, ...],
    *,
    scalar_key: str | None = None,
) -> _Fields:
    """Wrap a payload as `_Fields`, lifting a bare scalar payload under ``scalar_key``."""
    if isinstance(payload, Mapping):
        return _Fields(payload, kind.value, position)
    if scalar_key is not None and payload is not None:
        return _Fields({scalar_key: payload}, kind.value, position)
    raise MalformedEventError(
        f"payload must be a mapping, got {type(payload).__name__}",
        kind=kind.value,
        position=position,
    )


def _decode_version(payload: Any, position: tuple[int, ...]) -> VersionEvent:
    if payload is None or (isinstance(payload, Mapping) and not payload):
        return VersionEvent()
    f = _as_fields(payload, EventKind.VERSION, position, scalar_key="version")
    version = f.optional("version")
    if version is None:
        return VersionEvent()
    f.expect("version", _is_int(version), "an int")
    if version != TAP_VERSION:
        logger.debug("Source declared TAP version %s; rendering version %d", version, TAP_VERSION)
    return VersionEvent(version=version)


def _decode_plan(payload: Any, position: tuple[int, ...]) -> PlanEvent:
    f = _as_fields(payload, EventKind.PLAN, position, scalar_key="end")
    end = f.required("end")
    f.expect("end", _is_int(end), "an int")
    f.expect("end", end >= 0, "non-negative")
    start = f.optional("start")
    if start is not None and start != 1:
        logger.debug("Plan declares start=%r; TAP plans always render from 1", start)
    comment = f.optional("comment")
    f.expect("comment", comment is None or isinstance(comment, str), "a string")
    return PlanEvent(end=end, comment=comment or None)


def _decode_bailout(payload: Any, position: tuple[int, ...]) -> BailoutEvent:
    if payload is None:
        return BailoutEvent()
    f = _as_fields(payload, EventKind.BAILOUT, position, scalar_key="message")
    message = f.optional("message")
    if message is None:
        return BailoutEvent()
    f.expect("message", isinstance(message, str), "a string")
    return BailoutEvent(message=message)


def _decode_comment(payload: Any, position: tuple[int, ...]) -> CommentEvent:
    f = _as_fields(payload, EventKind.COMMENT, position, scalar_key="text")
    text = f.required("text")
    f.expect("text", isinstance(text, str), "a string")
    return CommentEvent(text=text)


def _decode_child(payload: Any, position: tuple[int, ...]) -> ChildEvent:
    if _is_sequence(payload):
        return ChildEvent(events=tuple(payload))
    f = _as_fields(payload, EventKind.CHILD, position)
    events = f.required("events")
    f.expect("events", _is_sequence(events), "a list of events")
    return ChildEvent(events=tuple(events))


def _decode_assert(payload: Any, position: tuple[int, ...]) -> AssertEvent:
    f = _as_fields(payload, EventKind.ASSERT, position)

    ok = f.required("ok")
    f.expect("ok", isinstance(ok, bool), "a bool")

    name = f.optional("name")
    f.expect("name", name is None or isinstance(name, str), "a string")

    test_id = f.optional("id")
    f.expect("id", test_id is None or _is_int(test_id), "an int")

    time = f.optional("time")
    f.expect("time", time is None or _is_number(time), "a number")

    skip = f.optional("skip")
    f.expect("skip", skip is None or isinstance(skip, (str, bool)), "a string or bool")

    todo = f.optional("todo")
    f.expect("todo", todo is None or isinstance(todo, (str, bool)), "a string or bool")

    diag = f.optional("diag")
    f.expect("diag", diag is None or isinstance(diag, Mapping), "a mapping")

    return AssertEvent(
        ok=ok,
        name=name or "",
        id=test_id,
        time=time,
        skip=skip,
        todo=todo,
        diag=diag,
    )


_DECODERS = {
    EventKind.VERSION: _decode_version,
    EventKind.PLAN: _decode_plan,
    EventKind.BAILOUT: _decode_bailout,
    EventKind.COMMENT: _decode_comment,
    EventKind.CHILD: _decode_child,
    EventKind.ASSERT: _decode_assert,
}


def decode_event(raw: Any, position: Sequence[int] = ()) -> Event | None:
    """Decode one raw event item.

    Already-decoded events are returned unchanged.

    Args:
        raw: A ``[name, payload]`` pair, a mapping with a ``"type"`` key, or an event.
        position: Path of indices to this item, used in error messages.

    Returns:
        The decoded event, or ``None`` for event names without a rendering rule.

    Raises:
        MalformedEventError: If the item or its payload has the wrong shape.
    """
    if isinstance(raw, EVENT_TYPES):
        return raw  # type: ignore[return-value]

    pos = tuple(position)
    name, payload = _split_raw(raw, pos)
    try:
        kind = EventKind(name)
    except ValueError:
        logger.debug("Skipping '%s' event at %s: nothing to render", name, pos)
        return None

    event = _DECODERS[kind](payload, pos)
    logger.trace("Decoded %s at %s: %r", kind.value, pos, event)
    return event


def decode_events(raw_events: Sequence[Any], position: Sequence[int] = ()) -> list[Event]:
    """Decode a whole event stream eagerly, including every child group.

    Events without a rendering rule are dropped.

    Raises:
        MalformedEventError: For the first malformed item, with its full position.
    """
    if not _is_sequence(raw_events):
        raise MalformedEventError(
            f"event stream must be a list, got {type(raw_events).__name__}",
            position=position,
        )

    decoded: list[Event] = []
    for index, raw in enumerate(raw_events):
        pos = (*position, index)
        event = decode_event(raw, pos)
        if event is None:
            continue
        if isinstance(event, ChildEvent):
            event = ChildEvent(events=tuple(decode_events(event.events, pos)))
        decoded.append(event)
    return decoded


def parse_event_stream(text: str) -> list[Any]:
    """Parse JSON text into a raw (undecoded) event stream.

    Raises:
        MalformedEventError: If the text is not valid JSON or not a JSON array.
    """
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedEventError(f"invalid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise MalformedEventError(f"event stream must be a JSON array, got {type(data).__name__}")
    return data


def load_events_json(text: str) -> list[Event]:
    """Parse a JSON event stream and decode it eagerly.

    Raises:
        MalformedEventError: If the text is not valid JSON or an event is malformed.
    """
    return decode_events(parse_event_stream(text))
