# topmark:header:start
#
#   project      : TapRender
#   file         : messages.py
#   file_relpath : src/taprender/rendering/messages.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Render single TAP records as text.

Every function here is pure: it takes one semantic record plus the ambient
indentation width and returns the exact TAP text for it, already indented. The
dispatcher owns all state (test counter, nesting depth).

Output grammar (TAP version 13):

    TAP version 13
    1..<end>[ # <comment>]
    Bail out![ <message>]
    # <text>
    <ok|not ok>[ <number>][ - <description>][ # <directive>]
      ---
      <key>: <value>
      ...

Directives are selected by `select_directive` with the fixed priority
**skip > todo > time**; exactly one directive clause is emitted per line.

Contract violations (wrong types from a caller) raise `MalformedEventError`
immediately; values PyYAML cannot represent raise `UnrenderablePayloadError`.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final, cast

import yaml

from taprender.config.logging import get_logger
from taprender.constants import DEFAULT_YAML_WIDTH, TAP_VERSION, YAML_INDENT
from taprender.core.errors import MalformedEventError, UnrenderablePayloadError

if TYPE_CHECKING:
    from taprender.config.logging import TaprenderLogger

logger: TaprenderLogger = get_logger(__name__)

# A leading run of whitespace, '#', whitespace (the raw comment prefix).
_COMMENT_PREFIX_RE: Final[re.Pattern[str]] = re.compile(r"^\s*#\s*")

# A '#' not already escaped with a backslash.
_UNESCAPED_HASH_RE: Final[re.Pattern[str]] = re.compile(r"(?<!\\)#")

# A line break inside single-line text (CRLF, CR or LF).
_LINE_BREAK_RE: Final[re.Pattern[str]] = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class AssertionRecord:
    """Everything needed to render one assertion line.

    Attributes:
        ok (bool): Pass/fail status.
        description (str): Assertion description (may be empty).
        test_number (int | None): Number to print, or None to omit it.
        directive (str | None): Directive text without the leading ``# ``.
    """

    ok: bool
    description: str = ""
    test_number: int | None = None
    directive: str | None = None


def _pad(indent: int) -> str:
    if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0:
        raise MalformedEventError(f"indent must be a non-negative int, got {indent!r}")
    return " " * indent


def escape_line_breaks(text: str) -> str:
    r"""Write embedded line breaks as the two-character escapes ``\r`` and ``\n``.

    Used for text that must stay on a single TAP line.
    """
    return _LINE_BREAK_RE.sub(
        lambda m: m.group(0).replace("\r", "\\r").replace("\n", "\\n"), text
    )


def render_version(indent: int = 0) -> str:
    """Return the TAP version declaration line."""
    return f"{_pad(indent)}TAP version {TAP_VERSION}"


def render_plan(end: int, indent: int = 0, comment: str | None = None) -> str:
    """Return the plan line ``1..<end>``.

    ``end == 0`` is a legal plan that declares no tests.

    Args:
        end (int): Number of the last planned test (non-negative).
        indent (int): Indentation width.
        comment (str | None): Optional reason appended as ``# <comment>``.

    Returns:
        str: The plan line.
    """
    if isinstance(end, bool) or not isinstance(end, int) or end < 0:
        raise MalformedEventError(f"plan end must be a non-negative int, got {end!r}", kind="plan")
    line = f"{_pad(indent)}1..{end}"
    if comment:
        line += f" # {escape_line_breaks(comment)}"
    return line


def render_bailout(message: str, indent: int = 0) -> str:
    """Return ``Bail out! <message>``; a single trailing newline is dropped."""
    if not isinstance(message, str):
        raise MalformedEventError(
            f"bailout message must be a string, got {type(message).__name__}", kind="bailout"
        )
    if message.endswith("\n"):
        message = message[:-1]
    message = escape_line_breaks(message)
    if not message:
        return f"{_pad(indent)}Bail out!"
    return f"{_pad(indent)}Bail out! {message}"


def normalize_comment(raw: str) -> str:
    """Strip one trailing newline, then a leading ``#`` and the whitespace around it."""
    if raw.endswith("\n"):
        raw = raw[:-1]
    return _COMMENT_PREFIX_RE.sub("", raw, count=1)


def render_diagnostic(text: str, indent: int = 0) -> str:
    """Return a ``# <text>`` comment line.

    ``text`` must already be normalized (see `normalize_comment`). Embedded
    newlines start a new ``# `` line at the same indentation, so the result can
    span several lines.
    """
    if not isinstance(text, str):
        raise MalformedEventError(
            f"comment text must be a string, got {type(text).__name__}", kind="comment"
        )
    pad = _pad(indent)
    return "\n".join(f"{pad}# {line}" for line in text.split("\n"))


def _format_ms(value: int | float) -> str:
    """Format a duration without a spurious ``.0`` for integral floats."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def select_directive(
    skip: str | bool | None = None,
    todo: str | bool | None = None,
    time: int | float | None = None,
) -> str | None:
    """Return the single directive for an assertion, or None.

    Priority is skip > todo > time: a skipped or todo assertion was not really
    executed, so its timing is dropped. Falsy values count as absent.

    Returns:
        str | None: ``Skip <reason>`` / ``Skip``, ``TODO <detail>`` / ``TODO``,
        ``time=<ms>ms``, or None.
    """
    if skip:
        return "Skip" if skip is True else f"Skip {escape_line_breaks(skip)}"
    if todo:
        return "TODO" if todo is True else f"TODO {escape_line_breaks(todo)}"
    if time:
        if isinstance(time, bool) or not isinstance(time, (int, float)):
            raise MalformedEventError(f"time must be a number, got {time!r}", kind="assert")
        return f"time={_format_ms(time)}ms"
    return None


def escape_description(description: str) -> str:
    r"""Escape ``#`` as ``\#`` and line breaks as ``\n`` so a description stays on its line.

    An unescaped ``#`` would open a directive.
    """
    return escape_line_breaks(_UNESCAPED_HASH_RE.sub(r"\\#", description))


def render_assertion(record: AssertionRecord, indent: int = 0) -> str:
    """Return one assertion line.

    Token order: status, number (if any), ``-`` and description (if any), then
    ``# <directive>`` (if any).
    """
    if not isinstance(record.ok, bool):
        raise MalformedEventError(f"'ok' must be a bool, got {record.ok!r}", kind="assert")
    if not isinstance(record.description, str):
        raise MalformedEventError(
            f"description must be a string, got {record.description!r}", kind="assert"
        )
    number = record.test_number
    if number is not None and (isinstance(number, bool) or not isinstance(number, int)):
        raise MalformedEventError(f"test number must be an int, got {number!r}", kind="assert")

    parts: list[str] = ["ok" if record.ok else "not ok"]
    if number is not None:
        parts.append(str(number))
    if record.description:
        parts.extend(("-", escape_description(record.description)))
    if record.directive:
        parts.extend(("#", record.directive))
    return _pad(indent) + " ".join(parts)


class _DiagnosticDumper(yaml.SafeDumper):
    """Safe dumper that writes multi-line strings as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


_DiagnosticDumper.add_representer(str, _represent_str)


def _plain(value: Any) -> Any:
    """Copy nested mappings into dicts and tuples into lists for the safe dumper."""
    if isinstance(value, Mapping):
        mapping = cast("Mapping[Any, Any]", value)
        return {key: _plain(item) for key, item in mapping.items()}
    if isinstance(value, (list, tuple)):
        items = cast("list[Any] | tuple[Any, ...]", value)
        return [_plain(item) for item in items]
    return value


def render_yaml_block(
    payload: Mapping[str, Any],
    indent: int = 0,
    width: int = DEFAULT_YAML_WIDTH,
) -> list[str]:
    """Return a fenced YAML diagnostic block.

    The block opens with ``---`` and closes with ``...``. Keys keep the order of
    ``payload``. Every line is indented by ``indent`` plus the fixed inner indent
    of the YAML block.

    Args:
        payload (Mapping[str, Any]): Diagnostic mapping.
        indent (int): Indentation width of the owning assertion line.
        width (int): Preferred line width for long scalars.

    Returns:
        list[str]: The block lines.

    Raises:
        MalformedEventError: If ``payload`` is not a mapping.
        UnrenderablePayloadError: If a value cannot be represented as YAML.
    """
    if not isinstance(payload, Mapping):
        raise MalformedEventError(
            f"diagnostic payload must be a mapping, got {type(payload).__name__}", kind="assert"
        )
    pad = _pad(indent + YAML_INDENT)

    lines: list[str] = [f"{pad}---"]
    if payload:
        try:
            text: str = yaml.dump(
                _plain(payload),
                Dumper=_DiagnosticDumper,
                sort_keys=False,
                default_flow_style=False,
                allow_unicode=True,
                width=width,
            )
        except yaml.YAMLError as exc:
            logger.debug("Cannot serialize diagnostic payload %r: %s", payload, exc)
            raise UnrenderablePayloadError(f"cannot render diagnostic payload: {exc}") from exc
        lines.extend(f"{pad}{line}" for line in text.splitlines())
    lines.append(f"{pad}...")
    return lines
