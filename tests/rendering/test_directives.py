# topmark:header:start
#
#   project      : TapRender
#   file         : test_directives.py
#   file_relpath : tests/rendering/test_directives.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for directive selection (skip > todo > time)."""

from __future__ import annotations

from typing import Any

import pytest

from taprender.core.errors import MalformedEventError
from taprender.rendering.messages import select_directive
from tests.conftest import parametrize


@parametrize(
    ("kwargs", "expected"),
    [
        ({}, None),
        ({"time": 12}, "time=12ms"),
        ({"time": 12.0}, "time=12ms"),
        ({"time": 1.5}, "time=1.5ms"),
        ({"skip": "not ready"}, "Skip not ready"),
        ({"skip": True}, "Skip"),
        ({"todo": True}, "TODO"),
        ({"todo": "write me"}, "TODO write me"),
        ({"skip": "a\nb"}, r"Skip a\nb"),
        ({"todo": "first\r\nsecond"}, r"TODO first\r\nsecond"),
    ],
)
def test_single_directive(kwargs: dict[str, Any], expected: str | None) -> None:
    """Each directive renders on its own."""
    assert select_directive(**kwargs) == expected


def test_skip_beats_time() -> None:
    """A skipped assertion never reports its duration."""
    assert select_directive(skip="later", time=30) == "Skip later"


def test_todo_beats_time() -> None:
    """A todo assertion never reports its duration."""
    assert select_directive(todo=True, time=30) == "TODO"


def test_skip_beats_todo() -> None:
    """Skip wins over todo; combined directives are never emitted."""
    assert select_directive(skip="flaky", todo="fix it", time=5) == "Skip flaky"


@parametrize(
    "kwargs",
    [
        {"skip": "", "time": 4},
        {"skip": False, "time": 4},
        {"todo": "", "time": 4},
        {"todo": False, "time": 4},
    ],
)
def test_falsy_values_are_absent(kwargs: dict[str, Any]) -> None:
    """Empty or false skip/todo values do not suppress the time directive."""
    assert select_directive(**kwargs) == "time=4ms"


def test_zero_time_is_absent() -> None:
    """A zero duration emits no directive."""
    assert select_directive(time=0) is None


def test_non_numeric_time_is_rejected() -> None:
    """A duration must be a number."""
    with pytest.raises(MalformedEventError):
        select_directive(time="12")  # type: ignore[arg-type]
