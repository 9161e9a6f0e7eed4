# topmark:header:start
#
#   project      : TapRender
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the TapRender test suite.

This file sets up global fixtures and customizes the logging configuration for test runs,
ensuring consistent and verbose logging output during testing.

Notes:
    Tests should respect the immutable/mutable options split:

    - Build options with `MutableRenderOptions` (mutable), then `freeze()` into a
      `RenderOptions` for dispatcher and public API calls.
    - Do **not** mutate a frozen `RenderOptions`. Call `RenderOptions.thaw()`,
      edit the returned builder, then `freeze()` again.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, cast

import pytest

from taprender.config import logging
from taprender.config.model import MutableRenderOptions, RenderOptions

F = TypeVar("F", bound=Callable[..., object])

# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]

FIXTURES_DIR: Path = Path(__file__).parent / "fixtures"


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type."""

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_taprender_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure TapRender's runtime log level is not forced via env during tests.

    This avoids accidental DEBUG/TRACE noise when the developer has exported
    TAPRENDER_LOG_LEVEL in their shell.
    """
    monkeypatch.delenv("TAPRENDER_LOG_LEVEL", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for all tests."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run a test in an empty working directory so no project config is discovered.

    Returns:
        Path: The isolated working directory.
    """
    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd


def make_options(**overrides: Any) -> RenderOptions:
    """Return frozen `RenderOptions` built from defaults and overrides."""
    m: MutableRenderOptions = MutableRenderOptions.from_defaults()
    m.apply_overrides(overrides)
    return m.freeze()


def load_fixture(name: str) -> tuple[str, str]:
    """Return the ``(events_json, expected_tap)`` texts of a golden fixture.

    The expected TAP file ends with a newline; the rendered document does not.
    """
    events = (FIXTURES_DIR / f"{name}.json").read_text(encoding="utf-8")
    expected = (FIXTURES_DIR / f"{name}.tap").read_text(encoding="utf-8")
    return events, expected.removesuffix("\n")
