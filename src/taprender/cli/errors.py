# topmark:header:start
#
#   project      : TapRender
#   file         : errors.py
#   file_relpath : src/taprender/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the TapRender CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from taprender.cli.exit_codes import ExitCode


class TaprenderError(click.ClickException):
    """Base class for all TapRender CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorization happens in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available.

        Falls back to Click's default error display when no console is present.
        """
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(self.format_message(), fg="bright_red"))
                return
        super().show(file)


class TaprenderUsageError(TaprenderError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class TaprenderConfigError(TaprenderError):
    """Error for configuration errors (unreadable/invalid config)."""

    exit_code = ExitCode.CONFIG_ERROR


class TaprenderFileNotFoundError(TaprenderError):
    """Error when the input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class TaprenderIOError(TaprenderError):
    """Error for I/O errors reading the input."""

    exit_code = ExitCode.IO_ERROR


class TaprenderInputError(TaprenderError):
    """Error for an event stream that is not valid JSON or holds a malformed event."""

    exit_code = ExitCode.INPUT_ERROR


class TaprenderRenderError(TaprenderError):
    """Error for an event that could not be rendered."""

    exit_code = ExitCode.RENDER_ERROR
