# topmark:header:start
#
#   project      : TapRender
#   file         : exit_codes.py
#   file_relpath : src/taprender/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the TapRender CLI.

TapRender aligns with the BSD `sysexits` convention where practical, so that other
tooling can interpret failures consistently. These codes describe the outcome of
*rendering*; they say nothing about whether the reported tests passed.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the TapRender CLI.

    Attributes:
        SUCCESS: The whole event stream was rendered.
        FAILURE: Generic failure (non-specific error).
        USAGE_ERROR: Command-line invocation error. Mirrors BSD ``EX_USAGE (64)``.
        INPUT_ERROR: The event stream is not valid JSON or holds a malformed event.
            Mirrors BSD ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Input path does not exist. Mirrors BSD ``EX_NOINPUT (66)``.
        RENDER_ERROR: An event could not be rendered (e.g. an unrenderable YAML
            payload). Mirrors BSD ``EX_SOFTWARE (70)``.
        IO_ERROR: I/O error reading the input. Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Configuration error. Mirrors BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last-resort).
    """

    SUCCESS = 0
    FAILURE = 1

    # sysexits-aligned values for better interoperability
    USAGE_ERROR = 64  # EX_USAGE
    INPUT_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    RENDER_ERROR = 70  # EX_SOFTWARE
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
