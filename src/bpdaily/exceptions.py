"""
Error hierarchy for blood pressure CSV conversion.

Every failure of a conversion is fatal. Each class names the stage it
comes from and the process exit status the CLI reports for it, so the
five failure kinds stay distinguishable from the shell.
"""
from __future__ import annotations


class BPConversionError(RuntimeError):
    """Base class for all conversion failures."""

    stage = "convert"
    exit_code = 1


class OutputConflictError(BPConversionError):
    """The destination exists and may not be overwritten, or is a directory."""

    stage = "output-check"
    exit_code = 3


class InputOpenError(BPConversionError):
    """The input CSV is missing or unreadable."""

    stage = "input-open"
    exit_code = 4


class HeaderValidationError(BPConversionError):
    """The header record is absent or does not name the blood pressure columns."""

    stage = "header"
    exit_code = 5


class BodyReadError(BPConversionError):
    """The CSV body is malformed: ragged rows or unterminated quotes."""

    stage = "body-read"
    exit_code = 6


class OutputWriteError(BPConversionError):
    """Writing the header or body to the destination failed."""

    stage = "output-write"
    exit_code = 7
