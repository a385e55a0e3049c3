"""Failure kinds raised while extracting events from one transaction's logs.

Only `ExtractionError` subclasses abort an extraction. A payload the decoder
declines is never an error.
"""

from __future__ import annotations


class ExtractionError(Exception):
    """Base class for fatal, per-transaction extraction failures."""


class MalformedLogStream(ExtractionError, ValueError):
    """The log list does not open with a root `Program <id> invoke` line."""


class StackUnderflow(ExtractionError):
    """A completion line was seen with no open invocation left to close."""

    def __init__(self, message: str, *, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position


class ExecutionInvariantError(ExtractionError, RuntimeError):
    """The execution stack was read while empty."""
