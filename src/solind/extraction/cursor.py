from __future__ import annotations

from collections.abc import Sequence


class LogCursor:
    """Forward-only reader over one transaction's log lines.

    Once exhausted, `next()` keeps returning None. A fresh cursor is needed
    per transaction.
    """

    def __init__(self, lines: Sequence[str]) -> None:
        self._lines = lines
        self._pos = 0

    @property
    def position(self) -> int:
        """Number of lines consumed so far."""
        return self._pos

    def next(self) -> str | None:
        if self._pos >= len(self._lines):
            return None
        line = self._lines[self._pos]
        self._pos += 1
        return line
