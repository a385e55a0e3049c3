"""Execution stack tracking which program emitted a given log line.

The runtime opens every transaction with the outermost `Program <id> invoke`
line, and brackets each cross-program invocation with an `invoke` line and a
`consumed` line. Pushing on the former and popping on the latter leaves the
currently executing program on top of the stack.
"""

from __future__ import annotations

import logging
import re

from solind.core.errors import ExecutionInvariantError, MalformedLogStream, StackUnderflow

logger = logging.getLogger(__name__)

ROOT_INVOKE_RE = re.compile(r"^Program (.*) invoke.*$")


class ExecutionContext:
    """Stack of executing program ids, outermost at the bottom."""

    def __init__(self, root_program: str) -> None:
        self._stack: list[str] = [root_program]

    @classmethod
    def from_root_line(cls, line: str | None) -> ExecutionContext:
        """Seed the stack from the first line of a transaction's logs."""
        if line is None:
            raise MalformedLogStream("log stream is empty; expected a root 'Program <id> invoke' line")
        m = ROOT_INVOKE_RE.match(line)
        if m is None:
            raise MalformedLogStream(f"first log line is not a program invocation: {line!r}")
        return cls(m.group(1))

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def is_empty(self) -> bool:
        return not self._stack

    def snapshot(self) -> tuple[str, ...]:
        """Copy of the stack, bottom first."""
        return tuple(self._stack)

    def current(self) -> str:
        """Program executing right now."""
        if not self._stack:
            raise ExecutionInvariantError("execution stack is empty")
        return self._stack[-1]

    def push(self, program_id: str) -> None:
        self._stack.append(program_id)
        logger.debug("enter %s (depth=%d)", program_id, len(self._stack))

    def pop(self) -> str:
        if not self._stack:
            raise StackUnderflow("completion line with no open invocation")
        program_id = self._stack.pop()
        logger.debug("exit %s (depth=%d)", program_id, len(self._stack))
        return program_id
