"""Per-line classification into a closed set of kinds.

- `LineKinds.Payload(text)`   → a program log line of the target, prefix stripped
- `LineKinds.EnterTarget()`   → the target announces its own invocation
- `LineKinds.EnterOther()`    → some other program is invoked
- `LineKinds.Complete()`      → an invocation finished (`consumed` line)
- `LineKinds.Noop()`          → nothing structural
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from solind.constants import DEFAULT_PAYLOAD_PREFIXES

CONSUMED_RE = re.compile(r"^Program (.*) consumed .*$")


class LineKinds:
    @dataclass(frozen=True, slots=True)
    class Payload:
        text: str

    @dataclass(frozen=True, slots=True)
    class EnterTarget:
        pass

    @dataclass(frozen=True, slots=True)
    class EnterOther:
        pass

    @dataclass(frozen=True, slots=True)
    class Complete:
        pass

    @dataclass(frozen=True, slots=True)
    class Noop:
        pass


LineKind = (
    LineKinds.Payload | LineKinds.EnterTarget | LineKinds.EnterOther | LineKinds.Complete | LineKinds.Noop
)
SystemLineKind = LineKinds.EnterTarget | LineKinds.EnterOther | LineKinds.Complete | LineKinds.Noop


def strip_payload_prefix(line: str, prefixes: Sequence[str]) -> str | None:
    """Return the text after the first matching prefix, or None."""
    for prefix in prefixes:
        if line.startswith(prefix):
            return line[len(prefix):]
    return None


def classify_system_line(line: str, target: str) -> SystemLineKind:
    """Classify a runtime-generated line by the text before its first colon."""
    head = line.split(":", 1)[0]
    if head.startswith(f"Program {target} invoke"):
        return LineKinds.EnterTarget()
    if "invoke" in head:
        return LineKinds.EnterOther()
    if CONSUMED_RE.match(head):
        return LineKinds.Complete()
    return LineKinds.Noop()


def classify_line(
    line: str,
    *,
    current: str | None,
    target: str,
    payload_prefixes: Sequence[str] = DEFAULT_PAYLOAD_PREFIXES,
) -> LineKind:
    """Classify one line given the program currently on top of the stack.

    `current` is None once the outermost invocation has completed.
    """
    if current == target:
        text = strip_payload_prefix(line, payload_prefixes)
        if text is not None:
            return LineKinds.Payload(text)
    # The target's own invoke / consumed markers are system lines too
    return classify_system_line(line, target)
