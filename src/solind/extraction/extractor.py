"""Event extraction over one transaction's log lines.

A transaction's logs can interleave output from many programs across CPI
boundaries, but only lines emitted while the *target* program is executing
carry its events. The extractor replays the invoke / consumed brackets on an
`ExecutionContext` to know, for each line, which program emitted it, and hands
the target's program log payloads to an `IEventDecoder`.

Extraction is lazy: `iter_events` yields events in log order as lines are
read, so callers can stop early. Fatal conditions (`MalformedLogStream`,
`StackUnderflow`) surface when the offending line is reached.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from solind.constants import CPI_PLACEHOLDER, DEFAULT_PAYLOAD_PREFIXES
from solind.core.config import ExtractorConfig
from solind.core.errors import StackUnderflow
from solind.core.interfaces import IEventDecoder
from solind.extraction.classify import LineKinds, classify_line
from solind.extraction.context import ExecutionContext
from solind.extraction.cursor import LogCursor

logger = logging.getLogger(__name__)


# ---------- per-line result ----------


class ExtractionResults:
    @dataclass(frozen=True, slots=True)
    class Emitted:
        event: Any

    @dataclass(frozen=True, slots=True)
    class Entered:
        program_id: str

    @dataclass(frozen=True, slots=True)
    class Exited:
        pass

    @dataclass(frozen=True, slots=True)
    class Noop:
        pass


ExtractionResult = (
    ExtractionResults.Emitted | ExtractionResults.Entered | ExtractionResults.Exited | ExtractionResults.Noop
)


# ---------- extractor ----------


class EventExtractor:
    """Extract the events of one program from transaction logs.

    Parameters
    ----------
    program_id : str
        Target program; only lines it emits are decoded.
    decoder : IEventDecoder
        Turns a payload string into an event or None.
    payload_prefixes : tuple[str, ...]
        Line prefixes marking program output, stripped before decoding.

    The extractor holds no per-transaction state, so one instance can serve
    many transactions, including from several threads.
    """

    def __init__(
        self,
        program_id: str,
        decoder: IEventDecoder,
        *,
        payload_prefixes: Sequence[str] = DEFAULT_PAYLOAD_PREFIXES,
    ) -> None:
        if not program_id:
            raise ValueError("program_id must be a non-empty string")
        self._program_id = program_id
        self._decoder = decoder
        self._payload_prefixes = tuple(payload_prefixes)

    @classmethod
    def from_config(cls, config: ExtractorConfig, decoder: IEventDecoder) -> EventExtractor:
        return cls(config.program_id, decoder, payload_prefixes=config.payload_prefixes)

    @property
    def program_id(self) -> str:
        return self._program_id

    def _step(self, context: ExecutionContext, cursor: LogCursor, line: str) -> ExtractionResult:
        current = None if context.is_empty else context.current()
        kind = classify_line(
            line,
            current=current,
            target=self._program_id,
            payload_prefixes=self._payload_prefixes,
        )
        match kind:
            case LineKinds.Payload(text=text):
                event = self._decoder.decode(text)
                if event is None:
                    return ExtractionResults.Noop()
                return ExtractionResults.Emitted(event)
            case LineKinds.EnterTarget():
                context.push(self._program_id)
                return ExtractionResults.Entered(self._program_id)
            case LineKinds.EnterOther():
                context.push(CPI_PLACEHOLDER)
                return ExtractionResults.Entered(CPI_PLACEHOLDER)
            case LineKinds.Complete():
                try:
                    context.pop()
                except StackUnderflow as e:
                    raise StackUnderflow(
                        f"line {cursor.position}: {line!r} closes an invocation that was never opened",
                        position=cursor.position,
                    ) from e
                # The runtime always follows `consumed` with a success/failure line
                skipped = cursor.next()
                logger.debug("skipped completion status line %r", skipped)
                return ExtractionResults.Exited()
            case LineKinds.Noop():
                return ExtractionResults.Noop()
        raise RuntimeError("Unsupported line kind")

    def iter_results(self, lines: Sequence[str]) -> Iterator[ExtractionResult]:
        """Yield one result per classified line (the root line excluded)."""
        cursor = LogCursor(lines)
        context = ExecutionContext.from_root_line(cursor.next())
        line = cursor.next()
        while line is not None:
            yield self._step(context, cursor, line)
            line = cursor.next()
        if context.depth > 1:
            logger.debug("log stream ended with %d open invocations", context.depth)

    def iter_events(self, lines: Sequence[str]) -> Iterator[Any]:
        """Yield decoded events in log order."""
        for result in self.iter_results(lines):
            if isinstance(result, ExtractionResults.Emitted):
                yield result.event

    def extract_events(self, lines: Sequence[str]) -> list[Any]:
        """Return all decoded events of one transaction."""
        return list(self.iter_events(lines))

    def parse_logs(self, lines: Sequence[str], callback: Callable[[Any], None]) -> None:
        """Invoke `callback(event)` for each decoded event, in log order."""
        for event in self.iter_events(lines):
            callback(event)


def parse_logs(program_id: str, decoder: IEventDecoder, lines: Sequence[str]) -> list[Any]:
    """One-shot helper: extract `program_id`'s events from `lines`."""
    return EventExtractor(program_id, decoder).extract_events(lines)
