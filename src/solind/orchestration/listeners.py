"""Name-filtered event listeners fed with transaction logs.

Listeners are registered per event name and called as `callback(event, slot)`.
Events of a transaction are delivered only after its whole log list was
extracted, so a transaction that fails extraction delivers nothing.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, Callable
from typing import Any

from solind.core.errors import ExtractionError
from solind.core.models import TransactionLogs, event_name
from solind.extraction.extractor import EventExtractor
from solind.orchestration.batch import BatchStats

logger = logging.getLogger(__name__)

EventCallback = Callable[[Any, int | None], None]


class EventDispatcher:
    def __init__(self, extractor: EventExtractor) -> None:
        self._extractor = extractor
        self._listeners: dict[int, tuple[str, EventCallback]] = {}
        self._next_id = 0

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_event_listener(self, event_name: str, callback: EventCallback) -> int:
        """Call `callback(event, slot)` for every `event_name` event; return the listener id."""
        listener_id = self._next_id
        self._next_id += 1
        self._listeners[listener_id] = (event_name, callback)
        return listener_id

    def remove_event_listener(self, listener_id: int) -> None:
        if listener_id not in self._listeners:
            raise KeyError(f"event listener {listener_id} not found")
        del self._listeners[listener_id]

    def dispatch(self, tx: TransactionLogs) -> int:
        """Extract `tx` and deliver its events; return the number of callbacks made.

        Extraction runs even with no listeners registered, so malformed logs
        always raise ExtractionError.
        """
        return self._deliver(self._extractor.extract_events(tx.logs), tx.slot)

    def _deliver(self, events: list[Any], slot: int | None) -> int:
        delivered = 0
        for event in events:
            name = event_name(event)
            for listened, callback in list(self._listeners.values()):
                if listened == name:
                    callback(event, slot)
                    delivered += 1
        return delivered

    async def consume(self, source: AsyncIterable[TransactionLogs]) -> BatchStats:
        """Dispatch every transaction from `source` until it is exhausted.

        `total_events` counts extracted events, not callback deliveries.
        """
        stats = BatchStats()
        async for tx in source:
            stats.total_lines += len(tx.logs)
            try:
                events = self._extractor.extract_events(tx.logs)
            except ExtractionError as e:
                stats.processed_failed += 1
                logger.warning("dropping tx %s (slot=%s): %s: %s", tx.signature, tx.slot, type(e).__name__, e)
                continue
            self._deliver(events, tx.slot)
            stats.processed_ok += 1
            stats.total_events += len(events)
        return stats
