"""Batch extraction over many transactions.

Each transaction is extracted independently: a `MalformedLogStream` or
`StackUnderflow` in one transaction is logged, counted and recorded on its
`TransactionEvents`, and the batch moves on to the next transaction.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from solind.core.errors import ExtractionError
from solind.core.interfaces import IEventSink
from solind.core.models import Column, EventRecord, TransactionLogs
from solind.extraction.extractor import EventExtractor

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------


@dataclass(kw_only=True)
class BatchStats:
    """
    Aggregated counters for a batch run.

    - how many transactions were extracted / failed / skipped
    - how many lines were read and events produced
    - how many shards were written
    """

    processed_ok: int = 0
    processed_failed: int = 0
    skipped_failed_tx: int = 0
    total_lines: int = 0
    total_events: int = 0
    shards_written: int = 0


@dataclass(slots=True)
class TransactionEvents:
    """Events of one transaction, or the reason extraction failed."""

    signature: str | None
    slot: int | None
    tx_index: int
    events: list[Any] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def records(self) -> list[EventRecord]:
        return [
            EventRecord(
                event=ev,
                slot=self.slot,
                signature=self.signature,
                tx_index=self.tx_index,
                event_index=i,
            )
            for i, ev in enumerate(self.events)
        ]


# ---------------------------------------------------------------------------
# Per-transaction extraction
# ---------------------------------------------------------------------------


def extract_transaction(extractor: EventExtractor, tx: TransactionLogs, tx_index: int = 0) -> TransactionEvents:
    """Extract one transaction, converting fatal extraction errors into `error`."""
    out = TransactionEvents(signature=tx.signature, slot=tx.slot, tx_index=tx_index)
    try:
        out.events = extractor.extract_events(tx.logs)
    except ExtractionError as e:
        out.error = f"{type(e).__name__}: {e}"
        logger.warning("extraction failed for tx %s (slot=%s): %s", tx.signature, tx.slot, out.error)
    return out


def iter_transaction_events(
    transactions: Iterable[TransactionLogs],
    extractor: EventExtractor,
    *,
    skip_failed: bool = False,
    stats: BatchStats | None = None,
) -> Iterator[TransactionEvents]:
    """Yield `TransactionEvents` per transaction, in input order.

    With `skip_failed`, transactions the runtime reported as failed are not
    extracted at all.
    """
    for tx_index, tx in enumerate(transactions):
        if skip_failed and tx.failed:
            if stats is not None:
                stats.skipped_failed_tx += 1
            continue
        result = extract_transaction(extractor, tx, tx_index)
        if stats is not None:
            stats.total_lines += len(tx.logs)
            if result.ok:
                stats.processed_ok += 1
                stats.total_events += len(result.events)
            else:
                stats.processed_failed += 1
        yield result


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class BatchExtractService:
    """
    Runs an extractor over many transactions and feeds an optional sink.

    It depends only on the extractor and the `IEventSink` interface.
    """

    def __init__(self, extractor: EventExtractor) -> None:
        self._extractor = extractor

    def run(
        self,
        transactions: Iterable[TransactionLogs],
        *,
        sink: IEventSink | None = None,
        batch_rows: int = 10_000,
        skip_failed: bool = False,
    ) -> BatchStats:
        """
        Extract every transaction and hand event rows to `sink` in batches.

        Parameters
        ----------
        transactions : Iterable[TransactionLogs]
            Transactions to process, in the order rows should be written.
        sink : IEventSink | None
            Destination for rows; None only counts.
        batch_rows : int
            Rows buffered before each `sink.add`.
        skip_failed : bool
            Skip transactions whose `err` is set.
        """
        stats = BatchStats()
        buf = Column.empty()

        for result in iter_transaction_events(
            transactions, self._extractor, skip_failed=skip_failed, stats=stats
        ):
            if sink is None:
                continue
            for record in result.records():
                buf.append_record(record)
            if buf.size() >= batch_rows:
                stats.shards_written += len(sink.add(buf))
                buf = Column.empty()

        if sink is not None:
            if buf.size() > 0:
                stats.shards_written += len(sink.add(buf))
            if sink.close():
                stats.shards_written += 1

        logger.info(
            "batch done: ok=%d failed=%d skipped=%d events=%d shards=%d",
            stats.processed_ok,
            stats.processed_failed,
            stats.skipped_failed_tx,
            stats.total_events,
            stats.shards_written,
        )
        return stats
