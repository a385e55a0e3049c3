"""Orchestration of extraction across many transactions.

This package provides:
- Batch extraction with per-transaction failure isolation and stats
- Name-filtered event listeners with (event, slot) callbacks
"""

from solind.orchestration.batch import (
    BatchExtractService,
    BatchStats,
    TransactionEvents,
    extract_transaction,
    iter_transaction_events,
)
from solind.orchestration.listeners import EventDispatcher

__all__ = [
    "BatchExtractService",
    "BatchStats",
    "TransactionEvents",
    "extract_transaction",
    "iter_transaction_events",
    "EventDispatcher",
]
