"""Core data models, configuration, interfaces and error kinds.

This package provides:
- Data models (TransactionLogs, EventRecord, Column)
- Configuration classes (ExtractorConfig, BatchConfig)
- Extraction error kinds (MalformedLogStream, StackUnderflow, ...)
"""

from solind.core.config import BatchConfig, ExtractorConfig
from solind.core.errors import (
    ExecutionInvariantError,
    ExtractionError,
    MalformedLogStream,
    StackUnderflow,
)
from solind.core.models import Column, EventRecord, TransactionLogs

__all__ = [
    "BatchConfig",
    "ExtractorConfig",
    "ExecutionInvariantError",
    "ExtractionError",
    "MalformedLogStream",
    "StackUnderflow",
    "Column",
    "EventRecord",
    "TransactionLogs",
]
