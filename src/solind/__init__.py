from __future__ import annotations

from .constants import PROGRAM_DATA, PROGRAM_LOG
from .core.errors import ExecutionInvariantError, ExtractionError, MalformedLogStream, StackUnderflow
from .core.models import TransactionLogs
from .decoding.decoder import DiscriminatorDecoder, LogMessage, RawEvent, TextLogDecoder
from .decoding.registry import make_registry
from .extraction.extractor import EventExtractor, parse_logs
from .orchestration.listeners import EventDispatcher

__all__ = [
    "EventExtractor",
    "parse_logs",
    "EventDispatcher",
    "TransactionLogs",
    "TextLogDecoder",
    "DiscriminatorDecoder",
    "LogMessage",
    "RawEvent",
    "make_registry",
    "ExtractionError",
    "MalformedLogStream",
    "StackUnderflow",
    "ExecutionInvariantError",
    "PROGRAM_LOG",
    "PROGRAM_DATA",
]
