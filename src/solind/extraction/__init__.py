"""Program-log event extraction.

This package provides:
- `LogCursor`: forward-only reader over a transaction's log lines
- `ExecutionContext`: stack of executing programs across CPI boundaries
- Line classification into a closed set of kinds (`LineKinds`)
- `EventExtractor`: lazy, log-ordered event extraction for one program
"""

from solind.extraction.classify import LineKind, LineKinds, classify_line, classify_system_line
from solind.extraction.context import ExecutionContext
from solind.extraction.cursor import LogCursor
from solind.extraction.extractor import EventExtractor, ExtractionResult, ExtractionResults, parse_logs

__all__ = [
    "LineKind",
    "LineKinds",
    "classify_line",
    "classify_system_line",
    "ExecutionContext",
    "LogCursor",
    "EventExtractor",
    "ExtractionResult",
    "ExtractionResults",
    "parse_logs",
]
