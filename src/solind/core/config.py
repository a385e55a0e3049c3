from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from solind.constants import DEFAULT_PAYLOAD_PREFIXES


@dataclass(frozen=True)
class ExtractorConfig:
    """Configuration for a single-program event extractor."""

    program_id: str
    payload_prefixes: tuple[str, ...] = DEFAULT_PAYLOAD_PREFIXES


@dataclass(frozen=True)
class BatchConfig:
    """Configuration for batch extraction over many transactions (CLI)."""

    program_id: str
    input_path: Path
    out_root: Path | None = None
    event_names: list[str] = field(default_factory=list)  # empty -> text log decoding
    payload_prefixes: tuple[str, ...] = DEFAULT_PAYLOAD_PREFIXES
    rows_per_shard: int = 250_000
    batch_rows: int = 10_000
    codec: str = "zstd"
    skip_failed_transactions: bool = False
    write_final_partial: bool = True

    def extractor_config(self) -> ExtractorConfig:
        return ExtractorConfig(program_id=self.program_id, payload_prefixes=self.payload_prefixes)
