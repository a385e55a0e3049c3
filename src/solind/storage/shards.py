from __future__ import annotations

import glob
import logging
import os
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from solind.core.interfaces import IEventSink
from solind.core.models import Column

logger = logging.getLogger(__name__)


class ShardsDir:
    def __init__(self, out_root: Path, *, program_id: str):
        self.key_dir = out_root / program_id
        self.shards_dir = self.key_dir / "shards"
        self.shards_dir.mkdir(exist_ok=True, parents=True)

    def shards_files_pattern(self) -> str:
        return (self.shards_dir / "shard_*.parquet").as_posix()

    def list_shards(self) -> list[str]:
        return sorted(glob.glob(self.shards_files_pattern()))

    def shard_path(self, idx: int) -> Path:
        return self.shards_dir / f"shard_{idx:05d}.parquet"


class ShardWriter(IEventSink):
    """
    Shard writer using dynamic columns:
    any event field becomes a new column on the fly.

    Shards from earlier runs are left untouched; numbering continues after
    the last existing shard.
    """

    def __init__(
        self,
        shards_dir: ShardsDir,
        *,
        rows_per_shard: int = 250_000,
        codec: str = "zstd",
        write_final_partial: bool = True,
    ) -> None:
        if rows_per_shard <= 0:
            raise ValueError("rows_per_shard must be positive")
        self.rows_per_shard = rows_per_shard
        self.codec = codec
        self.write_final_partial = write_final_partial
        self.shards_dir = shards_dir
        self.buf = Column.empty()
        self.shard_idx = self._next_index()

    def _next_index(self) -> int:
        existing = self.shards_dir.list_shards()
        if not existing:
            return 0
        last_idx = int(os.path.basename(existing[-1]).split("_")[1].split(".")[0])
        return last_idx + 1

    def _atomic_write(self, out_path: Path, table: pa.Table) -> Path | None:
        """Write Parquet atomically (tmp + replace)."""
        if len(table) == 0:
            return None
        tmp = out_path.with_suffix(".tmp")
        pq.write_table(table, tmp, compression=self.codec)
        os.replace(tmp, out_path)
        logger.info("wrote %s (rows=%d, cols=%d)", out_path, len(table), len(table.schema))
        return out_path

    def _write_next(self, n: int) -> Path | None:
        tbl = self.buf.take_first(n).to_arrow_table()
        out_path = self._atomic_write(self.shards_dir.shard_path(self.shard_idx), tbl)
        if out_path:
            self.shard_idx += 1
        return out_path

    def add(self, cols: Column) -> list[Path]:
        """Merge `cols` into the buffer; write shards as they become full."""
        written: list[Path] = []
        if self.buf.extend(cols) == 0:
            return written
        while self.buf.size() >= self.rows_per_shard:
            out_path = self._write_next(self.rows_per_shard)
            if out_path:
                written.append(out_path)
        return written

    def close(self) -> Path | None:
        """Flush remaining rows.

        If `write_final_partial` is False, rows short of a full shard are dropped.
        """
        remaining = self.buf.size()
        if remaining == 0:
            return None
        if not self.write_final_partial and remaining < self.rows_per_shard:
            logger.info("dropping %d rows short of a full shard", remaining)
            self.buf = Column.empty()
            return None
        return self._write_next(remaining)
