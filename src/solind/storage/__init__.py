"""Storage utilities for transaction input and Parquet output.

This package provides:
- Transaction loading from JSON / JSONL files
- Shard directory management and Parquet shard writing
"""

from solind.storage.inputs import load_transactions
from solind.storage.shards import ShardsDir, ShardWriter

__all__ = [
    "load_transactions",
    "ShardsDir",
    "ShardWriter",
]
