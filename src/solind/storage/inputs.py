from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from pydantic import TypeAdapter

from solind.core.models import TransactionLogs

logger = logging.getLogger(__name__)

_TX_LIST = TypeAdapter(list[TransactionLogs])


def load_transactions(path: Path) -> Iterator[TransactionLogs]:
    """Read transactions from a JSON array file or a JSONL file (one object per line).

    Raises pydantic.ValidationError on records that do not fit `TransactionLogs`.
    """
    text = path.read_text()
    if text.lstrip().startswith("["):
        txs = _TX_LIST.validate_json(text)
        logger.debug("loaded %d transactions from %s", len(txs), path)
        yield from txs
        return

    for line in text.splitlines():
        if line.strip():
            yield TransactionLogs.model_validate_json(line)
