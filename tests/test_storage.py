import json
from dataclasses import dataclass
from pathlib import Path

import pyarrow.parquet as pq
import pytest
from pydantic import ValidationError

from solind.core.models import Column, EventRecord
from solind.decoding.decoder import LogMessage, RawEvent
from solind.storage.inputs import load_transactions
from solind.storage.shards import ShardsDir, ShardWriter


def _column(n: int, *, start: int = 0) -> Column:
    col = Column.empty()
    for i in range(start, start + n):
        col.append_record(EventRecord(event=RawEvent("Deposit", bytes([i])), slot=i, signature=f"s{i}", tx_index=i, event_index=0))
    return col


def test_column_dynamic_fields_align():
    col = Column.empty()
    col.append_record(EventRecord(event=LogMessage("hi"), slot=1, signature="a", tx_index=0, event_index=0))
    col.append_record(EventRecord(event=RawEvent("Deposit", b"\xff"), slot=None, signature=None, tx_index=1, event_index=0))
    table = col.to_arrow_table()
    assert table.column_names == ["slot", "signature", "tx_index", "event_index", "event", "data", "message"]
    assert table.column("event").to_pylist() == ["LogMessage", "Deposit"]
    assert table.column("message").to_pylist() == ["hi", None]
    assert table.column("data").to_pylist() == [None, "ff"]
    assert table.column("slot").to_pylist() == [1, None]


def test_column_mapping_and_scalar_events():
    col = Column.empty()
    col.append_record(EventRecord(event={"name": "Swap", "amount": 5}, slot=1, signature="a", tx_index=0, event_index=0))
    col.append_record(EventRecord(event=42, slot=1, signature="a", tx_index=0, event_index=1))
    assert col.event == ["dict", "int"]
    assert col.dyn == {"name": ["Swap", None], "amount": ["5", None], "value": [None, "42"]}


@dataclass(frozen=True)
class Registered:
    name: str
    owner: str


def test_event_name_field_is_data_not_event_name():
    col = Column.empty()
    col.append_record(EventRecord(event=Registered(name="alice", owner="x"), slot=1, signature="a", tx_index=0, event_index=0))
    assert col.event == ["Registered"]
    assert col.dyn == {"name": ["alice"], "owner": ["x"]}


def test_event_fields_shadowing_base_columns_are_prefixed():
    col = Column.empty()
    event = {"slot": 999, "event": "inner", "amount": 1}
    col.append_record(EventRecord(event=event, slot=5, signature="a", tx_index=0, event_index=0))
    table = col.to_arrow_table()
    assert len(set(table.column_names)) == len(table.column_names)
    assert table.column("slot").to_pylist() == [5]
    assert table.column("event").to_pylist() == ["dict"]
    assert table.column("field_slot").to_pylist() == ["999"]
    assert table.column("field_event").to_pylist() == ["inner"]


def test_column_take_first_and_extend():
    col = _column(3)
    head = col.take_first(2)
    assert head.size() == 2 and col.size() == 1
    assert head.extend(col) == 1
    assert head.slot == [0, 1, 2]


def test_shard_writer_rolls_and_flushes(tmp_path: Path):
    writer = ShardWriter(ShardsDir(tmp_path, program_id="T1"), rows_per_shard=2)
    written = writer.add(_column(5))
    assert [p.name for p in written] == ["shard_00000.parquet", "shard_00001.parquet"]
    last = writer.close()
    assert last is not None and last.name == "shard_00002.parquet"
    assert pq.read_table(last).column("slot").to_pylist() == [4]


def test_shard_writer_continues_numbering(tmp_path: Path):
    shards_dir = ShardsDir(tmp_path, program_id="T1")
    first = ShardWriter(shards_dir, rows_per_shard=10)
    first.add(_column(1))
    first.close()
    second = ShardWriter(shards_dir, rows_per_shard=10)
    assert second.shard_idx == 1


def test_shard_writer_drops_partial_when_asked(tmp_path: Path):
    writer = ShardWriter(ShardsDir(tmp_path, program_id="T1"), rows_per_shard=10, write_final_partial=False)
    writer.add(_column(3))
    assert writer.close() is None
    assert writer.shards_dir.list_shards() == []


def test_load_transactions_jsonl_and_array(tmp_path: Path):
    records = [
        {"signature": "a", "slot": 1, "logs": ["Program T1 invoke [1]"]},
        {"signature": "b", "slot": 2, "err": None, "logMessages": ["Program X invoke [1]"]},
    ]
    jsonl = tmp_path / "txs.jsonl"
    jsonl.write_text("\n".join(json.dumps(r) for r in records) + "\n\n")
    array = tmp_path / "txs.json"
    array.write_text(json.dumps(records))

    for path in (jsonl, array):
        txs = list(load_transactions(path))
        assert [t.signature for t in txs] == ["a", "b"]
        assert txs[1].logs == ["Program X invoke [1]"]
        assert not txs[1].failed


def test_load_transactions_rejects_missing_logs(tmp_path: Path):
    path = tmp_path / "bad.jsonl"
    path.write_text(json.dumps({"signature": "a"}) + "\n")
    with pytest.raises(ValidationError):
        list(load_transactions(path))
