import base64
import json
from pathlib import Path

import pyarrow.parquet as pq
from click.testing import CliRunner

from solind.cli import cli
from solind.decoding.registry import event_discriminator


def _write_txs(path: Path) -> Path:
    payload = base64.b64encode(event_discriminator("Deposit") + b"\x07").decode()
    txs = [
        {
            "signature": "sig-1",
            "slot": 100,
            "logs": [
                "Program T1 invoke [1]",
                "Program log: Instruction: Deposit",
                f"Program log: {payload}",
                "Program T1 consumed 10 units",
                "Program T1 success",
            ],
        },
        {"signature": "sig-2", "slot": 101, "logs": []},
    ]
    path.write_text("\n".join(json.dumps(t) for t in txs))
    return path


def test_extract_writes_parquet(tmp_path: Path):
    src = _write_txs(tmp_path / "txs.jsonl")
    out = tmp_path / "out"
    result = CliRunner().invoke(
        cli,
        ["extract", "--program", "T1", "--input", str(src), "--event", "Deposit", "--out", str(out)],
    )
    assert result.exit_code == 0, result.output
    shards = sorted((out / "T1" / "shards").glob("shard_*.parquet"))
    assert len(shards) == 1
    table = pq.read_table(shards[0])
    assert table.column("event").to_pylist() == ["Deposit"]
    assert table.column("data").to_pylist() == ["07"]
    assert table.column("slot").to_pylist() == [100]


def test_extract_text_mode_without_output(tmp_path: Path):
    src = _write_txs(tmp_path / "txs.jsonl")
    result = CliRunner().invoke(cli, ["extract", "--program", "T1", "--input", str(src)])
    assert result.exit_code == 0, result.output
    assert "processed_failed" in result.output


def test_extract_rejects_invalid_records(tmp_path: Path):
    src = tmp_path / "bad.jsonl"
    src.write_text('{"signature": "x"}\n')
    result = CliRunner().invoke(cli, ["extract", "--program", "T1", "--input", str(src)])
    assert result.exit_code != 0
    assert "invalid transaction record" in result.output


def test_extract_rejects_non_positive_rows(tmp_path: Path):
    src = _write_txs(tmp_path / "txs.jsonl")
    result = CliRunner().invoke(cli, ["extract", "--program", "T1", "--input", str(src), "--batch-rows", "0"])
    assert result.exit_code == 2
