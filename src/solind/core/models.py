"""Core data models and the dynamic event column buffer.

This module defines:
- `TransactionLogs`: one transaction's log lines plus the caller's metadata.
- `EventRecord`: a decoded event with slot / signature attached by the caller.
- `Column`: dynamic, append-only columnar buffer where every event field
   becomes its own Parquet column.

Design notes
------------
- Dynamic columns are stored as strings for Arrow safety (u64/u128, raw bytes).
- Base columns are strongly typed and always present.
- Rows are kept in insertion order, which is log order; no sort is applied.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, is_dataclass
from typing import Any

import pyarrow as pa
from pydantic import AliasChoices, BaseModel, Field

# === Base schema (Arrow) ===

_BASE_FIELDS: list[tuple[str, pa.DataType]] = [
    ("slot", pa.uint64()),
    ("signature", pa.string()),
    ("tx_index", pa.uint64()),
    ("event_index", pa.uint64()),
    ("event", pa.string()),
]
_BASE_NAMES = frozenset(n for n, _ in _BASE_FIELDS)


# === Input record ===


class TransactionLogs(BaseModel):
    """Log lines of one transaction, as retrieved by the caller.

    Accepts both `logs` (subscription notifications) and `logMessages`
    (transaction meta) for the line list.
    """

    signature: str | None = None
    slot: int | None = None
    err: Any = None
    logs: list[str] = Field(validation_alias=AliasChoices("logs", "logMessages"))

    @property
    def failed(self) -> bool:
        return self.err is not None


# === Output record ===


@dataclass(slots=True, frozen=True)
class EventRecord:
    """A decoded event plus where it came from."""

    event: Any
    slot: int | None
    signature: str | None
    tx_index: int
    event_index: int  # position among the transaction's events


def event_name(event: Any) -> str:
    """Name of an event: its `event_name` attribute if it has one, else its type name."""
    name = getattr(event, "event_name", None)
    return str(name) if name else type(event).__name__


def event_fields(event: Any) -> tuple[str, dict[str, Any]]:
    """Split an opaque event into (name, field values) for columnar storage.

    Data fields are kept as-is; only the field an event class declares as
    `name_field` (already carried by the name) is left out.
    """
    name = event_name(event)
    if is_dataclass(event) and not isinstance(event, type):
        values = asdict(event)
        name_field = getattr(type(event), "name_field", None)
        if name_field:
            values.pop(name_field, None)
    elif isinstance(event, Mapping):
        values = dict(event)
    else:
        values = {"value": event}
    return name, values


def dyn_column_name(field_name: str) -> str:
    """Column for an event field; fields shadowing a base column get a `field_` prefix."""
    if field_name in _BASE_NAMES:
        return f"field_{field_name}"
    return field_name


def _to_cell(v: Any) -> str | None:
    if v is None:
        return None
    if isinstance(v, (bytes, bytearray)):
        return bytes(v).hex()
    return str(v)


# === Dynamic column buffer ===


@dataclass(slots=True)
class Column:
    """Dynamic columnar buffer of extracted events.

    - Base columns are always present and strongly typed.
    - Dynamic columns are created lazily upon first field appearance.
    - All dynamic values are stored as *strings* (or None).
    """

    slot: list[int | None] = field(default_factory=list)
    signature: list[str | None] = field(default_factory=list)
    tx_index: list[int] = field(default_factory=list)
    event_index: list[int] = field(default_factory=list)
    event: list[str] = field(default_factory=list)

    # Dynamic columns created on-demand for any event field
    dyn: dict[str, list[str | None]] = field(default_factory=dict)
    _rows: int = 0

    @staticmethod
    def empty() -> Column:
        """Return an empty buffer."""
        return Column()

    def size(self) -> int:
        """Number of rows currently stored."""
        return self._rows

    def _ensure_dyn_col(self, name: str) -> list[str | None]:
        """Ensure a dynamic column exists and is aligned to current row count."""
        col = self.dyn.get(name)
        if col is None:
            col = [None] * self._rows
            self.dyn[name] = col
        return col

    def append_record(self, record: EventRecord) -> None:
        """Append one event record (all of its fields become columns)."""
        name, values = event_fields(record.event)
        self.slot.append(record.slot)
        self.signature.append(record.signature)
        self.tx_index.append(record.tx_index)
        self.event_index.append(record.event_index)
        self.event.append(name)
        self._rows += 1
        # Pad existing dynamic columns with None for the new row
        for col in self.dyn.values():
            col.append(None)
        for k, v in values.items():
            self._ensure_dyn_col(dyn_column_name(k))[-1] = _to_cell(v)

    def extend(self, other: Column) -> int:
        """Merge `other` into self; align dynamic columns by name."""
        n = other.size()
        if n == 0:
            return 0

        old_rows = self._rows

        self.slot.extend(other.slot)
        self.signature.extend(other.signature)
        self.tx_index.extend(other.tx_index)
        self.event_index.extend(other.event_index)
        self.event.extend(other.event)
        self._rows += n

        for k in set(self.dyn.keys()) | set(other.dyn.keys()):
            if k not in self.dyn:
                # NEW column: fill rows that existed BEFORE this extend with None
                self.dyn[k] = [None] * old_rows
            ocol = other.dyn.get(k)
            self.dyn[k].extend([None] * n if ocol is None else ocol)

        return n

    def take_first(self, n: int) -> Column:
        """Detach and return the first `n` rows as a new buffer slice."""
        n = min(n, self._rows)
        out = Column()
        out.slot, self.slot = self.slot[:n], self.slot[n:]
        out.signature, self.signature = self.signature[:n], self.signature[n:]
        out.tx_index, self.tx_index = self.tx_index[:n], self.tx_index[n:]
        out.event_index, self.event_index = self.event_index[:n], self.event_index[n:]
        out.event, self.event = self.event[:n], self.event[n:]
        for k, col in self.dyn.items():
            out.dyn[k] = col[:n]
            self.dyn[k] = col[n:]
        out._rows = n
        self._rows -= n
        return out

    def to_arrow_table(self) -> pa.Table:
        """Convert the buffer to an Arrow table with deterministic schema."""
        fields = [pa.field(n, t) for n, t in _BASE_FIELDS]
        arrays: dict[str, pa.Array] = {
            "slot": pa.array(self.slot, type=pa.uint64()),
            "signature": pa.array(self.signature, type=pa.string()),
            "tx_index": pa.array(self.tx_index, type=pa.uint64()),
            "event_index": pa.array(self.event_index, type=pa.uint64()),
            "event": pa.array(self.event, type=pa.string()),
        }
        # Add dynamic columns in deterministic order
        for name in sorted(self.dyn.keys()):
            fields.append(pa.field(name, pa.string()))
            arrays[name] = pa.array(self.dyn[name], type=pa.string())
        return pa.Table.from_pydict(arrays, schema=pa.schema(fields))
