"""Reference `IEventDecoder` implementations.

Neither decoder interprets event fields; that belongs to an IDL-aware coder.
- `TextLogDecoder` turns plain `msg!` text into `LogMessage` events.
- `DiscriminatorDecoder` recognizes base64 payloads whose first 8 bytes are a
  registered event discriminator and returns the remaining bytes as `RawEvent`.
"""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from typing import ClassVar

from solind.decoding.registry import DISCRIMINATOR_SIZE, EventRegistry

# ---------- decoded events ----------


@dataclass(slots=True, frozen=True)
class LogMessage:
    """Plain-text program log message."""

    message: str


@dataclass(slots=True, frozen=True)
class RawEvent:
    """Event identified by discriminator; `data` is the undecoded body."""

    name_field: ClassVar[str] = "name"

    name: str
    data: bytes

    @property
    def event_name(self) -> str:
        return self.name


# ---------- decoders ----------


class TextLogDecoder:
    """Decode every payload (or those matching `pattern`) as a `LogMessage`."""

    def __init__(self, pattern: str | re.Pattern[str] | None = None) -> None:
        self._pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    def decode(self, payload: str) -> LogMessage | None:
        if self._pattern is not None and self._pattern.search(payload) is None:
            return None
        return LogMessage(message=payload)


class DiscriminatorDecoder:
    """Decode base64 payloads carrying a registered event discriminator."""

    def __init__(self, registry: EventRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> EventRegistry:
        return self._registry

    def decode(self, payload: str) -> RawEvent | None:
        try:
            raw = base64.b64decode(payload, validate=True)
        except binascii.Error:
            return None
        if len(raw) < DISCRIMINATOR_SIZE:
            return None
        name = self._registry.get(raw[:DISCRIMINATOR_SIZE])
        if name is None:
            return None
        return RawEvent(name=name, data=raw[DISCRIMINATOR_SIZE:])
