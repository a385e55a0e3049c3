"""Reference event decoders and the discriminator registry.

This package provides:
- `TextLogDecoder` / `LogMessage` for plain program log text
- `DiscriminatorDecoder` / `RawEvent` for base64 discriminated payloads
- Registry helpers keyed by event discriminator
"""

from solind.decoding.decoder import DiscriminatorDecoder, LogMessage, RawEvent, TextLogDecoder
from solind.decoding.registry import (
    EventRegistry,
    add_event_name,
    add_many,
    event_discriminator,
    make_registry,
)

__all__ = [
    "DiscriminatorDecoder",
    "LogMessage",
    "RawEvent",
    "TextLogDecoder",
    "EventRegistry",
    "add_event_name",
    "add_many",
    "event_discriminator",
    "make_registry",
]
