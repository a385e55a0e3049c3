"""Event registry keyed by 8-byte event discriminator.

This module exposes:
- `event_discriminator(name)` → first 8 bytes of sha256("event:<name>")
- `make_registry(names)` → EventRegistry for one or many event names
- `add_event_name(registry, name)` / `add_many(registry, names)`
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable

# The full registry keyed by discriminator bytes → event name.
EventRegistry = dict[bytes, str]

DISCRIMINATOR_SIZE = 8


def event_discriminator(name: str) -> bytes:
    """Return the discriminator prefixed to serialized `name` events."""
    return hashlib.sha256(f"event:{name}".encode()).digest()[:DISCRIMINATOR_SIZE]


def add_event_name(registry: EventRegistry, name: str) -> None:
    """Insert one event name into the registry keyed by its discriminator."""
    name = name.strip()
    if not name:
        raise ValueError("event name must be non-empty")
    registry[event_discriminator(name)] = name


def add_many(registry: EventRegistry, names: Iterable[str]) -> None:
    """Insert many event names into the registry."""
    for n in names:
        add_event_name(registry, n)


def make_registry(names: str | list[str]) -> EventRegistry:
    """Create a registry from one or multiple event names."""
    reg: EventRegistry = {}
    add_many(reg, [names] if isinstance(names, str) else names)
    return reg
