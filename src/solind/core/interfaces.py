from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from solind.core.models import Column


# ---------------------------------------------------------------------------
# IEventDecoder
# ---------------------------------------------------------------------------

@runtime_checkable
class IEventDecoder(Protocol):
    """
    Turns the text of one program log payload into an event.

    Domain expectations:
    - Pure from the extractor's point of view; caching is the decoder's business.
    - Returns None for anything that is not one of its events. Declining a
      payload is the common case and never an error.
    """

    def decode(self, payload: str) -> Any | None:
        """
        Return the decoded event for `payload`, or None.

        Implementations:
        - `TextLogDecoder` (plain `msg!` text)
        - `DiscriminatorDecoder` (base64 + 8-byte event discriminator)
        - IDL-driven coders living outside this package
        """
        ...


# ---------------------------------------------------------------------------
# IEventSink
# ---------------------------------------------------------------------------

@runtime_checkable
class IEventSink(Protocol):
    """
    Destination for batches of extracted event rows.

    Domain expectations:
    - Rows arrive in log order and must be kept in that order.
    - The batch service only cares how many files a batch produced.
    """

    def add(self, cols: Column) -> list[Path]:
        """Accept a batch of rows; return the paths written because of it."""
        ...

    def close(self) -> Path | None:
        """Flush buffered rows; return the last path written, if any."""
        ...
