"""Rate-limit sink contract."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class RateLimitSink(Protocol):
    """Receives the rate-limit counters of every response that carries them.

    Called synchronously from the response handler. Overlapping requests may
    call it concurrently; implementations own their synchronisation.
    """

    def __call__(self, last_response_at: datetime, limit_remaining: int, limit_reset_at: datetime) -> None:
        ...
