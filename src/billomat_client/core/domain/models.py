"""Domain models (Pydantic v2).

These describe *what* the client carries around (credentials, rate-limit
counters, raw call options), not how it talks to the API.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class BillomatApiClientConfig(BaseModel):
    """Immutable connection settings shared by every resource client."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(
        ...,
        min_length=8,
        description="API base URL without the `/api` suffix, e.g. https://acme.billomat.net.",
    )
    api_key: str = Field(
        ...,
        min_length=1,
        description="Billomat API key.",
    )
    app_id: str | None = Field(
        default=None,
        description="Registered app id, sent as an empty header when unset.",
    )
    app_secret: str | None = Field(
        default=None,
        description="Registered app secret, sent as an empty header when unset.",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout per request (seconds).",
    )


class RateLimitSnapshot(BaseModel):
    """Rate-limit counters read from a single response."""

    model_config = ConfigDict(frozen=True)

    last_response_at: datetime
    limit_remaining: int
    limit_reset_at: datetime


class RateLimitStatistics(BaseModel):
    """Latest rate-limit values seen by an API client.

    Every field stays `None` until the first response that carries both
    rate-limit headers.
    """

    last_response_at: datetime | None = None
    limit_remaining: int | None = None
    limit_reset_at: datetime | None = None

    def update(self, last_response_at: datetime, limit_remaining: int, limit_reset_at: datetime) -> None:
        self.last_response_at = last_response_at
        self.limit_remaining = limit_remaining
        self.limit_reset_at = limit_reset_at

    @property
    def is_known(self) -> bool:
        return self.limit_remaining is not None


class RawOptions(BaseModel):
    """Extras for `BillomatResourceClient.raw`."""

    query: Mapping[str, Any] | None = Field(
        default=None,
        description="Query-string parameters.",
    )
    payload: Any = Field(
        default=None,
        description="JSON body; only sent when truthy.",
    )
