"""Domain types: resource names and plain data models (no HTTP here)."""

from billomat_client.core.domain.models import (
    BillomatApiClientConfig,
    RateLimitSnapshot,
    RateLimitStatistics,
    RawOptions,
)
from billomat_client.core.domain.resources import SINGULAR, ResourceName, singular_name

__all__ = [
    "BillomatApiClientConfig",
    "RateLimitSnapshot",
    "RateLimitStatistics",
    "RawOptions",
    "ResourceName",
    "SINGULAR",
    "singular_name",
]
