"""Async client for the Billomat accounting REST API."""

from billomat_client.adapters.api_client import BillomatApiClient, get_billomat_api_client
from billomat_client.adapters.resource_client import BillomatResourceClient
from billomat_client.core.config import BillomatSettings
from billomat_client.core.domain.models import (
    BillomatApiClientConfig,
    RateLimitSnapshot,
    RateLimitStatistics,
    RawOptions,
)
from billomat_client.core.domain.resources import SINGULAR, ResourceName
from billomat_client.core.errors import (
    BillomatError,
    InvalidResponseShapeError,
    TransportError,
    UnsupportedResourceError,
)

__version__ = "0.1.0"

__all__ = [
    "BillomatApiClient",
    "BillomatApiClientConfig",
    "BillomatError",
    "BillomatResourceClient",
    "BillomatSettings",
    "InvalidResponseShapeError",
    "RateLimitSnapshot",
    "RateLimitStatistics",
    "RawOptions",
    "ResourceName",
    "SINGULAR",
    "TransportError",
    "UnsupportedResourceError",
    "get_billomat_api_client",
]
