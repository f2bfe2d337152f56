"""Facade bundling one resource client per Billomat collection.

Usage::

    async with get_billomat_api_client(config) as api:
        invoices = await api.invoices.list({"status": "OPEN"})
        print(api.rate_limit_statistics.limit_remaining)
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httpx

from billomat_client.adapters.http_client import build_async_client
from billomat_client.adapters.resource_client import BillomatResourceClient
from billomat_client.core.domain.models import BillomatApiClientConfig, RateLimitStatistics
from billomat_client.core.domain.resources import ResourceName
from billomat_client.core.interfaces.rate_limit import RateLimitSink

logger = logging.getLogger(__name__)


class BillomatApiClient:
    """Entry point to every resource collection of one account.

    Attribute access maps underscores to hyphens, so `api.credit_notes`
    is the `credit-notes` collection.
    """

    def __init__(
        self,
        config: BillomatApiClientConfig,
        *,
        on_rate_limit: RateLimitSink | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._on_rate_limit = on_rate_limit
        self._client = client
        self._owns_client = False
        self._resources: dict[str, BillomatResourceClient[Any]] = {}
        self.rate_limit_statistics = RateLimitStatistics()

    @property
    def config(self) -> BillomatApiClientConfig:
        return self._config

    async def __aenter__(self) -> BillomatApiClient:
        if self._client is None:
            self._client = build_async_client(self._config)
            self._owns_client = True
            # Resource clients created before entering would keep opening their own connections.
            self._resources.clear()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
            self._owns_client = False
            self._resources.clear()

    def resource(self, name: ResourceName | str) -> BillomatResourceClient[Any]:
        key = str(name)
        if key not in self._resources:
            self._resources[key] = BillomatResourceClient(
                self._config,
                key,
                self._update_rate_limit_statistics,
                client=self._client,
            )
        return self._resources[key]

    def __getattr__(self, attr: str) -> BillomatResourceClient[Any]:
        if attr.startswith("_"):
            raise AttributeError(attr)
        name = attr.replace("_", "-")
        try:
            ResourceName(name)
        except ValueError:
            raise AttributeError(f"{type(self).__name__!r} has no resource {attr!r}") from None
        return self.resource(name)

    def _update_rate_limit_statistics(
        self,
        last_response_at: datetime,
        limit_remaining: int,
        limit_reset_at: datetime,
    ) -> None:
        self.rate_limit_statistics.update(last_response_at, limit_remaining, limit_reset_at)
        if self._on_rate_limit is not None:
            self._on_rate_limit(last_response_at, limit_remaining, limit_reset_at)


def get_billomat_api_client(
    config: BillomatApiClientConfig,
    *,
    on_rate_limit: RateLimitSink | None = None,
    client: httpx.AsyncClient | None = None,
) -> BillomatApiClient:
    """Build a `BillomatApiClient` for `config`."""

    logger.debug("Creating Billomat API client for %s", config.base_url)
    return BillomatApiClient(config, on_rate_limit=on_rate_limit, client=client)


__all__ = ["BillomatApiClient", "get_billomat_api_client"]
