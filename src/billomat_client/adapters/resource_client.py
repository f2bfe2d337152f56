"""CRUD access to one Billomat resource collection.

Billomat wraps entities in envelopes keyed by the collection's singular name:

- single entity:  {"invoice": {...}}
- list:           {"invoices": {"invoice": [...]}}  (a lone hit is not an array)

This module hides that convention and reports rate-limit headers to a sink.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, Mapping, TypeVar

import httpx

from billomat_client.adapters.http_client import build_async_client, build_auth_headers, build_url
from billomat_client.adapters.rate_limit import snapshot_from_headers
from billomat_client.core.domain.models import BillomatApiClientConfig, RawOptions
from billomat_client.core.domain.resources import ResourceName, singular_name
from billomat_client.core.errors import InvalidResponseShapeError, UnsupportedResourceError
from billomat_client.core.interfaces.rate_limit import RateLimitSink

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Mapping[str, Any])


class BillomatResourceClient(Generic[T]):
    """Typed CRUD calls against `/api/<name>`.

    When `client` is given, requests go through it and the caller owns its
    lifecycle; otherwise each call opens and closes its own client.
    """

    def __init__(
        self,
        config: BillomatApiClientConfig,
        name: ResourceName | str,
        update_rate_limit_statistics: RateLimitSink,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._name = str(name)
        self._update_rate_limit_statistics = update_rate_limit_statistics
        self._client = client

    @property
    def name(self) -> str:
        return self._name

    async def list(self, query: Mapping[str, Any] | None = None) -> list[T]:
        """All entities of the first page matching `query`."""

        singular = self._require_singular()
        body = await self._request("list", "GET", f"api/{self._name}", params=query)
        if not isinstance(body, dict) or self._name not in body:
            raise InvalidResponseShapeError("list", body)

        container = body[self._name]
        value = container.get(singular) if isinstance(container, dict) else None
        if not value:
            return []
        # Exactly one hit comes back as an object, not a one-element array.
        return value if isinstance(value, list) else [value]

    async def get(self, id: int) -> T | None:
        singular = self._require_singular()
        body = await self._request("get", "GET", f"api/{self._name}/{id}")
        return self._unwrap("get", body, singular)

    async def create(self, resource: T) -> T | None:
        singular = self._require_singular()
        body = await self._request("create", "POST", f"api/{self._name}", json={singular: resource})
        return self._unwrap("create", body, singular)

    async def edit(self, resource: T) -> T | None:
        """PUT the resource; the entity itself carries its id."""

        singular = self._require_singular()
        body = await self._request("edit", "PUT", f"api/{self._name}", json={singular: resource})
        return self._unwrap("edit", body, singular)

    async def raw(self, method: str, sub_uri: str | None = None, options: RawOptions | None = None) -> Any:
        """Call an endpoint outside the envelope convention and return its body as is."""

        self._require_singular()
        options = options or RawOptions()
        endpoint = f"api/{self._name}/{sub_uri}" if sub_uri else f"api/{self._name}"
        body = await self._request(
            "raw",
            method.upper(),
            endpoint,
            params=options.query,
            json=options.payload if options.payload else None,
        )
        if not _is_object(body):
            raise InvalidResponseShapeError("raw", body)
        return body

    def _require_singular(self) -> str:
        singular = singular_name(self._name)
        if singular is None:
            raise UnsupportedResourceError(self._name)
        return singular

    @staticmethod
    def _unwrap(operation: str, body: Any, singular: str) -> Any:
        if not _is_object(body):
            raise InvalidResponseShapeError(operation, body)
        # A JSON array passes the object check but carries no envelope key.
        return body.get(singular) if isinstance(body, dict) else None

    async def _request(
        self,
        operation: str,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        url = build_url(self._config, endpoint)
        logger.debug("%s %s", method, url)
        # Sent per request so an injected client is authenticated too.
        options: dict[str, Any] = {
            "params": params,
            "json": json,
            "headers": build_auth_headers(self._config),
            "follow_redirects": True,
        }

        if self._client is not None:
            response = await self._client.request(method, url, **options)
        else:
            async with build_async_client(self._config) as client:
                response = await client.request(method, url, **options)

        response.raise_for_status()
        self._report_rate_limit(response.headers)
        return self._decode(operation, response)

    def _report_rate_limit(self, headers: httpx.Headers) -> None:
        snapshot = snapshot_from_headers(headers)
        if snapshot is None:
            return
        logger.debug(
            "Rate limit for %s: %s remaining until %s",
            self._name,
            snapshot.limit_remaining,
            snapshot.limit_reset_at.isoformat(),
        )
        self._update_rate_limit_statistics(
            snapshot.last_response_at,
            snapshot.limit_remaining,
            snapshot.limit_reset_at,
        )

    @staticmethod
    def _decode(operation: str, response: httpx.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise InvalidResponseShapeError(operation, response.text) from exc


def _is_object(body: Any) -> bool:
    """JSON objects and arrays; scalars and `null` are rejected."""

    return isinstance(body, (dict, list))
