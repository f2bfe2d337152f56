"""httpx wrapper.

Why a wrapper:
- Every Billomat call needs the same auth headers, timeout and redirect policy;
  they live in one builder instead of in each resource client.
- Tests replace the network by passing an `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from billomat_client.core.domain.models import BillomatApiClientConfig


def build_auth_headers(config: BillomatApiClientConfig) -> dict[str, str]:
    """Headers sent with every request; unset app credentials become empty strings."""

    return {
        "accept": "application/json",
        "content-type": "application/json",
        "x-billomatapikey": config.api_key,
        "x-appid": config.app_id or "",
        "x-appsecret": config.app_secret or "",
    }


def build_async_client(
    config: BillomatApiClientConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` pre-authenticated for `config`."""

    headers = build_auth_headers(config)
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.timeout_seconds),
        headers=headers,
        follow_redirects=True,
        transport=transport,
    )


def build_url(config: BillomatApiClientConfig, endpoint: str) -> str:
    return f"{config.base_url.rstrip('/')}/{endpoint}"
