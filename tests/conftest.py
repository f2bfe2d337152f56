from __future__ import annotations

import json
from datetime import datetime
from typing import Any

import httpx
import pytest

from billomat_client.adapters.http_client import build_async_client
from billomat_client.core.domain.models import BillomatApiClientConfig

RESET_EPOCH = 1_792_404_000  # 2026-10-19T10:00:00Z


class FakeBillomat:
    """Records requests and answers them with a canned response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._status = 200
        self._body: Any = {}
        self._content: bytes | None = None
        self._headers: dict[str, str] = {}

    def respond(
        self,
        body: Any = None,
        *,
        status: int = 200,
        headers: dict[str, str] | None = None,
        content: bytes | None = None,
    ) -> None:
        self._status = status
        self._body = body
        self._content = content
        self._headers = headers or {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._content is not None:
            return httpx.Response(self._status, content=self._content, headers=self._headers)
        return httpx.Response(self._status, json=self._body, headers=self._headers)

    def client(self, config: BillomatApiClientConfig) -> httpx.AsyncClient:
        return build_async_client(config, transport=httpx.MockTransport(self.handler))

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


class SinkRecorder:
    def __init__(self) -> None:
        self.calls: list[tuple[datetime, int, datetime]] = []

    def __call__(self, last_response_at: datetime, limit_remaining: int, limit_reset_at: datetime) -> None:
        self.calls.append((last_response_at, limit_remaining, limit_reset_at))


@pytest.fixture
def config() -> BillomatApiClientConfig:
    return BillomatApiClientConfig(base_url="https://acme.billomat.net", api_key="secret-key")


@pytest.fixture
def billomat() -> FakeBillomat:
    return FakeBillomat()


@pytest.fixture
def sink() -> SinkRecorder:
    return SinkRecorder()


@pytest.fixture
async def http_client(billomat: FakeBillomat, config: BillomatApiClientConfig):
    async with billomat.client(config) as client:
        yield client


@pytest.fixture
def rate_limit_headers() -> dict[str, str]:
    return {
        "x-rate-limit-remaining": "37",
        "x-rate-limit-reset": str(RESET_EPOCH),
        "date": "Mon, 19 Oct 2026 09:30:00 GMT",
    }
