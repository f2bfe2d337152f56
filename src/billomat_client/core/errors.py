"""Error taxonomy for the Billomat client.

Transport failures are not wrapped: whatever httpx raises (connection errors,
timeouts, `HTTPStatusError` for non-2xx responses) reaches the caller as is.
`TransportError` names that branch so the whole taxonomy can be caught.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

TransportError = httpx.HTTPError


class BillomatError(Exception):
    """Base class for errors raised by the client itself."""


class UnsupportedResourceError(BillomatError):
    """The resource name has no registered singular form."""

    def __init__(self, resource: str) -> None:
        self.resource = resource
        super().__init__(f"Unsupported resource (no singular defined): {resource}")


class InvalidResponseShapeError(BillomatError):
    """The response body does not match the expected envelope."""

    def __init__(self, operation: str, body: Any) -> None:
        self.operation = operation
        self.body = body
        super().__init__(f"Invalid {operation} response: {_dump(body)}")


def _dump(body: Any) -> str:
    try:
        return json.dumps(body, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(body)
