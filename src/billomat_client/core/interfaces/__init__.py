"""Contracts implemented by callers of the client."""

from billomat_client.core.interfaces.rate_limit import RateLimitSink

__all__ = ["RateLimitSink"]
