"""Parsing of Billomat's rate-limit response headers.

None of these functions raise: a missing or malformed header yields `None`
(or the current time for `Date`).
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Mapping

from billomat_client.core.domain.models import RateLimitSnapshot

logger = logging.getLogger(__name__)

REMAINING_HEADER = "x-rate-limit-remaining"
RESET_HEADER = "x-rate-limit-reset"
DATE_HEADER = "date"


def _to_number(value: str) -> float | None:
    try:
        number = float(value.strip())
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def parse_rate_limit_remaining(value: str | None) -> int | None:
    """Remaining call count; `0` means the quota is spent.

    Fractional or otherwise non-integer values are rejected, not truncated.
    """

    if not value:
        return None
    try:
        remaining = int(value.strip())
    except ValueError:
        logger.warning("Ignoring non-integer %s header: %r", REMAINING_HEADER, value)
        return None
    return remaining


def parse_rate_limit_reset(value: str | None) -> datetime | None:
    """Unix-seconds reset timestamp as an aware UTC datetime."""

    if not value:
        return None
    number = _to_number(value)
    if number is None:
        logger.warning("Ignoring non-numeric %s header: %r", RESET_HEADER, value)
        return None
    try:
        return datetime.fromtimestamp(number, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        logger.warning("Ignoring out-of-range %s header: %r", RESET_HEADER, value)
        return None


def parse_date_header(value: str | None) -> datetime:
    """Response `Date` header; falls back to the current time."""

    if value:
        try:
            parsed = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            parsed = None
        if parsed is not None:
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed
        logger.warning("Ignoring unparseable %s header: %r", DATE_HEADER, value)
    return datetime.now(timezone.utc)


def snapshot_from_headers(headers: Mapping[str, str]) -> RateLimitSnapshot | None:
    """Build a snapshot when both counters are present, else `None`.

    `headers` must do case-insensitive lookups (as `httpx.Headers` does) or
    carry lowercase keys.
    """

    limit_remaining = parse_rate_limit_remaining(headers.get(REMAINING_HEADER))
    limit_reset_at = parse_rate_limit_reset(headers.get(RESET_HEADER))
    last_response_at = parse_date_header(headers.get(DATE_HEADER))

    if limit_remaining is None or limit_reset_at is None:
        return None
    return RateLimitSnapshot(
        last_response_at=last_response_at,
        limit_remaining=limit_remaining,
        limit_reset_at=limit_reset_at,
    )
