"""When to retry a Notion request, and how long to wait first."""

from __future__ import annotations

import random

import httpx

RETRYABLE_STATUSES: frozenset[int] = frozenset({429, 500, 502, 503, 504})

RETRYABLE_EXCEPTIONS: tuple[type[Exception], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
)


def should_retry(
    status_code: int | None,
    exception: Exception | None,
    attempt: int,
    max_attempts: int,
) -> bool:
    """Return True if another attempt should be made.

    Parameters
    ----------
    status_code:
        Response status, or ``None`` when no response arrived.
    exception:
        Transport exception, or ``None`` when a response arrived.
    attempt:
        Zero-based index of the attempt that just failed.
    max_attempts:
        Total attempts allowed, the first one included.
    """
    if attempt + 1 >= max_attempts:
        return False
    if exception is not None:
        return isinstance(exception, RETRYABLE_EXCEPTIONS)
    return status_code in RETRYABLE_STATUSES


def parse_retry_after(response: httpx.Response) -> float | None:
    """Return the ``Retry-After`` header in seconds, or ``None``."""
    raw = response.headers.get("retry-after")
    if raw is None:
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if value >= 0 else None


def compute_backoff(
    attempt: int,
    base: float = 1.0,
    maximum: float = 60.0,
    jitter: bool = True,
    retry_after: float | None = None,
) -> float:
    """Seconds to wait before retrying.

    A server-supplied *retry_after* wins; otherwise the delay doubles per
    attempt from *base* up to *maximum*.  *jitter* scales the result into
    the upper half of its range.

    >>> compute_backoff(3, base=1.0, maximum=60.0, jitter=False)
    8.0
    >>> compute_backoff(10, base=1.0, maximum=60.0, jitter=False)
    60.0
    """
    delay = retry_after if retry_after is not None else min(base * (2 ** attempt), maximum)
    if jitter:
        delay *= 0.5 + random.random() * 0.5
    return float(delay)
