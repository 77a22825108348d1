"""Client-side pacing for Notion API calls.

Notion allows an average of three requests per second per integration.
Both buckets below refill at ``rate_rps`` tokens per second up to a
``burst`` ceiling; a caller that finds the bucket empty waits for the
deficit to refill.  :class:`TokenBucket` blocks the thread,
:class:`AsyncTokenBucket` awaits.
"""

from __future__ import annotations

import asyncio
import threading
import time


class _Bucket:
    """Refill arithmetic shared by the sync and async buckets.

    Not thread-safe on its own; callers hold their lock around
    :meth:`_take`.
    """

    __slots__ = ("burst", "last_refill", "rate", "tokens")

    def __init__(self, rate_rps: float, burst: int = 10) -> None:
        if rate_rps <= 0:
            raise ValueError(f"rate_rps must be > 0, got {rate_rps}")
        if burst < 1:
            raise ValueError(f"burst must be >= 1, got {burst}")
        self.rate = float(rate_rps)
        self.burst = burst
        self.tokens = float(burst)
        self.last_refill = time.monotonic()

    def _take(self, tokens: int) -> float:
        """Consume *tokens* and return how long the caller must wait."""
        now = time.monotonic()
        self.tokens = min(float(self.burst), self.tokens + (now - self.last_refill) * self.rate)
        self.last_refill = now

        if self.tokens >= tokens:
            self.tokens -= tokens
            return 0.0

        # The deficit is paid for by the wait; the bucket restarts empty.
        wait = (tokens - self.tokens) / self.rate
        self.tokens = 0.0
        return wait


class TokenBucket(_Bucket):
    """Thread-safe bucket for the synchronous transport."""

    __slots__ = ("_lock",)

    def __init__(self, rate_rps: float, burst: int = 10) -> None:
        super().__init__(rate_rps, burst)
        self._lock = threading.Lock()

    def acquire(self, tokens: int = 1) -> float:
        """Take *tokens*, sleeping if needed; return the seconds waited."""
        with self._lock:
            wait = self._take(tokens)
        if wait > 0:
            time.sleep(wait)
        return wait


class AsyncTokenBucket(_Bucket):
    """Coroutine-safe bucket for the asynchronous transport."""

    __slots__ = ("_lock",)

    def __init__(self, rate_rps: float, burst: int = 10) -> None:
        super().__init__(rate_rps, burst)
        self._lock = asyncio.Lock()

    async def acquire(self, tokens: int = 1) -> float:
        """Take *tokens*, awaiting if needed; return the seconds waited."""
        async with self._lock:
            wait = self._take(tokens)
        if wait > 0:
            await asyncio.sleep(wait)
        return wait
