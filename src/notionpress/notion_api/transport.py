"""Sync and async HTTP transports for the Notion API.

One request goes through these steps:

1. Wait for a token-bucket slot.
2. Send it with the auth and ``Notion-Version`` headers.
3. ``2xx``: return the decoded JSON body (``{}`` when empty).
4. ``429``: honour ``Retry-After`` and retry.
5. ``5xx`` or a network failure: back off exponentially and retry.
6. Any other ``4xx``: raise the matching typed error straight away.
7. Out of attempts: raise :class:`NotionpressRateLimitError` when the
   last answer was a 429, else :class:`NotionpressRetryExhaustedError`.

The decision logic lives in module-level helpers so the two transports
differ only in how they sleep and send.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Iterator
from typing import Any

import httpx

from notionpress.config import NotionpressConfig
from notionpress.errors import (
    NotionpressAuthError,
    NotionpressError,
    NotionpressNetworkError,
    NotionpressNotFoundError,
    NotionpressPermissionError,
    NotionpressRateLimitError,
    NotionpressRetryExhaustedError,
    NotionpressValidationError,
)
from notionpress.observability import MetricsHook, get_logger, log_event, resolve_metrics

from .rate_limit import AsyncTokenBucket, TokenBucket
from .retries import RETRYABLE_STATUSES, compute_backoff, parse_retry_after, should_retry

log = get_logger("notionpress.transport")

PAGE_SIZE = 100
BUCKET_BURST = 10


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _client_options(config: NotionpressConfig) -> dict[str, Any]:
    return {
        "base_url": config.base_url,
        "headers": {
            "Authorization": f"Bearer {config.token}",
            "Notion-Version": config.notion_version,
            "Content-Type": "application/json",
        },
        "timeout": httpx.Timeout(config.timeout_seconds),
        "proxy": config.http_proxy,
    }


def error_for_status(response: httpx.Response, method: str, path: str) -> NotionpressError:
    """Map a non-retryable error response to a typed exception."""
    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    notion_message = body.get("message") or response.text[:500]
    notion_code = body.get("code", "")
    where = f"{method} {path}"

    if status == 401:
        return NotionpressAuthError(
            message=f"Authentication failed on {where}: {notion_message}",
            context={"status_code": status, "notion_code": notion_code},
        )
    if status == 403:
        return NotionpressPermissionError(
            message=f"Permission denied on {where}: {notion_message}",
            context={"status_code": status, "notion_code": notion_code, "operation": where},
        )
    if status == 404:
        return NotionpressNotFoundError(
            message=f"Resource not found on {where}: {notion_message}",
            context={"status_code": status, "notion_code": notion_code, "path": path},
        )
    return NotionpressValidationError(
        message=f"Client error {status} on {where}: {notion_message}",
        context={"status_code": status, "notion_code": notion_code, "body": body},
    )


class _Attempts:
    """Bookkeeping for one logical request across its retry attempts."""

    def __init__(self, config: NotionpressConfig, metrics: MetricsHook, method: str, path: str) -> None:
        self.config = config
        self.metrics = metrics
        self.method = method
        self.path = path
        self.last_status: int | None = None
        self.last_exception: Exception | None = None
        self.last_retry_after: float | None = None

    @property
    def tags(self) -> dict[str, str]:
        return {"method": self.method, "path": self.path}

    def waited(self, seconds: float) -> None:
        if seconds > 0:
            self.metrics.timing("notionpress.rate_limit_wait_ms", seconds * 1000, tags=self.tags)

    def _backoff(self, attempt: int, reason: str, retry_after: float | None = None) -> float:
        self.metrics.increment("notionpress.retries_total", tags={**self.tags, "reason": reason})
        return compute_backoff(
            attempt,
            base=self.config.retry_base_delay,
            maximum=self.config.retry_max_delay,
            jitter=self.config.retry_jitter,
            retry_after=retry_after,
        )

    def network_error(self, exc: Exception, attempt: int) -> float:
        """Return the delay before retrying after *exc*, or raise."""
        self.last_exception = exc
        self.last_status = None
        self.metrics.increment("notionpress.requests_total", tags={**self.tags, "status": "error"})
        log_event(
            log,
            logging.WARNING,
            "request network error",
            op="request",
            method=self.method,
            path=self.path,
            attempt=attempt + 1,
            error=str(exc),
        )
        if should_retry(None, exc, attempt, self.config.retry_max_attempts):
            return self._backoff(attempt, "network_error")
        raise NotionpressNetworkError(
            message=f"Network error on {self.method} {self.path}: {exc}",
            context={"url": self.path, "attempt": attempt + 1},
            cause=exc,
        ) from exc

    def transport_error(self, exc: httpx.TransportError) -> NotionpressNetworkError:
        """Wrap a transport failure that is not worth retrying."""
        self.metrics.increment("notionpress.requests_total", tags={**self.tags, "status": "error"})
        return NotionpressNetworkError(
            message=f"Transport error on {self.method} {self.path}: {exc}",
            context={"url": self.path, "error_type": type(exc).__name__},
            cause=exc,
        )

    def response(self, response: httpx.Response, elapsed_ms: float, attempt: int) -> float | None:
        """Inspect an error-or-success response.

        Returns ``None`` on success, the delay before the next attempt when
        the request should be retried, or ``-1.0`` when attempts ran out.
        Raises for non-retryable client errors.
        """
        status = response.status_code
        self.last_status = status
        self.last_exception = None
        status_tags = {**self.tags, "status": str(status)}
        self.metrics.increment("notionpress.requests_total", tags=status_tags)
        self.metrics.timing("notionpress.request_duration_ms", elapsed_ms, tags=status_tags)

        if 200 <= status < 300:
            return None
        if status not in RETRYABLE_STATUSES:
            raise error_for_status(response, self.method, self.path)

        retry_after: float | None = None
        reason = "server_error"
        if status == 429:
            retry_after = parse_retry_after(response)
            self.last_retry_after = retry_after
            reason = "rate_limited"
            self.metrics.increment("notionpress.rate_limited_total", tags=self.tags)
            log_event(
                log,
                logging.WARNING,
                "rate limited by Notion API",
                op="request",
                method=self.method,
                path=self.path,
                status_code=status,
                retry_after=retry_after,
                attempt=attempt + 1,
            )

        if not should_retry(status, None, attempt, self.config.retry_max_attempts):
            return -1.0
        return self._backoff(attempt, reason, retry_after)

    def exhausted(self) -> NotionpressError:
        attempts = self.config.retry_max_attempts
        where = f"{self.method} {self.path}"
        if self.last_status == 429:
            return NotionpressRateLimitError(
                message=f"Still rate limited after {attempts} attempts on {where}",
                context={"retry_after_seconds": self.last_retry_after, "attempt": attempts},
            )
        last = f"last error: {self.last_exception}" if self.last_exception else f"last status: {self.last_status}"
        return NotionpressRetryExhaustedError(
            message=f"All {attempts} attempts exhausted for {where} ({last})",
            context={"attempts": attempts, "last_status_code": self.last_status},
            cause=self.last_exception,
        )


def _decode(response: httpx.Response, method: str, path: str) -> dict:
    if response.status_code == 204 or not response.content:
        return {}
    try:
        data = response.json()
    except ValueError as exc:
        raise NotionpressValidationError(
            message=f"Invalid JSON in response to {method} {path}",
            context={"status_code": response.status_code, "body": response.text[:500]},
            cause=exc,
        ) from exc
    if not isinstance(data, dict):
        raise NotionpressValidationError(
            message=f"Expected a JSON object in response to {method} {path}",
            context={"status_code": response.status_code, "body": response.text[:500]},
        )
    return data


def _with_cursor(method: str, kwargs: dict[str, Any], cursor: str | None) -> dict[str, Any]:
    """Return request kwargs carrying ``page_size`` and *cursor*.

    POST endpoints take the cursor in the JSON body, GET endpoints in the
    query string.
    """
    key = "json" if method.upper() in ("POST", "PATCH") else "params"
    paging = dict(kwargs.get(key) or {})
    paging["page_size"] = PAGE_SIZE
    paging.pop("start_cursor", None)
    if cursor is not None:
        paging["start_cursor"] = cursor
    return {**kwargs, key: paging}


def _next_cursor(data: dict) -> str | None:
    if not data.get("has_more"):
        return None
    return data.get("next_cursor") or None


# ---------------------------------------------------------------------------
# Sync transport
# ---------------------------------------------------------------------------

class NotionTransport:
    """Synchronous HTTP transport with auth, retries and rate limiting.

    Parameters
    ----------
    config:
        Supplies credentials, retry policy, pacing and the metrics hook.
    client:
        Optional pre-built ``httpx.Client``; tests pass one backed by
        ``httpx.MockTransport``.
    """

    def __init__(self, config: NotionpressConfig, client: httpx.Client | None = None) -> None:
        self._config = config
        self._bucket = TokenBucket(rate_rps=config.rate_limit_rps, burst=BUCKET_BURST)
        self._metrics = resolve_metrics(config.metrics)
        self._client = client if client is not None else httpx.Client(**_client_options(config))

    def request(self, method: str, path: str, **kwargs: Any) -> dict:
        """Send one API request and return the decoded JSON body.

        Parameters
        ----------
        method:
            HTTP method.
        path:
            Path relative to ``base_url``, e.g. ``/pages/{id}``.
        **kwargs:
            Forwarded to :meth:`httpx.Client.request` (``json=``,
            ``params=``, ``headers=``).

        Raises
        ------
        NotionpressAuthError
            On 401.
        NotionpressPermissionError
            On 403.
        NotionpressNotFoundError
            On 404.
        NotionpressValidationError
            On 400 and other non-retryable 4xx, or a 2xx body that is not a
            JSON object.
        NotionpressRateLimitError
            When every attempt was answered with 429.
        NotionpressRetryExhaustedError
            When retries ran out on 5xx or network failures.
        NotionpressNetworkError
            On a network failure that is not retried, or any other
            transport error (protocol, proxy, unsupported protocol).
        """
        attempts = _Attempts(self._config, self._metrics, method, path)

        for attempt in range(self._config.retry_max_attempts):
            attempts.waited(self._bucket.acquire())

            started = time.monotonic()
            try:
                response = self._client.request(method, path, **kwargs)
            except (httpx.TimeoutException, httpx.NetworkError) as exc:
                time.sleep(attempts.network_error(exc, attempt))
                continue
            except httpx.TransportError as exc:
                raise attempts.transport_error(exc) from exc

            delay = attempts.response(response, (time.monotonic() - started) * 1000, attempt)
            if delay is None:
                return _decode(response, method, path)
            if delay < 0:
                break
            time.sleep(delay)

        raise attempts.exhausted()

    def paginate(self, path: str, *, method: str = "GET", **kwargs: Any) -> Iterator[dict]:
        """Yield every item of a cursor-paginated list endpoint."""
        cursor: str | None = None
        while True:
            data = self.request(method, path, **_with_cursor(method, kwargs, cursor))
            yield from data.get("results", [])
            cursor = _next_cursor(data)
            if cursor is None:
                return

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> NotionTransport:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


# ---------------------------------------------------------------------------
# Async transport
# ---------------------------------------------------------------------------

class AsyncNotionTransport:
    """Asynchronous counterpart of :class:`NotionTransport`."""

    def __init__(self, config: NotionpressConfig, client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._bucket = AsyncTokenBucket(rate_rps=config.rate_limit_rps, burst=BUCKET_BURST)
        self._metrics = resolve_metrics(config.metrics)
        self._client = client if client is not None else httpx.AsyncClient(**_client_options(config))

    async def request(self, method: str, path: str, **kwargs: Any) -> dict:
        """Send one API request; see :meth:`NotionTransport.request`."""
        attempts = _Attempts(self._config, self._metrics, method, path)

        for attempt in range(self._config.retry_max_attempts):
            attempts.waited(await self._bucket.acquire())

            started = time.monotonic()
            try:
                response = await self._client.request(method, path, **kwargs)
            except (httpx.TimeoutException, httpx.NetworkError) as exc:
                await asyncio.sleep(attempts.network_error(exc, attempt))
                continue
            except httpx.TransportError as exc:
                raise attempts.transport_error(exc) from exc

            delay = attempts.response(response, (time.monotonic() - started) * 1000, attempt)
            if delay is None:
                return _decode(response, method, path)
            if delay < 0:
                break
            await asyncio.sleep(delay)

        raise attempts.exhausted()

    async def paginate(self, path: str, *, method: str = "GET", **kwargs: Any) -> AsyncIterator[dict]:
        cursor: str | None = None
        while True:
            data = await self.request(method, path, **_with_cursor(method, kwargs, cursor))
            for item in data.get("results", []):
                yield item
            cursor = _next_cursor(data)
            if cursor is None:
                return

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> AsyncNotionTransport:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
