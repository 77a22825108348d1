"""Metrics hook protocol and its no-op default.

notionpress reports counters and timings through whatever object is set
as ``NotionpressConfig.metrics``.  Anything with matching ``increment``,
``timing`` and ``gauge`` methods qualifies, so StatsD, Prometheus or
Datadog clients can be adapted with a few lines.

Emitted metric names:

* ``notionpress.requests_total``              -- counter
* ``notionpress.retries_total``               -- counter
* ``notionpress.rate_limited_total``          -- counter
* ``notionpress.request_duration_ms``         -- timing
* ``notionpress.rate_limit_wait_ms``          -- timing
* ``notionpress.blocks_converted_total``      -- counter
* ``notionpress.unsupported_blocks_total``    -- counter
* ``notionpress.pages_imported_total``        -- counter
* ``notionpress.page_import_failures_total``  -- counter
* ``notionpress.page_import_duration_ms``     -- timing
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol every metrics backend must satisfy.

    *tags* are string key/value pairs; backends map them onto their own
    labelling scheme.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment counter *name* by *value*."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration of *ms* milliseconds."""
        ...

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Set gauge *name* to *value*."""
        ...


class NoopMetricsHook:
    """Discards every data point.

    Used whenever no backend is configured so call sites never have to
    check for ``None``.
    """

    __slots__ = ()

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        pass

    def timing(self, name: str, ms: float, tags: dict[str, str] | None = None) -> None:
        pass

    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        pass


def resolve_metrics(metrics: Any | None) -> MetricsHook:
    """Return *metrics*, or a :class:`NoopMetricsHook` when it is ``None``."""
    return metrics if metrics is not None else NoopMetricsHook()
