"""Import orchestration: fetch a Notion page, convert it, hand it to a sink.

:class:`Importer` runs pages one after another.  :class:`AsyncImporter`
runs up to ``config.import_max_concurrent`` pages at once.  Both turn any
exception raised while importing a page into a failed
:class:`~notionpress.models.ImportResult`, so one bad page never stops a
batch.  Errors that are not already a
:class:`~notionpress.errors.NotionpressError` are wrapped first.

Usage::

    from notionpress import Importer, InMemoryPostSink, NotionContentSource, NotionpressConfig

    config = NotionpressConfig(token="secret_...")
    with NotionContentSource(config) as source:
        sink = InMemoryPostSink()
        batch = Importer(source, sink, config=config).import_pages(page_ids)
    for failure in batch.failures:
        print(failure.source_id, failure.error)
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

from notionpress.config import NotionpressConfig
from notionpress.converter.registry import ConverterRegistry, build_default_registry
from notionpress.errors import (
    ErrorCode,
    NotionpressError,
    NotionpressSinkError,
    NotionpressValidationError,
)
from notionpress.models import BatchImportResult, ConversionWarning, ImportResult, PostPayload
from notionpress.observability import get_logger, log_event, resolve_metrics

from .properties import extract_meta, extract_title
from .sink import PostSink
from .source import AsyncContentSource, ContentSource

log = get_logger("notionpress.importer")


class _ImporterBase:
    """State and bookkeeping shared by the sync and async importers."""

    def __init__(
        self,
        sink: PostSink,
        registry: ConverterRegistry | None = None,
        config: NotionpressConfig | None = None,
    ) -> None:
        self._config = config or NotionpressConfig()
        self._registry = registry if registry is not None else build_default_registry(self._config)
        self._sink = sink
        self._metrics = resolve_metrics(self._config.metrics)

    @property
    def registry(self) -> ConverterRegistry:
        return self._registry

    def build_post_payload(self, page: dict[str, Any], blocks: list[dict]) -> PostPayload:
        """Convert a fetched page and its block tree into a post payload.

        Raises
        ------
        NotionpressDepthError
            If *blocks* nest deeper than ``config.max_depth``.
        """
        payload, _ = self._build(page, blocks)
        return payload

    def _build(self, page: dict[str, Any], blocks: list[dict]) -> tuple[PostPayload, list[ConversionWarning]]:
        content, warnings = self._registry.convert_page(blocks)
        payload = PostPayload(
            source_id=page.get("id", ""),
            title=extract_title(page),
            content=content,
            status=self._config.default_post_status,
            post_type=self._config.default_post_type,
            author=self._config.default_author,
            created_time=page.get("created_time"),
            modified_time=page.get("last_edited_time"),
            meta=extract_meta(page),
        )
        return payload, warnings

    def _store(self, page_id: str, page: dict[str, Any], blocks: list[dict]) -> ImportResult:
        payload, warnings = self._build(page, blocks)
        # The requested id wins over whatever form the API echoed back.
        payload.source_id = page_id
        try:
            target_id = self._sink.upsert_post(payload)
        except NotionpressError:
            raise
        except Exception as exc:
            raise NotionpressSinkError(
                message=f"Post sink failed for page {page_id}: {exc}",
                context={"source_id": page_id, "error_type": type(exc).__name__},
                cause=exc,
            ) from exc
        return ImportResult(source_id=page_id, target_id=target_id, warnings=warnings)

    def _succeeded(self, result: ImportResult, started: float) -> ImportResult:
        elapsed_ms = (time.monotonic() - started) * 1000
        self._metrics.increment("notionpress.pages_imported_total")
        self._metrics.timing("notionpress.page_import_duration_ms", elapsed_ms)
        log_event(
            log,
            logging.INFO,
            "page imported",
            op="import_page",
            page_id=result.source_id,
            target_id=result.target_id,
            warnings=len(result.warnings),
            duration_ms=round(elapsed_ms, 1),
        )
        return result

    def _failed(self, page_id: str, exc: NotionpressError, started: float) -> ImportResult:
        elapsed_ms = (time.monotonic() - started) * 1000
        code = str(getattr(exc.code, "value", exc.code))
        self._metrics.increment("notionpress.page_import_failures_total", tags={"code": code})
        self._metrics.timing("notionpress.page_import_duration_ms", elapsed_ms)
        log_event(
            log,
            logging.WARNING,
            "page import failed",
            op="import_page",
            page_id=page_id,
            error_code=code,
            error=exc.message,
            duration_ms=round(elapsed_ms, 1),
        )
        return ImportResult(source_id=page_id, error=exc.message, error_code=code)

    @staticmethod
    def _unexpected(page_id: str, exc: Exception) -> NotionpressError:
        return NotionpressError(
            code=ErrorCode.UNKNOWN,
            message=f"Unexpected error importing page {page_id}: {type(exc).__name__}: {exc}",
            context={"page_id": page_id, "error_type": type(exc).__name__},
            cause=exc,
        )

    @staticmethod
    def _check_ids(page_ids: list[str]) -> None:
        if not page_ids:
            raise NotionpressValidationError(
                message="No pages selected for import",
                context={"page_ids": list(page_ids or [])},
            )


class Importer(_ImporterBase):
    """Synchronous importer.

    Parameters
    ----------
    source:
        Where pages and blocks are read from.
    sink:
        Where finished posts are written.
    registry:
        Converter registry; :func:`build_default_registry` when omitted.
    config:
        Post defaults, depth limit and metrics hook.
    """

    def __init__(
        self,
        source: ContentSource,
        sink: PostSink,
        registry: ConverterRegistry | None = None,
        config: NotionpressConfig | None = None,
    ) -> None:
        super().__init__(sink, registry, config)
        self._source = source

    def import_page(self, page_id: str) -> ImportResult:
        """Import one page.

        Never raises for an :class:`Exception`: anything that is not already
        a :class:`NotionpressError` is wrapped with code ``UNKNOWN`` (or
        ``SINK_ERROR`` when the sink raised it) and recorded as a failure.
        """
        started = time.monotonic()
        try:
            page = self._source.get_page(page_id)
            blocks = self._source.get_all_block_children(page_id)
            result = self._store(page_id, page, blocks)
        except NotionpressError as exc:
            return self._failed(page_id, exc, started)
        except Exception as exc:
            return self._failed(page_id, self._unexpected(page_id, exc), started)
        return self._succeeded(result, started)

    def import_pages(self, page_ids: list[str]) -> BatchImportResult:
        """Import pages in order; each failure is recorded and skipped.

        Raises
        ------
        NotionpressValidationError
            If *page_ids* is empty.
        """
        self._check_ids(page_ids)
        batch = BatchImportResult()
        for page_id in page_ids:
            batch.add(self.import_page(page_id))
        log_event(
            log,
            logging.INFO,
            "batch import finished",
            op="import_pages",
            imported=len(batch.successes),
            failed=len(batch.failures),
        )
        return batch


class AsyncImporter(_ImporterBase):
    """Asynchronous importer.

    Pages of a batch are imported concurrently, at most
    ``config.import_max_concurrent`` at a time.  Result order within the
    batch follows completion and is not guaranteed.
    """

    def __init__(
        self,
        source: AsyncContentSource,
        sink: PostSink,
        registry: ConverterRegistry | None = None,
        config: NotionpressConfig | None = None,
    ) -> None:
        super().__init__(sink, registry, config)
        self._source = source

    async def import_page(self, page_id: str) -> ImportResult:
        started = time.monotonic()
        try:
            page = await self._source.get_page(page_id)
            blocks = await self._source.get_all_block_children(page_id)
            result = self._store(page_id, page, blocks)
        except NotionpressError as exc:
            return self._failed(page_id, exc, started)
        except Exception as exc:
            return self._failed(page_id, self._unexpected(page_id, exc), started)
        return self._succeeded(result, started)

    async def import_pages(self, page_ids: list[str]) -> BatchImportResult:
        self._check_ids(page_ids)
        semaphore = asyncio.Semaphore(self._config.import_max_concurrent)
        batch = BatchImportResult()

        async def _import_one(page_id: str) -> None:
            async with semaphore:
                batch.add(await self.import_page(page_id))

        await asyncio.gather(*(_import_one(page_id) for page_id in page_ids))
        log_event(
            log,
            logging.INFO,
            "batch import finished",
            op="import_pages",
            imported=len(batch.successes),
            failed=len(batch.failures),
        )
        return batch
