"""Where page content comes from.

The importer talks to a :class:`ContentSource`; the Notion-backed
implementations wire the endpoint wrappers in :mod:`notionpress.notion_api`
to it.  Tests substitute an in-memory source.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from notionpress.config import NotionpressConfig
from notionpress.models import ImportableItem
from notionpress.notion_api import (
    AsyncBlockAPI,
    AsyncDatabaseAPI,
    AsyncNotionTransport,
    AsyncPageAPI,
    AsyncSearchAPI,
    BlockAPI,
    DatabaseAPI,
    NotionTransport,
    PageAPI,
    SearchAPI,
)

from .properties import importable_item


def _importable(results: list[dict[str, Any]]) -> list[ImportableItem]:
    items = (importable_item(result) for result in results)
    return [item for item in items if item is not None]


@runtime_checkable
class ContentSource(Protocol):
    def get_page(self, page_id: str) -> dict[str, Any]:
        ...

    def get_block_children(self, block_id: str) -> list[dict[str, Any]]:
        ...

    def get_all_block_children(self, block_id: str) -> list[dict[str, Any]]:
        """Return the full block tree with children attached."""
        ...


@runtime_checkable
class AsyncContentSource(Protocol):
    async def get_page(self, page_id: str) -> dict[str, Any]:
        ...

    async def get_block_children(self, block_id: str) -> list[dict[str, Any]]:
        ...

    async def get_all_block_children(self, block_id: str) -> list[dict[str, Any]]:
        ...


class NotionContentSource:
    """Content source backed by the Notion REST API.

    Parameters
    ----------
    config:
        Credentials and transport settings.  ``config.max_depth`` also
        bounds the recursive block fetch.
    transport:
        Optional pre-built transport; one is created from *config* when
        omitted and closed by :meth:`close`.

    Example::

        with NotionContentSource(NotionpressConfig(token="secret_...")) as source:
            items = source.list_importable_items()
            page_ids = [item.id for item in items if item.object == "page"]
    """

    def __init__(self, config: NotionpressConfig, transport: NotionTransport | None = None) -> None:
        self._transport = transport if transport is not None else NotionTransport(config)
        self.pages = PageAPI(self._transport)
        self.blocks = BlockAPI(self._transport, max_depth=config.max_depth)
        self.databases = DatabaseAPI(self._transport)
        self.search = SearchAPI(self._transport)

    def get_page(self, page_id: str) -> dict[str, Any]:
        return self.pages.retrieve(page_id)

    def get_block_children(self, block_id: str) -> list[dict[str, Any]]:
        return self.blocks.get_children(block_id)

    def get_all_block_children(self, block_id: str) -> list[dict[str, Any]]:
        return self.blocks.get_all_children(block_id)

    def list_database_pages(self, database_id: str, **query: Any) -> list[dict[str, Any]]:
        return self.databases.query(database_id, **query)

    def list_importable_items(self, query: str | None = None) -> list[ImportableItem]:
        """Return every page and database shared with the integration.

        Results of ``POST /search`` that are neither pages nor databases
        are skipped.  Archived items are included and flagged.
        """
        return _importable(self.search.search(query=query))

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> NotionContentSource:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class AsyncNotionContentSource:
    """Async counterpart of :class:`NotionContentSource`."""

    def __init__(self, config: NotionpressConfig, transport: AsyncNotionTransport | None = None) -> None:
        self._transport = transport if transport is not None else AsyncNotionTransport(config)
        self.pages = AsyncPageAPI(self._transport)
        self.blocks = AsyncBlockAPI(self._transport, max_depth=config.max_depth)
        self.databases = AsyncDatabaseAPI(self._transport)
        self.search = AsyncSearchAPI(self._transport)

    async def get_page(self, page_id: str) -> dict[str, Any]:
        return await self.pages.retrieve(page_id)

    async def get_block_children(self, block_id: str) -> list[dict[str, Any]]:
        return await self.blocks.get_children(block_id)

    async def get_all_block_children(self, block_id: str) -> list[dict[str, Any]]:
        return await self.blocks.get_all_children(block_id)

    async def list_database_pages(self, database_id: str, **query: Any) -> list[dict[str, Any]]:
        return await self.databases.query(database_id, **query)

    async def list_importable_items(self, query: str | None = None) -> list[ImportableItem]:
        return _importable(await self.search.search(query=query))

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> AsyncNotionContentSource:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
