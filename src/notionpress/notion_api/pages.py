"""Page endpoint wrappers.

Only reads are needed: the importer fetches a page for its properties
and then walks its blocks through :class:`~notionpress.notion_api.blocks.BlockAPI`.
"""

from __future__ import annotations

from typing import Any

from .transport import AsyncNotionTransport, NotionTransport


class PageAPI:
    """Synchronous wrapper for ``/pages``.

    Parameters
    ----------
    transport:
        A configured :class:`NotionTransport`.
    """

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def retrieve(self, page_id: str) -> dict[str, Any]:
        """Return the page object for *page_id* (hyphens optional)."""
        return self._transport.request("GET", f"/pages/{page_id}")


class AsyncPageAPI:
    """Asynchronous wrapper for ``/pages``."""

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def retrieve(self, page_id: str) -> dict[str, Any]:
        return await self._transport.request("GET", f"/pages/{page_id}")
