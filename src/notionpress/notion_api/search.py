"""Workspace search wrappers, used to discover what can be imported."""

from __future__ import annotations

from typing import Any

from .transport import AsyncNotionTransport, NotionTransport

SEARCH_PATH = "/search"


def _search_body(
    query: str | None,
    filter: dict[str, Any] | None,
    sort: dict[str, Any] | None,
) -> dict[str, Any]:
    body: dict[str, Any] = {}
    if query:
        body["query"] = query
    if filter:
        body["filter"] = filter
    if sort:
        body["sort"] = sort
    return body


class SearchAPI:
    """Synchronous wrapper for ``POST /search``."""

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def search(
        self,
        query: str | None = None,
        filter: dict[str, Any] | None = None,
        sort: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Return every page and database shared with the integration.

        Parameters
        ----------
        query:
            Optional text matched against titles.
        filter:
            Optional Notion search filter, e.g.
            ``{"property": "object", "value": "page"}``.
        sort:
            Optional Notion sort object.
        """
        return list(
            self._transport.paginate(
                SEARCH_PATH,
                method="POST",
                json=_search_body(query, filter, sort),
            )
        )


class AsyncSearchAPI:
    """Asynchronous wrapper for ``POST /search``."""

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def search(
        self,
        query: str | None = None,
        filter: dict[str, Any] | None = None,
        sort: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        return [
            item
            async for item in self._transport.paginate(
                SEARCH_PATH,
                method="POST",
                json=_search_body(query, filter, sort),
            )
        ]
