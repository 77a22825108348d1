"""Database query wrappers, used to list pages for a batch import."""

from __future__ import annotations

from typing import Any

from .transport import AsyncNotionTransport, NotionTransport


def _query_body(filter: dict[str, Any] | None, sorts: list[dict[str, Any]] | None) -> dict[str, Any]:
    body: dict[str, Any] = {}
    if filter:
        body["filter"] = filter
    if sorts:
        body["sorts"] = sorts
    return body


class DatabaseAPI:
    """Synchronous wrapper for ``/databases``."""

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def retrieve(self, database_id: str) -> dict[str, Any]:
        return self._transport.request("GET", f"/databases/{database_id}")

    def query(
        self,
        database_id: str,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
    ) -> list[dict[str, Any]]:
        """Return every page in *database_id* matching *filter*.

        Parameters
        ----------
        database_id:
            The database to query.
        filter:
            Optional Notion filter object.
        sorts:
            Optional list of Notion sort objects.
        """
        return list(
            self._transport.paginate(
                f"/databases/{database_id}/query",
                method="POST",
                json=_query_body(filter, sorts),
            )
        )


class AsyncDatabaseAPI:
    """Asynchronous wrapper for ``/databases``."""

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def retrieve(self, database_id: str) -> dict[str, Any]:
        return await self._transport.request("GET", f"/databases/{database_id}")

    async def query(
        self,
        database_id: str,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
    ) -> list[dict[str, Any]]:
        return [
            page
            async for page in self._transport.paginate(
                f"/databases/{database_id}/query",
                method="POST",
                json=_query_body(filter, sorts),
            )
        ]
