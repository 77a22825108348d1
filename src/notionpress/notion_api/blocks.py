"""Block endpoint wrappers.

:meth:`BlockAPI.get_children` returns one level of children, following
pagination cursors.  :meth:`BlockAPI.get_all_children` walks the whole
subtree depth-first and attaches each block's children under
``block["children"]``, which is where the converters look for them.
"""

from __future__ import annotations

from typing import Any

from notionpress.errors import NotionpressDepthError

from .transport import AsyncNotionTransport, NotionTransport


def _needs_children(block: Any) -> bool:
    return isinstance(block, dict) and bool(block.get("has_children")) and bool(block.get("id"))


def _depth_error(block_id: str, depth: int, max_depth: int) -> NotionpressDepthError:
    return NotionpressDepthError(
        message=f"Block nesting exceeds max_depth={max_depth}",
        context={"depth": depth, "max_depth": max_depth, "block_id": block_id},
    )


class BlockAPI:
    """Synchronous wrapper for ``/blocks``.

    Parameters
    ----------
    transport:
        A configured :class:`NotionTransport`.
    max_depth:
        Deepest nesting level :meth:`get_all_children` will fetch.  The
        requested block's own children are level 0.
    """

    def __init__(self, transport: NotionTransport, max_depth: int = 32) -> None:
        self._transport = transport
        self._max_depth = max_depth

    def retrieve(self, block_id: str) -> dict[str, Any]:
        return self._transport.request("GET", f"/blocks/{block_id}")

    def get_children(self, block_id: str) -> list[dict[str, Any]]:
        """Return every direct child of *block_id*, in order."""
        return list(self._transport.paginate(f"/blocks/{block_id}/children", method="GET"))

    def get_all_children(self, block_id: str, _depth: int = 0) -> list[dict[str, Any]]:
        """Return the children of *block_id* with their subtrees attached.

        Children are fetched sequentially, depth-first.

        Raises
        ------
        NotionpressDepthError
            If the tree is nested deeper than ``max_depth``.
        """
        blocks = self.get_children(block_id)
        for block in blocks:
            if not _needs_children(block):
                continue
            if _depth + 1 > self._max_depth:
                raise _depth_error(block["id"], _depth + 1, self._max_depth)
            block["children"] = self.get_all_children(block["id"], _depth + 1)
        return blocks


class AsyncBlockAPI:
    """Asynchronous counterpart of :class:`BlockAPI`."""

    def __init__(self, transport: AsyncNotionTransport, max_depth: int = 32) -> None:
        self._transport = transport
        self._max_depth = max_depth

    async def retrieve(self, block_id: str) -> dict[str, Any]:
        return await self._transport.request("GET", f"/blocks/{block_id}")

    async def get_children(self, block_id: str) -> list[dict[str, Any]]:
        return [
            block
            async for block in self._transport.paginate(f"/blocks/{block_id}/children", method="GET")
        ]

    async def get_all_children(self, block_id: str, _depth: int = 0) -> list[dict[str, Any]]:
        blocks = await self.get_children(block_id)
        for block in blocks:
            if not _needs_children(block):
                continue
            if _depth + 1 > self._max_depth:
                raise _depth_error(block["id"], _depth + 1, self._max_depth)
            block["children"] = await self.get_all_children(block["id"], _depth + 1)
        return blocks
