"""Destination side of an import.

A :class:`PostSink` turns a :class:`~notionpress.models.PostPayload` into a
stored post and returns its id.  Re-importing the same Notion page must
update the existing post rather than create a duplicate, so sinks keep a
``source_id -> target_id`` mapping.
"""

from __future__ import annotations

import itertools
import threading
from typing import Any, Protocol, runtime_checkable

from notionpress.errors import NotionpressSinkError
from notionpress.models import PostPayload


@runtime_checkable
class PostSink(Protocol):
    def upsert_post(self, payload: PostPayload) -> Any:
        """Create or update the post for ``payload.source_id``; return its id.

        Raises :class:`~notionpress.errors.NotionpressSinkError` on failure.
        """
        ...


class InMemoryPostSink:
    """Dict-backed sink with sequential integer ids.

    Useful in tests and dry runs.  Safe to share between threads.
    """

    def __init__(self) -> None:
        self.posts: dict[int, PostPayload] = {}
        self._mapping: dict[str, int] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def upsert_post(self, payload: PostPayload) -> int:
        if not payload.source_id:
            raise NotionpressSinkError(
                message="Post payload has no source_id",
                context={"source_id": payload.source_id},
            )
        with self._lock:
            target_id = self._mapping.get(payload.source_id)
            if target_id is None:
                target_id = next(self._ids)
                self._mapping[payload.source_id] = target_id
            self.posts[target_id] = payload
        return target_id

    def target_id_for(self, source_id: str) -> int | None:
        return self._mapping.get(source_id)

    def __len__(self) -> int:
        return len(self.posts)
