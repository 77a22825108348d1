"""Notion API transport and endpoint wrappers.

* :mod:`.rate_limit` -- token-bucket pacing (sync and async).
* :mod:`.retries` -- retry decisions and backoff.
* :mod:`.transport` -- HTTP transport with auth, retries and pacing.
* :mod:`.pages`, :mod:`.blocks`, :mod:`.databases`, :mod:`.search` --
  endpoint wrappers.
"""

from __future__ import annotations

from .blocks import AsyncBlockAPI, BlockAPI
from .databases import AsyncDatabaseAPI, DatabaseAPI
from .pages import AsyncPageAPI, PageAPI
from .rate_limit import AsyncTokenBucket, TokenBucket
from .retries import compute_backoff, should_retry
from .search import AsyncSearchAPI, SearchAPI
from .transport import AsyncNotionTransport, NotionTransport

__all__ = [
    "AsyncBlockAPI",
    "AsyncDatabaseAPI",
    "AsyncNotionTransport",
    "AsyncPageAPI",
    "AsyncSearchAPI",
    "AsyncTokenBucket",
    "BlockAPI",
    "DatabaseAPI",
    "NotionTransport",
    "PageAPI",
    "SearchAPI",
    "TokenBucket",
    "compute_backoff",
    "should_retry",
]
