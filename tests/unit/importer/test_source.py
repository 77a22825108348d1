"""Tests for the Notion-backed content sources.

Requests are answered by an ``httpx.MockTransport`` so the full stack
(transport, pagination, recursive fetch) runs without a network.
"""

from __future__ import annotations

import json

import httpx

from notionpress.config import NotionpressConfig
from notionpress.importer import AsyncNotionContentSource, Importer, InMemoryPostSink, NotionContentSource
from notionpress.notion_api.transport import AsyncNotionTransport, NotionTransport

BASE_URL = "https://api.notion.com/v1"

PAGE = {
    "object": "page",
    "id": "page1",
    "url": "https://www.notion.so/page1",
    "properties": {"title": {"type": "title", "title": [{"plain_text": "From API"}]}},
}

CHILDREN = {
    "page1": [
        [
            {"id": "b1", "type": "heading_1", "has_children": False,
             "heading_1": {"rich_text": [{"plain_text": "Intro"}]}},
            {"id": "b2", "type": "bulleted_list_item", "has_children": True,
             "bulleted_list_item": {"rich_text": [{"plain_text": "outer"}]}},
        ],
        [
            {"id": "b3", "type": "bulleted_list_item", "has_children": False,
             "bulleted_list_item": {"rich_text": [{"plain_text": "second"}]}},
        ],
    ],
    "b2": [
        [
            {"id": "b2a", "type": "paragraph", "has_children": False,
             "paragraph": {"rich_text": [{"plain_text": "inner"}]}},
        ],
    ],
}

DATABASE = {
    "object": "database",
    "id": "db1",
    "title": [{"plain_text": "Blog"}],
    "archived": False,
    "parent": {"type": "workspace", "workspace": True},
    "properties": {"Name": {"type": "title"}},
}


def handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path.removeprefix("/v1")
    if path == "/pages/page1":
        return httpx.Response(200, json=PAGE)
    if path.startswith("/blocks/") and path.endswith("/children"):
        block_id = path.split("/")[2]
        batches = CHILDREN.get(block_id, [[]])
        index = int(request.url.params.get("start_cursor", "0"))
        has_more = index + 1 < len(batches)
        return httpx.Response(200, json={
            "results": batches[index],
            "has_more": has_more,
            "next_cursor": str(index + 1) if has_more else None,
        })
    if path == "/databases/db1/query":
        body = json.loads(request.content)
        assert body["page_size"] == 100
        return httpx.Response(200, json={"results": [PAGE], "has_more": False})
    if path == "/search":
        body = json.loads(request.content)
        if body.get("start_cursor") == "s2":
            return httpx.Response(200, json={"results": [DATABASE, {"object": "user", "id": "u1"}], "has_more": False})
        return httpx.Response(200, json={"results": [PAGE], "has_more": True, "next_cursor": "s2"})
    if path == "/pages/flaky":
        raise httpx.RemoteProtocolError("peer closed connection", request=request)
    return httpx.Response(404, json={"message": "not found", "code": "object_not_found"})


def make_config() -> NotionpressConfig:
    return NotionpressConfig(token="test-token-1234", rate_limit_rps=10_000.0, retry_jitter=False)


def sync_source(config: NotionpressConfig) -> NotionContentSource:
    client = httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return NotionContentSource(config, transport=NotionTransport(config, client=client))


class TestNotionContentSource:
    def test_recursive_fetch(self):
        with sync_source(make_config()) as source:
            blocks = source.get_all_block_children("page1")
        assert [b["id"] for b in blocks] == ["b1", "b2", "b3"]
        assert blocks[1]["children"][0]["id"] == "b2a"

    def test_list_database_pages(self):
        with sync_source(make_config()) as source:
            assert [p["id"] for p in source.list_database_pages("db1")] == ["page1"]

    def test_list_importable_items(self):
        with sync_source(make_config()) as source:
            items = source.list_importable_items()
        assert [(i.object, i.id, i.title) for i in items] == [("page", "page1", "From API"), ("database", "db1", "Blog")]
        assert items[1].parent_id == "workspace"
        assert items[1].property_names == [("Name", "title")]

    def test_transport_protocol_error_is_per_page(self):
        config = make_config()
        with sync_source(config) as source:
            batch = Importer(source, InMemoryPostSink(), config=config).import_pages(["page1", "flaky"])
        assert [r.source_id for r in batch.successes] == ["page1"]
        assert batch.failures[0].source_id == "flaky"
        assert batch.failures[0].error_code == "NETWORK_ERROR"

    def test_full_import(self):
        config = make_config()
        sink = InMemoryPostSink()
        with sync_source(config) as source:
            batch = Importer(source, sink, config=config).import_pages(["page1", "missing"])
        assert [r.source_id for r in batch.successes] == ["page1"]
        assert batch.failures[0].error_code == "NOT_FOUND"
        post = sink.posts[batch.successes[0].target_id]
        assert post.title == "From API"
        assert "<li>outer<!-- wp:paragraph -->" in post.content
        assert "<li>second</li>" in post.content
        assert post.content.count("<ul>") == 1


class TestAsyncNotionContentSource:
    async def test_recursive_fetch(self):
        config = make_config()
        client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
        async with AsyncNotionContentSource(config, transport=AsyncNotionTransport(config, client=client)) as source:
            page = await source.get_page("page1")
            blocks = await source.get_all_block_children("page1")
        assert page["id"] == "page1"
        assert [b["id"] for b in blocks] == ["b1", "b2", "b3"]
        assert blocks[1]["children"][0]["id"] == "b2a"

    async def test_list_importable_items(self):
        config = make_config()
        client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
        async with AsyncNotionContentSource(config, transport=AsyncNotionTransport(config, client=client)) as source:
            items = await source.list_importable_items()
        assert [i.id for i in items] == ["page1", "db1"]
