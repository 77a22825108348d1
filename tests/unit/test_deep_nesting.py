"""Depth-guard tests: deeply nested trees fail closed instead of overflowing."""

from __future__ import annotations

import pytest

from notionpress.config import MAX_DEPTH_LIMIT, NotionpressConfig
from notionpress.converter.registry import build_default_registry
from notionpress.errors import ErrorCode, NotionpressDepthError


def nested(depth: int, block_type: str = "toggle") -> dict:
    """Build a chain of *depth* nested blocks below a top-level block."""
    leaf = {"type": "paragraph", "id": f"n{depth}", "paragraph": {"rich_text": [{"plain_text": "leaf"}]}}
    node = leaf
    for level in range(depth - 1, -1, -1):
        node = {
            "type": block_type,
            "id": f"n{level}",
            block_type: {"rich_text": [{"plain_text": f"level {level}"}]},
            "children": [node],
        }
    return node


class TestDepthGuard:
    def test_within_limit(self):
        registry = build_default_registry(NotionpressConfig(max_depth=5))
        out = registry.convert_tree([nested(5)])
        assert "leaf" in out

    def test_exceeding_limit_raises(self):
        registry = build_default_registry(NotionpressConfig(max_depth=5))
        with pytest.raises(NotionpressDepthError) as exc_info:
            registry.convert_tree([nested(6)])
        assert exc_info.value.code == ErrorCode.DEPTH_EXCEEDED
        assert exc_info.value.context["max_depth"] == 5
        assert exc_info.value.context["depth"] == 6

    def test_nested_lists_count_towards_depth(self):
        registry = build_default_registry(NotionpressConfig(max_depth=2))
        with pytest.raises(NotionpressDepthError):
            registry.convert_tree([nested(3, "bulleted_list_item")])

    def test_default_limit_handles_realistic_nesting(self, registry):
        out = registry.convert_tree([nested(10, "bulleted_list_item")])
        assert out.count("<ul>") == 10

    def test_highest_limit_converts_without_recursion_error(self):
        registry = build_default_registry(NotionpressConfig(max_depth=MAX_DEPTH_LIMIT))
        out = registry.convert_tree([nested(MAX_DEPTH_LIMIT, "bulleted_list_item")])
        assert out.count("<ul>") == MAX_DEPTH_LIMIT

    def test_very_deep_tree_fails_closed_at_highest_limit(self):
        registry = build_default_registry(NotionpressConfig(max_depth=MAX_DEPTH_LIMIT))
        with pytest.raises(NotionpressDepthError) as exc_info:
            registry.convert_tree([nested(400, "bulleted_list_item")])
        assert exc_info.value.context["depth"] == MAX_DEPTH_LIMIT + 1
