"""Tests for notionpress/config.py."""

from __future__ import annotations

import pytest

from notionpress.config import DEFAULT_COLOR_MAPPINGS, MAX_DEPTH_LIMIT, NotionpressConfig


class TestDefaults:
    def test_defaults(self):
        config = NotionpressConfig()
        assert config.notion_version == "2025-09-03"
        assert config.max_depth == 32
        assert config.default_post_status == "draft"
        assert config.default_post_type == "post"
        assert config.default_author is None
        assert config.import_max_concurrent == 4

    def test_color_overrides_merge(self):
        config = NotionpressConfig(color_mappings={"red": "crimson", "brand": "#123456"})
        colors = config.resolved_color_mappings()
        assert colors["red"] == "crimson"
        assert colors["brand"] == "#123456"
        assert colors["blue"] == DEFAULT_COLOR_MAPPINGS["blue"]

    def test_defaults_not_mutated(self):
        NotionpressConfig(color_mappings={"red": "crimson"}).resolved_color_mappings()
        assert DEFAULT_COLOR_MAPPINGS["red"] != "crimson"


class TestValidation:
    @pytest.mark.parametrize("kwargs", [
        {"retry_max_attempts": 0},
        {"retry_base_delay": -1},
        {"retry_max_delay": -1},
        {"rate_limit_rps": 0},
        {"timeout_seconds": 0},
        {"max_depth": 0},
        {"max_depth": 101},
        {"import_max_concurrent": 0},
        {"base_url": "http://api.example.com/v1"},
    ])
    def test_rejects_invalid(self, kwargs):
        with pytest.raises(ValueError):
            NotionpressConfig(**kwargs)

    def test_max_depth_limit_accepted(self):
        assert NotionpressConfig(max_depth=MAX_DEPTH_LIMIT).max_depth == MAX_DEPTH_LIMIT

    def test_local_http_allowed(self):
        assert NotionpressConfig(base_url="http://localhost:8080/v1").base_url.startswith("http://")


class TestRepr:
    def test_token_masked(self):
        text = repr(NotionpressConfig(token="secret_abcdefgh1234"))
        assert "secret_abcdefgh1234" not in text
        assert "...1234" in text

    def test_short_token_masked(self):
        assert "token='****'" in repr(NotionpressConfig(token="ab"))
