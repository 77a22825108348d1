"""Shared test fixtures for the notionpress test suite."""

from __future__ import annotations

from typing import Any

import pytest

from notionpress.config import NotionpressConfig
from notionpress.converter.registry import ConverterRegistry, build_default_registry


class RecordingMetricsHook:
    """A metrics backend that records all calls for assertion."""

    def __init__(self) -> None:
        self.increments: list[dict[str, Any]] = []
        self.timings: list[dict[str, Any]] = []
        self.gauges: list[dict[str, Any]] = []

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        self.increments.append({"name": name, "value": value, "tags": tags})

    def timing(self, name: str, ms: float, tags: dict[str, str] | None = None) -> None:
        self.timings.append({"name": name, "ms": ms, "tags": tags})

    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        self.gauges.append({"name": name, "value": value, "tags": tags})

    def names(self) -> list[str]:
        return [call["name"] for call in self.increments]


@pytest.fixture
def config() -> NotionpressConfig:
    """Default test configuration with a dummy token."""
    return NotionpressConfig(token="test_token_1234")


@pytest.fixture
def registry(config: NotionpressConfig) -> ConverterRegistry:
    """Registry loaded with the built-in converters."""
    return build_default_registry(config)


@pytest.fixture
def metrics() -> RecordingMetricsHook:
    return RecordingMetricsHook()


@pytest.fixture
def convert(registry: ConverterRegistry):
    """Convert a list of blocks to markup with the default registry."""

    def _convert(blocks: list[dict]) -> str:
        return registry.convert_tree(blocks)

    return _convert
