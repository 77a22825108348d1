"""Page import: content sources, post sinks and the orchestrators tying them together."""

from __future__ import annotations

from .orchestrator import AsyncImporter, Importer
from .properties import (
    UNTITLED,
    extract_description,
    extract_file_url,
    extract_icon,
    extract_meta,
    extract_rich_text,
    extract_title,
    importable_item,
    parent_of,
)
from .sink import InMemoryPostSink, PostSink
from .source import AsyncContentSource, AsyncNotionContentSource, ContentSource, NotionContentSource

__all__ = [
    "UNTITLED",
    "AsyncContentSource",
    "AsyncImporter",
    "AsyncNotionContentSource",
    "ContentSource",
    "Importer",
    "InMemoryPostSink",
    "NotionContentSource",
    "PostSink",
    "extract_description",
    "extract_file_url",
    "extract_icon",
    "extract_meta",
    "extract_rich_text",
    "extract_title",
    "importable_item",
    "parent_of",
]
