"""Notion blocks to Gutenberg markup conversion pipeline.

Public API:

- :class:`ConverterRegistry` / :func:`build_default_registry`: dispatch.
- :class:`BlockConverter` / :class:`ConversionContext`: extension points.
- :func:`group_blocks`: fold consecutive list items into grouped nodes.
- :func:`render_rich_text` / :func:`plain_text`: inline rendering.
"""

from notionpress.converter.base import BlockConverter, ConversionContext, wrap_block
from notionpress.converter.grouping import GROUPABLE_TYPES, group_blocks
from notionpress.converter.registry import ConverterRegistry, build_default_registry
from notionpress.converter.rich_text import (
    EMPTY_PARAGRAPH,
    escape_html,
    escape_url,
    plain_text,
    render_rich_text,
)

__all__ = [
    "EMPTY_PARAGRAPH",
    "GROUPABLE_TYPES",
    "BlockConverter",
    "ConversionContext",
    "ConverterRegistry",
    "build_default_registry",
    "escape_html",
    "escape_url",
    "group_blocks",
    "plain_text",
    "render_rich_text",
    "wrap_block",
]
