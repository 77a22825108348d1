"""notionpress: convert Notion pages into Gutenberg block markup.

Public re-exports
-----------------

* **Conversion:** :class:`ConverterRegistry`, :func:`build_default_registry`,
  :class:`BlockConverter`, :class:`ConversionContext`
* **Import:** :class:`Importer`, :class:`AsyncImporter`, content sources
  and post sinks
* **Configuration:** :class:`NotionpressConfig`
* **Errors:** Every :class:`NotionpressError` subclass and :class:`ErrorCode`
* **Models:** Payload and result dataclasses

Usage::

    from notionpress import build_default_registry

    registry = build_default_registry()
    markup, warnings = registry.convert_page(blocks)
"""

from __future__ import annotations

# ── Configuration ───────────────────────────────────────────────────────
from notionpress.config import DEFAULT_COLOR_MAPPINGS, MAX_DEPTH_LIMIT, NotionpressConfig

# ── Conversion ──────────────────────────────────────────────────────────
from notionpress.converter import (
    BlockConverter,
    ConversionContext,
    ConverterRegistry,
    build_default_registry,
    group_blocks,
    render_rich_text,
)

# ── Errors ──────────────────────────────────────────────────────────────
from notionpress.errors import (
    ErrorCode,
    NotionpressAuthError,
    NotionpressConversionError,
    NotionpressDepthError,
    NotionpressError,
    NotionpressNetworkError,
    NotionpressNotFoundError,
    NotionpressPermissionError,
    NotionpressRateLimitError,
    NotionpressRetryExhaustedError,
    NotionpressSinkError,
    NotionpressValidationError,
)

# ── Import ──────────────────────────────────────────────────────────────
from notionpress.importer import (
    AsyncImporter,
    AsyncNotionContentSource,
    ContentSource,
    Importer,
    InMemoryPostSink,
    NotionContentSource,
    PostSink,
)

# ── Models ──────────────────────────────────────────────────────────────
from notionpress.models import (
    BatchImportResult,
    ConversionWarning,
    GroupedBlock,
    ImportableItem,
    ImportResult,
    PostPayload,
    RichTextSpan,
)

__all__ = [
    # Configuration
    "NotionpressConfig",
    "DEFAULT_COLOR_MAPPINGS",
    "MAX_DEPTH_LIMIT",
    # Conversion
    "BlockConverter",
    "ConversionContext",
    "ConverterRegistry",
    "build_default_registry",
    "group_blocks",
    "render_rich_text",
    # Import
    "Importer",
    "AsyncImporter",
    "ContentSource",
    "NotionContentSource",
    "AsyncNotionContentSource",
    "PostSink",
    "InMemoryPostSink",
    # Errors
    "NotionpressError",
    "ErrorCode",
    "NotionpressValidationError",
    "NotionpressAuthError",
    "NotionpressPermissionError",
    "NotionpressNotFoundError",
    "NotionpressRateLimitError",
    "NotionpressRetryExhaustedError",
    "NotionpressNetworkError",
    "NotionpressConversionError",
    "NotionpressDepthError",
    "NotionpressSinkError",
    # Models
    "BatchImportResult",
    "ConversionWarning",
    "GroupedBlock",
    "ImportableItem",
    "ImportResult",
    "PostPayload",
    "RichTextSpan",
]
