"""Inline rendering: Notion rich_text arrays to HTML.

Each span is HTML-escaped and then wrapped in annotation tags in a fixed
order, innermost first::

    code -> bold -> italic -> strikethrough -> underline -> link

The order does not depend on which subset of annotations is set, so the
output always nests correctly.
"""

from __future__ import annotations

import html
import re
from collections.abc import Iterable
from typing import Any, Union
from urllib.parse import urlsplit

from notionpress.models import RichTextSpan

SpanLike = Union[RichTextSpan, dict]

# Placeholder that keeps an empty paragraph visible in the block editor.
EMPTY_PARAGRAPH = "&nbsp;"

# (annotation attribute, opening tag, closing tag), innermost first.
_ANNOTATION_TAGS: tuple[tuple[str, str, str], ...] = (
    ("code", "<code>", "</code>"),
    ("bold", "<strong>", "</strong>"),
    ("italic", "<em>", "</em>"),
    ("strikethrough", "<s>", "</s>"),
    ("underline", "<u>", "</u>"),
)

_ALLOWED_URL_SCHEMES: frozenset[str] = frozenset({"http", "https", "mailto", "tel"})

_TAG_RE = re.compile(r"<[^>]*>")


def escape_html(text: str) -> str:
    """Escape text for use in HTML element content or attribute values."""
    return html.escape(text, quote=True)


def escape_url(url: str | None) -> str:
    """Escape *url* for an ``href``/``src`` attribute.

    URLs with a scheme outside http, https, mailto and tel (for example
    ``javascript:``) come back as an empty string.  Relative URLs and
    fragments are kept.
    """
    if not url or not isinstance(url, str):
        return ""
    url = url.strip()
    # Control characters can be used to disguise a scheme.
    cleaned = "".join(ch for ch in url if ch.isprintable() and not ch.isspace())
    try:
        scheme = urlsplit(cleaned).scheme.lower()
    except ValueError:
        # Unparseable, e.g. an unbalanced "[" in the host.
        return ""
    if scheme and scheme not in _ALLOWED_URL_SCHEMES:
        return ""
    return html.escape(cleaned, quote=True)


def _as_span(segment: SpanLike) -> RichTextSpan:
    if isinstance(segment, RichTextSpan):
        return segment
    return RichTextSpan.from_notion(segment if isinstance(segment, dict) else {})


def render_span(span: RichTextSpan) -> str:
    """Render one span to HTML.  Empty text renders to ``""``."""
    if not span.plain_text:
        return ""

    content = escape_html(span.plain_text)
    for attr, open_tag, close_tag in _ANNOTATION_TAGS:
        if getattr(span, attr):
            content = f"{open_tag}{content}{close_tag}"

    href = escape_url(span.href)
    if href:
        content = f'<a href="{href}">{content}</a>'
    return content


def render_rich_text(segments: Iterable[SpanLike] | None) -> str:
    """Render a Notion rich_text array (or :class:`RichTextSpan` list) to HTML.

    Parameters
    ----------
    segments:
        Notion rich_text objects or spans, in display order.  ``None`` and
        non-list values render to ``""``.

    Returns
    -------
    str
        Concatenated HTML for every span.
    """
    if not segments or not isinstance(segments, (list, tuple)):
        return ""
    return "".join(render_span(_as_span(seg)) for seg in segments)


def plain_text(segments: Iterable[SpanLike] | None) -> str:
    """Concatenate the raw text of *segments*, without escaping or tags."""
    if not segments or not isinstance(segments, (list, tuple)):
        return ""
    return "".join(_as_span(seg).plain_text for seg in segments)


def is_blank_markup(markup: str) -> bool:
    """True when *markup* has no visible text once tags are removed."""
    return not _TAG_RE.sub("", markup).strip()


def rich_text_of(payload: dict[str, Any], key: str = "rich_text") -> list:
    """Return ``payload[key]`` when it is a list, else an empty list."""
    value = payload.get(key) if isinstance(payload, dict) else None
    return value if isinstance(value, list) else []
