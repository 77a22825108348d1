"""Converters for media and link blocks.

Media URLs are passed through untouched: nothing is downloaded or
re-hosted.  A block whose URL cannot be resolved renders to ``""``.
"""

from __future__ import annotations

import re

from notionpress.converter.base import (
    BlockConverter,
    ConversionContext,
    block_data,
    resolve_file_url,
    wrap_block,
)
from notionpress.converter.rich_text import (
    escape_html,
    escape_url,
    plain_text,
    render_rich_text,
    rich_text_of,
)

# Hosts whose video URLs are rendered through the oEmbed block.
VIDEO_EMBED_RE = re.compile(r"(youtube\.com|youtu\.be|vimeo\.com)", re.IGNORECASE)


def _figcaption(caption: str) -> str:
    if not caption:
        return ""
    return f'<figcaption class="wp-element-caption">{caption}</figcaption>'


class ImageConverter(BlockConverter):
    block_types = frozenset({"image"})

    def convert(self, block: dict, context: ConversionContext) -> str:
        data = block_data(block)
        url = resolve_file_url(data)
        src = escape_url(url)
        if not src:
            return ""

        caption_rt = rich_text_of(data, "caption")
        alt = plain_text(caption_rt)
        markup = (
            '<figure class="wp-block-image">'
            f'<img src="{src}" alt="{escape_html(alt)}"/>'
            f"{_figcaption(render_rich_text(caption_rt))}</figure>"
        )
        return wrap_block("image", markup, {"url": url, "alt": alt})


class VideoConverter(BlockConverter):
    """YouTube and Vimeo links embed; anything else gets a native player."""

    block_types = frozenset({"video"})

    def convert(self, block: dict, context: ConversionContext) -> str:
        data = block_data(block)
        url = resolve_file_url(data)
        src = escape_url(url)
        if not src:
            return ""

        caption = _figcaption(render_rich_text(rich_text_of(data, "caption")))

        match = VIDEO_EMBED_RE.search(url)
        if match:
            provider = "vimeo" if "vimeo" in match.group(1).lower() else "youtube"
            markup = (
                f'<figure class="wp-block-embed is-type-video is-provider-{provider}">'
                f'<div class="wp-block-embed__wrapper">\n{src}\n</div>{caption}</figure>'
            )
            return wrap_block(
                "embed",
                markup,
                {"url": url, "type": "video", "providerNameSlug": provider},
            )

        markup = f'<figure class="wp-block-video"><video controls src="{src}"></video>{caption}</figure>'
        return wrap_block("video", markup, {"src": url})


class AudioConverter(BlockConverter):
    block_types = frozenset({"audio"})

    def convert(self, block: dict, context: ConversionContext) -> str:
        data = block_data(block)
        url = resolve_file_url(data)
        src = escape_url(url)
        if not src:
            return ""

        caption = _figcaption(render_rich_text(rich_text_of(data, "caption")))
        markup = f'<figure class="wp-block-audio"><audio controls src="{src}"></audio>{caption}</figure>'
        return wrap_block("audio", markup, {"src": url})


class FileConverter(BlockConverter):
    """Files render as a link plus a download button."""

    block_types = frozenset({"file", "pdf"})

    def convert(self, block: dict, context: ConversionContext) -> str:
        data = block_data(block)
        url = resolve_file_url(data)
        href = escape_url(url)
        if not href:
            return ""

        name = data.get("name")
        if not isinstance(name, str) or not name:
            name = plain_text(rich_text_of(data, "caption"))
        if not name:
            name = url.rsplit("/", 1)[-1].split("?", 1)[0] or "file"

        markup = (
            '<div class="wp-block-file">'
            f'<a href="{href}">{escape_html(name)}</a>'
            f'<a href="{href}" class="wp-block-file__button wp-element-button" download>'
            "Download</a></div>"
        )
        return wrap_block("file", markup, {"href": url})


class BookmarkConverter(BlockConverter):
    """Bookmarks and link previews become oEmbed blocks."""

    block_types = frozenset({"bookmark", "link_preview"})

    def convert(self, block: dict, context: ConversionContext) -> str:
        data = block_data(block)
        url = data.get("url") if isinstance(data.get("url"), str) else ""
        src = escape_url(url)
        if not src:
            return ""

        caption = _figcaption(render_rich_text(rich_text_of(data, "caption")))
        markup = (
            '<figure class="wp-block-embed"><div class="wp-block-embed__wrapper">\n'
            f"{src}\n</div>{caption}</figure>"
        )
        return wrap_block("embed", markup, {"url": url})


class EmbedConverter(BookmarkConverter):
    block_types = frozenset({"embed"})
