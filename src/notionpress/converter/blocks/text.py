"""Converters for text-bearing blocks.

Paragraphs, headings, quotes, code, dividers, callouts and toggles.
"""

from __future__ import annotations

from notionpress.converter.base import (
    BlockConverter,
    ConversionContext,
    block_color,
    block_data,
    color_class,
    node_type,
    wrap_block,
)
from notionpress.converter.rich_text import (
    EMPTY_PARAGRAPH,
    escape_html,
    is_blank_markup,
    plain_text,
    render_rich_text,
    rich_text_of,
)

# Notion's name for "no language", plus the older spelling.
_PLAIN_LANGUAGES: frozenset[str] = frozenset({"", "plain text", "plaintext"})


def _color_attributes(data: dict) -> dict:
    css = color_class(data.get("color"))
    return {"className": css} if css else {}


class ParagraphConverter(BlockConverter):
    block_types = frozenset({"paragraph"})

    def convert(self, block: dict, context: ConversionContext) -> str:
        data = block_data(block)
        content = render_rich_text(rich_text_of(data))
        if is_blank_markup(content):
            content = EMPTY_PARAGRAPH

        markup = f"<p>{content}</p>" + context.convert_children(block)
        return wrap_block("paragraph", markup, _color_attributes(data))


class HeadingConverter(BlockConverter):
    """``heading_1`` to ``heading_3``.

    Toggleable headings keep their children, rendered after the heading.
    """

    block_types = frozenset({"heading_1", "heading_2", "heading_3"})

    def convert(self, block: dict, context: ConversionContext) -> str:
        level = int(node_type(block)[-1])
        data = block_data(block)
        content = render_rich_text(rich_text_of(data))

        markup = f"<h{level}>{content}</h{level}>"
        if data.get("is_toggleable"):
            markup += context.convert_children(block)

        return wrap_block("heading", markup, {"level": level, **_color_attributes(data)})


class QuoteConverter(BlockConverter):
    block_types = frozenset({"quote"})

    def convert(self, block: dict, context: ConversionContext) -> str:
        data = block_data(block)
        content = render_rich_text(rich_text_of(data))
        markup = (
            f'<blockquote class="wp-block-quote"><p>{content}</p>'
            f"{context.convert_children(block)}</blockquote>"
        )
        return wrap_block("quote", markup, _color_attributes(data))


class CodeConverter(BlockConverter):
    """Code blocks keep their raw text; annotations are ignored."""

    block_types = frozenset({"code"})

    def convert(self, block: dict, context: ConversionContext) -> str:
        data = block_data(block)
        code = plain_text(rich_text_of(data))
        language = data.get("language") or ""

        attributes = {}
        if isinstance(language, str) and language.lower() not in _PLAIN_LANGUAGES:
            attributes["language"] = language

        markup = f'<pre class="wp-block-code"><code>{escape_html(code)}</code></pre>'
        return wrap_block("code", markup, attributes)


class DividerConverter(BlockConverter):
    block_types = frozenset({"divider"})

    def convert(self, block: dict, context: ConversionContext) -> str:
        return wrap_block(
            "separator",
            '<hr class="wp-block-separator has-alpha-channel-opacity"/>',
        )


class CalloutConverter(BlockConverter):
    """Callouts become a group holding the icon and text, then children.

    A non-default color is translated through ``context.color_mappings``
    into the group's background or text color.
    """

    block_types = frozenset({"callout"})

    def convert(self, block: dict, context: ConversionContext) -> str:
        data = block_data(block)
        icon = data.get("icon") if isinstance(data.get("icon"), dict) else {}
        emoji = icon.get("emoji") if icon.get("type", "emoji") == "emoji" else None
        if not isinstance(emoji, str):
            emoji = None

        content = render_rich_text(rich_text_of(data))
        if emoji:
            content = f"{escape_html(emoji)} {content}" if content else escape_html(emoji)
        if is_blank_markup(content):
            content = EMPTY_PARAGRAPH

        inner = wrap_block("paragraph", f"<p>{content}</p>")
        markup = (
            '<div class="wp-block-group notion-callout">'
            f"{inner}{context.convert_children(block)}</div>"
        )

        attributes: dict = {"className": "notion-callout"}
        color = block_color(data)
        if color != "default":
            key = "background" if color.endswith("_background") else "text"
            attributes["style"] = {"color": {key: context.map_color(color)}}

        return wrap_block("group", markup, attributes)


class ToggleConverter(BlockConverter):
    block_types = frozenset({"toggle"})

    def convert(self, block: dict, context: ConversionContext) -> str:
        summary = render_rich_text(rich_text_of(block_data(block)))
        markup = (
            f'<details class="wp-block-details"><summary>{summary}</summary>'
            f"{context.convert_children(block)}</details>"
        )
        return wrap_block("details", markup)
