"""List and to-do converters.

Both accept a :class:`~notionpress.models.GroupedBlock` (the normal case,
one Gutenberg list per run of items) or a lone item dict, which renders as
a single-item list.
"""

from __future__ import annotations

from notionpress.converter.base import (
    BlockConverter,
    ConversionContext,
    Node,
    block_color,
    block_data,
    color_class,
    node_type,
    wrap_block,
)
from notionpress.converter.rich_text import render_rich_text, rich_text_of
from notionpress.models import GroupedBlock

CHECKED_GLYPH = "☑"
UNCHECKED_GLYPH = "☐"


def _members(node: Node) -> tuple[dict, ...]:
    if isinstance(node, GroupedBlock):
        return node.members
    return (node,)


def _list_color(items: tuple[dict, ...]) -> str:
    # The first item with a non-default color decides for the whole list.
    for item in items:
        color = block_color(block_data(item))
        if color != "default":
            return color
    return ""


class ListConverter(BlockConverter):
    """Bulleted and numbered lists."""

    block_types = frozenset({"bulleted_list_item", "numbered_list_item"})

    def convert(self, block: Node, context: ConversionContext) -> str:
        items = _members(block)
        if not items:
            return ""

        ordered = node_type(block) == "numbered_list_item"
        tag = "ol" if ordered else "ul"
        body = "".join(self._render_item(item, context) for item in items)

        attributes: dict = {"ordered": ordered}
        css = color_class(_list_color(items))
        if css:
            attributes["className"] = css

        return wrap_block("list", f"<{tag}>{body}</{tag}>", attributes)

    def _render_item(self, item: dict, context: ConversionContext) -> str:
        content = render_rich_text(rich_text_of(block_data(item)))
        return f"<li>{content}{context.convert_children(item)}</li>"


class TodoConverter(BlockConverter):
    """Checklists, rendered as a bulleted list with check glyphs."""

    block_types = frozenset({"to_do"})

    def convert(self, block: Node, context: ConversionContext) -> str:
        items = _members(block)
        if not items:
            return ""

        body = "".join(self._render_item(item, context) for item in items)
        return wrap_block("list", f"<ul>{body}</ul>", {"className": "notion-todo-list"})

    def _render_item(self, item: dict, context: ConversionContext) -> str:
        data = block_data(item)
        glyph = CHECKED_GLYPH if data.get("checked") else UNCHECKED_GLYPH
        content = render_rich_text(rich_text_of(data))
        return f"<li>{glyph} {content}{context.convert_children(item)}</li>"
