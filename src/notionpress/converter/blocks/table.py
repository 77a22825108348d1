"""Table converter.

A Notion ``table`` block stores only its shape (``table_width``,
``has_column_header``, ``has_row_header``); the data lives in ``table_row``
children whose ``cells`` are lists of rich_text arrays.
"""

from __future__ import annotations

from notionpress.converter.base import (
    BlockConverter,
    ConversionContext,
    block_children,
    block_data,
    node_type,
    wrap_block,
)
from notionpress.converter.rich_text import render_rich_text


def render_row(row: dict, header: bool = False, row_header: bool = False) -> str:
    """Render one ``table_row`` block as ``<tr>``.

    Each cell is rendered independently.  With *row_header*, the first
    cell of a body row becomes a ``<th>``.
    """
    cells = block_data(row).get("cells")
    if not isinstance(cells, list):
        cells = []

    parts: list[str] = []
    for index, cell in enumerate(cells):
        tag = "th" if header or (row_header and index == 0) else "td"
        content = render_rich_text(cell if isinstance(cell, list) else [])
        parts.append(f"<{tag}>{content}</{tag}>")
    return "<tr>" + "".join(parts) + "</tr>"


class TableConverter(BlockConverter):
    block_types = frozenset({"table", "table_row"})

    def convert(self, block: dict, context: ConversionContext) -> str:
        if node_type(block) == "table_row":
            return render_row(block)

        data = block_data(block)
        has_header = bool(data.get("has_column_header"))
        row_header = bool(data.get("has_row_header"))
        rows = [row for row in block_children(block) if node_type(row) == "table_row"]

        markup = '<figure class="wp-block-table"><table>'
        if has_header and rows:
            markup += f"<thead>{render_row(rows[0], header=True)}</thead>"
            rows = rows[1:]
        if rows:
            body = "".join(render_row(row, row_header=row_header) for row in rows)
            markup += f"<tbody>{body}</tbody>"
        markup += "</table></figure>"

        return wrap_block("table", markup)
