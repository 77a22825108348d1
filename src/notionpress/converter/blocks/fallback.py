"""Catch-all converter for block types nothing else handles."""

from __future__ import annotations

import logging

from notionpress.converter.base import BlockConverter, ConversionContext, Node, node_type
from notionpress.observability import get_logger, log_event

log = get_logger("notionpress.converter")


def comment_safe(text: str) -> str:
    r"""Make *text* safe inside an HTML comment, reversibly.

    ``--`` is the only sequence that can end or corrupt a comment; it is
    written as ``\u002d\u002d``, the escape :func:`block_comment_attrs`
    uses.  Backslashes are doubled so the original text can be recovered.

    >>> comment_safe("a--b")
    'a\\u002d\\u002db'
    """
    return text.replace("\\", "\\\\").replace("--", "\\u002d\\u002d")


class UnsupportedConverter(BlockConverter):
    """Emit a visible HTML comment naming the unrecognised block type.

    Lowest priority and supports every block, so dispatch never falls
    through.
    """

    priority = 1

    def supports(self, block: Node) -> bool:
        return True

    def convert(self, block: Node, context: ConversionContext) -> str:
        block_type = node_type(block) or "unknown"
        block_id = block.get("id", "") if isinstance(block, dict) else ""

        context.warn(
            "UNSUPPORTED_BLOCK",
            f"No converter for Notion block type: {block_type}",
            block_id=block_id,
            block_type=block_type,
        )
        context.registry.metrics.increment(
            "notionpress.unsupported_blocks_total",
            tags={"type": block_type},
        )
        log_event(
            log,
            logging.DEBUG,
            "unsupported block",
            op="convert_block",
            block_type=block_type,
            block_id=block_id,
        )
        return f"<!-- Unsupported Notion block type: {comment_safe(block_type)} -->\n"
