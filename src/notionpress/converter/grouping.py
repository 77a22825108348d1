"""Sibling grouping for list-like blocks.

Notion stores each list item as its own sibling block.  Converting them
one by one would produce a separate Gutenberg list per item, so before
dispatch every run of consecutive same-type list items is folded into a
single :class:`~notionpress.models.GroupedBlock`.
"""

from __future__ import annotations

from typing import Union

from notionpress.models import GroupedBlock

GROUPABLE_TYPES: frozenset[str] = frozenset({
    "bulleted_list_item",
    "numbered_list_item",
    "to_do",
})

Node = Union[dict, GroupedBlock]


def group_blocks(blocks: list[dict] | None) -> list[Node]:
    """Fold runs of consecutive same-type list items into grouped nodes.

    A single left-to-right pass.  Any block whose type differs from the
    current run's type (including another groupable type) ends the run.
    Non-groupable blocks are returned unchanged, order is preserved, and
    children are left alone: each child list is grouped separately when
    it is converted.

    Examples
    --------
    >>> [type(n).__name__ for n in group_blocks([
    ...     {"type": "paragraph"},
    ...     {"type": "to_do"},
    ...     {"type": "to_do"},
    ... ])]
    ['dict', 'GroupedBlock']
    """
    if not blocks:
        return []

    grouped: list[Node] = []
    i = 0
    count = len(blocks)

    while i < count:
        block = blocks[i]
        block_type = block.get("type") if isinstance(block, dict) else None

        if not isinstance(block_type, str) or block_type not in GROUPABLE_TYPES:
            grouped.append(block)
            i += 1
            continue

        start = i
        i += 1
        while i < count and isinstance(blocks[i], dict) and blocks[i].get("type") == block_type:
            i += 1

        grouped.append(GroupedBlock(type=block_type, members=tuple(blocks[start:i])))

    return grouped
