"""Shared pieces for block converters.

:class:`BlockConverter` is the base every converter extends.
:class:`ConversionContext` is threaded through each ``convert`` call and is
the only way a converter reaches the registry, so converters never look up
global state.

The module-level helpers cover what most converters need: reading a
block's type payload and children with safe defaults, resolving media
URLs, and serialising Gutenberg block comments.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Union

from notionpress.errors import NotionpressDepthError
from notionpress.models import ConversionWarning, GroupedBlock

if TYPE_CHECKING:
    from .registry import ConverterRegistry

Node = Union[dict, GroupedBlock]

DEFAULT_PRIORITY = 10


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------

@dataclass
class ConversionContext:
    """Per-conversion state passed to every converter.

    Attributes
    ----------
    registry:
        The registry that dispatched the current block; used to convert
        children.
    color_mappings:
        Notion color name to CSS color value.
    depth:
        Nesting depth of the blocks currently being converted.  Top-level
        page blocks are depth 0.
    max_depth:
        Deepest level that may be converted.
    warnings:
        Shared list collecting non-fatal issues for the whole conversion.
    """

    registry: ConverterRegistry
    color_mappings: dict[str, str] = field(default_factory=dict)
    depth: int = 0
    max_depth: int = 32
    warnings: list[ConversionWarning] = field(default_factory=list)

    def child(self) -> ConversionContext:
        """Return a context one level deeper, sharing the warning list."""
        return replace(self, depth=self.depth + 1)

    def convert_children(self, block: dict) -> str:
        """Convert *block*'s children one level deeper.

        Returns ``""`` for a block without children.

        Raises
        ------
        NotionpressDepthError
            If the children sit deeper than :attr:`max_depth`.
        """
        children = block_children(block)
        if not children:
            return ""
        if self.depth + 1 > self.max_depth:
            raise NotionpressDepthError(
                message=f"Block nesting exceeds max_depth={self.max_depth}",
                context={
                    "depth": self.depth + 1,
                    "max_depth": self.max_depth,
                    "block_id": block.get("id", ""),
                },
            )
        return self.registry.convert_tree(children, self.child())

    def map_color(self, color: str) -> str:
        """Translate a Notion color name, falling back to the name itself."""
        return self.color_mappings.get(color, color)

    def warn(self, code: str, message: str, **context: Any) -> None:
        self.warnings.append(ConversionWarning(code=code, message=message, context=context))


# ---------------------------------------------------------------------------
# Converter base class
# ---------------------------------------------------------------------------

class BlockConverter(ABC):
    """Base class for block converters.

    Subclasses implement :meth:`supports` and :meth:`convert` and may
    override :attr:`priority` (higher runs earlier).
    """

    priority: int = DEFAULT_PRIORITY

    #: Notion block types this converter handles.  Used by the default
    #: :meth:`supports`.
    block_types: frozenset[str] = frozenset()

    def supports(self, block: Node) -> bool:
        """Return True if this converter can convert *block*."""
        return node_type(block) in self.block_types

    @abstractmethod
    def convert(self, block: Node, context: ConversionContext) -> str:
        """Convert *block* to Gutenberg markup."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(priority={self.priority})"


# ---------------------------------------------------------------------------
# Block access helpers
# ---------------------------------------------------------------------------

def node_type(node: Any) -> str:
    """Return the block type of a block dict or grouped node, or ``""``."""
    if isinstance(node, GroupedBlock):
        return node.type
    if isinstance(node, dict):
        value = node.get("type")
        return value if isinstance(value, str) else ""
    return ""


def block_data(block: dict) -> dict:
    """Return the type-keyed payload of *block*, or ``{}``."""
    data = block.get(node_type(block)) if isinstance(block, dict) else None
    return data if isinstance(data, dict) else {}


def block_children(block: dict) -> list[dict]:
    """Return *block*'s children.

    Children fetched by :class:`~notionpress.importer.NotionContentSource`
    live under ``block["children"]``; locally built blocks may carry them
    inside the type payload instead.
    """
    if not isinstance(block, dict):
        return []
    children = block.get("children") or block_data(block).get("children")
    return children if isinstance(children, list) else []


def block_color(data: dict) -> str:
    """Return the Notion color named in *data*, or ``"default"``."""
    color = data.get("color") if isinstance(data, dict) else None
    return color if isinstance(color, str) and color else "default"


def color_class(color: Any) -> str:
    """Return the Gutenberg color class for a Notion color, or ``""``."""
    if not isinstance(color, str) or not color or color == "default":
        return ""
    return f"has-{color.replace('_', '-')}-color"


def resolve_file_url(payload: dict) -> str:
    """Return the URL of a Notion file object.

    The first non-empty of ``external.url`` and ``file.url`` wins.
    ``file_upload`` objects have no URL until fetched separately and
    resolve to ``""``.
    """
    if not isinstance(payload, dict):
        return ""
    for key in ("external", "file"):
        source = payload.get(key)
        if isinstance(source, dict):
            url = source.get("url")
            if isinstance(url, str) and url.strip():
                return url.strip()
    return ""


# ---------------------------------------------------------------------------
# Gutenberg serialisation
# ---------------------------------------------------------------------------

def block_comment_attrs(attributes: dict[str, Any] | None) -> str:
    """Serialise block attributes the way the block editor writes them."""
    if not attributes:
        return ""
    encoded = json.dumps(attributes, ensure_ascii=False, separators=(",", ":"))
    # "--" would terminate the surrounding HTML comment.
    encoded = encoded.replace("--", "\\u002d\\u002d")
    return " " + encoded


def wrap_block(name: str, content: str, attributes: dict[str, Any] | None = None) -> str:
    """Wrap *content* in ``<!-- wp:name -->`` delimiters.

    Parameters
    ----------
    name:
        Block name.  Core blocks use the bare name (``"paragraph"``).
    content:
        Inner HTML.
    attributes:
        Block attributes; omitted from the comment when empty.
    """
    attrs = block_comment_attrs(attributes)
    return f"<!-- wp:{name}{attrs} -->\n{content}\n<!-- /wp:{name} -->\n"
