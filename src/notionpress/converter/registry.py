"""Converter registry and dispatch.

The registry holds converters ordered by descending priority, ties broken
by registration order.  :meth:`ConverterRegistry.convert_block` hands a
block to the first converter whose ``supports`` returns True.  The
default set ends with :class:`~notionpress.converter.blocks.UnsupportedConverter`,
which supports everything, so every block produces output.

Registries are ordinary objects.  Build one with
:func:`build_default_registry` at start-up and pass it to whatever needs
it; once shared it is only read, so it is safe to reuse across threads
and concurrent imports.

Usage::

    from notionpress.converter import build_default_registry

    registry = build_default_registry()
    markup = registry.convert_tree(blocks)
"""

from __future__ import annotations

import logging
from typing import Any

from notionpress.config import NotionpressConfig
from notionpress.models import ConversionWarning
from notionpress.observability import MetricsHook, get_logger, log_event, resolve_metrics

from .base import BlockConverter, ConversionContext, Node, node_type
from .grouping import group_blocks

log = get_logger("notionpress.converter")

# Emitted if a custom registry lacks a catch-all converter.
_NO_CONVERTER = "<!-- Unsupported Notion block type: {type} -->\n"


class ConverterRegistry:
    """Priority-ordered collection of block converters.

    Parameters
    ----------
    config:
        Supplies ``color_mappings``, ``max_depth`` and the metrics hook.
        Defaults to ``NotionpressConfig()``.
    """

    def __init__(self, config: NotionpressConfig | None = None) -> None:
        self._config = config or NotionpressConfig()
        self._metrics = resolve_metrics(self._config.metrics)
        self._entries: list[tuple[int, int, BlockConverter]] = []

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, converter: BlockConverter) -> None:
        """Add *converter*, keeping the list in dispatch order."""
        self._entries.append((converter.priority, len(self._entries), converter))
        self._entries.sort(key=lambda entry: (-entry[0], entry[1]))

    @property
    def converters(self) -> list[BlockConverter]:
        """Registered converters in dispatch order."""
        return [entry[2] for entry in self._entries]

    @property
    def metrics(self) -> MetricsHook:
        """The metrics hook converters report through."""
        return self._metrics

    def find_converter(self, block: Node) -> BlockConverter | None:
        for _, _, converter in self._entries:
            if converter.supports(block):
                return converter
        return None

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def new_context(self, warnings: list[ConversionWarning] | None = None) -> ConversionContext:
        """Return a top-level context bound to this registry."""
        return ConversionContext(
            registry=self,
            color_mappings=self._config.resolved_color_mappings(),
            depth=0,
            max_depth=self._config.max_depth,
            warnings=warnings if warnings is not None else [],
        )

    def convert_block(self, block: Node, context: ConversionContext | None = None) -> str:
        """Convert a single block (or grouped node) to Gutenberg markup."""
        if context is None:
            context = self.new_context()

        converter = self.find_converter(block)
        block_type = node_type(block) or "unknown"
        if converter is None:
            return _NO_CONVERTER.format(type=block_type)

        self._metrics.increment(
            "notionpress.blocks_converted_total",
            tags={"type": block_type, "converter": type(converter).__name__},
        )
        return converter.convert(block, context)

    def convert_tree(
        self,
        blocks: list[dict] | None,
        context: ConversionContext | None = None,
    ) -> str:
        """Group *blocks* and convert each resulting node, in order.

        Parameters
        ----------
        blocks:
            Sibling blocks with their children already attached.
        context:
            Conversion context.  A fresh top-level context is created
            when omitted.

        Raises
        ------
        NotionpressDepthError
            If the tree is nested deeper than ``config.max_depth``.
        """
        if context is None:
            context = self.new_context()

        return "".join(self.convert_block(node, context) for node in group_blocks(blocks))

    def convert_page(self, blocks: list[dict] | None) -> tuple[str, list[ConversionWarning]]:
        """Convert a page's top-level blocks and return markup plus warnings."""
        context = self.new_context()
        markup = self.convert_tree(blocks, context)
        if context.warnings:
            log_event(
                log,
                logging.DEBUG,
                "conversion produced warnings",
                op="convert_page",
                warnings=len(context.warnings),
            )
        return markup, context.warnings

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ConverterRegistry({self.converters!r})"


def build_default_registry(config: NotionpressConfig | None = None, **kwargs: Any) -> ConverterRegistry:
    """Return a registry loaded with the built-in converters.

    Parameters
    ----------
    config:
        Configuration for the registry.
    **kwargs:
        Forwarded to :class:`NotionpressConfig` when *config* is omitted.
    """
    from .blocks import DEFAULT_CONVERTERS

    registry = ConverterRegistry(config or NotionpressConfig(**kwargs))
    for converter_cls in DEFAULT_CONVERTERS:
        registry.register(converter_cls())
    return registry
