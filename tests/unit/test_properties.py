"""Property-based tests for notionpress using Hypothesis.

These check the invariants of the inline renderer, the sibling grouper
and converter dispatch over a wide range of generated inputs.
"""

from __future__ import annotations

import html
import re
import string

from hypothesis import given
from hypothesis import strategies as st

from notionpress.converter.grouping import GROUPABLE_TYPES, group_blocks
from notionpress.converter.registry import build_default_registry
from notionpress.converter.rich_text import plain_text, render_rich_text, render_span
from notionpress.models import GroupedBlock, RichTextSpan

# ---------------------------------------------------------------------------
# Reusable strategies
# ---------------------------------------------------------------------------

_ORDER = ["code", "strong", "em", "s", "u", "a"]

_span_st = st.builds(
    RichTextSpan,
    plain_text=st.text(min_size=1, max_size=40),
    bold=st.booleans(),
    italic=st.booleans(),
    strikethrough=st.booleans(),
    underline=st.booleans(),
    code=st.booleans(),
    href=st.one_of(st.none(), st.just("https://example.com/x")),
)

_segment_st = st.builds(
    lambda text, bold, italic: {
        "type": "text",
        "plain_text": text,
        "annotations": {"bold": bold, "italic": italic},
    },
    st.text(max_size=30),
    st.booleans(),
    st.booleans(),
)

_block_type_st = st.sampled_from(
    ["bulleted_list_item", "numbered_list_item", "to_do", "paragraph", "divider", "quote"]
)

# Every type some built-in converter handles.
_KNOWN_TYPES = {
    "paragraph", "heading_1", "heading_2", "heading_3", "quote", "code",
    "divider", "callout", "toggle", "bulleted_list_item", "numbered_list_item",
    "to_do", "table", "table_row", "image", "video", "audio", "file", "pdf",
    "bookmark", "link_preview", "embed",
}

_unknown_type_st = st.one_of(
    st.text(alphabet=string.ascii_lowercase + "_", min_size=1, max_size=24),
    st.text(min_size=1, max_size=24),
).filter(lambda t: t not in _KNOWN_TYPES)

# Arbitrary JSON-like values, used where a payload field has the wrong type.
_json_st = st.recursive(
    st.none() | st.booleans() | st.integers() | st.floats(allow_nan=False) | st.text(max_size=8),
    lambda children: st.lists(children, max_size=3) | st.dictionaries(st.text(max_size=6), children, max_size=3),
    max_leaves=8,
)

_bad_segment_st = st.fixed_dictionaries(
    {},
    optional={
        "plain_text": _json_st,
        "text": _json_st,
        "annotations": st.one_of(_json_st, st.dictionaries(
            st.sampled_from(["bold", "italic", "strikethrough", "underline", "code"]), _json_st
        )),
        "href": _json_st,
    },
)

_rich_text_st = st.one_of(_json_st, st.lists(st.one_of(_bad_segment_st, _json_st), max_size=3))

_PAYLOAD_KEYS = (
    "color", "icon", "name", "language", "url", "external", "file",
    "checked", "is_toggleable", "has_column_header", "has_row_header", "cells", "type",
)

_payload_st = st.one_of(
    _json_st,
    st.fixed_dictionaries(
        {},
        optional={
            "rich_text": _rich_text_st,
            "caption": _rich_text_st,
            **{key: _json_st for key in _PAYLOAD_KEYS},
        },
    ),
)


def _malformed_block(block_type, payload, children, extra_type):
    block = {"type": block_type if extra_type is None else extra_type, block_type: payload}
    if children is not None:
        block["children"] = children
    return block


_malformed_block_st = st.builds(
    _malformed_block,
    st.sampled_from(sorted(_KNOWN_TYPES)),
    _payload_st,
    st.one_of(st.none(), _json_st, st.lists(st.dictionaries(st.sampled_from(["type", "paragraph"]), _json_st), max_size=2)),
    st.one_of(st.none(), _json_st),
)


def _decode_comment(out: str) -> str:
    body = re.fullmatch(r"<!-- Unsupported Notion block type: (.*) -->\n", out, re.DOTALL).group(1)
    return re.sub(r"\\(\\|u002d)", lambda m: "\\" if m.group(1) == "\\" else "-", body)


_registry = build_default_registry()


# ---------------------------------------------------------------------------
# Rich text renderer
# ---------------------------------------------------------------------------

@given(st.text(min_size=1, max_size=200))
def test_unannotated_span_is_escaped_text(text):
    assert render_span(RichTextSpan(text)) == html.escape(text, quote=True)


@given(_span_st)
def test_annotation_nesting_order_is_fixed(span):
    tags = re.findall(r"<(/?)(code|strong|em|s|u|a)\b", render_span(span))
    opening = [name for slash, name in tags if not slash]
    # Outermost first, so the expected order is the reverse of _ORDER.
    expected = [name for name in reversed(_ORDER) if name in opening]
    assert opening == expected
    closing = [name for slash, name in tags if slash]
    assert closing == list(reversed(opening))


@given(st.lists(_segment_st, max_size=10))
def test_plain_text_matches_segment_text(segments):
    assert plain_text(segments) == "".join(s["plain_text"] for s in segments)


@given(st.lists(_segment_st, max_size=10))
def test_render_never_leaks_raw_angle_brackets(segments):
    rendered = render_rich_text(segments)
    stripped = re.sub(r"</?(strong|em)>", "", rendered)
    assert "<" not in stripped and ">" not in stripped


# ---------------------------------------------------------------------------
# Sibling grouper
# ---------------------------------------------------------------------------

@given(st.lists(_block_type_st, max_size=30))
def test_grouping_preserves_blocks_in_order(types):
    blocks = [{"type": t, "id": str(i)} for i, t in enumerate(types)]
    flattened: list[dict] = []
    for node in group_blocks(blocks):
        if isinstance(node, GroupedBlock):
            flattened.extend(node.members)
        else:
            flattened.append(node)
    assert flattened == blocks


@given(st.lists(_block_type_st, max_size=30))
def test_groups_are_maximal_same_type_runs(types):
    nodes = group_blocks([{"type": t} for t in types])
    for node in nodes:
        if isinstance(node, GroupedBlock):
            assert node.type in GROUPABLE_TYPES
            assert all(m["type"] == node.type for m in node.members)
        else:
            assert node["type"] not in GROUPABLE_TYPES
    for left, right in zip(nodes, nodes[1:]):
        if isinstance(left, GroupedBlock) and isinstance(right, GroupedBlock):
            assert left.type != right.type


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

@given(_unknown_type_st)
def test_dispatch_is_total(block_type):
    out = _registry.convert_tree([{"type": block_type, "id": "x"}])
    assert out
    assert out.count("-->") == 1
    assert _decode_comment(out) == block_type


@given(st.lists(st.one_of(_block_type_st, _unknown_type_st), max_size=15))
def test_malformed_payloads_never_raise(types):
    blocks = [{"type": t} for t in types]
    assert isinstance(_registry.convert_tree(blocks), str)


@given(st.lists(_malformed_block_st, max_size=5))
def test_wrong_typed_payload_values_never_raise(blocks):
    assert isinstance(_registry.convert_tree(blocks), str)


@given(_bad_segment_st)
def test_wrong_typed_segment_degrades_to_text_or_empty(segment):
    span = RichTextSpan.from_notion(segment)
    assert isinstance(span.plain_text, str)
    assert span.href is None or isinstance(span.href, str)
    assert isinstance(render_rich_text([segment]), str)
