"""Tests for notionpress/converter/rich_text.py."""

from __future__ import annotations

import pytest

from notionpress.converter.rich_text import (
    EMPTY_PARAGRAPH,
    escape_html,
    escape_url,
    is_blank_markup,
    plain_text,
    render_rich_text,
    render_span,
    rich_text_of,
)
from notionpress.models import RichTextSpan


def seg(text: str, href: str | None = None, **annotations) -> dict:
    segment = {
        "type": "text",
        "plain_text": text,
        "text": {"content": text},
        "annotations": annotations,
    }
    if href is not None:
        segment["href"] = href
    return segment


# ---------------------------------------------------------------------------
# Escaping
# ---------------------------------------------------------------------------

class TestEscapeHtml:
    def test_escapes_markup_characters(self):
        assert escape_html('<a href="x">&</a>') == "&lt;a href=&quot;x&quot;&gt;&amp;&lt;/a&gt;"

    def test_plain_text_unchanged(self):
        assert escape_html("hello world") == "hello world"


class TestEscapeUrl:
    @pytest.mark.parametrize("url", [
        "https://example.com/a?b=1",
        "http://example.com",
        "mailto:someone@example.com",
        "tel:+15551234",
    ])
    def test_allowed_schemes_kept(self, url):
        assert escape_url(url) == url

    def test_ampersand_escaped(self):
        assert escape_url("https://example.com/?a=1&b=2") == "https://example.com/?a=1&amp;b=2"

    @pytest.mark.parametrize("url", [
        "javascript:alert(1)",
        "JavaScript:alert(1)",
        "java\tscript:alert(1)",
        "data:text/html;base64,PHNjcmlwdD4=",
        "vbscript:msgbox",
    ])
    def test_dangerous_schemes_dropped(self, url):
        assert escape_url(url) == ""

    def test_relative_url_kept(self):
        assert escape_url("/wiki/page#section") == "/wiki/page#section"

    @pytest.mark.parametrize("url", [None, "", "   "])
    def test_empty_values(self, url):
        assert escape_url(url) == ""


# ---------------------------------------------------------------------------
# Span rendering
# ---------------------------------------------------------------------------

class TestRenderSpan:
    def test_no_annotations_is_escaped_text(self):
        assert render_span(RichTextSpan("a < b")) == "a &lt; b"

    def test_empty_text_renders_nothing(self):
        assert render_span(RichTextSpan("", bold=True, href="https://x.test")) == ""

    @pytest.mark.parametrize("attr,tag", [
        ("code", "code"),
        ("bold", "strong"),
        ("italic", "em"),
        ("strikethrough", "s"),
        ("underline", "u"),
    ])
    def test_single_annotation(self, attr, tag):
        span = RichTextSpan("x", **{attr: True})
        assert render_span(span) == f"<{tag}>x</{tag}>"

    def test_all_annotations_nest_in_fixed_order(self):
        span = RichTextSpan(
            "x",
            bold=True,
            italic=True,
            strikethrough=True,
            underline=True,
            code=True,
            href="https://example.com",
        )
        assert render_span(span) == (
            '<a href="https://example.com"><u><s><em><strong><code>x'
            "</code></strong></em></s></u></a>"
        )

    def test_subset_keeps_relative_order(self):
        span = RichTextSpan("x", underline=True, code=True)
        assert render_span(span) == "<u><code>x</code></u>"

    def test_unsafe_link_rendered_as_text(self):
        span = RichTextSpan("click", href="javascript:alert(1)")
        assert render_span(span) == "click"


class TestRenderRichText:
    def test_concatenates_segments(self):
        result = render_rich_text([seg("Hello "), seg("world", bold=True)])
        assert result == "Hello <strong>world</strong>"

    def test_link_segment(self):
        result = render_rich_text([seg("docs", href="https://example.com/docs")])
        assert result == '<a href="https://example.com/docs">docs</a>'

    def test_text_content_used_without_plain_text(self):
        result = render_rich_text([{"type": "text", "text": {"content": "local"}}])
        assert result == "local"

    def test_accepts_spans(self):
        assert render_rich_text([RichTextSpan("a", italic=True)]) == "<em>a</em>"

    @pytest.mark.parametrize("value", [None, [], "not a list", {"plain_text": "x"}, 42])
    def test_non_list_input_renders_empty(self, value):
        assert render_rich_text(value) == ""

    def test_malformed_segments_skipped(self):
        assert render_rich_text([None, "junk", seg("ok")]) == "ok"


class TestPlainText:
    def test_ignores_annotations(self):
        assert plain_text([seg("<b>", bold=True), seg(" & more")]) == "<b> & more"

    def test_non_list(self):
        assert plain_text(None) == ""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestHelpers:
    def test_placeholder_value(self):
        assert EMPTY_PARAGRAPH == "&nbsp;"

    @pytest.mark.parametrize("markup,blank", [
        ("", True),
        ("   ", True),
        ("<strong></strong>", True),
        ("<em> </em>", True),
        ("<em>x</em>", False),
    ])
    def test_is_blank_markup(self, markup, blank):
        assert is_blank_markup(markup) is blank

    def test_rich_text_of_defaults(self):
        assert rich_text_of({}) == []
        assert rich_text_of({"rich_text": "nope"}) == []
        assert rich_text_of({"caption": [seg("c")]}, "caption") == [seg("c")]
