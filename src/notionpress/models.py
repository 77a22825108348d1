"""Public data models for notionpress.

Notion blocks themselves stay plain ``dict`` objects exactly as the API
returns them.  This module holds the types the pipeline creates on top of
them: rich-text spans, grouped list runs, post payloads, and import
results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Conversion types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RichTextSpan:
    """One run of text sharing a single combination of inline formatting.

    Attributes
    ----------
    plain_text:
        The raw, unescaped text.
    bold, italic, strikethrough, underline, code:
        Independent annotation flags.
    href:
        Optional link target.
    """

    plain_text: str
    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    code: bool = False
    href: str | None = None

    @classmethod
    def from_notion(cls, segment: dict[str, Any]) -> RichTextSpan:
        """Build a span from a Notion rich_text object.

        API responses carry ``plain_text``; locally built segments only
        have ``text.content``.  Missing or wrongly typed keys default to
        empty.
        """
        text = segment.get("plain_text")
        if not isinstance(text, str) or not text:
            inner = segment.get("text")
            text = inner.get("content") if isinstance(inner, dict) else None
        annotations = segment.get("annotations")
        if not isinstance(annotations, dict):
            annotations = {}
        href = segment.get("href")
        return cls(
            plain_text=text if isinstance(text, str) else "",
            bold=bool(annotations.get("bold", False)),
            italic=bool(annotations.get("italic", False)),
            strikethrough=bool(annotations.get("strikethrough", False)),
            underline=bool(annotations.get("underline", False)),
            code=bool(annotations.get("code", False)),
            href=href if isinstance(href, str) and href else None,
        )


@dataclass(frozen=True)
class GroupedBlock:
    """A run of consecutive sibling list blocks of the same type.

    Produced only by :func:`notionpress.converter.grouping.group_blocks`
    and discarded once converted.

    Attributes
    ----------
    type:
        The shared Notion block type of every member.
    members:
        The original block dicts, in source order.
    """

    type: str
    members: tuple[dict, ...]

    is_grouped: bool = field(default=True, init=False)


@dataclass
class ConversionWarning:
    """A non-fatal issue encountered during conversion.

    Attributes
    ----------
    code:
        Machine-readable warning code (e.g. ``"UNSUPPORTED_BLOCK"``).
    message:
        Human-readable description.
    context:
        Arbitrary structured data for diagnostics.
    """

    code: str
    message: str
    context: dict = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Import types
# ---------------------------------------------------------------------------

@dataclass
class ImportableItem:
    """A page or database found in the workspace, ready to offer for import.

    Attributes
    ----------
    id:
        Notion object ID.
    object:
        ``"page"``, ``"database"`` or ``"data_source"``.
    title:
        Plain-text title, ``"(Untitled)"`` when empty.
    url:
        Notion URL (empty when absent).
    created_time, last_edited_time:
        Notion timestamps copied verbatim.
    archived:
        Whether Notion reports the object as archived.
    parent_type, parent_id:
        Parent kind (``page_id``, ``database_id``, ``workspace``...) and
        its ID; ``"workspace"`` for top-level items.
    description:
        Plain-text description (databases only).
    property_names:
        ``(name, type)`` pairs of the database schema (databases only).
    """

    id: str
    object: str
    title: str
    url: str = ""
    created_time: str = ""
    last_edited_time: str = ""
    archived: bool = False
    parent_type: str = ""
    parent_id: str = ""
    description: str = ""
    property_names: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class PostPayload:
    """Everything a post sink needs to create or update one post.

    Attributes
    ----------
    source_id:
        The Notion page ID the post was built from.  Sinks key their
        ``source_id -> target_id`` mapping on it.
    title:
        Plain-text post title.
    content:
        Gutenberg block markup.
    status, post_type, author:
        WordPress post defaults taken from configuration.
    created_time, modified_time:
        Notion timestamps copied verbatim (ISO-8601 strings).
    meta:
        Pass-through page metadata (Notion URL, icon, cover).
    """

    source_id: str
    title: str
    content: str
    status: str = "draft"
    post_type: str = "post"
    author: int | None = None
    created_time: str | None = None
    modified_time: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)


@dataclass
class ImportResult:
    """Outcome of importing a single Notion page.

    Exactly one of ``target_id`` and ``error`` is set.
    """

    source_id: str
    target_id: Any | None = None
    error: str | None = None
    error_code: str | None = None
    warnings: list[ConversionWarning] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchImportResult:
    """Aggregated outcome of importing many pages.

    Partial success is the normal case: inspect both lists.
    """

    successes: list[ImportResult] = field(default_factory=list)
    failures: list[ImportResult] = field(default_factory=list)

    def add(self, result: ImportResult) -> None:
        if result.ok:
            self.successes.append(result)
        else:
            self.failures.append(result)

    @property
    def total(self) -> int:
        return len(self.successes) + len(self.failures)
