"""Helpers that read post fields out of a Notion page object.

Everything here is total: missing or malformed properties produce the
documented default rather than an exception.
"""

from __future__ import annotations

from typing import Any

from notionpress.models import ImportableItem

UNTITLED = "(Untitled)"

IMPORTABLE_OBJECTS = frozenset({"page", "database", "data_source"})


def extract_rich_text(rich_text: Any) -> str:
    """Concatenate the ``plain_text`` of every segment.

    >>> extract_rich_text([{"plain_text": "Hello "}, {"plain_text": "world"}])
    'Hello world'
    >>> extract_rich_text(None)
    ''
    """
    if not isinstance(rich_text, list):
        return ""
    return "".join(
        item["plain_text"]
        for item in rich_text
        if isinstance(item, dict) and isinstance(item.get("plain_text"), str)
    )


def extract_title(page: dict[str, Any]) -> str:
    """Return the page's title, or ``"(Untitled)"``.

    Pages carry the title as the one property of type ``title``;
    databases and data sources carry it as a top-level ``title`` rich
    text array.  An empty title counts as missing.
    """
    obj = page.get("object")
    title = ""
    if obj == "page":
        properties = page.get("properties")
        if isinstance(properties, dict):
            for prop in properties.values():
                if isinstance(prop, dict) and prop.get("type") == "title":
                    title = extract_rich_text(prop.get("title"))
                    break
    elif obj in ("database", "data_source"):
        title = extract_rich_text(page.get("title"))
    return title or UNTITLED


def extract_description(page: dict[str, Any]) -> str:
    return extract_rich_text(page.get("description"))


def extract_file_url(file: Any) -> str | None:
    """Return the URL of a Notion file object, or ``None``.

    ``file_upload`` objects need a separate API call to resolve and are
    reported as ``None``.
    """
    if not isinstance(file, dict):
        return None
    kind = file.get("type")
    if kind not in ("external", "file"):
        return None
    payload = file.get(kind)
    url = payload.get("url") if isinstance(payload, dict) else None
    return url if isinstance(url, str) and url else None


def extract_icon(page: dict[str, Any]) -> dict[str, str]:
    """Return icon metadata: ``icon_type`` plus ``icon_emoji`` or ``icon_url``."""
    icon = page.get("icon")
    if not isinstance(icon, dict):
        return {}
    if icon.get("type") == "emoji":
        emoji = icon.get("emoji")
        return {"icon_type": "emoji", "icon_emoji": emoji} if emoji else {}
    url = extract_file_url(icon)
    return {"icon_type": "file", "icon_url": url} if url else {}


def extract_meta(page: dict[str, Any]) -> dict[str, Any]:
    """Pass-through metadata stored alongside the post.

    ``archived`` and ``in_trash`` are always present; the other keys only
    when the page carries a value for them.
    """
    meta: dict[str, Any] = {
        "archived": page.get("archived") is True,
        "in_trash": page.get("in_trash") is True,
    }
    for key, name in (("url", "notion_url"), ("public_url", "public_url")):
        value = page.get(key)
        if value:
            meta[name] = value
    meta.update(extract_icon(page))
    cover = extract_file_url(page.get("cover"))
    if cover:
        meta["cover_url"] = cover
    description = extract_description(page)
    if description:
        meta["description"] = description
    for key in ("created_by", "last_edited_by"):
        user = page.get(key)
        if isinstance(user, dict) and user:
            meta[key] = user
    return meta


def parent_of(item: dict[str, Any]) -> tuple[str, str]:
    """Return ``(parent_type, parent_id)`` for a page or database.

    >>> parent_of({"parent": {"type": "page_id", "page_id": "abc"}})
    ('page_id', 'abc')
    >>> parent_of({"parent": {"type": "workspace", "workspace": True}})
    ('workspace', 'workspace')
    """
    parent = item.get("parent")
    if not isinstance(parent, dict):
        return "", ""
    kind = parent.get("type")
    if not isinstance(kind, str):
        return "", ""
    if kind == "workspace":
        return kind, "workspace"
    if kind in ("page_id", "database_id", "data_source_id", "block_id"):
        value = parent.get(kind)
        return kind, value if isinstance(value, str) else ""
    return kind, ""


def database_property_names(database: dict[str, Any]) -> list[tuple[str, str]]:
    properties = database.get("properties")
    if not isinstance(properties, dict):
        return []
    return [
        (name, prop.get("type", "") if isinstance(prop, dict) else "")
        for name, prop in properties.items()
    ]


def importable_item(item: Any) -> ImportableItem | None:
    """Summarise a search result for display, or ``None`` if it is not a
    page or database.
    """
    obj = item.get("object") if isinstance(item, dict) else None
    if not isinstance(obj, str) or obj not in IMPORTABLE_OBJECTS:
        return None
    parent_type, parent_id = parent_of(item)
    is_database = obj != "page"
    return ImportableItem(
        id=_text(item.get("id")),
        object=obj,
        title=extract_title(item),
        url=_text(item.get("url")),
        created_time=_text(item.get("created_time")),
        last_edited_time=_text(item.get("last_edited_time")),
        archived=item.get("archived") is True,
        parent_type=parent_type,
        parent_id=parent_id,
        description=extract_description(item) if is_database else "",
        property_names=database_property_names(item) if is_database else [],
    )


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""
