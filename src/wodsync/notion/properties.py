"""Notion property payloads for WOD records.

Database columns (the WOD database under the root page):
    Name      title      "2026-02-01 — Gym A — CrossFit"
    Date      date       ISO start date, the dedup scope
    Location  rich_text  location, first half of the dedup key
    Type      select     program, second half of the dedup key
    Source    url        fixed site URL
    WOD       rich_text  workout body

Notion caps a single rich_text item at 2000 characters; longer values are
split into several items, kept under SEGMENT_LIMIT for headroom.
"""

from typing import Any

from wodsync.models import DedupKey, WodEntry

SEGMENT_LIMIT = 1800
TITLE_LIMIT = 180

NAME = "Name"
DATE = "Date"
LOCATION = "Location"
TYPE = "Type"
SOURCE = "Source"
BODY = "WOD"


def segment(text: str, limit: int = SEGMENT_LIMIT) -> list[str]:
    """Split text into consecutive pieces of at most limit characters.

    "".join(segment(text)) == text for any text.
    """
    if limit <= 0:
        raise ValueError("limit must be positive")
    return [text[i : i + limit] for i in range(0, len(text), limit)]


def rich_text(content: str | None) -> list[dict[str, Any]]:
    """Rich text array for content; blank content becomes an empty array."""
    s = content or ""
    if not s.strip():
        return []
    return [{"type": "text", "text": {"content": chunk}} for chunk in segment(s)]


def plain_text(items: list[dict[str, Any]] | None) -> str:
    return "".join(item.get("plain_text", "") for item in items or [])


def record_title(iso_date: str, entry: WodEntry) -> str:
    return f"{iso_date} — {entry.location} — {entry.program}"[:TITLE_LIMIT]


def record_properties(iso_date: str, entry: WodEntry, source_url: str) -> dict[str, Any]:
    """Properties for a new database row holding entry."""
    return {
        NAME: {"title": rich_text(record_title(iso_date, entry))},
        DATE: {"date": {"start": iso_date}},
        LOCATION: {"rich_text": rich_text(entry.location)},
        TYPE: {"select": {"name": entry.program}},
        SOURCE: {"url": source_url},
        BODY: {"rich_text": rich_text(entry.body)},
    }


def date_filter(iso_date: str) -> dict[str, Any]:
    return {"property": DATE, "date": {"equals": iso_date}}


def record_key(page: dict[str, Any]) -> DedupKey:
    """Dedup key of an existing database row."""
    props = page.get("properties") or {}
    location = plain_text((props.get(LOCATION) or {}).get("rich_text"))
    select = (props.get(TYPE) or {}).get("select") or {}
    return DedupKey(location, select.get("name") or "")
