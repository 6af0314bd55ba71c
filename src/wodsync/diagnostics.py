"""Read-only inspection of the Notion side, for setting up the integration.

Answers the two questions that come up when the sync fails with a
DiscoveryError or a property error: what is actually under the root page, and
what columns does the database have.
"""

import re
from collections import Counter
from typing import Any

from pydantic import BaseModel, Field

from wodsync.notion.client import NotionClient
from wodsync.notion.properties import plain_text
from wodsync.sync import find_child_database

SAMPLE_SIZE = 40
SAMPLE_TEXT_LIMIT = 120

DATE_LIKE = re.compile(r"(\d{4}-\d{2}-\d{2}|\d{2}/\d{2}/\d{4})")


class BlockSample(BaseModel):
    id: str
    type: str
    text: str


class PageSummary(BaseModel):
    """Child blocks of a page, aggregated."""

    total: int = 0
    types: dict[str, int] = Field(default_factory=dict)  # most common first
    samples: list[BlockSample] = Field(default_factory=list)
    date_block: BlockSample | None = None


class DatabaseSchema(BaseModel):
    id: str
    title: str
    properties: dict[str, str]  # column name -> Notion property type
    title_property: str | None = None


def block_text(block: dict[str, Any]) -> str:
    """Plain text of a block's rich_text payload, '' for other blocks."""
    payload = block.get(block.get("type", "")) or {}
    items = payload.get("rich_text") if isinstance(payload, dict) else None
    if not isinstance(items, list):
        return ""
    return plain_text(items)


def summarize_page(client: NotionClient, page_id: str) -> PageSummary:
    """Count child block types and sample the first blocks of page_id."""
    counts: Counter[str] = Counter()
    samples: list[BlockSample] = []

    for block in client.list_block_children(page_id):
        counts[block.get("type", "")] += 1
        if len(samples) < SAMPLE_SIZE:
            samples.append(
                BlockSample(
                    id=block.get("id", ""),
                    type=block.get("type", ""),
                    text=block_text(block)[:SAMPLE_TEXT_LIMIT],
                )
            )

    date_block = next(
        (
            s
            for s in samples
            if (s.type.startswith("heading_") or s.type == "paragraph")
            and DATE_LIKE.search(s.text)
        ),
        None,
    )
    return PageSummary(
        total=sum(counts.values()),
        types=dict(counts.most_common()),
        samples=samples,
        date_block=date_block,
    )


def describe_database(client: NotionClient, page_id: str) -> DatabaseSchema:
    """Locate the database under page_id and list its columns."""
    database_id = find_child_database(client, page_id)
    db = client.retrieve_database(database_id)
    props = {
        name: definition.get("type", "")
        for name, definition in (db.get("properties") or {}).items()
    }
    title_property = next(
        (name for name, kind in props.items() if kind == "title"), None
    )
    return DatabaseSchema(
        id=database_id,
        title=plain_text(db.get("title")),
        properties=props,
        title_property=title_property,
    )
