"""Notion API access for the WOD sync."""

from wodsync.notion.client import NotionClient
from wodsync.notion.pagination import PAGE_SIZE, CursorPager

__all__ = [
    "NotionClient",
    "CursorPager",
    "PAGE_SIZE",
]
