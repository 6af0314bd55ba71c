"""Cursor pagination for Notion list endpoints.

Notion list responses look like:
    {"results": [...], "has_more": true, "next_cursor": "abc"}

CursorPager wraps a page-fetching callable and hides the cursor loop so that
callers (database discovery, existing-record queries, diagnostics) can simply
iterate to completion.
"""

from collections.abc import Callable, Iterator
from typing import Any

from wodsync.logging import get_logger

log = get_logger(__name__)

PAGE_SIZE = 100

PageFetcher = Callable[[str | None], dict[str, Any]]


class CursorPager:
    """Lazy, restartable sequence over every item of a paginated listing.

    Each call to iter() starts again from the first page; nothing is cached.
    """

    def __init__(self, fetch_page: PageFetcher, *, label: str = "") -> None:
        """Initialize CursorPager.

        Args:
            fetch_page: Called with the cursor to resume from (None for the
                first page) and returns one decoded response body.
            label: Name used in log events.
        """
        self.fetch_page = fetch_page
        self.label = label

    def pages(self) -> Iterator[dict[str, Any]]:
        cursor: str | None = None
        count = 0
        while True:
            page = self.fetch_page(cursor)
            count += 1
            yield page
            cursor = page.get("next_cursor")
            if not page.get("has_more") or not cursor:
                break
        log.debug("pagination_complete", listing=self.label, pages=count)

    def __iter__(self) -> Iterator[dict[str, Any]]:
        for page in self.pages():
            yield from page.get("results", [])

    def all(self) -> list[dict[str, Any]]:
        return list(self)
