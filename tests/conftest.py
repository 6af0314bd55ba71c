"""Shared fixtures: an in-memory stand-in for the Notion REST API.

FakeNotionSession implements the subset of requests.Session used by
NotionClient (headers + request()) and serves the endpoints the sync touches,
with real cursor pagination so multi-page listings are exercised.
"""

from __future__ import annotations

import json
import re
from typing import Any

import pytest

from wodsync.config import WodSyncConfig
from wodsync.notion.client import NotionClient

PAGE_ID = "root-page"
DATABASE_ID = "wod-db"
BASE_URL = "https://api.notion.test/v1"


class FakeResponse:
    def __init__(self, status_code: int, payload: Any) -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = payload if isinstance(payload, str) else json.dumps(payload)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        if isinstance(self._payload, str):
            raise ValueError("not json")
        return self._payload


class FakeNotionSession:
    """Notion page with child blocks, one child database and its rows."""

    def __init__(self, children: list[dict] | None = None, max_page_size: int = 100) -> None:
        self.headers: dict[str, str] = {}
        self.children = children if children is not None else [
            {"id": "b1", "type": "paragraph", "paragraph": {"rich_text": []}},
            {"id": DATABASE_ID, "type": "child_database"},
        ]
        self.rows: list[dict] = []
        self.databases = {
            DATABASE_ID: {
                "id": DATABASE_ID,
                "title": [{"plain_text": "Daily WOD"}],
                "properties": {
                    "Name": {"type": "title"},
                    "Date": {"type": "date"},
                    "Location": {"type": "rich_text"},
                    "Type": {"type": "select"},
                    "Source": {"type": "url"},
                    "WOD": {"type": "rich_text"},
                },
            }
        }
        self.max_page_size = max_page_size
        self.calls: list[tuple[str, str]] = []
        self.fail_on: tuple[str, str, int] | None = None  # (method, path prefix, status)

    # -- helpers --------------------------------------------------------
    def _page(self, items: list[dict], size: int, cursor: str | None) -> dict:
        size = min(size, self.max_page_size)
        start = int(cursor) if cursor else 0
        chunk = items[start : start + size]
        end = start + len(chunk)
        has_more = end < len(items)
        return {
            "object": "list",
            "results": chunk,
            "has_more": has_more,
            "next_cursor": str(end) if has_more else None,
        }

    @staticmethod
    def _stored(properties: dict) -> dict:
        """Echo properties back the way Notion does, with plain_text filled in."""
        stored = json.loads(json.dumps(properties))
        for prop in stored.values():
            for key in ("title", "rich_text"):
                for item in prop.get(key, []):
                    item["plain_text"] = item["text"]["content"]
        return stored

    # -- requests.Session interface -------------------------------------
    def request(self, method: str, url: str, params=None, json=None, timeout=None):
        path = url.split("/v1", 1)[1]
        self.calls.append((method, path))

        if self.fail_on and method == self.fail_on[0] and path.startswith(self.fail_on[1]):
            return FakeResponse(self.fail_on[2], {"object": "error", "message": "boom"})

        m = re.fullmatch(r"/blocks/([^/]+)/children", path)
        if method == "GET" and m:
            if m.group(1) != PAGE_ID:
                return FakeResponse(404, {"object": "error", "code": "object_not_found"})
            params = params or {}
            return FakeResponse(
                200,
                self._page(self.children, params.get("page_size", 100), params.get("start_cursor")),
            )

        m = re.fullmatch(r"/databases/([^/]+)/query", path)
        if method == "POST" and m:
            body = json or {}
            rows = self.rows
            flt = body.get("filter")
            if flt:
                wanted = flt["date"]["equals"]
                rows = [
                    r for r in rows
                    if r["properties"][flt["property"]]["date"]["start"] == wanted
                ]
            return FakeResponse(
                200,
                self._page(rows, body.get("page_size", 100), body.get("start_cursor")),
            )

        m = re.fullmatch(r"/databases/([^/]+)", path)
        if method == "GET" and m:
            return FakeResponse(200, self.databases[m.group(1)])

        if method == "POST" and path == "/pages":
            row = {
                "object": "page",
                "id": f"row-{len(self.rows) + 1}",
                "parent": json["parent"],
                "properties": self._stored(json["properties"]),
            }
            self.rows.append(row)
            return FakeResponse(200, row)

        return FakeResponse(400, "unsupported fake endpoint")


@pytest.fixture
def fake_session() -> FakeNotionSession:
    return FakeNotionSession()


@pytest.fixture
def client(fake_session: FakeNotionSession) -> NotionClient:
    return NotionClient("secret-token", base_url=BASE_URL, session=fake_session)


@pytest.fixture
def config() -> WodSyncConfig:
    return WodSyncConfig(
        _env_file=None,
        notion_token="secret-token",
        notion_page_id=PAGE_ID,
        notion_base_url=BASE_URL,
        wod_date="2026-02-01",
    )


@pytest.fixture
def scenario_text() -> str:
    return (
        "#### 01/02/2026\n#### Gym A\n#### CrossFit\nWarm up\n5 rounds\n\n"
        "#### 01/02/2026\n#### Gym B\n#### Open Gym\nFree lift\n"
    )


@pytest.fixture
def make_client():
    """Build a client over a custom fake page: make_client(children=..., max_page_size=...)."""

    def _make(**kwargs: Any) -> tuple[NotionClient, FakeNotionSession]:
        session = FakeNotionSession(**kwargs)
        return NotionClient("secret-token", base_url=BASE_URL, session=session), session

    return _make
