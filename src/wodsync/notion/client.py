"""Thin Notion REST client built on requests.

Only the handful of endpoints the sync needs. Every non-2xx response becomes a
RemoteAPIError; transport exceptions from requests propagate unchanged. There
is no retry here: a failed call aborts the run.
"""

from typing import Any

import requests

from wodsync.config import WodSyncConfig
from wodsync.errors import RemoteAPIError
from wodsync.logging import get_logger
from wodsync.notion.pagination import PAGE_SIZE, CursorPager

log = get_logger(__name__)


class NotionClient:
    """Authenticated access to the Notion API."""

    def __init__(
        self,
        token: str,
        *,
        base_url: str = "https://api.notion.com/v1",
        notion_version: str = "2022-06-28",
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Notion-Version": notion_version,
            }
        )

    @classmethod
    def from_config(
        cls, config: WodSyncConfig, session: requests.Session | None = None
    ) -> "NotionClient":
        return cls(
            config.notion_token,
            base_url=config.notion_base_url,
            notion_version=config.notion_version,
            timeout=config.request_timeout_seconds,
            session=session,
        )

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send one request and decode the JSON response.

        Args:
            method: HTTP method.
            path: Path below the API base URL, e.g. "/pages".
            params: Query string parameters.
            json_body: JSON request body.

        Returns:
            Decoded response body ({} if the body is not JSON).

        Raises:
            RemoteAPIError: On any non-success status.
        """
        url = f"{self.base_url}{path}"
        resp = self.session.request(
            method,
            url,
            params=params,
            json=json_body,
            timeout=self.timeout,
        )
        if not resp.ok:
            log.warning(
                "notion_request_failed",
                method=method,
                path=path,
                status=resp.status_code,
            )
            raise RemoteAPIError(resp.status_code, resp.text, method=method, path=path)

        log.debug("notion_request", method=method, path=path, status=resp.status_code)
        try:
            return resp.json()
        except ValueError:
            return {}

    def get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self.request("GET", path, params=params)

    def post(self, path: str, json_body: dict[str, Any]) -> dict[str, Any]:
        return self.request("POST", path, json_body=json_body)

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------
    def list_block_children(self, block_id: str) -> CursorPager:
        """All child blocks of a page or block, across pages."""

        def fetch(cursor: str | None) -> dict[str, Any]:
            params: dict[str, Any] = {"page_size": PAGE_SIZE}
            if cursor:
                params["start_cursor"] = cursor
            return self.get(f"/blocks/{block_id}/children", params=params)

        return CursorPager(fetch, label=f"children:{block_id}")

    def query_database(
        self, database_id: str, filter: dict[str, Any] | None = None
    ) -> CursorPager:
        """All pages of a database matching filter, across pages."""

        def fetch(cursor: str | None) -> dict[str, Any]:
            body: dict[str, Any] = {"page_size": PAGE_SIZE}
            if filter:
                body["filter"] = filter
            if cursor:
                body["start_cursor"] = cursor
            return self.post(f"/databases/{database_id}/query", body)

        return CursorPager(fetch, label=f"query:{database_id}")

    def retrieve_database(self, database_id: str) -> dict[str, Any]:
        return self.get(f"/databases/{database_id}")

    def create_page(self, database_id: str, properties: dict[str, Any]) -> dict[str, Any]:
        """Create one row in a database."""
        return self.post(
            "/pages",
            {"parent": {"database_id": database_id}, "properties": properties},
        )
