"""Error hierarchy for the daily WOD sync.

Every error is fatal for the run that raised it. Nothing here is retried in
process: the recovery strategy is to re-run the whole job later, which is safe
because SyncEngine skips records that already exist for the target date.

Example usage from a script:
    try:
        result = run_daily(config, markdown)
    except WodSyncError:
        log.error("wod_sync_failed", exc_info=True)
        sys.exit(1)
"""


class WodSyncError(Exception):
    """Base exception for all WOD sync errors."""

    pass


class ConfigurationError(WodSyncError):
    """Required setting missing or invalid.

    Examples: NOTION_TOKEN unset, unknown time zone name, malformed --date.
    Raised before any network call is made.
    """

    pass


class SourceFormatError(WodSyncError):
    """Source text produced no entries for the target date.

    A day with nothing scheduled is treated as an anomaly that needs an
    operator to look at it, not as an empty success.
    """

    pass


class RemoteAPIError(WodSyncError):
    """Notion answered with a non-success status.

    Carries the HTTP status code and the response body truncated to
    BODY_LIMIT characters for diagnostics.
    """

    BODY_LIMIT = 1200

    def __init__(self, status_code: int, body: str, *, method: str = "", path: str = "") -> None:
        self.status_code = status_code
        self.body = body[: self.BODY_LIMIT]
        self.method = method
        self.path = path
        target = f" ({method} {path})" if method else ""
        super().__init__(f"Notion API error {status_code}{target}: {self.body}")


class DiscoveryError(WodSyncError):
    """No child database found under the configured root page.

    This is a configuration problem (wrong page id, or the integration was not
    shared with the database), not a parse problem.
    """

    pass
