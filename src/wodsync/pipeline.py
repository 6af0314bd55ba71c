"""Daily run: page text in, Notion rows out."""

from wodsync.config import WodSyncConfig
from wodsync.errors import ConfigurationError, SourceFormatError
from wodsync.logging import get_logger, run_context
from wodsync.models import SyncResult, TargetDate, WodEntry
from wodsync.notion.client import NotionClient
from wodsync.parser import entries_for_date, parse
from wodsync.sync import SyncEngine
from wodsync.timeutil import resolve_today, target_from_iso

log = get_logger(__name__)


def resolve_target(config: WodSyncConfig) -> TargetDate:
    """The configured override if any, else today in the site's time zone."""
    if config.wod_date.strip():
        return target_from_iso(config.wod_date)
    return resolve_today(config.wod_timezone)


def select_entries(markdown: str, target: TargetDate) -> list[WodEntry]:
    """Parse the page and keep the target date's entries.

    Raises:
        SourceFormatError: If nothing is scheduled for the target date.
    """
    entries = parse(markdown)
    todays = entries_for_date(entries, target.ddmmyyyy)
    log.info(
        "page_entries",
        total=len(entries),
        dates=sorted({e.date for e in entries}),
        target=target.ddmmyyyy,
        matching=len(todays),
        recovered=sum(1 for e in todays if e.recovered),
    )
    if not entries:
        raise SourceFormatError(
            "No WOD blocks found in page text (no '#### DD/MM/YYYY' headers)."
        )
    if not todays:
        raise SourceFormatError(f"No entries found for {target.ddmmyyyy}.")
    return todays


def run_daily(
    config: WodSyncConfig,
    markdown: str,
    *,
    client: NotionClient | None = None,
    dry_run: bool = False,
) -> SyncResult:
    """Sync the target date's WODs from markdown into Notion.

    Args:
        config: Loaded configuration.
        markdown: Page text of the WOD site.
        client: Notion client to use; built from config when omitted.
        dry_run: Query Notion but do not create rows.

    Returns:
        SyncResult for the target date.
    """
    config.require_notion()
    if not markdown.strip():
        raise ConfigurationError(
            "Missing WOD_MARKDOWN (expected the WOD page text)."
        )

    target = resolve_target(config)
    with run_context(target):
        todays = select_entries(markdown, target)

        engine = SyncEngine(
            client or NotionClient.from_config(config),
            config.notion_page_id,
            config.wod_source_url,
        )
        return engine.sync(target.iso, todays, dry_run=dry_run)
