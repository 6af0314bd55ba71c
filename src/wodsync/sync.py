"""Idempotent sync of parsed WOD entries into the Notion database.

Create-if-absent is done client side: query the rows already stored for the
target date, then create only the entries whose (location, program) key is
not among them. Notion has no server-side idempotency key, so this is
best-effort idempotency under a single-writer assumption. Two runs for the
same date executing at the same time can both see an empty set and create
duplicates; the scheduler must not overlap runs.

A failure halfway leaves the rows already created in place. Re-running the
job converges because those rows are skipped the second time.
"""

from wodsync.errors import DiscoveryError, SourceFormatError
from wodsync.logging import get_logger
from wodsync.models import DedupKey, SyncResult, WodEntry
from wodsync.notion.client import NotionClient
from wodsync.notion.properties import date_filter, record_key, record_properties

log = get_logger(__name__)

CHILD_DATABASE = "child_database"


def find_child_database(client: NotionClient, page_id: str) -> str:
    """Return the id of the first child database under page_id.

    Lists every child block before looking, so a database below the first
    hundred blocks is still found.

    Raises:
        DiscoveryError: If the page has no child database.
    """
    children = client.list_block_children(page_id).all()
    for block in children:
        if block.get("type") == CHILD_DATABASE:
            log.info("database_discovered", page_id=page_id, database_id=block["id"])
            return block["id"]
    raise DiscoveryError(
        f"No child_database found under page {page_id} ({len(children)} child blocks)."
    )


class SyncEngine:
    """Creates missing WOD rows for one date, sequentially."""

    def __init__(self, client: NotionClient, page_id: str, source_url: str) -> None:
        self.client = client
        self.page_id = page_id
        self.source_url = source_url
        self._database_id: str | None = None

    @property
    def database_id(self) -> str:
        """Child database id, discovered once per engine."""
        if self._database_id is None:
            self._database_id = find_child_database(self.client, self.page_id)
        return self._database_id

    def existing_keys(self, iso_date: str) -> set[DedupKey]:
        """Dedup keys of every row already stored for iso_date."""
        pages = self.client.query_database(self.database_id, date_filter(iso_date))
        keys = {record_key(page) for page in pages}
        log.info("existing_records", date=iso_date, count=len(keys))
        return keys

    def create(self, iso_date: str, entry: WodEntry) -> dict:
        return self.client.create_page(
            self.database_id,
            record_properties(iso_date, entry, self.source_url),
        )

    def sync(
        self, iso_date: str, entries: list[WodEntry], *, dry_run: bool = False
    ) -> SyncResult:
        """Create a row for every entry not yet stored for iso_date.

        Args:
            iso_date: Target date, YYYY-MM-DD.
            entries: Parsed entries for that date, in page order.
            dry_run: Count what would be created without writing.

        Returns:
            SyncResult with created/skipped counts.

        Raises:
            SourceFormatError: If entries is empty.
            DiscoveryError: If the root page holds no database.
            RemoteAPIError: If any Notion call fails; stops the run.
        """
        if not entries:
            raise SourceFormatError(f"No entries to sync for {iso_date}.")

        seen = self.existing_keys(iso_date)
        result = SyncResult(date=iso_date, dry_run=dry_run)

        for entry in entries:
            key = entry.dedup_key
            if key in seen:
                result.skipped += 1
                result.skipped_keys.append(tuple(key))
                log.debug("entry_skipped", location=key.location, program=key.program)
                continue

            if not dry_run:
                self.create(iso_date, entry)
            seen.add(key)
            result.created += 1
            result.created_keys.append(tuple(key))
            log.info(
                "entry_created",
                date=iso_date,
                location=key.location,
                program=key.program,
                dry_run=dry_run,
            )

        log.info(
            "sync_complete",
            date=iso_date,
            created=result.created,
            skipped=result.skipped,
            dry_run=dry_run,
        )
        return result
