"""Inspect the Notion page and database the WOD sync writes to.

Read-only. Useful when setting up the integration or when the daily sync fails
with a discovery or property error.

Run with: python scripts/inspect_notion.py database   # columns and types
          python scripts/inspect_notion.py page       # child blocks summary

Required environment (or .env): NOTION_TOKEN, NOTION_PAGE_ID

Exit codes:
  0 = success (report on stdout)
  1 = error (traceback on stderr)
"""

import argparse
import json
import sys
import traceback
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from wodsync.config import WodSyncConfig  # noqa: E402
from wodsync.diagnostics import describe_database, summarize_page  # noqa: E402
from wodsync.logging import get_logger, setup_logging  # noqa: E402
from wodsync.notion.client import NotionClient  # noqa: E402

log = get_logger("inspect_notion")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Inspect the Notion page/database used by the WOD sync.",
    )
    parser.add_argument("target", choices=["database", "page"])
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON instead of text.",
    )
    return parser.parse_args()


def _print_database(client: NotionClient, page_id: str, as_json: bool) -> None:
    schema = describe_database(client, page_id)
    if as_json:
        print(schema.model_dump_json(indent=2))
        return
    print(f"Database id: {schema.id}")
    print(f"Database title: {schema.title}")
    print("Properties:")
    for name, kind in schema.properties.items():
        print(f"- {name}: {kind}")
    print(f"Title property: {schema.title_property}")


def _print_page(client: NotionClient, page_id: str, as_json: bool) -> None:
    summary = summarize_page(client, page_id)
    if as_json:
        print(summary.model_dump_json(indent=2))
        return
    print(f"Total child blocks: {summary.total}")
    print("Types:")
    for kind, count in summary.types.items():
        print(f"- {kind}: {count}")

    print("\nFirst blocks sample:")
    for sample in summary.samples:
        print(f"- {sample.type} ({sample.id}): {json.dumps(sample.text)}")

    if summary.date_block:
        print(
            f"\nDetected date-like block type={summary.date_block.type} "
            f"text={json.dumps(summary.date_block.text)}"
        )
    else:
        print(f"\nNo date-like heading found in first {len(summary.samples)} blocks.")


def main(args: argparse.Namespace) -> None:
    # stderr logging before settings load, so config errors never reach stdout
    setup_logging()
    config = WodSyncConfig()
    setup_logging(json_output=config.log_json, log_level=config.log_level)
    config.require_notion()

    client = NotionClient.from_config(config)
    if args.target == "database":
        _print_database(client, config.notion_page_id, args.json)
    else:
        _print_page(client, config.notion_page_id, args.json)


if __name__ == "__main__":
    args = _parse_args()
    try:
        main(args)
    except Exception as e:
        log.error("inspect_failed", error=str(e), type=type(e).__name__)
        traceback.print_exc(file=sys.stderr)
        sys.exit(1)
